import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from mate.tokenizer import Token, TokenType, untokenize

logger = logging.getLogger(__name__)


class EvaluationError(Exception):
    """Base class for everything `evaluate` raises on malformed token sequences"""


@dataclass
class IllegalTokenError(EvaluationError):
    token_idx: int
    token: Token

    def __str__(self) -> str:
        return "\n".join(
            [
                f"[Evaluation error] Found an illegal token at index {self.token_idx} of parsed tokens",
                f"  • Type: {self.token.type}",
                f"  • Value: {self.token.lexeme!r}",
                f"  • Sub tokens: {untokenize(self.token.sub_tokens) or '-'}",
            ]
        )


@dataclass
class MissingOperatorError(EvaluationError):
    left: float
    right: float
    token_idx: int

    def __str__(self) -> str:
        return f"[Evaluation error] Missing operation between {self.left} and {self.right} (token {self.token_idx})"


@dataclass
class MissingOperandError(EvaluationError):
    token_idx: int
    token: Optional[Token]

    def __str__(self) -> str:
        if self.token is None:
            return f"[Evaluation error] Expression ends with an operator, operand expected at token {self.token_idx}"
        return f"[Evaluation error] Operand expected at token {self.token_idx}, found {self.token}"


@dataclass
class NumberParseError(EvaluationError):
    token_idx: int
    token: Token

    def __str__(self) -> str:
        return f"[Evaluation error] Cannot parse {self.token.lexeme!r} as a number (token {self.token_idx})"


class EmptyExpressionError(EvaluationError):
    def __str__(self) -> str:
        return "[Evaluation error] Nothing to evaluate"


def _divide(x: float, y: float) -> float:
    try:
        return x / y
    except ZeroDivisionError:
        logger.debug("Division of %s by zero", x)
        if x == 0 or math.isnan(x):
            return math.nan
        return math.copysign(math.inf, x) * math.copysign(1.0, y)


BinaryOperationImpl = Callable[[float, float], float]

operation_impls: dict[TokenType, BinaryOperationImpl] = {
    TokenType.PLUS: lambda x, y: x + y,
    TokenType.MINUS: lambda x, y: x - y,
    TokenType.PRODUCT: lambda x, y: x * y,
    TokenType.DIVIDE: _divide,
}


def execute_operation(x: float, y: float, operator: TokenType) -> float:
    if operator not in operation_impls:
        raise ValueError(f"Unexpected operator: {operator}")
    return operation_impls[operator](x, y)


def evaluate(tokens: Sequence[Token]) -> float:
    """Folds `tokens` left to right into a single number.

    There is no operator precedence: `2 + 3 * 4` is `((0 + 2) + 3) * 4`.
    Only brackets, already turned into sub-expression tokens by the tokenizer,
    group operations. The accumulator starts at zero and the first operand is
    added to it.
    """
    if not tokens:
        raise EmptyExpressionError()

    if len(tokens) == 1 and tokens[0].type is TokenType.SUB_EXPRESSION:
        return evaluate(tokens[0].sub_tokens)

    result = 0.0
    operator = TokenType.PLUS
    previous_operand = 0.0
    for i, token in enumerate(tokens):
        if i % 2 == 1:
            if token.is_operator():
                operator = token.type
                continue
            elif token.type is TokenType.ILLEGAL:
                raise IllegalTokenError(token_idx=i, token=token)
            else:
                raise MissingOperatorError(left=previous_operand, right=_resolve_operand(tokens, i), token_idx=i)

        operand = _resolve_operand(tokens, i)
        result = execute_operation(result, operand, operator)
        previous_operand = operand

    if len(tokens) % 2 == 0:
        raise MissingOperandError(token_idx=len(tokens), token=None)

    return result


def _resolve_operand(tokens: Sequence[Token], i: int) -> float:
    token = tokens[i]
    if token.type is TokenType.NUMBER:
        try:
            return float(token.lexeme)
        except ValueError:
            raise NumberParseError(token_idx=i, token=token)
    elif token.type is TokenType.SUB_EXPRESSION:
        return evaluate(token.sub_tokens)
    elif token.type is TokenType.ILLEGAL:
        raise IllegalTokenError(token_idx=i, token=token)
    elif token.is_operator():
        raise MissingOperandError(token_idx=i, token=token)
    else:
        raise RuntimeError(f"Unexpected token type: {token.type}")
