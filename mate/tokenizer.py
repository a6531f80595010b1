import enum
import re
from dataclasses import dataclass
from typing import Iterator, Sequence

from mate.utils import PrintableEnum, is_number, is_point, is_whitespace


class TokenType(PrintableEnum):
    NUMBER = enum.auto()
    PLUS = enum.auto()
    MINUS = enum.auto()
    PRODUCT = enum.auto()
    DIVIDE = enum.auto()
    SUB_EXPRESSION = enum.auto()
    ILLEGAL = enum.auto()


OPERATOR_TYPES = frozenset([TokenType.PLUS, TokenType.MINUS, TokenType.PRODUCT, TokenType.DIVIDE])


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str = ""
    sub_tokens: tuple["Token", ...] = ()

    def is_operator(self) -> bool:
        return self.type in OPERATOR_TYPES

    def is_operand(self) -> bool:
        return self.type is TokenType.NUMBER or self.type is TokenType.SUB_EXPRESSION

    def __str__(self) -> str:
        if self.type is TokenType.SUB_EXPRESSION:
            return f"<{self.type}>({untokenize(self.sub_tokens)})"
        return f"<{self.type}>{self.lexeme}"


OPERATOR_GLYPHS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.PRODUCT,
    "•": TokenType.PRODUCT,
    "/": TokenType.DIVIDE,
    ":": TokenType.DIVIDE,
}

CANONICAL_GLYPHS = {
    TokenType.PLUS: "+",
    TokenType.MINUS: "-",
    TokenType.PRODUCT: "*",
    TokenType.DIVIDE: "/",
}


def tokenize(code: str) -> list[Token]:
    i = 0
    tokens: list[Token] = []
    while i < len(code):
        if is_whitespace(code[i]):
            i += 1
        elif code[i] == "(":
            close_idx = _find_closing_bracket(code, i)
            tokens.append(Token(type=TokenType.SUB_EXPRESSION, sub_tokens=tuple(tokenize(code[i + 1 : close_idx]))))
            i = close_idx + 1
        elif _is_number_start(code, i, tokens):
            number_end_idx = _find_number_end(code, i)
            lexeme = code[i:number_end_idx].replace(",", ".")
            tokens.append(Token(type=TokenType.NUMBER, lexeme=lexeme))
            i = number_end_idx
        elif code[i] in OPERATOR_GLYPHS:
            tokens.append(Token(type=OPERATOR_GLYPHS[code[i]], lexeme=code[i]))
            i += 1
        else:
            tokens.append(Token(type=TokenType.ILLEGAL, lexeme=code[i]))
            i += 1
    return tokens


def _find_closing_bracket(code: str, open_idx: int) -> int:
    """Index of the bracket matching the one at `open_idx`, or `len(code)` if it is never closed"""
    bracket_count = 1
    j = open_idx + 1
    while j < len(code):
        if code[j] == "(":
            bracket_count += 1
        elif code[j] == ")":
            bracket_count -= 1
            if bracket_count == 0:
                return j
        j += 1
    return len(code)


def _digits_ahead(code: str, i: int) -> bool:
    if i >= len(code):
        return False
    if is_number(code[i]):
        return True
    return is_point(code[i]) and i + 1 < len(code) and is_number(code[i + 1])


def _is_number_start(code: str, i: int, tokens: list[Token]) -> bool:
    if code[i] in ("+", "-"):
        # 2-3 is a subtraction, not two numbers
        follows_operand = bool(tokens) and tokens[-1].is_operand()
        return not follows_operand and _digits_ahead(code, i + 1)
    return _digits_ahead(code, i)


def _find_number_end(code: str, start: int) -> int:
    j = start
    if code[j] in ("+", "-"):
        j += 1
    seen_point = False
    while j < len(code):
        if is_number(code[j]):
            pass
        elif is_point(code[j]) and not seen_point:
            seen_point = True
        else:
            break
        j += 1
    return j


def _canonical_lexemes(tokens: Sequence[Token]) -> Iterator[str]:
    for t in tokens:
        if t.type is TokenType.SUB_EXPRESSION:
            yield "("
            yield from _canonical_lexemes(t.sub_tokens)
            yield ")"
        elif t.is_operator():
            yield CANONICAL_GLYPHS[t.type]
        else:
            yield t.lexeme


def untokenize(tokens: Sequence[Token]) -> str:
    result = " ".join(_canonical_lexemes(tokens))

    # ( 1 + 2 ) => (1 + 2)
    result = re.sub(r"\(\s+", "(", result)
    result = re.sub(r"\s+\)", ")", result)
    return result


def format_tokens(tokens: Sequence[Token], depth: int = 0) -> list[str]:
    lines = []
    indent = "  " * depth
    for t in tokens:
        if t.type is TokenType.SUB_EXPRESSION:
            lines.append(f"{indent}{t.type}")
            lines.extend(format_tokens(t.sub_tokens, depth + 1))
        else:
            lines.append(f"{indent}{t.type}({t.lexeme})")
    return lines
