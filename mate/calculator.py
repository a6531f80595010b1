import logging
from typing import Optional

from mate.evaluator import EvaluationError, evaluate
from mate.tokenizer import tokenize

logger = logging.getLogger(__name__)


def compute(code: str) -> tuple[float, Optional[EvaluationError]]:
    """Tokenizes and evaluates `code`.

    On failure the result is 0.0 and the error is returned alongside it,
    so the error has to be checked before trusting the number.
    """
    tokens = tokenize(code)
    try:
        return evaluate(tokens), None
    except EvaluationError as e:
        logger.debug("Failed to evaluate %r: %s", code, e)
        return 0.0, e
