import enum


class PrintableEnum(enum.Enum):
    def __str__(self) -> str:
        return self.name

    __repr__ = __str__


WHITESPACE = frozenset(" \t\n\r")


def is_number(char: str) -> bool:
    """ASCII digits only, `str.isdigit` also accepts superscripts that `float` rejects"""
    return "0" <= char <= "9"


def is_point(char: str) -> bool:
    return char in (".", ",")


def is_whitespace(char: str) -> bool:
    return char in WHITESPACE
