import pytest

from mate.tokenizer import Token, TokenType, format_tokens, tokenize, untokenize


def num(lexeme: str) -> Token:
    return Token(type=TokenType.NUMBER, lexeme=lexeme)


def op(glyph: str) -> Token:
    return Token(
        type={"+": TokenType.PLUS, "-": TokenType.MINUS, "*": TokenType.PRODUCT, "/": TokenType.DIVIDE}[glyph],
        lexeme=glyph,
    )


def sub(*tokens: Token) -> Token:
    return Token(type=TokenType.SUB_EXPRESSION, sub_tokens=tokens)


def illegal(char: str) -> Token:
    return Token(type=TokenType.ILLEGAL, lexeme=char)


def nesting_depth(tokens: list[Token] | tuple[Token, ...]) -> int:
    return max((1 + nesting_depth(t.sub_tokens) for t in tokens if t.type is TokenType.SUB_EXPRESSION), default=0)


@pytest.mark.parametrize(
    "code, expected_tokens",
    [
        pytest.param("2 + 4.5 - 5", [num("2"), op("+"), num("4.5"), op("-"), num("5")]),
        pytest.param(
            "(4 * 5 - 5) * 2 + 24 / 2",
            [
                sub(num("4"), op("*"), num("5"), op("-"), num("5")),
                op("*"),
                num("2"),
                op("+"),
                num("24"),
                op("/"),
                num("2"),
            ],
        ),
        pytest.param(
            "(4 * 5 - 5) * 2 + (24 / 2)",
            [
                sub(num("4"), op("*"), num("5"), op("-"), num("5")),
                op("*"),
                num("2"),
                op("+"),
                sub(num("24"), op("/"), num("2")),
            ],
        ),
        pytest.param(
            "(24 / 4) + 2 - (-2 * -5)",
            [
                sub(num("24"), op("/"), num("4")),
                op("+"),
                num("2"),
                op("-"),
                sub(num("-2"), op("*"), num("-5")),
            ],
        ),
        pytest.param("2-3", [num("2"), op("-"), num("3")]),
        pytest.param("2--3", [num("2"), op("-"), num("-3")]),
        pytest.param("(1)-2", [sub(num("1")), op("-"), num("2")]),
        pytest.param("- 3", [op("-"), num("3")]),
        pytest.param("1.2.3", [num("1.2"), num(".3")]),
        pytest.param("&!@", [illegal("&"), illegal("!"), illegal("@")]),
        pytest.param("2 ) 3", [num("2"), illegal(")"), num("3")]),
        pytest.param(".", [illegal(".")]),
        pytest.param("()", [sub()]),
        pytest.param("(1 + 2", [sub(num("1"), op("+"), num("2"))]),
        pytest.param("", []),
        pytest.param(" \t\r\n", []),
    ],
)
def test_tokenize(code: str, expected_tokens: list[Token]) -> None:
    assert tokenize(code) == expected_tokens


@pytest.mark.parametrize(
    "code, expected_lexeme",
    [
        pytest.param("42", "42"),
        pytest.param("-42", "-42"),
        pytest.param("+42", "+42"),
        pytest.param("4.2", "4.2"),
        pytest.param("4,2", "4.2"),
        pytest.param("-,5", "-.5"),
        pytest.param(".5", ".5"),
        pytest.param("5.", "5."),
        pytest.param("007", "007"),
    ],
)
def test_tokenize_single_number(code: str, expected_lexeme: str) -> None:
    tokens = tokenize(code)
    assert tokens == [num(expected_lexeme)]
    float(tokens[0].lexeme)


@pytest.mark.parametrize(
    "code, expected_type",
    [
        pytest.param("*", TokenType.PRODUCT),
        pytest.param("•", TokenType.PRODUCT),
        pytest.param("/", TokenType.DIVIDE),
        pytest.param(":", TokenType.DIVIDE),
        pytest.param("+", TokenType.PLUS),
        pytest.param("-", TokenType.MINUS),
    ],
)
def test_tokenize_operator_glyphs(code: str, expected_type: TokenType) -> None:
    assert tokenize(code) == [Token(type=expected_type, lexeme=code)]


@pytest.mark.parametrize(
    "code, expected_depth",
    [
        pytest.param("1 + 2", 0),
        pytest.param("(1 + 2)", 1),
        pytest.param("(1) + (2)", 1),
        pytest.param("((1 + 2) * 3)", 2),
        pytest.param("(((((((((12 * 0.5) : 2))))))))", 9),
        pytest.param("1 + (2 * (3 - (4 / 5)))", 3),
    ],
)
def test_tokenize_nesting_depth(code: str, expected_depth: int) -> None:
    assert nesting_depth(tokenize(code)) == expected_depth


def test_tokens_are_immutable() -> None:
    token = tokenize("1")[0]
    with pytest.raises(AttributeError):
        token.lexeme = "2"  # type: ignore


@pytest.mark.parametrize(
    "code, expected",
    [
        pytest.param("2+4.5-5", "2 + 4.5 - 5"),
        pytest.param("( 4•5 ) : 2", "(4 * 5) / 2"),
        pytest.param("((1))", "((1))"),
    ],
)
def test_untokenize(code: str, expected: str) -> None:
    assert untokenize(tokenize(code)) == expected


def test_format_tokens() -> None:
    assert format_tokens(tokenize("(1 + 2) * -3")) == [
        "SUB_EXPRESSION",
        "  NUMBER(1)",
        "  PLUS(+)",
        "  NUMBER(2)",
        "PRODUCT(*)",
        "NUMBER(-3)",
    ]
