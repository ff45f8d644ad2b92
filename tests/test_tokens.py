import pytest

from stagecc.tokens import (
    GenericKind,
    KeywordKind,
    OperatorKind,
    PunctuationKind,
    Span,
    Token,
    TokenCategory,
    TokenKind,
    TokenStream,
)


@pytest.mark.parametrize(
    "kind, generic",
    [
        (TokenKind.keyword(KeywordKind.INT), GenericKind.KEYWORD),
        (TokenKind.identifier("main"), GenericKind.IDENTIFIER),
        (TokenKind.operator(OperatorKind.PLUS), GenericKind.OPERATOR),
        (TokenKind.punctuation(PunctuationKind.SEMICOLON), GenericKind.PUNCTUATION),
        (TokenKind.constant("2"), GenericKind.CONSTANT),
        (TokenKind.unknown("@"), GenericKind.UNKNOWN),
        (TokenKind.eof(), GenericKind.EOF),
        (TokenKind.irrelevant(), GenericKind.UNKNOWN),
    ],
)
def test_to_generic(kind, generic):
    assert kind.to_generic() is generic


def test_constructors_set_category_and_value():
    kind = TokenKind.identifier("foo")
    assert kind.category is TokenCategory.IDENTIFIER
    assert kind.value == "foo"
    assert TokenKind.eof().value is None


def test_constant_is_stored_as_text():
    assert TokenKind.constant(7) == TokenKind.constant("7")


def test_kind_equality_depends_on_payload():
    assert TokenKind.identifier("a") == TokenKind.identifier("a")
    assert not (TokenKind.identifier("a") == TokenKind.identifier("b"))
    assert not (TokenKind.identifier("a") == TokenKind.constant("a"))


def test_span_defaults_to_origin():
    span = Span()
    assert (span.start_line, span.start_col, span.end_line, span.end_col) == (0, 0, 0, 0)


def _stream():
    return TokenStream(
        [
            Token(TokenKind.keyword(KeywordKind.RETURN), "return", Span(0, 0, 0, 6)),
            Token(TokenKind.constant("2"), "2", Span(0, 7, 0, 8)),
            Token(TokenKind.eof(), "", Span(0, 8, 0, 8)),
        ]
    )


def test_peek_does_not_advance():
    stream = _stream()
    first = stream.peek()
    assert first is stream.peek()
    assert stream.pointer == 0
    assert first.lexeme == "return"


def test_consume_in_order_then_none():
    stream = _stream()
    lexemes = [stream.consume().lexeme for _ in range(3)]
    assert lexemes == ["return", "2", ""]
    assert stream.consume() is None
    assert stream.peek() is None
    assert not stream


def test_consume_expected_match_and_mismatch():
    stream = _stream()
    assert stream.consume_expected(TokenKind.constant("2")) is None
    assert stream.pointer == 0
    token = stream.consume_expected(TokenKind.keyword(KeywordKind.RETURN))
    assert token.lexeme == "return"
    assert stream.pointer == 1


def test_iteration_yields_remaining_tokens():
    stream = _stream()
    stream.consume()
    assert [t.lexeme for t in stream.remaining()] == ["2", ""]
    assert [t.lexeme for t in stream] == ["2", ""]
    assert stream.remaining() == ()
    assert bool(stream) is False


def test_truthiness_tracks_tokens_left():
    stream = _stream()
    consumed = []
    while stream:
        consumed.append(stream.consume().lexeme)
    assert consumed == ["return", "2", ""]
    assert stream.pointer == 3
    empty = TokenStream([])
    assert [t for t in empty] == []
    assert empty.peek() is None