"""Turns ASCII source text into a stream of tokens."""

from __future__ import annotations

from typing import Callable, Optional, Tuple

from .diagnostics import Custom, Diagnostic, DiagnosticsManager, UnknownToken
from .tokens import (
    KeywordKind,
    OperatorKind,
    PunctuationKind,
    Span,
    Token,
    TokenCategory,
    TokenKind,
    TokenStream,
)

Position = Tuple[int, int]

# The characters treated as whitespace between tokens.
_WHITESPACE = frozenset(" \t\n\r\x0b\x0c")

_KEYWORDS = {
    "int": TokenKind.keyword(KeywordKind.INT),
    "void": TokenKind.keyword(KeywordKind.VOID),
    "return": TokenKind.keyword(KeywordKind.RETURN),
}

_PUNCTUATION = {
    ";": PunctuationKind.SEMICOLON,
    "(": PunctuationKind.OPEN_PAREN,
    ")": PunctuationKind.CLOSE_PAREN,
    "{": PunctuationKind.OPEN_BRACE,
    "}": PunctuationKind.CLOSE_BRACE,
}

_TWO_CHAR_OPERATORS = {
    "&&": OperatorKind.LOGICAL_AND,
    "||": OperatorKind.LOGICAL_OR,
    "==": OperatorKind.EQUAL_EQUAL,
    "!=": OperatorKind.NOT_EQUAL,
    "<=": OperatorKind.LESS_EQUAL,
    ">=": OperatorKind.GREATER_EQUAL,
}

_UNSUPPORTED_OPERATORS = {
    "--": "Decrement operator is NOT supported",
    "++": "Increment operator is NOT supported",
}

_ONE_CHAR_OPERATORS = {
    "-": OperatorKind.MINUS,
    "~": OperatorKind.TILDE,
    "+": OperatorKind.PLUS,
    "*": OperatorKind.ASTERISK,
    "/": OperatorKind.SLASH,
    "%": OperatorKind.PERCENT,
    "!": OperatorKind.EXCLAMATION,
    "<": OperatorKind.LESS_THAN,
    ">": OperatorKind.GREATER_THAN,
}


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_alpha(ch: str) -> bool:
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def _is_word_char(ch: str) -> bool:
    return _is_alpha(ch) or _is_digit(ch) or ch == "_"


def _irrelevant() -> Token:
    return Token(TokenKind.irrelevant(), "", Span())


def lookup_keyword(candidate: str) -> TokenKind:
    """Classify a word as a keyword, an identifier, or unknown if it starts with a digit."""
    if candidate and _is_digit(candidate[0]):
        return TokenKind.unknown(candidate)
    keyword = _KEYWORDS.get(candidate)
    if keyword is not None:
        return keyword
    return TokenKind.identifier(candidate)


class Lexer:
    """A cursor over ASCII source that tracks line and column."""

    def __init__(self, source_code: str) -> None:
        if not source_code.isascii():
            raise ValueError("source code must be ASCII")
        self.source_code = source_code
        self.pointer = 0
        self.line = 0
        self.column = 0

    def peek(self) -> Optional[str]:
        """The character at the cursor, or None at the end."""
        if self.pointer < len(self.source_code):
            return self.source_code[self.pointer]
        return None

    def peek_slice(self, start: int, end: int) -> Optional[str]:
        """The text between ``start`` and ``end``, or None if out of range."""
        if 0 <= start <= end <= len(self.source_code):
            return self.source_code[start:end]
        return None

    def advance(self) -> Optional[str]:
        """Move past the current character and return it, or None at the end."""
        ch = self.peek()
        if ch is None:
            return None
        self.pointer += 1
        if ch == "\n":
            self.line += 1
            self.column = 0
        else:
            self.column += 1
        return ch

    def current_position(self) -> Position:
        return (self.line, self.column)

    def span_from(self, start: Position) -> Span:
        """A span from ``start`` up to the current position."""
        return Span(start[0], start[1], self.line, self.column)

    def _advance_while(self, predicate: Callable[[str], bool]) -> None:
        while (ch := self.peek()) is not None and predicate(ch):
            self.advance()

    def tokenize(self, diagnostics: DiagnosticsManager) -> TokenStream:
        """Read the whole source; problems are pushed to ``diagnostics``."""
        tokens = []
        while self.peek() is not None:
            token = self._produce(diagnostics)
            if token is not None:
                if token.kind.category is not TokenCategory.IRRELEVANT:
                    tokens.append(token)
                continue
            ch = self.advance()
            if ch is None:
                break
            span = Span(self.line, self.column, self.line, self.column)
            unknown = Token(TokenKind.unknown(ch), ch, span)
            diagnostics.push(Diagnostic.error(span, UnknownToken(unknown)))

        eof_span = Span(self.line, self.column, self.line, self.column)
        tokens.append(Token(TokenKind.eof(), "", eof_span))
        return TokenStream(tokens)

    def _produce(self, diagnostics: DiagnosticsManager) -> Optional[Token]:
        for producer in _PRODUCERS:
            token = producer(self, diagnostics)
            if token is not None:
                return token
        return None


def _produce_whitespace(lexer: Lexer, diagnostics: DiagnosticsManager) -> Optional[Token]:
    ch = lexer.peek()
    if ch is None or ch not in _WHITESPACE:
        return None
    lexer._advance_while(lambda c: c in _WHITESPACE)
    return _irrelevant()


def _produce_comment(lexer: Lexer, diagnostics: DiagnosticsManager) -> Optional[Token]:
    start = lexer.pointer
    opener = lexer.peek_slice(start, start + 2)
    if opener == "//":
        lexer.advance()
        lexer.advance()
        lexer._advance_while(lambda c: c != "\n")
        return _irrelevant()

    if opener == "/*":
        lexer.advance()
        lexer.advance()
        while lexer.peek() is not None:
            pos = lexer.pointer
            pair = lexer.peek_slice(pos, pos + 2)
            if pair is None:
                break
            if pair == "*/":
                lexer.advance()
                lexer.advance()
                return _irrelevant()
            lexer.advance()
        diagnostics.push(Diagnostic.error(Span(), Custom("Unterminated multi-line comment")))
        return _irrelevant()

    return None


def _produce_word(lexer: Lexer, diagnostics: DiagnosticsManager) -> Optional[Token]:
    ch = lexer.peek()
    if ch is None or not (_is_alpha(ch) or ch == "_"):
        return None
    start_pos = lexer.current_position()
    start_ptr = lexer.pointer
    lexer._advance_while(_is_word_char)
    lexeme = lexer.source_code[start_ptr:lexer.pointer]
    return Token(lookup_keyword(lexeme), lexeme, lexer.span_from(start_pos))


def _produce_constant(lexer: Lexer, diagnostics: DiagnosticsManager) -> Optional[Token]:
    ch = lexer.peek()
    if ch is None or not _is_digit(ch):
        return None
    start_pos = lexer.current_position()
    start_ptr = lexer.pointer
    lexer._advance_while(_is_digit)

    nxt = lexer.peek()
    if nxt is not None and (_is_alpha(nxt) or nxt == "_"):
        lexer._advance_while(_is_word_char)
        lexeme = lexer.source_code[start_ptr:lexer.pointer]
        span = lexer.span_from(start_pos)
        invalid = Token(TokenKind.unknown(lexeme), lexeme, span)
        diagnostics.push(Diagnostic.error(span, UnknownToken(invalid)))
        return invalid

    lexeme = lexer.source_code[start_ptr:lexer.pointer]
    return Token(TokenKind.constant(lexeme), lexeme, lexer.span_from(start_pos))


def _produce_punctuation(lexer: Lexer, diagnostics: DiagnosticsManager) -> Optional[Token]:
    ch = lexer.peek()
    punc = _PUNCTUATION.get(ch) if ch is not None else None
    if punc is None:
        return None
    start_pos = lexer.current_position()
    lexer.advance()
    return Token(TokenKind.punctuation(punc), ch, lexer.span_from(start_pos))


def _produce_operator(lexer: Lexer, diagnostics: DiagnosticsManager) -> Optional[Token]:
    start_pos = lexer.current_position()
    start_ptr = lexer.pointer

    pair = lexer.peek_slice(start_ptr, start_ptr + 2)
    if pair is not None:
        if pair in _UNSUPPORTED_OPERATORS:
            lexer.advance()
            lexer.advance()
            span = lexer.span_from(start_pos)
            diagnostics.push(Diagnostic.error(span, Custom(_UNSUPPORTED_OPERATORS[pair])))
            return None
        if pair in _TWO_CHAR_OPERATORS:
            lexer.advance()
            lexer.advance()
            kind = TokenKind.operator(_TWO_CHAR_OPERATORS[pair])
            return Token(kind, pair, lexer.span_from(start_pos))

    ch = lexer.peek()
    op = _ONE_CHAR_OPERATORS.get(ch) if ch is not None else None
    if op is None:
        return None
    lexer.advance()
    return Token(TokenKind.operator(op), ch, lexer.span_from(start_pos))


_PRODUCERS = (
    _produce_whitespace,
    _produce_comment,
    _produce_word,
    _produce_constant,
    _produce_punctuation,
    _produce_operator,
)