"""Token kinds, tokens, source spans and a consumable token stream."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Iterator, Optional, Tuple, Union


class GenericKind(Enum):
    """Coarse categories used when reporting what was expected."""

    KEYWORD = auto()
    IDENTIFIER = auto()
    OPERATOR = auto()
    PUNCTUATION = auto()
    CONSTANT = auto()
    UNKNOWN = auto()
    EOF = auto()
    STATEMENT = auto()
    EXPRESSION = auto()


class KeywordKind(Enum):
    INT = auto()
    RETURN = auto()
    VOID = auto()


class OperatorKind(Enum):
    TILDE = auto()
    MINUS = auto()
    PLUS = auto()
    ASTERISK = auto()
    SLASH = auto()
    PERCENT = auto()
    EXCLAMATION = auto()
    LESS_THAN = auto()
    GREATER_THAN = auto()
    LOGICAL_AND = auto()
    LOGICAL_OR = auto()
    EQUAL_EQUAL = auto()
    NOT_EQUAL = auto()
    LESS_EQUAL = auto()
    GREATER_EQUAL = auto()


class PunctuationKind(Enum):
    SEMICOLON = auto()
    OPEN_PAREN = auto()
    CLOSE_PAREN = auto()
    OPEN_BRACE = auto()
    CLOSE_BRACE = auto()


class TokenCategory(Enum):
    """The variant of a token kind."""

    KEYWORD = auto()
    IDENTIFIER = auto()
    OPERATOR = auto()
    PUNCTUATION = auto()
    CONSTANT = auto()
    UNKNOWN = auto()
    IRRELEVANT = auto()
    EOF = auto()


_GENERIC_OF_CATEGORY = {
    TokenCategory.KEYWORD: GenericKind.KEYWORD,
    TokenCategory.IDENTIFIER: GenericKind.IDENTIFIER,
    TokenCategory.OPERATOR: GenericKind.OPERATOR,
    TokenCategory.PUNCTUATION: GenericKind.PUNCTUATION,
    TokenCategory.CONSTANT: GenericKind.CONSTANT,
    TokenCategory.UNKNOWN: GenericKind.UNKNOWN,
    TokenCategory.EOF: GenericKind.EOF,
    TokenCategory.IRRELEVANT: GenericKind.UNKNOWN,
}

Payload = Union[KeywordKind, OperatorKind, PunctuationKind, str, None]


@dataclass(frozen=True)
class TokenKind:
    """A token's kind: a category plus the payload that category carries."""

    category: TokenCategory
    value: Payload = None

    @classmethod
    def keyword(cls, kw: KeywordKind) -> "TokenKind":
        return cls(TokenCategory.KEYWORD, kw)

    @classmethod
    def identifier(cls, name: str) -> "TokenKind":
        return cls(TokenCategory.IDENTIFIER, str(name))

    @classmethod
    def operator(cls, op: OperatorKind) -> "TokenKind":
        return cls(TokenCategory.OPERATOR, op)

    @classmethod
    def punctuation(cls, punc: PunctuationKind) -> "TokenKind":
        return cls(TokenCategory.PUNCTUATION, punc)

    @classmethod
    def constant(cls, value) -> "TokenKind":
        return cls(TokenCategory.CONSTANT, str(value))

    @classmethod
    def unknown(cls, text: str) -> "TokenKind":
        return cls(TokenCategory.UNKNOWN, str(text))

    @classmethod
    def irrelevant(cls) -> "TokenKind":
        return cls(TokenCategory.IRRELEVANT)

    @classmethod
    def eof(cls) -> "TokenKind":
        return cls(TokenCategory.EOF)

    def to_generic(self) -> GenericKind:
        """Return the coarse category of this kind."""
        return _GENERIC_OF_CATEGORY[self.category]


@dataclass(frozen=True)
class Span:
    """Zero-based start and end positions in the source."""

    start_line: int = 0
    start_col: int = 0
    end_line: int = 0
    end_col: int = 0


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    lexeme: str
    span: Span = Span()


class TokenStream:
    """A sequence of tokens read front to back."""

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens: Tuple[Token, ...] = tuple(tokens)
        self._pointer = 0

    @property
    def tokens(self) -> Tuple[Token, ...]:
        return self._tokens

    @property
    def pointer(self) -> int:
        return self._pointer

    def consume(self) -> Optional[Token]:
        """Return the next token and move past it, or None at the end."""
        if self._pointer < len(self._tokens):
            token = self._tokens[self._pointer]
            self._pointer += 1
            return token
        return None

    def peek(self) -> Optional[Token]:
        """Return the next token without moving past it."""
        if self._pointer < len(self._tokens):
            return self._tokens[self._pointer]
        return None

    def consume_expected(self, expected: TokenKind) -> Optional[Token]:
        """Consume the next token only if its kind equals ``expected``."""
        actual = self.peek()
        if actual is not None and actual.kind == expected:
            return self.consume()
        return None

    def remaining(self) -> Tuple[Token, ...]:
        """The tokens not yet consumed."""
        return self._tokens[self._pointer:]

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        token = self.consume()
        if token is None:
            raise StopIteration
        return token

    def __bool__(self) -> bool:
        return self._pointer < len(self._tokens)

    def __repr__(self) -> str:
        return f"TokenStream(tokens={list(self._tokens)!r}, pointer={self._pointer})"