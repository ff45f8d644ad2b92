"""Compiler diagnostics: kinds, messages, and rendering against the source."""

from __future__ import annotations

import sys
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterator, List, TextIO, Tuple

from .tokens import (
    GenericKind,
    KeywordKind,
    PunctuationKind,
    Span,
    Token,
    TokenCategory,
    TokenKind,
)

_GENERIC_NAMES = {
    GenericKind.KEYWORD: "keyword",
    GenericKind.IDENTIFIER: "identifier",
    GenericKind.OPERATOR: "operator",
    GenericKind.PUNCTUATION: "punctuation",
    GenericKind.CONSTANT: "constant",
    GenericKind.UNKNOWN: "unknown generic token",
    GenericKind.STATEMENT: "statement",
    GenericKind.EXPRESSION: "expression",
    GenericKind.EOF: "<END OF LINE>",
}

_KEYWORD_NAMES = {
    KeywordKind.INT: "int",
    KeywordKind.RETURN: "return",
    KeywordKind.VOID: "void",
}

_PUNCTUATION_NAMES = {
    PunctuationKind.SEMICOLON: ";",
    PunctuationKind.OPEN_PAREN: "(",
    PunctuationKind.CLOSE_PAREN: ")",
    PunctuationKind.OPEN_BRACE: "{",
    PunctuationKind.CLOSE_BRACE: "}",
}

_CATEGORY_NAMES = {
    TokenCategory.IDENTIFIER: "identifier",
    TokenCategory.OPERATOR: "operator",
    TokenCategory.IRRELEVANT: "irrelevant",
    TokenCategory.CONSTANT: "constant",
    TokenCategory.UNKNOWN: "unknown token",
    TokenCategory.EOF: "<END OF LINE>",
}


def user_string(kind) -> str:
    """A short human-readable name for a token kind or category."""
    if isinstance(kind, GenericKind):
        return _GENERIC_NAMES[kind]
    if isinstance(kind, KeywordKind):
        return _KEYWORD_NAMES[kind]
    if isinstance(kind, PunctuationKind):
        return _PUNCTUATION_NAMES[kind]
    if isinstance(kind, TokenKind):
        if kind.category is TokenCategory.KEYWORD:
            return _KEYWORD_NAMES[kind.value]
        if kind.category is TokenCategory.PUNCTUATION:
            return _PUNCTUATION_NAMES[kind.value]
        return _CATEGORY_NAMES[kind.category]
    raise TypeError(f"no user-facing name for {kind!r}")


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"
    HELP = "help"

    def __str__(self) -> str:
        return self.value


class DiagnosticKind:
    """Base of every diagnostic kind."""

    def message(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class UnknownToken(DiagnosticKind):
    token: Token

    def message(self) -> str:
        return f"unknown {user_string(self.token.kind)} '{self.token.lexeme}'"


@dataclass(frozen=True)
class UnexpectedToken(DiagnosticKind):
    found: Token
    expected: Tuple[TokenKind, ...]

    def message(self) -> str:
        options = " or ".join(user_string(k) for k in self.expected)
        return f"expected {options}, found '{self.found.lexeme}'"


@dataclass(frozen=True)
class ExpectedToken(DiagnosticKind):
    expected: TokenKind
    found: Token

    def message(self) -> str:
        return f"expected '{user_string(self.expected)}', found '{self.found.lexeme}'"


@dataclass(frozen=True)
class UnexpectedGeneric(DiagnosticKind):
    found: Token
    expected: Tuple[GenericKind, ...]

    def message(self) -> str:
        options = " or ".join(user_string(k) for k in self.expected)
        return f"expected {options}, found '{self.found.lexeme}'"


@dataclass(frozen=True)
class ExpectedGeneric(DiagnosticKind):
    expected: GenericKind
    found: Token

    def message(self) -> str:
        return f"expected {user_string(self.expected)}, found '{self.found.lexeme}'"


@dataclass(frozen=True)
class UnexpectedEof(DiagnosticKind):
    def message(self) -> str:
        return "unexpected end of file"


@dataclass(frozen=True)
class InvalidType(DiagnosticKind):
    type_name: str

    def message(self) -> str:
        return f"invalid type '{self.type_name}'"


@dataclass(frozen=True)
class InvalidGenericType(DiagnosticKind):
    kind: GenericKind

    def message(self) -> str:
        return f"invalid type {user_string(self.kind)}"


@dataclass(frozen=True)
class Custom(DiagnosticKind):
    text: str

    def message(self) -> str:
        return self.text


@dataclass(frozen=True)
class Diagnostic:
    span: Span
    severity: Severity
    kind: DiagnosticKind
    children: Tuple["Diagnostic", ...] = ()

    @classmethod
    def error(cls, span: Span, kind: DiagnosticKind) -> "Diagnostic":
        return cls(span, Severity.ERROR, kind)

    @classmethod
    def warning(cls, span: Span, kind: DiagnosticKind) -> "Diagnostic":
        return cls(span, Severity.WARNING, kind)

    @classmethod
    def note(cls, span: Span, message) -> "Diagnostic":
        return cls(span, Severity.NOTE, Custom(str(message)))

    @classmethod
    def help(cls, span: Span, message) -> "Diagnostic":
        return cls(span, Severity.HELP, Custom(str(message)))

    def message(self) -> str:
        return self.kind.message()

    def with_child(self, child: "Diagnostic") -> "Diagnostic":
        """A copy of this diagnostic with ``child`` attached after the others."""
        return replace(self, children=self.children + (child,))


def _source_lines(source: str) -> List[str]:
    lines = source.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class DiagnosticsManager:
    """Collects diagnostics for one source file and renders them."""

    def __init__(self, source_code="", filename="") -> None:
        self.source_code = str(source_code)
        self.filename = str(filename)
        self.diagnostics: List[Diagnostic] = []

    def push(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def is_empty(self) -> bool:
        return not self.diagnostics

    def __len__(self) -> int:
        return len(self.diagnostics)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.diagnostics)

    def render(self) -> str:
        """All diagnostics, each followed by its children, as report text."""
        lines = _source_lines(self.source_code)
        out: List[str] = []
        for diag in self.diagnostics:
            out.extend(self._render_one(diag, lines))
            for child in diag.children:
                out.extend(self._render_one(child, lines))
        return "".join(line + "\n" for line in out)

    def report(self, stream: TextIO = None) -> None:
        """Write the rendered diagnostics to ``stream`` (stderr by default)."""
        (stream or sys.stderr).write(self.render())

    def _render_one(self, diag: Diagnostic, lines: List[str]) -> List[str]:
        span = diag.span
        line_no = span.start_line + 1
        out = [
            f"{self.filename}:{line_no}:{span.start_col + 1}: "
            f"{diag.severity}: {diag.message()}"
        ]
        if span.start_line < len(lines):
            source_line = lines[span.start_line]
            out.append(f"{line_no:>5} | {source_line}")
            out.append(f"      | {self._underline(span, source_line)}")
        return out

    @staticmethod
    def _underline(span: Span, source_line: str) -> str:
        rest = len(source_line) - span.start_col
        if span.start_line == span.end_line:
            length = min(span.end_col - span.start_col, rest)
        else:
            length = rest
        marker = "^" + "~" * (length - 1) if length > 0 else "^"
        return " " * span.start_col + marker