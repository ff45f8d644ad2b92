"""Recursive-descent parser producing the AST of a single-function program."""

from __future__ import annotations

from typing import Iterable, Optional, Union

from .ast import (
    BinaryExpr,
    ConstantExpr,
    Expression,
    FunctionDef,
    Program,
    ReturnStatement,
    Statement,
    UnaryExpr,
)
from .converters import operator_to_binary, operator_to_unary
from .diagnostics import (
    Diagnostic,
    DiagnosticsManager,
    ExpectedToken,
    UnexpectedEof,
    UnexpectedGeneric,
    UnknownToken,
)
from .tokens import (
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

_PRECEDENCE = {
    OperatorKind.ASTERISK: 50,
    OperatorKind.SLASH: 50,
    OperatorKind.PERCENT: 50,
    OperatorKind.PLUS: 45,
    OperatorKind.MINUS: 45,
    OperatorKind.LESS_THAN: 35,
    OperatorKind.LESS_EQUAL: 35,
    OperatorKind.GREATER_THAN: 35,
    OperatorKind.GREATER_EQUAL: 35,
    OperatorKind.EQUAL_EQUAL: 30,
    OperatorKind.NOT_EQUAL: 30,
    OperatorKind.LOGICAL_AND: 10,
    OperatorKind.LOGICAL_OR: 5,
}

_UNARY_OPERATORS = frozenset(
    {OperatorKind.TILDE, OperatorKind.EXCLAMATION, OperatorKind.MINUS}
)

# Operand of a prefix operator binds tighter than any binary operator.
_UNARY_BINDING = 100

_OPEN_PAREN = TokenKind.punctuation(PunctuationKind.OPEN_PAREN)
_CLOSE_PAREN = TokenKind.punctuation(PunctuationKind.CLOSE_PAREN)
_OPEN_BRACE = TokenKind.punctuation(PunctuationKind.OPEN_BRACE)
_CLOSE_BRACE = TokenKind.punctuation(PunctuationKind.CLOSE_BRACE)
_SEMICOLON = TokenKind.punctuation(PunctuationKind.SEMICOLON)
_INT = TokenKind.keyword(KeywordKind.INT)
_VOID = TokenKind.keyword(KeywordKind.VOID)
_RETURN = TokenKind.keyword(KeywordKind.RETURN)


class _Abort(Exception):
    """Unwinds the parser after a failure has been recorded."""


def get_precedence(op: OperatorKind) -> int:
    """Binding strength of a binary operator; 0 for operators with none."""
    return _PRECEDENCE.get(op, 0)


class Parser:
    """Parses a token stream, recording problems in a diagnostics manager.

    The ``parse_*`` methods abandon parsing on failure after recording a
    diagnostic; :meth:`parse` turns that into a ``None`` result.
    """

    def __init__(
        self,
        source_tokens: Union[TokenStream, Iterable[Token]],
        diagnostics: Optional[DiagnosticsManager] = None,
    ) -> None:
        if not isinstance(source_tokens, TokenStream):
            source_tokens = TokenStream(source_tokens)
        self.source_tokens = source_tokens
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticsManager()

    def parse(self) -> Optional[Program]:
        """The parsed program, or None if parsing had to stop."""
        try:
            return self.parse_program()
        except _Abort:
            return None

    def expect(self, kind: TokenKind) -> Token:
        """Consume the next token, which must have kind ``kind``."""
        token = self.source_tokens.consume()
        if token is None:
            self._fail_eof()
        if token.kind == kind:
            return token
        self.diagnostics.push(Diagnostic.error(token.span, ExpectedToken(kind, token)))
        raise _Abort

    def parse_program(self) -> Program:
        function = self.parse_function()
        # A missing end of input is reported but does not discard the program.
        try:
            self.expect(TokenKind.eof())
        except _Abort:
            pass
        return Program(function)

    def parse_function(self) -> FunctionDef:
        self.expect(_INT)
        name = self._unwrap(TokenCategory.IDENTIFIER, GenericKind.IDENTIFIER)
        self.expect(_OPEN_PAREN)
        self.expect(_VOID)
        self.expect(_CLOSE_PAREN)
        self.expect(_OPEN_BRACE)
        body = self.parse_statement()
        self.expect(_CLOSE_BRACE)
        return FunctionDef(name, body)

    def parse_statement(self) -> Statement:
        token = self._peek()
        if token.kind == _RETURN:
            self.expect(_RETURN)
            expression = self.parse_expression()
            self.expect(_SEMICOLON)
            return ReturnStatement(expression)
        self._fail_here(token, "expected a statement here")

    def parse_expression(self, min_prec: int = 0) -> Expression:
        """Parse an expression whose binary operators bind at least ``min_prec``."""
        lhs = self._parse_operand()

        while True:
            token = self.source_tokens.peek()
            if token is None or token.kind.category is not TokenCategory.OPERATOR:
                break
            op = token.kind.value
            prec = get_precedence(op)
            if prec < min_prec:
                break
            self.source_tokens.consume()
            rhs = self.parse_expression(prec + 1)
            binary = operator_to_binary(op)
            if binary is None:
                raise _Abort
            lhs = BinaryExpr(binary, lhs, rhs)

        return lhs

    def _parse_operand(self) -> Expression:
        token = self._peek()
        kind = token.kind

        if kind.category is TokenCategory.CONSTANT:
            return ConstantExpr(self._unwrap(TokenCategory.CONSTANT, GenericKind.CONSTANT))

        if kind.category is TokenCategory.OPERATOR and kind.value in _UNARY_OPERATORS:
            operator = operator_to_unary(kind.value)
            self.source_tokens.consume()
            operand = self.parse_expression(_UNARY_BINDING)
            return UnaryExpr(operator, operand)

        if kind == _OPEN_PAREN:
            self.expect(_OPEN_PAREN)
            inner = self.parse_expression()
            self.expect(_CLOSE_PAREN)
            return inner

        self._fail_here(token, "expected an expression here")

    def _peek(self) -> Token:
        token = self.source_tokens.peek()
        if token is None:
            raise _Abort
        return token

    def _unwrap(self, category: TokenCategory, generic: GenericKind):
        token = self.source_tokens.consume()
        if token is None:
            self._fail_eof()
        if token.kind.category is category:
            return token.kind.value
        self.diagnostics.push(
            Diagnostic.error(token.span, UnexpectedGeneric(token, (generic,)))
        )
        raise _Abort

    def _fail_eof(self):
        self.diagnostics.push(Diagnostic.error(Span(), UnexpectedEof()))
        raise _Abort

    def _fail_here(self, token: Token, note: str):
        self.diagnostics.push(
            Diagnostic.error(token.span, UnknownToken(token)).with_child(
                Diagnostic.note(token.span, note)
            )
        )
        raise _Abort