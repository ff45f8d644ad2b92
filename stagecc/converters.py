"""Mappings between token operators, AST operators and TAC operators."""

from __future__ import annotations

from typing import Optional

from .ast import AstBinaryKind, AstUnaryKind
from .tac import TacBinaryKind, TacUnaryKind
from .tokens import OperatorKind

_UNARY_OF_OPERATOR = {
    OperatorKind.MINUS: AstUnaryKind.NEGATE,
    OperatorKind.TILDE: AstUnaryKind.COMPLEMENT,
    OperatorKind.EXCLAMATION: AstUnaryKind.NOT,
}

_BINARY_OF_OPERATOR = {
    OperatorKind.PLUS: AstBinaryKind.ADD,
    OperatorKind.MINUS: AstBinaryKind.SUBTRACT,
    OperatorKind.ASTERISK: AstBinaryKind.MULTIPLY,
    OperatorKind.SLASH: AstBinaryKind.DIVIDE,
    OperatorKind.PERCENT: AstBinaryKind.REMAINDER,
    OperatorKind.LOGICAL_AND: AstBinaryKind.AND,
    OperatorKind.EQUAL_EQUAL: AstBinaryKind.EQUAL,
    OperatorKind.NOT_EQUAL: AstBinaryKind.NOT_EQUAL,
    OperatorKind.LESS_THAN: AstBinaryKind.LESS_THAN,
    OperatorKind.LESS_EQUAL: AstBinaryKind.LESS_OR_EQUAL,
    OperatorKind.GREATER_THAN: AstBinaryKind.GREATER_THAN,
    OperatorKind.GREATER_EQUAL: AstBinaryKind.GREATER_OR_EQUAL,
    OperatorKind.LOGICAL_OR: AstBinaryKind.OR,
}

_TAC_OF_UNARY = {
    AstUnaryKind.COMPLEMENT: TacUnaryKind.COMPLEMENT,
    AstUnaryKind.NEGATE: TacUnaryKind.NEGATE,
    AstUnaryKind.NOT: TacUnaryKind.NOT,
}

# Logical "and" maps to addition here; "or" has no direct TAC operator.
_TAC_OF_BINARY = {
    AstBinaryKind.ADD: TacBinaryKind.ADD,
    AstBinaryKind.SUBTRACT: TacBinaryKind.SUBTRACT,
    AstBinaryKind.MULTIPLY: TacBinaryKind.MULTIPLY,
    AstBinaryKind.DIVIDE: TacBinaryKind.DIVIDE,
    AstBinaryKind.REMAINDER: TacBinaryKind.REMAINDER,
    AstBinaryKind.AND: TacBinaryKind.ADD,
    AstBinaryKind.EQUAL: TacBinaryKind.EQUAL,
    AstBinaryKind.NOT_EQUAL: TacBinaryKind.NOT_EQUAL,
    AstBinaryKind.LESS_THAN: TacBinaryKind.LESS_THAN,
    AstBinaryKind.LESS_OR_EQUAL: TacBinaryKind.LESS_OR_EQUAL,
    AstBinaryKind.GREATER_THAN: TacBinaryKind.GREATER_THAN,
    AstBinaryKind.GREATER_OR_EQUAL: TacBinaryKind.GREATER_OR_EQUAL,
}


def operator_to_unary(op: OperatorKind) -> Optional[AstUnaryKind]:
    """The unary AST operator for a token operator, or None."""
    return _UNARY_OF_OPERATOR.get(op)


def operator_to_binary(op: OperatorKind) -> Optional[AstBinaryKind]:
    """The binary AST operator for a token operator, or None."""
    return _BINARY_OF_OPERATOR.get(op)


def unary_to_tac(kind: AstUnaryKind) -> TacUnaryKind:
    """The TAC operator for a unary AST operator."""
    return _TAC_OF_UNARY[kind]


def binary_to_tac(kind: AstBinaryKind) -> Optional[TacBinaryKind]:
    """The TAC operator for a binary AST operator, or None for logical or."""
    return _TAC_OF_BINARY.get(kind)