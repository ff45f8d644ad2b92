"""Abstract syntax tree of the accepted C subset and a visitor over it."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Union


class AstUnaryKind(Enum):
    COMPLEMENT = auto()
    NEGATE = auto()
    NOT = auto()


class AstBinaryKind(Enum):
    ADD = auto()
    SUBTRACT = auto()
    MULTIPLY = auto()
    DIVIDE = auto()
    REMAINDER = auto()
    AND = auto()
    OR = auto()
    EQUAL = auto()
    NOT_EQUAL = auto()
    LESS_THAN = auto()
    LESS_OR_EQUAL = auto()
    GREATER_THAN = auto()
    GREATER_OR_EQUAL = auto()


@dataclass(frozen=True)
class ConstantExpr:
    constant: str


@dataclass(frozen=True)
class UnaryExpr:
    operator: AstUnaryKind
    operand: "Expression"


@dataclass(frozen=True)
class BinaryExpr:
    operator: AstBinaryKind
    left: "Expression"
    right: "Expression"


Expression = Union[ConstantExpr, UnaryExpr, BinaryExpr]


@dataclass(frozen=True)
class ReturnStatement:
    expression: Expression


Statement = ReturnStatement


@dataclass(frozen=True)
class FunctionDef:
    name: str
    body: Statement


@dataclass(frozen=True)
class Program:
    function_definition: FunctionDef


class Visitor:
    """Walks a program down to its expressions; override the hooks to act."""

    def visit(self, node) -> None:
        if isinstance(node, Program):
            self.visit_program(node)
        elif isinstance(node, FunctionDef):
            self.visit_function(node)
        elif isinstance(node, ReturnStatement):
            self.visit_statement(node)
        elif isinstance(node, (ConstantExpr, UnaryExpr, BinaryExpr)):
            self.visit_expression(node)
        else:
            raise TypeError(f"not an AST node: {node!r}")

    def visit_program(self, program: Program) -> None:
        self.visit(program.function_definition)

    def visit_function(self, function: FunctionDef) -> None:
        self.visit(function.body)

    def visit_statement(self, statement: Statement) -> None:
        self.visit(statement.expression)

    def visit_expression(self, expression: Expression) -> None:
        """Descend into the sub-expressions of a compound expression."""
        if isinstance(expression, UnaryExpr):
            self.visit(expression.operand)
        elif isinstance(expression, BinaryExpr):
            self.visit(expression.left)
            self.visit(expression.right)