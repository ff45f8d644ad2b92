"""Lowers the AST into three-address code."""

from __future__ import annotations

from typing import List, Optional, Tuple

from .ast import (
    AstBinaryKind,
    BinaryExpr,
    ConstantExpr,
    Expression,
    FunctionDef,
    Program,
    ReturnStatement,
    Statement,
    UnaryExpr,
)
from .converters import binary_to_tac, unary_to_tac
from .tac import (
    TacBinary,
    TacConstant,
    TacCopy,
    TacFunction,
    TacInstruction,
    TacJump,
    TacJumpIfNotZero,
    TacJumpIfZero,
    TacLabel,
    TacProgram,
    TacReturn,
    TacUnary,
    TacVal,
    TacVar,
    TempGen,
)

# For each short-circuit operator: label prefix, jump taken on the deciding
# value, result when both operands are evaluated, result when short-circuited.
_SHORT_CIRCUIT = {
    AstBinaryKind.AND: ("and_false", TacJumpIfZero, "1", "0"),
    AstBinaryKind.OR: ("or_true", TacJumpIfNotZero, "0", "1"),
}

Lowered = Tuple[List[TacInstruction], TacVal]


class TacGenerator:
    """Produces TAC, drawing temporaries and labels from one ``TempGen``."""

    def __init__(self, tempgen: Optional[TempGen] = None) -> None:
        self.tempgen = tempgen if tempgen is not None else TempGen()

    def generate(self, program: Program) -> TacProgram:
        return TacProgram(self.transform_function(program.function_definition))

    def transform_function(self, function: FunctionDef) -> TacFunction:
        return TacFunction(function.name, self.transform_statement(function.body))

    def transform_statement(self, statement: Statement) -> List[TacInstruction]:
        if isinstance(statement, ReturnStatement):
            instructions, value = self.transform_expression(statement.expression)
            return [*instructions, TacReturn(value)]
        raise TypeError(f"not a statement: {statement!r}")

    def transform_expression(self, expression: Expression) -> Lowered:
        """The instructions computing ``expression`` and the value holding it."""
        if isinstance(expression, ConstantExpr):
            return [], TacConstant(expression.constant)

        if isinstance(expression, UnaryExpr):
            instructions, source = self.transform_expression(expression.operand)
            destination = TacVar(self.tempgen.temp())
            instructions.append(
                TacUnary(unary_to_tac(expression.operator), source, destination)
            )
            return instructions, destination

        if isinstance(expression, BinaryExpr):
            if expression.operator in _SHORT_CIRCUIT:
                return self._short_circuit(expression)
            left_instructions, left = self.transform_expression(expression.left)
            right_instructions, right = self.transform_expression(expression.right)
            destination = TacVar(self.tempgen.temp())
            instructions = [
                *left_instructions,
                *right_instructions,
                TacBinary(binary_to_tac(expression.operator), left, right, destination),
            ]
            return instructions, destination

        raise TypeError(f"not an expression: {expression!r}")

    def _short_circuit(self, expression: BinaryExpr) -> Lowered:
        prefix, jump, evaluated, short = _SHORT_CIRCUIT[expression.operator]

        result = TacVar(self.tempgen.temp())
        short_label = self.tempgen.label(prefix)
        end_label = self.tempgen.label("end")

        instructions, left = self.transform_expression(expression.left)
        instructions.append(jump(left, short_label))

        right_instructions, right = self.transform_expression(expression.right)
        instructions.extend(right_instructions)
        instructions.extend(
            [
                jump(right, short_label),
                TacCopy(TacConstant(evaluated), result),
                TacJump(end_label),
                TacLabel(short_label),
                TacCopy(TacConstant(short), result),
                TacLabel(end_label),
            ]
        )
        return instructions, result