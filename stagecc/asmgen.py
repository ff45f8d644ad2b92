"""Selects assembly instructions for three-address code."""

from __future__ import annotations

from typing import List

from .asm import (
    AsmCondCode,
    AsmFunction,
    AsmInstruction,
    AsmProgram,
    AsmReg,
    Binary,
    Cdq,
    Cmp,
    Idiv,
    Imm,
    Jmp,
    JmpCC,
    Label,
    Mov,
    Reg,
    Ret,
    SetCC,
    Unary,
    convert_binary_operator,
    convert_operand,
    convert_to_cond_code,
    convert_unary_operator,
)
from .tac import (
    TacBinary,
    TacBinaryKind,
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
    TacUnaryKind,
)

_RELATIONAL = frozenset(
    {
        TacBinaryKind.EQUAL,
        TacBinaryKind.NOT_EQUAL,
        TacBinaryKind.LESS_THAN,
        TacBinaryKind.LESS_OR_EQUAL,
        TacBinaryKind.GREATER_THAN,
        TacBinaryKind.GREATER_OR_EQUAL,
    }
)

# Register holding the result of a division: quotient or remainder.
_DIVISION_RESULT = {
    TacBinaryKind.DIVIDE: AsmReg.AX,
    TacBinaryKind.REMAINDER: AsmReg.DX,
}


class AsmGenerator:
    """Turns a TAC program into assembly still using pseudo registers."""

    def generate(self, program: TacProgram) -> AsmProgram:
        return AsmProgram(self.cast_function(program.function_definition))

    def cast_function(self, function: TacFunction) -> AsmFunction:
        instructions = [
            asm
            for instruction in function.instructions
            for asm in self.cast_instruction(instruction)
        ]
        return AsmFunction(function.identifier, instructions)

    def cast_instruction(self, instruction: TacInstruction) -> List[AsmInstruction]:
        """The assembly instructions for one TAC instruction."""
        if isinstance(instruction, TacReturn):
            return [Mov(convert_operand(instruction.val), Reg(AsmReg.AX)), Ret()]
        if isinstance(instruction, TacUnary):
            return self._cast_unary(instruction)
        if isinstance(instruction, TacBinary):
            return self._cast_binary(instruction)
        if isinstance(instruction, TacCopy):
            return [Mov(convert_operand(instruction.src), convert_operand(instruction.dst))]
        if isinstance(instruction, TacJump):
            return [Jmp(instruction.target)]
        if isinstance(instruction, TacJumpIfZero):
            return [
                Cmp(Imm(0), convert_operand(instruction.condition)),
                JmpCC(AsmCondCode.E, instruction.target),
            ]
        if isinstance(instruction, TacJumpIfNotZero):
            return [
                Cmp(Imm(0), convert_operand(instruction.condition)),
                JmpCC(AsmCondCode.NE, instruction.target),
            ]
        if isinstance(instruction, TacLabel):
            return [Label(instruction.name)]
        raise TypeError(f"not a TAC instruction: {instruction!r}")

    @staticmethod
    def _cast_unary(instruction: TacUnary) -> List[AsmInstruction]:
        source = convert_operand(instruction.source)
        destination = convert_operand(instruction.destination)
        if instruction.operator is TacUnaryKind.NOT:
            return [
                Cmp(Imm(0), source),
                Mov(Imm(0), destination),
                SetCC(AsmCondCode.E, destination),
            ]
        return [
            Mov(source, destination),
            Unary(convert_unary_operator(instruction.operator), destination),
        ]

    @staticmethod
    def _cast_binary(instruction: TacBinary) -> List[AsmInstruction]:
        operator = instruction.operator
        source1 = convert_operand(instruction.source1)
        source2 = convert_operand(instruction.source2)
        destination = convert_operand(instruction.destination)

        if operator in _DIVISION_RESULT:
            return [
                Mov(source1, Reg(AsmReg.AX)),
                Cdq(),
                Idiv(source2),
                Mov(Reg(_DIVISION_RESULT[operator]), destination),
            ]

        if operator in _RELATIONAL:
            return [
                Cmp(source2, source1),
                Mov(Imm(0), destination),
                SetCC(convert_to_cond_code(operator), destination),
            ]

        scratch = Reg(AsmReg.R10)
        return [
            Mov(source1, scratch),
            Binary(convert_binary_operator(operator), source2, scratch),
            Mov(scratch, destination),
        ]