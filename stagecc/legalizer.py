"""Rewrites assembly instructions whose operand combinations are not encodable."""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple

from .asm import (
    AllocateStack,
    AsmBinaryOperator,
    AsmFunction,
    AsmInstruction,
    AsmOperand,
    AsmProgram,
    AsmReg,
    Binary,
    Cmp,
    Idiv,
    Imm,
    Mov,
    Reg,
    Stack,
    Unary,
)

Fix = Optional[List[AsmInstruction]]


def is_stack_operand(op: AsmOperand) -> bool:
    """Whether the operand is a stack slot."""
    return isinstance(op, Stack)


def both_stack_operands(src: AsmOperand, dst: AsmOperand) -> bool:
    """Whether both operands are stack slots."""
    return is_stack_operand(src) and is_stack_operand(dst)


def legalize_mov(instr: AsmInstruction) -> Fix:
    """Route a memory-to-memory move through R10."""
    if isinstance(instr, Mov) and both_stack_operands(instr.src, instr.dst):
        scratch = Reg(AsmReg.R10)
        return [Mov(instr.src, scratch), Mov(scratch, instr.dst)]
    return None


def legalize_unary(instr: AsmInstruction) -> Fix:
    """Unary instructions accept any operand, so they are kept as they are."""
    if isinstance(instr, Unary):
        return [instr]
    return None


def legalize_binop(instr: AsmInstruction) -> Fix:
    """Fix multiplications into memory, memory-to-memory arithmetic and immediate divisors."""
    if isinstance(instr, Binary):
        if instr.binary_operator is AsmBinaryOperator.MULT and is_stack_operand(instr.dst):
            scratch = Reg(AsmReg.R11)
            return [
                Mov(instr.src, scratch),
                Binary(AsmBinaryOperator.MULT, instr.dst, scratch),
                Mov(scratch, instr.dst),
            ]
        if both_stack_operands(instr.src, instr.dst):
            scratch = Reg(AsmReg.R10)
            return [
                Mov(instr.src, scratch),
                Binary(instr.binary_operator, scratch, instr.dst),
            ]
        return None
    if isinstance(instr, Idiv) and isinstance(instr.operand, Imm):
        scratch = Reg(AsmReg.R10)
        return [Mov(instr.operand, scratch), Idiv(scratch)]
    return None


def legalize_compare(instr: AsmInstruction) -> Fix:
    """Fix comparisons of two stack slots or against an immediate second operand."""
    if not isinstance(instr, Cmp):
        return None
    if is_stack_operand(instr.operand1) and is_stack_operand(instr.operand2):
        scratch = Reg(AsmReg.R10)
        return [Mov(instr.operand1, scratch), Cmp(scratch, instr.operand2)]
    if isinstance(instr.operand2, Imm):
        scratch = Reg(AsmReg.R11)
        return [Mov(instr.operand2, scratch), Cmp(instr.operand1, scratch)]
    return None


_FIXES: Tuple[Callable[[AsmInstruction], Fix], ...] = (
    legalize_mov,
    legalize_unary,
    legalize_binop,
    legalize_compare,
)


class AsmLegalizer:
    """Reserves the stack frame and makes every instruction encodable."""

    def __init__(self, stack_size: int) -> None:
        self.stack_size = stack_size

    def legalize(self, program: AsmProgram) -> AsmProgram:
        function = program.function_definition
        instructions: List[AsmInstruction] = [AllocateStack(self.stack_size)]
        for instr in function.instructions:
            instructions.extend(self.fix_instruction(instr))
        return AsmProgram(AsmFunction(function.identifier, instructions))

    def fix_instruction(self, instr: AsmInstruction) -> List[AsmInstruction]:
        """The first applicable rewrite of ``instr``, or ``instr`` alone."""
        for fix in _FIXES:
            fixed = fix(instr)
            if fixed is not None:
                return fixed
        return [instr]