"""Renders an assembly program as AT&T-syntax text."""

from __future__ import annotations

from typing import List

from .asm import (
    AllocateStack,
    AsmBinaryOperator,
    AsmCondCode,
    AsmFunction,
    AsmInstruction,
    AsmOperand,
    AsmProgram,
    AsmReg,
    AsmUnaryOperator,
    Binary,
    Cdq,
    Cmp,
    Idiv,
    Imm,
    Jmp,
    JmpCC,
    Label,
    Mov,
    Pseudo,
    Reg,
    Ret,
    SetCC,
    Stack,
    Unary,
)

_REG_4BYTE = {
    AsmReg.AX: "%eax",
    AsmReg.DX: "%edx",
    AsmReg.R10: "%r10d",
    AsmReg.R11: "%r11d",
}

_REG_1BYTE = {
    AsmReg.AX: "%al",
    AsmReg.DX: "%dl",
    AsmReg.R10: "%r10b",
    AsmReg.R11: "%r11b",
}

_BINARY = {
    AsmBinaryOperator.ADD: "addl",
    AsmBinaryOperator.SUB: "subl",
    AsmBinaryOperator.MULT: "imull",
}

_UNARY = {
    AsmUnaryOperator.NEG: "negl",
    AsmUnaryOperator.NOT: "notl",
}

_COND = {
    AsmCondCode.E: "e",
    AsmCondCode.NE: "ne",
    AsmCondCode.L: "l",
    AsmCondCode.LE: "le",
    AsmCondCode.G: "g",
    AsmCondCode.GE: "ge",
}

_STACK_NOTE = '\n.section .note.GNU-stack,"",@progbits\n'


def reg_4byte(reg: AsmReg) -> str:
    return _REG_4BYTE[reg]


def reg_1byte(reg: AsmReg) -> str:
    return _REG_1BYTE[reg]


def to_asm(item) -> str:
    """The assembly text of an operand, register, operator, condition or plain value."""
    if isinstance(item, Reg):
        return reg_4byte(item.reg)
    if isinstance(item, Stack):
        return f"{item.offset}(%rbp)"
    if isinstance(item, Imm):
        return f"${item.value}"
    if isinstance(item, Pseudo):
        raise ValueError("pseudo operand should not exist at emission")
    if isinstance(item, AsmReg):
        return reg_4byte(item)
    if isinstance(item, AsmBinaryOperator):
        return _BINARY[item]
    if isinstance(item, AsmUnaryOperator):
        return _UNARY[item]
    if isinstance(item, AsmCondCode):
        return _COND[item]
    return str(item)


def set_cc_operand(op: AsmOperand) -> str:
    """Operand text for a set instruction: registers use their 1-byte name."""
    if isinstance(op, Reg):
        return reg_1byte(op.reg)
    return to_asm(op)


def _instruction_lines(instr: AsmInstruction) -> List[str]:
    if isinstance(instr, Mov):
        return [f"movl {to_asm(instr.src)}, {to_asm(instr.dst)}"]
    if isinstance(instr, Unary):
        return [f"{to_asm(instr.unary_operator)} {to_asm(instr.operand)}"]
    if isinstance(instr, Binary):
        return [
            f"{to_asm(instr.binary_operator)} {to_asm(instr.src)}, {to_asm(instr.dst)}"
        ]
    if isinstance(instr, Idiv):
        return [f"idivl {to_asm(instr.operand)}"]
    if isinstance(instr, Cdq):
        return ["cdq"]
    if isinstance(instr, AllocateStack):
        return [f"subq ${instr.amount}, %rsp"]
    if isinstance(instr, Ret):
        return ["movq %rbp, %rsp", "popq %rbp", "ret"]
    if isinstance(instr, Cmp):
        return [f"cmpl {to_asm(instr.operand1)}, {to_asm(instr.operand2)}"]
    if isinstance(instr, Jmp):
        return [f"jmp .L{instr.label}"]
    if isinstance(instr, JmpCC):
        return [f"j{to_asm(instr.cond)} .L{instr.label}"]
    if isinstance(instr, SetCC):
        return [f"set{to_asm(instr.cond)} {set_cc_operand(instr.operand)}"]
    if isinstance(instr, Label):
        return [f".L{instr.name}:"]
    raise TypeError(f"not an assembly instruction: {instr!r}")


class CodeEmitter:
    """Produces the text of an assembly file."""

    def emit(self, program: AsmProgram) -> str:
        return self.emit_function(program.function_definition) + _STACK_NOTE

    def emit_function(self, function: AsmFunction) -> str:
        prologue = (
            f".globl {function.identifier}\n"
            f"{function.identifier}:\n"
            "    pushq %rbp\n"
            "    movq %rsp, %rbp\n"
        )
        body = "".join(self.emit_instruction(instr) for instr in function.instructions)
        return prologue + body

    def emit_instruction(self, instr: AsmInstruction) -> str:
        """The indented lines of one instruction, each ending in a newline."""
        return "\n".join(f"    {line}" for line in _instruction_lines(instr)) + "\n"