"""Assembly-level program representation and conversions from TAC."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Union

from .tac import TacBinaryKind, TacConstant, TacUnaryKind, TacVal, TacVar


class AsmUnaryOperator(Enum):
    NEG = auto()
    NOT = auto()


class AsmBinaryOperator(Enum):
    ADD = auto()
    SUB = auto()
    MULT = auto()


class AsmCondCode(Enum):
    E = auto()
    NE = auto()
    G = auto()
    GE = auto()
    L = auto()
    LE = auto()


class AsmReg(Enum):
    AX = auto()
    R10 = auto()
    DX = auto()
    R11 = auto()


@dataclass(frozen=True)
class Imm:
    value: int


@dataclass(frozen=True)
class Reg:
    reg: AsmReg


@dataclass(frozen=True)
class Pseudo:
    name: str


@dataclass(frozen=True)
class Stack:
    offset: int


AsmOperand = Union[Imm, Reg, Pseudo, Stack]


@dataclass(frozen=True)
class Mov:
    src: AsmOperand
    dst: AsmOperand


@dataclass(frozen=True)
class Unary:
    unary_operator: AsmUnaryOperator
    operand: AsmOperand


@dataclass(frozen=True)
class Binary:
    binary_operator: AsmBinaryOperator
    src: AsmOperand
    dst: AsmOperand


@dataclass(frozen=True)
class Cmp:
    operand1: AsmOperand
    operand2: AsmOperand


@dataclass(frozen=True)
class Idiv:
    operand: AsmOperand


@dataclass(frozen=True)
class Cdq:
    pass


@dataclass(frozen=True)
class Jmp:
    label: str


@dataclass(frozen=True)
class JmpCC:
    cond: AsmCondCode
    label: str


@dataclass(frozen=True)
class SetCC:
    cond: AsmCondCode
    operand: AsmOperand


@dataclass(frozen=True)
class Label:
    name: str


@dataclass(frozen=True)
class AllocateStack:
    amount: int


@dataclass(frozen=True)
class Ret:
    pass


AsmInstruction = Union[
    Mov, Unary, Binary, Cmp, Idiv, Cdq, Jmp, JmpCC, SetCC, Label, AllocateStack, Ret
]


@dataclass
class AsmFunction:
    identifier: str
    instructions: List[AsmInstruction] = field(default_factory=list)


@dataclass
class AsmProgram:
    function_definition: AsmFunction


_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1

_UNARY = {
    TacUnaryKind.NEGATE: AsmUnaryOperator.NEG,
    TacUnaryKind.COMPLEMENT: AsmUnaryOperator.NOT,
}

_BINARY = {
    TacBinaryKind.ADD: AsmBinaryOperator.ADD,
    TacBinaryKind.SUBTRACT: AsmBinaryOperator.SUB,
    TacBinaryKind.MULTIPLY: AsmBinaryOperator.MULT,
}

_COND = {
    TacBinaryKind.EQUAL: AsmCondCode.E,
    TacBinaryKind.NOT_EQUAL: AsmCondCode.NE,
    TacBinaryKind.LESS_THAN: AsmCondCode.L,
    TacBinaryKind.LESS_OR_EQUAL: AsmCondCode.LE,
    TacBinaryKind.GREATER_THAN: AsmCondCode.G,
    TacBinaryKind.GREATER_OR_EQUAL: AsmCondCode.GE,
}


def convert_operand(val: TacVal) -> AsmOperand:
    """An immediate for a constant, a pseudo register for a variable."""
    if isinstance(val, TacConstant):
        text = val.value
        if not _INT_PATTERN.fullmatch(text):
            raise ValueError(f"invalid constant integer: {text!r}")
        number = int(text)
        if not _I32_MIN <= number <= _I32_MAX:
            raise ValueError(f"invalid constant integer: {text!r}")
        return Imm(number)
    if isinstance(val, TacVar):
        return Pseudo(val.name)
    raise TypeError(f"not a TAC value: {val!r}")


def convert_unary_operator(op: TacUnaryKind) -> AsmUnaryOperator:
    """The single instruction operator for a TAC unary operator."""
    try:
        return _UNARY[op]
    except KeyError:
        raise ValueError(f"no single assembly operator for {op}") from None


def convert_binary_operator(op: TacBinaryKind) -> AsmBinaryOperator:
    """The arithmetic instruction operator for add, subtract or multiply."""
    try:
        return _BINARY[op]
    except KeyError:
        raise ValueError(f"no arithmetic assembly operator for {op}") from None


def convert_to_cond_code(op: TacBinaryKind) -> AsmCondCode:
    """The condition code for a relational TAC operator."""
    try:
        return _COND[op]
    except KeyError:
        raise ValueError(f"{op} is not a relational operator") from None