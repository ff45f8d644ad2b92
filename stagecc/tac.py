"""Three-address code and the generator of fresh temporaries and labels."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Union


class TacUnaryKind(Enum):
    COMPLEMENT = auto()
    NEGATE = auto()
    NOT = auto()


class TacBinaryKind(Enum):
    ADD = auto()
    SUBTRACT = auto()
    MULTIPLY = auto()
    DIVIDE = auto()
    REMAINDER = auto()
    EQUAL = auto()
    NOT_EQUAL = auto()
    LESS_THAN = auto()
    LESS_OR_EQUAL = auto()
    GREATER_THAN = auto()
    GREATER_OR_EQUAL = auto()


@dataclass(frozen=True)
class TacConstant:
    value: str


@dataclass(frozen=True)
class TacVar:
    name: str


TacVal = Union[TacConstant, TacVar]


@dataclass(frozen=True)
class TacReturn:
    val: TacVal


@dataclass(frozen=True)
class TacUnary:
    operator: TacUnaryKind
    source: TacVal
    destination: TacVal


@dataclass(frozen=True)
class TacBinary:
    operator: TacBinaryKind
    source1: TacVal
    source2: TacVal
    destination: TacVal


@dataclass(frozen=True)
class TacCopy:
    src: TacVal
    dst: TacVal


@dataclass(frozen=True)
class TacJump:
    target: str


@dataclass(frozen=True)
class TacJumpIfZero:
    condition: TacVal
    target: str


@dataclass(frozen=True)
class TacJumpIfNotZero:
    condition: TacVal
    target: str


@dataclass(frozen=True)
class TacLabel:
    name: str


TacInstruction = Union[
    TacReturn, TacUnary, TacBinary, TacCopy, TacJump, TacJumpIfZero, TacJumpIfNotZero, TacLabel
]


@dataclass
class TacFunction:
    identifier: str
    instructions: List[TacInstruction] = field(default_factory=list)


@dataclass
class TacProgram:
    function_definition: TacFunction


@dataclass
class TempGen:
    """Hands out unique temporary names and numbered labels."""

    temp_counter: int = 0
    label_counter: int = 0

    def temp(self) -> str:
        name = f"%t{self.temp_counter}"
        self.temp_counter += 1
        return name

    def label(self, prefix) -> str:
        name = f"{prefix}{self.label_counter}"
        self.label_counter += 1
        return name