"""Replaces pseudo registers with stack slots."""

from __future__ import annotations

from dataclasses import fields, replace
from typing import Dict, Tuple

from .asm import AsmFunction, AsmInstruction, AsmOperand, AsmProgram, Pseudo, Stack

_SLOT_SIZE = 4


class AsmAllocator:
    """Gives every distinct pseudo register its own 4-byte stack slot.

    Slots are handed out downwards from -4 in order of first appearance; the
    mapping is kept across calls on the same allocator.
    """

    def __init__(self) -> None:
        self.next_offset = -_SLOT_SIZE
        self.stack_map: Dict[str, int] = {}

    def allocate(self, program: AsmProgram) -> Tuple[AsmProgram, int]:
        """The program with pseudos replaced, and the stack size to reserve."""
        function = program.function_definition
        instructions = [self._visit_instruction(instr) for instr in function.instructions]
        allocated = AsmProgram(AsmFunction(function.identifier, instructions))
        return allocated, -self.next_offset

    def _visit_instruction(self, instr: AsmInstruction) -> AsmInstruction:
        changes = {
            f.name: self.replace_operand(getattr(instr, f.name))
            for f in fields(instr)
            if isinstance(getattr(instr, f.name), Pseudo)
        }
        return replace(instr, **changes) if changes else instr

    def replace_operand(self, operand: AsmOperand) -> AsmOperand:
        """A stack slot for a pseudo register; any other operand unchanged."""
        if not isinstance(operand, Pseudo):
            return operand
        offset = self.stack_map.get(operand.name)
        if offset is None:
            offset = self.next_offset
            self.stack_map[operand.name] = offset
            self.next_offset -= _SLOT_SIZE
        return Stack(offset)