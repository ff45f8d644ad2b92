"""Drives the compilation pipeline and the external preprocessor and linker."""

from __future__ import annotations

import pprint
import subprocess
from enum import Enum, IntEnum, auto
from pathlib import Path
from typing import Optional, TextIO, Union

from .allocator import AsmAllocator
from .asmgen import AsmGenerator
from .diagnostics import DiagnosticsManager
from .emitter import CodeEmitter
from .legalizer import AsmLegalizer
from .lexer import Lexer
from .parser import Parser
from .tac import TempGen
from .tacgen import TacGenerator

PathLike = Union[str, Path]


class ErrCode(IntEnum):
    LEXER_ERROR = 1
    PARSER_ERROR = 2


class PipelineStage(Enum):
    LEXER = auto()
    PARSER = auto()
    TAC_GENERATION = auto()
    ASSEMBLY_GENERATION = auto()
    ASSEMBLY_ALLOCATION = auto()
    ASSEMBLY_LEGALIZATION = auto()
    CODE_EMISSION = auto()


class CompileError(Exception):
    """A failed compilation; ``code`` is set when a pipeline stage failed."""

    def __init__(self, message: str, code: Optional[ErrCode] = None) -> None:
        super().__init__(message)
        self.code = code


class Compiler:
    """Compiles one source file, stopping after a chosen stage."""

    def __init__(
        self,
        source_code: str,
        filename="",
        diagnostic_stream: Optional[TextIO] = None,
    ) -> None:
        self.source_code = source_code
        self.diagnostics = DiagnosticsManager(source_code, filename)
        self.diagnostic_stream = diagnostic_stream

    def compile(self, stage: PipelineStage = PipelineStage.CODE_EMISSION) -> str:
        """Assembly text, or a dump of the requested stage's result.

        Diagnostics are reported and :class:`CompileError` raised when lexing
        or parsing fails.
        """
        tokens = Lexer(self.source_code).tokenize(self.diagnostics)
        self._check(ErrCode.LEXER_ERROR, "lexing failed")
        if stage is PipelineStage.LEXER:
            return pprint.pformat(list(tokens.remaining()))

        program = Parser(tokens, self.diagnostics).parse()
        self._check(ErrCode.PARSER_ERROR, "parsing failed")
        if program is None:
            raise RuntimeError("parser returned no program despite no diagnostics")
        if stage is PipelineStage.PARSER:
            return pprint.pformat(program)

        tac = TacGenerator(TempGen()).generate(program)
        if stage is PipelineStage.TAC_GENERATION:
            return pprint.pformat(tac)

        asm = AsmGenerator().generate(tac)
        if stage is PipelineStage.ASSEMBLY_GENERATION:
            return pprint.pformat(asm)

        allocated, stack_size = AsmAllocator().allocate(asm)
        if stage is PipelineStage.ASSEMBLY_ALLOCATION:
            return pprint.pformat(allocated)

        legal = AsmLegalizer(stack_size).legalize(allocated)
        if stage is PipelineStage.ASSEMBLY_LEGALIZATION:
            return pprint.pformat(legal)

        return CodeEmitter().emit(legal)

    def _check(self, code: ErrCode, message: str) -> None:
        if not self.diagnostics.is_empty():
            self.diagnostics.report(self.diagnostic_stream)
            raise CompileError(message, code)


def preprocess(input_file: PathLike) -> Path:
    """Run the C preprocessor; returns the path of the ``.i`` file it wrote."""
    input_file = Path(input_file)
    preprocessed = input_file.with_suffix(".i")
    try:
        result = subprocess.run(
            ["gcc", "-E", "-P", str(input_file), "-o", str(preprocessed)]
        )
    except OSError as exc:
        raise CompileError(f"Failed to run preprocessor: {exc}") from exc
    if result.returncode != 0:
        raise CompileError("Preprocessing failed")
    return preprocessed


def assemble_and_link(asm_file: PathLike, input_file: PathLike) -> Path:
    """Build an executable next to ``input_file``; the assembly file is removed."""
    asm_file = Path(asm_file)
    executable = Path(input_file).with_suffix("")
    try:
        result = subprocess.run(["gcc", str(asm_file), "-o", str(executable)])
    except OSError as exc:
        raise CompileError(f"Failed to assemble/link: {exc}") from exc
    finally:
        asm_file.unlink(missing_ok=True)
    if result.returncode != 0:
        raise CompileError("Assembly/linking failed")
    return executable