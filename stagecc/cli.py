"""Command-line entry point of the compiler driver."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, NamedTuple, Optional, Sequence

from .compiler import (
    CompileError,
    Compiler,
    PipelineStage,
    assemble_and_link,
    preprocess,
)

_USAGE = "Usage: compiler_driver [--lex|--parse|--codegen|-S] <file.c>"

_STAGE_OPTIONS = {
    "--lex": PipelineStage.LEXER,
    "--parse": PipelineStage.PARSER,
    "--tacky": PipelineStage.TAC_GENERATION,
    "--codegen": PipelineStage.ASSEMBLY_GENERATION,
    "--allocation": PipelineStage.ASSEMBLY_ALLOCATION,
    "--legalization": PipelineStage.ASSEMBLY_LEGALIZATION,
}


class _Options(NamedTuple):
    stage: PipelineStage
    emit_assembly_only: bool
    input_file: Path


def parse_args(argv: Sequence[str]) -> _Options:
    """Read leading options, then exactly one input file; ValueError on bad use."""
    args: List[str] = list(argv)
    if not args:
        raise ValueError(_USAGE)

    stage = PipelineStage.CODE_EMISSION
    emit_assembly_only = False
    while args and args[0].startswith("-"):
        arg = args.pop(0)
        if arg in _STAGE_OPTIONS:
            stage = _STAGE_OPTIONS[arg]
        elif arg == "-S":
            stage = PipelineStage.CODE_EMISSION
            emit_assembly_only = True
        else:
            raise ValueError(f"Unknown option: {arg}")

    if len(args) != 1:
        listed = ", ".join(f'"{a}"' for a in args)
        raise ValueError(f"Expected single input file. Got: [{listed}]")

    return _Options(stage, emit_assembly_only, Path(args[0]))


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the driver; returns the process exit status."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        options = parse_args(argv)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1

    input_file = options.input_file
    if not input_file.exists():
        print(f"Input file does not exist: {input_file}", file=sys.stderr)
        return 1

    try:
        preprocessed = preprocess(input_file)
    except CompileError as exc:
        print(exc, file=sys.stderr)
        return 1

    try:
        try:
            source_code = preprocessed.read_text()
        except OSError as exc:
            print(f"Failed to read preprocessed file: {exc}", file=sys.stderr)
            return 1
        compiler = Compiler(source_code, input_file.name)
        try:
            output = compiler.compile(options.stage)
        except CompileError as exc:
            return int(exc.code) if exc.code is not None else 1
    finally:
        preprocessed.unlink(missing_ok=True)

    if options.stage is not PipelineStage.CODE_EMISSION:
        print(output)
        return 0

    asm_file = input_file.with_suffix(".s")
    try:
        asm_file.write_text(output)
    except OSError as exc:
        print(f"Failed to write assembly file: {exc}", file=sys.stderr)
        return 1

    if options.emit_assembly_only:
        return 0

    try:
        assemble_and_link(asm_file, input_file)
    except CompileError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())