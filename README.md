# stagecc

`stagecc` compiles a small subset of C into x86-64 assembly in the AT&T
syntax. It accepts a program made of one `int name(void)` function whose
body is a single `return` statement. The returned expression can use:

- decimal integer constants that fit in 32 bits
- the unary operators `-`, `~` and `!`
- the arithmetic operators `+ - * / %`
- the comparisons `< <= > >= == !=`
- the short-circuit operators `&&` and `||`
- parentheses

Both `//` and `/* */` comments are accepted. The source must be ASCII.

## Pipeline

The source goes through these stages in order:

1. lexing into tokens (`stagecc.lexer.Lexer`)
2. parsing into an abstract syntax tree (`stagecc.parser.Parser`)
3. lowering to three-address code (`stagecc.tacgen.TacGenerator`)
4. generating assembly instructions that still use pseudo-registers
   (`stagecc.asmgen.AsmGenerator`)
5. giving each pseudo-register its own 4-byte stack slot
   (`stagecc.allocator.AsmAllocator`)
6. rewriting instructions that are not valid x86-64, such as
   memory-to-memory moves (`stagecc.legalizer.AsmLegalizer`)
7. emitting the assembly text (`stagecc.emitter.CodeEmitter`)

If lexing or parsing fails, the compiler writes diagnostics to standard
error in `file:line:col: severity: message` form. When the position lies
within the source, the diagnostic also shows the source line with the
offending span underlined.

## Installation

```
pip install .
```

`gcc` must be on your `PATH` for the command line tool. It is used to
preprocess the input and to assemble and link the output.

## Command line

```
stagecc [--lex|--parse|--tacky|--codegen|--allocation|--legalization|-S] FILE.c
```

- With no option, `FILE.c` is preprocessed, compiled and then assembled and
  linked into an executable called `FILE`. The intermediate `FILE.s` is
  removed afterwards.
- `-S` stops once `FILE.s` has been written.
- The other options stop after the stage they name and print that stage's
  result to standard output:
  - `--lex`: tokens
  - `--parse`: the syntax tree
  - `--tacky`: three-address code
  - `--codegen`: the generated assembly
  - `--allocation`: the assembly after stack allocation
  - `--legalization`: the assembly after legalization

The exit status is 1 for a lexer error and 2 for a parser error. It is also
1 for a usage error, a missing input file, or a failure to preprocess, to
write the assembly file or to assemble and link.

## Library use

```python
from stagecc.compiler import Compiler, PipelineStage

source = "int main(void) { return (1 + 2) * 3 && !0; }"
assembly = Compiler(source, "main.c").compile(PipelineStage.CODE_EMISSION)
print(assembly)
```

`Compiler.compile` reports diagnostics and raises `CompileError` when the
source has errors. The diagnostics go to standard error unless a stream is
passed as `diagnostic_stream`. The error's `code` attribute is an `ErrCode`,
either `LEXER_ERROR` or `PARSER_ERROR`. For any stage other than
`CODE_EMISSION`, `compile` returns a pretty-printed dump of that stage's
result.

`stagecc.compiler.preprocess` and `stagecc.compiler.assemble_and_link` run
`gcc` and raise `CompileError` if it fails.

## Limitations

- There is no preprocessor, assembler or linker of its own. These steps
  call `gcc`.
- Only a single function with a single `return` statement is handled. There
  are no variables, no other statements and no function calls.
- `++` and `--` are reported as unsupported.