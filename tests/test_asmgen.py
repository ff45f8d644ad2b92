import pytest

from stagecc.asm import (
    AsmBinaryOperator,
    AsmCondCode,
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
    Unary,
)
from stagecc.asmgen import AsmGenerator
from stagecc.tac import (
    TacBinary,
    TacBinaryKind,
    TacConstant,
    TacCopy,
    TacFunction,
    TacJump,
    TacJumpIfNotZero,
    TacJumpIfZero,
    TacLabel,
    TacProgram,
    TacReturn,
    TacUnary,
    TacUnaryKind,
    TacVar,
)


@pytest.fixture
def gen():
    return AsmGenerator()


def test_return(gen):
    assert gen.cast_instruction(TacReturn(TacConstant("2"))) == [
        Mov(Imm(2), Reg(AsmReg.AX)),
        Ret(),
    ]


def test_negate(gen):
    instr = TacUnary(TacUnaryKind.NEGATE, TacConstant("5"), TacVar("a"))
    assert gen.cast_instruction(instr) == [
        Mov(Imm(5), Pseudo("a")),
        Unary(AsmUnaryOperator.NEG, Pseudo("a")),
    ]


def test_complement(gen):
    instr = TacUnary(TacUnaryKind.COMPLEMENT, TacVar("x"), TacVar("a"))
    assert gen.cast_instruction(instr) == [
        Mov(Pseudo("x"), Pseudo("a")),
        Unary(AsmUnaryOperator.NOT, Pseudo("a")),
    ]


def test_logical_not(gen):
    instr = TacUnary(TacUnaryKind.NOT, TacVar("x"), TacVar("a"))
    assert gen.cast_instruction(instr) == [
        Cmp(Imm(0), Pseudo("x")),
        Mov(Imm(0), Pseudo("a")),
        SetCC(AsmCondCode.E, Pseudo("a")),
    ]


def test_add_goes_through_r10(gen):
    instr = TacBinary(TacBinaryKind.ADD, TacVar("x"), TacVar("y"), TacVar("z"))
    assert gen.cast_instruction(instr) == [
        Mov(Pseudo("x"), Reg(AsmReg.R10)),
        Binary(AsmBinaryOperator.ADD, Pseudo("y"), Reg(AsmReg.R10)),
        Mov(Reg(AsmReg.R10), Pseudo("z")),
    ]


@pytest.mark.parametrize(
    "kind, result", [(TacBinaryKind.DIVIDE, AsmReg.AX), (TacBinaryKind.REMAINDER, AsmReg.DX)]
)
def test_division(gen, kind, result):
    instr = TacBinary(kind, TacVar("x"), TacVar("y"), TacVar("z"))
    assert gen.cast_instruction(instr) == [
        Mov(Pseudo("x"), Reg(AsmReg.AX)),
        Cdq(),
        Idiv(Pseudo("y")),
        Mov(Reg(result), Pseudo("z")),
    ]


@pytest.mark.parametrize(
    "kind, cond",
    [
        (TacBinaryKind.EQUAL, AsmCondCode.E),
        (TacBinaryKind.NOT_EQUAL, AsmCondCode.NE),
        (TacBinaryKind.LESS_THAN, AsmCondCode.L),
        (TacBinaryKind.LESS_OR_EQUAL, AsmCondCode.LE),
        (TacBinaryKind.GREATER_THAN, AsmCondCode.G),
        (TacBinaryKind.GREATER_OR_EQUAL, AsmCondCode.GE),
    ],
)
def test_relational_compares_operands_swapped(gen, kind, cond):
    instr = TacBinary(kind, TacVar("x"), TacVar("y"), TacVar("z"))
    assert gen.cast_instruction(instr) == [
        Cmp(Pseudo("y"), Pseudo("x")),
        Mov(Imm(0), Pseudo("z")),
        SetCC(cond, Pseudo("z")),
    ]


def test_copy(gen):
    assert gen.cast_instruction(TacCopy(TacConstant("1"), TacVar("r"))) == [
        Mov(Imm(1), Pseudo("r"))
    ]


def test_jumps_and_labels(gen):
    assert gen.cast_instruction(TacJump("end0")) == [Jmp("end0")]
    assert gen.cast_instruction(TacLabel("end0")) == [Label("end0")]
    assert gen.cast_instruction(TacJumpIfZero(TacVar("c"), "and_false0")) == [
        Cmp(Imm(0), Pseudo("c")),
        JmpCC(AsmCondCode.E, "and_false0"),
    ]
    assert gen.cast_instruction(TacJumpIfNotZero(TacVar("c"), "or_true0")) == [
        Cmp(Imm(0), Pseudo("c")),
        JmpCC(AsmCondCode.NE, "or_true0"),
    ]


def test_unknown_instruction_raises(gen):
    with pytest.raises(TypeError):
        gen.cast_instruction(Ret())


def test_generate_concatenates_in_order(gen):
    tac_instrs = [
        TacUnary(TacUnaryKind.NEGATE, TacConstant("3"), TacVar("%t0")),
        TacReturn(TacVar("%t0")),
    ]
    program = gen.generate(TacProgram(TacFunction("main", tac_instrs)))
    function = program.function_definition
    assert function.identifier == "main"
    expected = [asm for t in tac_instrs for asm in gen.cast_instruction(t)]
    assert function.instructions == expected
    assert function.instructions[-1] == Ret()