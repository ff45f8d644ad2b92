import pytest

from stagecc.asm import (
    AsmBinaryOperator,
    AsmCondCode,
    AsmUnaryOperator,
    Cdq,
    Imm,
    Pseudo,
    Ret,
    convert_binary_operator,
    convert_operand,
    convert_to_cond_code,
    convert_unary_operator,
)
from stagecc.tac import TacBinaryKind, TacConstant, TacUnaryKind, TacVar


def test_constant_becomes_immediate():
    assert convert_operand(TacConstant("42")) == Imm(42)


def test_negative_constant_becomes_immediate():
    assert convert_operand(TacConstant("-7")) == Imm(-7)


def test_i32_bounds_are_accepted():
    assert convert_operand(TacConstant("2147483647")) == Imm(2147483647)
    assert convert_operand(TacConstant("-2147483648")) == Imm(-2147483648)


@pytest.mark.parametrize("text", ["2147483648", "-2147483649", "abc", "", "1_0", " 3"])
def test_invalid_constants_raise(text):
    with pytest.raises(ValueError):
        convert_operand(TacConstant(text))


def test_variable_becomes_pseudo():
    assert convert_operand(TacVar("%t3")) == Pseudo("%t3")


def test_non_value_raises_type_error():
    with pytest.raises(TypeError):
        convert_operand("x")


@pytest.mark.parametrize(
    "tac, asm",
    [
        (TacUnaryKind.NEGATE, AsmUnaryOperator.NEG),
        (TacUnaryKind.COMPLEMENT, AsmUnaryOperator.NOT),
    ],
)
def test_unary_operator_mapping(tac, asm):
    assert convert_unary_operator(tac) is asm


def test_logical_not_has_no_unary_instruction():
    with pytest.raises(ValueError):
        convert_unary_operator(TacUnaryKind.NOT)


@pytest.mark.parametrize(
    "tac, asm",
    [
        (TacBinaryKind.ADD, AsmBinaryOperator.ADD),
        (TacBinaryKind.SUBTRACT, AsmBinaryOperator.SUB),
        (TacBinaryKind.MULTIPLY, AsmBinaryOperator.MULT),
    ],
)
def test_binary_operator_mapping(tac, asm):
    assert convert_binary_operator(tac) is asm


@pytest.mark.parametrize(
    "tac",
    [TacBinaryKind.DIVIDE, TacBinaryKind.REMAINDER, TacBinaryKind.EQUAL, TacBinaryKind.LESS_THAN],
)
def test_binary_operator_rejects_others(tac):
    with pytest.raises(ValueError):
        convert_binary_operator(tac)


@pytest.mark.parametrize(
    "tac, cond",
    [
        (TacBinaryKind.EQUAL, AsmCondCode.E),
        (TacBinaryKind.NOT_EQUAL, AsmCondCode.NE),
        (TacBinaryKind.LESS_THAN, AsmCondCode.L),
        (TacBinaryKind.LESS_OR_EQUAL, AsmCondCode.LE),
        (TacBinaryKind.GREATER_THAN, AsmCondCode.G),
        (TacBinaryKind.GREATER_OR_EQUAL, AsmCondCode.GE),
    ],
)
def test_condition_codes(tac, cond):
    assert convert_to_cond_code(tac) is cond


@pytest.mark.parametrize("tac", [TacBinaryKind.ADD, TacBinaryKind.DIVIDE])
def test_condition_code_rejects_arithmetic(tac):
    with pytest.raises(ValueError):
        convert_to_cond_code(tac)


def test_fieldless_instructions_compare_equal():
    assert Cdq() == Cdq()
    assert Ret() == Ret()
    assert Cdq() != Ret()