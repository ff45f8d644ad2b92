import pytest

from stagecc.ast import AstBinaryKind, AstUnaryKind
from stagecc.converters import (
    binary_to_tac,
    operator_to_binary,
    operator_to_unary,
    unary_to_tac,
)
from stagecc.tac import TacBinaryKind, TacUnaryKind
from stagecc.tokens import OperatorKind


@pytest.mark.parametrize(
    "op, expected",
    [
        (OperatorKind.MINUS, AstUnaryKind.NEGATE),
        (OperatorKind.TILDE, AstUnaryKind.COMPLEMENT),
        (OperatorKind.EXCLAMATION, AstUnaryKind.NOT),
        (OperatorKind.PLUS, None),
        (OperatorKind.LOGICAL_AND, None),
    ],
)
def test_operator_to_unary(op, expected):
    assert operator_to_unary(op) is expected


@pytest.mark.parametrize(
    "op, expected",
    [
        (OperatorKind.PLUS, AstBinaryKind.ADD),
        (OperatorKind.MINUS, AstBinaryKind.SUBTRACT),
        (OperatorKind.ASTERISK, AstBinaryKind.MULTIPLY),
        (OperatorKind.SLASH, AstBinaryKind.DIVIDE),
        (OperatorKind.PERCENT, AstBinaryKind.REMAINDER),
        (OperatorKind.LOGICAL_AND, AstBinaryKind.AND),
        (OperatorKind.LOGICAL_OR, AstBinaryKind.OR),
        (OperatorKind.EQUAL_EQUAL, AstBinaryKind.EQUAL),
        (OperatorKind.NOT_EQUAL, AstBinaryKind.NOT_EQUAL),
        (OperatorKind.LESS_THAN, AstBinaryKind.LESS_THAN),
        (OperatorKind.LESS_EQUAL, AstBinaryKind.LESS_OR_EQUAL),
        (OperatorKind.GREATER_THAN, AstBinaryKind.GREATER_THAN),
        (OperatorKind.GREATER_EQUAL, AstBinaryKind.GREATER_OR_EQUAL),
        (OperatorKind.TILDE, None),
        (OperatorKind.EXCLAMATION, None),
    ],
)
def test_operator_to_binary(op, expected):
    assert operator_to_binary(op) is expected


@pytest.mark.parametrize(
    "kind, expected",
    [
        (AstUnaryKind.COMPLEMENT, TacUnaryKind.COMPLEMENT),
        (AstUnaryKind.NEGATE, TacUnaryKind.NEGATE),
        (AstUnaryKind.NOT, TacUnaryKind.NOT),
    ],
)
def test_unary_to_tac(kind, expected):
    assert unary_to_tac(kind) is expected


def test_binary_to_tac_and_maps_to_add():
    assert binary_to_tac(AstBinaryKind.AND) is TacBinaryKind.ADD


def test_binary_to_tac_or_has_no_mapping():
    assert binary_to_tac(AstBinaryKind.OR) is None


def test_binary_to_tac_covers_all_but_or():
    mapped = {k: binary_to_tac(k) for k in AstBinaryKind}
    assert [k for k, v in mapped.items() if v is None] == [AstBinaryKind.OR]
    assert binary_to_tac(AstBinaryKind.GREATER_OR_EQUAL) is TacBinaryKind.GREATER_OR_EQUAL
    assert binary_to_tac(AstBinaryKind.REMAINDER) is TacBinaryKind.REMAINDER