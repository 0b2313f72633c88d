"""Tests for the request/response models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from models import ConvertRequest, EvaluateRequest, Operation, OverflowModeName
from widths import OverflowMode


class TestOperation:

    def test_unary_ops(self):
        assert {op for op in Operation if op.is_unary} == {
            Operation.NEG, Operation.POS, Operation.INVERT,
        }

    def test_shift_ops(self):
        assert {op for op in Operation if op.is_shift} == {
            Operation.SHL, Operation.SHR,
        }


class TestEvaluateRequest:

    def test_binary_needs_b(self):
        with pytest.raises(ValidationError, match="needs operand 'b'"):
            EvaluateRequest(op="add", a="1")

    def test_unary_rejects_b(self):
        with pytest.raises(ValidationError, match="single operand"):
            EvaluateRequest(op="neg", a="1", b="2")

    def test_empty_operand_rejected(self):
        with pytest.raises(ValidationError):
            EvaluateRequest(op="add", a="", b="1")

    def test_digits_not_checked_here(self):
        req = EvaluateRequest(op="add", a="12x", b="1")
        assert req.a == "12x"


class TestConvertRequest:

    def test_default_mode_is_error(self):
        req = ConvertRequest(value="1", int_type="int8")
        assert req.mode.to_mode() is OverflowMode.ERROR

    def test_mode_mapping(self):
        assert OverflowModeName.WRAP.to_mode() is OverflowMode.WRAP
        assert OverflowModeName.CLAMP.to_mode() is OverflowMode.CLAMP

    def test_unknown_type(self):
        with pytest.raises(ValidationError, match="Unknown int_type"):
            ConvertRequest(value="1", int_type="int7")
