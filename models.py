"""Request/response models for the big-integer HTTP service.

Operands travel as decimal strings so values of any size survive JSON.
The models only check shape; the engine itself validates the digits
and raises ``InvalidFormat``, which the API maps to a 422.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, model_validator

from widths import BY_NAME, OverflowMode


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

class Operation(str, Enum):
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    MOD = "mod"
    AND = "and"
    OR = "or"
    XOR = "xor"
    SHL = "shl"
    SHR = "shr"
    NEG = "neg"
    POS = "pos"
    INVERT = "invert"

    @property
    def is_unary(self) -> bool:
        return self in (Operation.NEG, Operation.POS, Operation.INVERT)

    @property
    def is_shift(self) -> bool:
        return self in (Operation.SHL, Operation.SHR)


class EvaluateRequest(BaseModel):
    """One operator applied to one or two decimal operands."""

    op: Operation
    a: str = Field(..., min_length=1, description="Decimal operand")
    b: str | None = Field(
        default=None,
        min_length=1,
        description="Second decimal operand; shift count for shl/shr",
    )

    @model_validator(mode="after")
    def operand_count_matches_op(self) -> EvaluateRequest:
        if self.op.is_unary and self.b is not None:
            raise ValueError(f"{self.op.value} takes a single operand")
        if not self.op.is_unary and self.b is None:
            raise ValueError(f"{self.op.value} needs operand 'b'")
        return self


class EvaluateResponse(BaseModel):
    op: Operation
    a: str
    b: str | None = None
    result: str


class CompareRequest(BaseModel):
    a: str = Field(..., min_length=1)
    b: str = Field(..., min_length=1)


class CompareResponse(BaseModel):
    result: int = Field(..., ge=-1, le=1, description="-1, 0 or 1")


# ---------------------------------------------------------------------------
# Machine integer conversion
# ---------------------------------------------------------------------------

class OverflowModeName(str, Enum):
    WRAP = "wrap"
    CLAMP = "clamp"
    ERROR = "error"

    def to_mode(self) -> OverflowMode:
        return OverflowMode[self.name]


class ConvertRequest(BaseModel):
    """Squeeze a decimal value into a fixed-width machine type."""

    value: str = Field(..., min_length=1)
    int_type: str = Field(..., description="e.g. 'int32', 'uint64'")
    mode: OverflowModeName = OverflowModeName.ERROR

    @model_validator(mode="after")
    def known_type(self) -> ConvertRequest:
        if self.int_type not in BY_NAME:
            raise ValueError(
                f"Unknown int_type {self.int_type!r}; "
                f"expected one of {sorted(BY_NAME)}"
            )
        return self


class ConvertResponse(BaseModel):
    int_type: str
    value: int
