"""FastAPI endpoints exposing the big-integer engine.

Routes
------
POST   /bigint/evaluate    Apply one operator to decimal operands
POST   /bigint/compare     Three-way compare two decimal operands
POST   /bigint/convert     Convert to a fixed-width machine integer
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import APIRouter, HTTPException

from bigint import BINARY_OPERATIONS, SHIFT_OPERATIONS, UNARY_OPERATIONS, BigInt
from errors import DivideByZero, InvalidFormat, MachineIntOverflow
from models import (
    CompareRequest,
    CompareResponse,
    ConvertRequest,
    ConvertResponse,
    EvaluateRequest,
    EvaluateResponse,
)
from widths import BY_NAME

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bigint", tags=["bigint"])


@dataclass(frozen=True)
class ServiceConfig:
    """Input limits for the service; the engine itself has none."""

    max_digits: int = 100_000
    max_shift: int = 1_000_000


# The config is injected by the app factory (see app.py).
_config: ServiceConfig | None = None


def set_config(config: ServiceConfig) -> None:
    """Inject the service config. Called once at app startup."""
    global _config
    _config = config


def get_config() -> ServiceConfig:
    assert _config is not None, "Config not initialized"
    return _config


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _unprocessable(detail: str) -> HTTPException:
    return HTTPException(status_code=422, detail=detail)


def _parse(text: str) -> BigInt:
    limit = get_config().max_digits
    if len(text.lstrip("-")) > limit:
        raise _unprocessable(f"Operand longer than {limit} digits")
    try:
        return BigInt(text)
    except InvalidFormat as e:
        raise _unprocessable(str(e)) from e


def _shift_count(text: str) -> int:
    count = int(_parse(text))
    limit = get_config().max_shift
    if count > limit:
        raise _unprocessable(f"Shift count {count} exceeds {limit}")
    return count


def _evaluate(payload: EvaluateRequest) -> BigInt:
    a = _parse(payload.a)
    name = payload.op.value
    if payload.op.is_unary:
        return UNARY_OPERATIONS[name](a)
    if payload.op.is_shift:
        return SHIFT_OPERATIONS[name](a, _shift_count(payload.b))
    return BINARY_OPERATIONS[name](a, _parse(payload.b))


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/evaluate", response_model=EvaluateResponse)
def evaluate(payload: EvaluateRequest) -> EvaluateResponse:
    """Apply ``op`` to ``a`` (and ``b``) and return the decimal result."""
    try:
        result = _evaluate(payload)
    except DivideByZero as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except ValueError as e:
        # negative shift count
        raise _unprocessable(str(e)) from e
    logger.debug("evaluate %s -> %d limbs", payload.op.value, result.limb_count())
    return EvaluateResponse(
        op=payload.op, a=payload.a, b=payload.b, result=result.to_string()
    )


@router.post("/compare", response_model=CompareResponse)
def compare(payload: CompareRequest) -> CompareResponse:
    """Return -1, 0 or 1 as ``a`` is less than, equal to or greater than ``b``."""
    a = _parse(payload.a)
    b = _parse(payload.b)
    return CompareResponse(result=(a > b) - (a < b))


@router.post("/convert", response_model=ConvertResponse)
def convert(payload: ConvertRequest) -> ConvertResponse:
    """Convert ``value`` to ``int_type`` using the requested overflow mode."""
    value = _parse(payload.value)
    int_type = BY_NAME[payload.int_type]
    try:
        converted = value.to_machine(int_type, payload.mode.to_mode())
    except MachineIntOverflow as e:
        raise _unprocessable(str(e)) from e
    return ConvertResponse(int_type=int_type.name, value=converted)
