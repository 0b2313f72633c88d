"""Shared fixtures for big-integer tests."""
from __future__ import annotations

import pytest

from bigint import BigInt


# 2**32 boundaries and a few values that straddle them.
LIMB_EDGES = [
    0, 1, -1,
    2**31 - 1, 2**31, -(2**31), -(2**31) - 1,
    2**32 - 1, 2**32, 2**32 + 1, -(2**32), -(2**32) - 1,
    2**63, -(2**63), 2**64 - 1, 2**64, -(2**64),
    2**96 + 12345, -(2**96) - 12345,
]

BIG_X = int(
    "80834881818236391177723050839925923675652324008047822995592133407801"
    "164689064475307470399"
)


@pytest.fixture
def big_x() -> BigInt:
    return BigInt(str(BIG_X))


@pytest.fixture
def limb_edges() -> list[int]:
    return list(LIMB_EDGES)


@pytest.fixture(params=LIMB_EDGES, ids=lambda v: f"v{v}")
def edge_value(request) -> int:
    return request.param
