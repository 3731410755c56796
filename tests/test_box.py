"""Tests for the Box container model."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from box_packer.errors import InvalidArgumentError
from box_packer.models import Box, to_positive_decimal


def test_new_box_is_empty() -> None:
    box = Box(capacity=10)

    assert box.items == ()
    assert box.current_load == 0
    assert box.remaining == 10
    assert box.fill_ratio == 0.0


def test_try_add_accepts_until_full() -> None:
    """Items are appended in arrival order while they fit."""
    box = Box(capacity=10)

    assert box.try_add(6) is True
    assert box.try_add(4) is True

    assert box.items == (Decimal("6"), Decimal("4"))
    assert box.current_load == 10
    assert box.remaining == 0
    assert box.fill_ratio == 1.0


def test_try_add_rejects_overflow_without_mutation() -> None:
    box = Box(capacity=10)
    box.try_add(7)

    assert box.try_add(4) is False
    assert box.items == (Decimal("7"),)
    assert box.current_load == 7


def test_exact_fit_is_accepted() -> None:
    box = Box(capacity=10)

    assert box.try_add(10) is True
    assert box.can_fit(Decimal("0.001")) is False


def test_decimal_weights_add_up_exactly() -> None:
    """Ten 0.1 items fill a box of capacity 1 exactly."""
    box = Box(capacity=1)

    for _ in range(10):
        assert box.try_add(0.1) is True

    assert box.current_load == Decimal("1")
    assert box.try_add(0.1) is False


@pytest.mark.parametrize("bad", [0, -3, Decimal("-0.5"), float("nan"), float("inf"), "abc", None, True])
def test_try_add_rejects_invalid_weight(bad) -> None:
    box = Box(capacity=10)

    with pytest.raises(InvalidArgumentError):
        box.try_add(bad)

    assert box.items == ()


@pytest.mark.parametrize("bad", [0, -1, float("inf")])
def test_box_requires_positive_finite_capacity(bad) -> None:
    with pytest.raises(ValidationError):
        Box(capacity=bad)


def test_capacity_cannot_be_reassigned() -> None:
    box = Box(capacity=10)

    with pytest.raises(ValidationError):
        box.capacity = Decimal("20")


def test_items_view_is_a_snapshot() -> None:
    box = Box(capacity=10)
    box.try_add(2)
    snapshot = box.items

    box.try_add(3)

    assert snapshot == (Decimal("2"),)
    assert box.items == (Decimal("2"), Decimal("3"))


def test_dump_includes_derived_figures() -> None:
    box = Box(capacity=10)
    box.try_add(5)

    data = box.model_dump()

    assert data["capacity"] == Decimal("10")
    assert list(data["items"]) == [Decimal("5")]
    assert data["current_load"] == Decimal("5")
    assert data["remaining"] == Decimal("5")
    assert data["fill_ratio"] == 0.5


def test_to_positive_decimal_coerces_numbers_and_strings() -> None:
    assert to_positive_decimal(3) == Decimal("3")
    assert to_positive_decimal("2.5") == Decimal("2.5")
    assert to_positive_decimal(0.1) == Decimal("0.1")


def test_fit_check_does_not_round_large_loads() -> None:
    box = Box(capacity="1e27")

    assert box.try_add("1e27") is True
    assert box.can_fit("0.1") is False
    assert box.try_add("0.1") is False
    assert box.remaining == 0


def test_remaining_is_exact_for_many_digits() -> None:
    box = Box(capacity="100000000000000000000000000000.5")
    box.try_add("0.25")

    assert box.remaining == Decimal("100000000000000000000000000000.25")


def test_snapshot_is_independent_of_the_box() -> None:
    box = Box(capacity=10)
    box.try_add(4)

    copy = box.snapshot()
    box.try_add(3)

    assert copy.items == (Decimal("4"),)
    assert copy.capacity == box.capacity
    assert box.items == (Decimal("4"), Decimal("3"))
