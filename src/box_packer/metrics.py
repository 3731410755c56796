from __future__ import annotations

from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, Context, Decimal, localcontext
from typing import TYPE_CHECKING, ContextManager, Iterable

if TYPE_CHECKING:
    from .models import Box


def exact_context() -> ContextManager[Context]:
    """
    Decimal context in which additions and subtractions never round.

    Only use it for sums and differences; a division like 1/3 would try to
    produce MAX_PREC digits.
    """
    return localcontext(Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN))


def exact_sum(values: Iterable[Decimal]) -> Decimal:
    with exact_context():
        return sum(values, Decimal(0))


def total_weight(boxes: Iterable[Box]) -> Decimal:
    return exact_sum(b.current_load for b in boxes)


def average_fill_ratio(boxes: Iterable[Box]) -> float:
    """Mean of the per-box fill ratios; 0.0 when no box was opened."""
    ratios = [b.fill_ratio for b in boxes]
    return 0.0 if not ratios else sum(ratios) / len(ratios)


def compute_metrics(boxes: list[Box]) -> tuple[int, Decimal, float]:
    return len(boxes), total_weight(boxes), average_fill_ratio(boxes)
