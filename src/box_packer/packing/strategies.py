"""
Box selection strategies for the greedy packer.

Public entry point:
    choose_box(strategy, boxes, weight)
returns an existing Box that can take the weight (no mutation), or None when
a new box has to be opened.

Both strategies are deterministic and break ties by box creation order.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Optional

from box_packer.errors import UnknownStrategyError
from box_packer.models import Box, PackingStrategy


def first_fit(boxes: Iterable[Box], weight: Decimal) -> Optional[Box]:
    """First box, in creation order, with room for the weight."""
    for box in boxes:
        if box.can_fit(weight):
            return box
    return None


def best_fit(boxes: Iterable[Box], weight: Decimal) -> Optional[Box]:
    """Box with the smallest remaining capacity that still fits the weight."""
    best: Optional[Box] = None
    for box in boxes:
        if box.remaining < weight:
            continue
        # strict '<' keeps the earliest box on ties
        if best is None or box.remaining < best.remaining:
            best = box
    return best


_STRATEGIES = {
    PackingStrategy.FIRST_FIT: first_fit,
    PackingStrategy.BEST_FIT: best_fit,
}


def choose_box(
    strategy: PackingStrategy | str,
    boxes: Iterable[Box],
    weight: Decimal,
) -> Optional[Box]:
    """
    Decide which existing box should receive `weight` right now.

    Parameters
    ----------
    strategy : PackingStrategy | str
        "first_fit" or "best_fit".
    boxes : Iterable[Box]
        Candidate boxes in creation order.
    weight : Decimal
        Validated, positive item weight.

    Returns
    -------
    Optional[Box]
        The chosen box, or None if no existing box can take the weight.
    """
    try:
        select = _STRATEGIES[PackingStrategy(strategy)]
    except (KeyError, ValueError) as e:
        raise UnknownStrategyError(
            f"Unknown packing strategy: {strategy}. Expected one of: first_fit, best_fit."
        ) from e
    return select(boxes, weight)
