from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Iterable, Optional

from box_packer.errors import OversizedItemError
from box_packer.models import (
    Box,
    OversizePolicy,
    PackingResult,
    PackingStrategy,
    to_positive_decimal,
)
from box_packer.packing.strategies import choose_box

logger = logging.getLogger(__name__)


class Packer:
    """
    Greedy packer that assigns item weights to identical boxes.

    - Processes weights strictly in input order, one at a time
    - Opens a new box only when no existing box can take the item
    - Boxes are never removed or reordered; repeated `pack_items` calls keep
      filling the same boxes
    - Deterministic (no randomness)
    """

    def __init__(
        self,
        box_capacity: Any,
        strategy: PackingStrategy | str = PackingStrategy.BEST_FIT,
        oversize_policy: OversizePolicy | str = OversizePolicy.SKIP,
    ) -> None:
        self._box_capacity = to_positive_decimal(box_capacity, what="Box capacity")
        self._strategy = PackingStrategy.parse(strategy)
        self._oversize_policy = OversizePolicy.parse(oversize_policy)
        self._boxes: list[Box] = []
        self._unpacked: list[Decimal] = []

    @property
    def box_capacity(self) -> Decimal:
        return self._box_capacity

    @property
    def strategy(self) -> PackingStrategy:
        return self._strategy

    @property
    def oversize_policy(self) -> OversizePolicy:
        return self._oversize_policy

    @property
    def boxes(self) -> tuple[Box, ...]:
        return tuple(self._boxes)

    @property
    def unpacked(self) -> tuple[Decimal, ...]:
        return tuple(self._unpacked)

    def _validate(self, weights: Iterable[Any]) -> list[Decimal]:
        validated: list[Decimal] = []
        for idx, weight in enumerate(weights):
            w = to_positive_decimal(weight, what=f"Item weight #{idx + 1}")
            if self._oversize_policy is OversizePolicy.REJECT and w > self._box_capacity:
                raise OversizedItemError(
                    f"Item weight #{idx + 1} ({w}) exceeds box capacity {self._box_capacity}"
                )
            validated.append(w)
        return validated

    def _place(self, weight: Decimal) -> Optional[Box]:
        if weight > self._box_capacity:
            # never fits anywhere, and a fresh box would stay empty
            logger.debug("Skipping oversized item %s (capacity %s)", weight, self._box_capacity)
            self._unpacked.append(weight)
            return None

        box = choose_box(self._strategy, self._boxes, weight)
        if box is None:
            box = Box(capacity=self._box_capacity)
            self._boxes.append(box)
            logger.debug("Opened box %d for item %s", len(self._boxes), weight)

        box.try_add(weight)
        return box

    def pack_item(self, weight: Any) -> Optional[Box]:
        """
        Place a single weight.

        Returns the box that received it, or None if it was skipped as
        oversized.
        """
        (w,) = self._validate([weight])
        return self._place(w)

    def pack_items(self, weights: Iterable[Any]) -> None:
        """
        Place every weight in input order.

        The whole batch is validated before the first placement, so an
        invalid weight leaves the boxes untouched.
        """
        for w in self._validate(weights):
            self._place(w)

    def result(self) -> PackingResult:
        """Snapshot of the run so far; later `pack_items` calls do not change it."""
        return PackingResult(
            strategy=self._strategy,
            box_capacity=self._box_capacity,
            boxes=[b.snapshot() for b in self._boxes],
            unpacked=list(self._unpacked),
        )


def pack_weights(
    box_capacity: Any,
    weights: Iterable[Any],
    strategy: PackingStrategy | str = PackingStrategy.BEST_FIT,
    oversize_policy: OversizePolicy | str = OversizePolicy.SKIP,
) -> PackingResult:
    """One-shot helper: build a Packer, pack `weights` and return the result."""
    packer = Packer(box_capacity, strategy=strategy, oversize_policy=oversize_policy)
    packer.pack_items(weights)
    return packer.result()
