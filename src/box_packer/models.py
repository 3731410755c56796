from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    TypeAdapter,
    ValidationError,
    computed_field,
)

from box_packer.errors import InvalidArgumentError, UnknownStrategyError
from box_packer.metrics import average_fill_ratio, exact_context, exact_sum, total_weight

PositiveDecimal = Annotated[Decimal, Field(gt=0, allow_inf_nan=False)]

_POSITIVE_DECIMAL = TypeAdapter(PositiveDecimal)


def to_positive_decimal(value: Any, what: str = "Item weight") -> Decimal:
    """
    Coerce an int/float/str/Decimal to a finite positive Decimal.

    Raises InvalidArgumentError for zero, negative, NaN, infinite or
    non-numeric input.
    """
    if isinstance(value, bool):
        raise InvalidArgumentError(f"{what} must be a number, got {value!r}")
    if isinstance(value, float):
        # shortest repr, so 0.1 stays 0.1 instead of its binary expansion
        value = repr(value)
    try:
        return _POSITIVE_DECIMAL.validate_python(value)
    except ValidationError as e:
        raise InvalidArgumentError(
            f"{what} must be a finite positive number, got {value!r}"
        ) from e


class PackingStrategy(str, Enum):
    """Greedy placement rule used by the packer."""

    FIRST_FIT = "first_fit"
    BEST_FIT = "best_fit"

    @property
    def label(self) -> str:
        """Display name used in reports (FirstFit, BestFit)."""
        return self.value.title().replace("_", "")

    @classmethod
    def parse(cls, value: PackingStrategy | str) -> PackingStrategy:
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("-", "_").replace(" ", "_")
        key = {"firstfit": "first_fit", "bestfit": "best_fit"}.get(key, key)
        try:
            return cls(key)
        except ValueError as e:
            valid = [s.value for s in cls]
            raise UnknownStrategyError(f"Unknown packing strategy '{value}'. Valid: {valid}") from e


class OversizePolicy(str, Enum):
    """What to do with an item heavier than the box capacity."""

    SKIP = "skip"  # leave it out, record it in `unpacked`
    REJECT = "reject"  # raise OversizedItemError before touching any box

    @classmethod
    def parse(cls, value: OversizePolicy | str) -> OversizePolicy:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as e:
            valid = [p.value for p in cls]
            raise InvalidArgumentError(f"Unknown oversize policy '{value}'. Valid: {valid}") from e


class Box(BaseModel):
    """
    A fixed-capacity box.

    Items are kept in arrival order and can only be appended through
    `try_add`; the capacity cannot be reassigned once the box exists.
    """

    model_config = ConfigDict(frozen=True)

    capacity: PositiveDecimal = Field(description="Maximum total weight the box can hold")

    _items: list[Decimal] = PrivateAttr(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def items(self) -> tuple[Decimal, ...]:
        return tuple(self._items)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def current_load(self) -> Decimal:
        return exact_sum(self._items)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def remaining(self) -> Decimal:
        with exact_context():
            return self.capacity - self.current_load

    @computed_field  # type: ignore[prop-decorator]
    @property
    def fill_ratio(self) -> float:
        return 0.0 if self.capacity == 0 else float(self.current_load / self.capacity)

    def can_fit(self, weight: Any) -> bool:
        w = to_positive_decimal(weight)
        return w <= self.remaining

    def try_add(self, weight: Any) -> bool:
        """
        Append the weight if it fits.

        Returns False without touching the box when the weight would push the
        load over capacity. Raises InvalidArgumentError for a weight that is
        not a finite positive number.
        """
        w = to_positive_decimal(weight)
        if w > self.remaining:
            return False
        self._items.append(w)
        return True

    def snapshot(self) -> Box:
        """Independent copy holding the same items; later additions to this box do not show up in it."""
        copy = Box(capacity=self.capacity)
        copy._items.extend(self._items)
        return copy


class PackingResult(BaseModel):
    """Standard result returned by the packer."""

    model_config = ConfigDict(frozen=True)

    strategy: PackingStrategy
    box_capacity: PositiveDecimal
    boxes: list[Box] = Field(default_factory=list)
    unpacked: list[Decimal] = Field(
        default_factory=list,
        description="Oversized weights that were skipped, in arrival order",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def box_count(self) -> int:
        return len(self.boxes)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_weight(self) -> Decimal:
        return total_weight(self.boxes)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def unpacked_weight(self) -> Decimal:
        return exact_sum(self.unpacked)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def average_fill_ratio(self) -> float:
        return average_fill_ratio(self.boxes)
