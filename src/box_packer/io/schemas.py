"""Data schemas for input/output operations."""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from box_packer.models import Box, PackingResult
from box_packer.report import format_result


class PackRequestSchema(BaseModel):
    """Schema for a packing request (JSON input file or POST /pack body)."""
    capacity: Optional[Union[float, str]] = Field(None, description="Capacity of every box")
    strategy: Optional[str] = Field(None, description="first_fit or best_fit")
    weights: List[Union[float, str]] = Field(default_factory=list, description="Item weights in arrival order")
    oversize_policy: Optional[str] = Field(None, description="skip or reject")


class BoxSchema(BaseModel):
    """Schema for one filled box."""
    index: int = Field(ge=1, description="1-based position in creation order")
    items: List[float] = Field(description="Item weights in insertion order")
    load: float = Field(ge=0, description="Sum of the item weights")
    remaining: float = Field(ge=0, description="Capacity left")
    capacity: float = Field(gt=0, description="Capacity of the box")
    fill_ratio: float = Field(ge=0, le=1, description="load / capacity")


class PackingPlanSchema(BaseModel):
    """Schema for a packing result."""
    strategy: str
    box_capacity: float = Field(gt=0)
    boxes: List[BoxSchema] = Field(default_factory=list)
    box_count: int = Field(ge=0, description="Number of boxes used")
    total_weight: float = Field(ge=0, description="Total packed weight")
    average_fill_ratio: float = Field(ge=0, le=1, description="Mean fill ratio across boxes")
    unpacked: List[float] = Field(default_factory=list, description="Oversized weights left out")
    summary: str = Field(description="Human-readable report")


def _f(value: Decimal) -> float:
    return float(value)


def box_to_schema(index: int, box: Box) -> BoxSchema:
    return BoxSchema(
        index=index,
        items=[_f(w) for w in box.items],
        load=_f(box.current_load),
        remaining=_f(box.remaining),
        capacity=_f(box.capacity),
        fill_ratio=box.fill_ratio,
    )


def result_to_schema(result: PackingResult) -> PackingPlanSchema:
    return PackingPlanSchema(
        strategy=result.strategy.value,
        box_capacity=_f(result.box_capacity),
        boxes=[box_to_schema(i, b) for i, b in enumerate(result.boxes, start=1)],
        box_count=result.box_count,
        total_weight=_f(result.total_weight),
        average_fill_ratio=result.average_fill_ratio,
        unpacked=[_f(w) for w in result.unpacked],
        summary=format_result(result),
    )
