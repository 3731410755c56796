"""Plain-text rendering of packing results."""

from __future__ import annotations

from decimal import Decimal

from box_packer.models import Box, PackingResult


def format_number(value: Decimal) -> str:
    """Render a Decimal without exponent or trailing zeros (10.50 -> 10.5)."""
    return format(value.normalize(), "f")


def format_box(box: Box) -> str:
    items = ", ".join(format_number(w) for w in box.items)
    return (
        f"[{items}] (Used: {format_number(box.current_load)}/{format_number(box.capacity)}, "
        f"{box.fill_ratio:.0%})"
    )


def format_result(result: PackingResult, width: int = 50) -> str:
    lines = [
        f"Packing Results ({result.strategy.label} Strategy, "
        f"Capacity: {format_number(result.box_capacity)})",
        "=" * width,
    ]
    for i, box in enumerate(result.boxes, start=1):
        lines.append(f"Box {i}: {format_box(box)}")
    lines.append("-" * width)
    lines.append(f"Total Boxes Used: {result.box_count}")
    lines.append(f"Total Weight: {format_number(result.total_weight)}")
    lines.append(f"Average Fill Ratio: {result.average_fill_ratio:.0%}")
    if result.unpacked:
        skipped = ", ".join(format_number(w) for w in result.unpacked)
        lines.append(f"Oversized (not packed): [{skipped}]")
    return "\n".join(lines)
