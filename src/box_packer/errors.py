"""Exceptions raised by the box packer."""

from __future__ import annotations


class PackingError(ValueError):
    """Base class for all box packer input errors."""

    code = "PACKING_ERROR"


class InvalidArgumentError(PackingError):
    """Raised for a non-positive or non-finite weight or capacity."""

    code = "INVALID_ARGUMENT"


class OversizedItemError(InvalidArgumentError):
    """Raised when an item is heavier than the box capacity and oversized items are rejected."""

    code = "OVERSIZED_ITEM"


class UnknownStrategyError(PackingError):
    """Raised when a strategy tag is not one of the known placement strategies."""

    code = "UNKNOWN_STRATEGY"


class ConfigurationError(PackingError):
    """Raised when environment configuration cannot be parsed."""

    code = "CONFIGURATION_ERROR"
