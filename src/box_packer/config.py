"""Runtime defaults from environment variables; loads .env locally via python-dotenv."""

from __future__ import annotations

import logging
import os
from decimal import Decimal
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from box_packer.errors import ConfigurationError, PackingError
from box_packer.models import OversizePolicy, PackingStrategy, to_positive_decimal

ENV_PREFIX = "BOX_PACKER_"


class Settings(BaseModel):
    """Defaults applied when a request does not say otherwise."""

    capacity: Optional[Decimal] = Field(default=None, description="Default box capacity")
    strategy: PackingStrategy = PackingStrategy.BEST_FIT
    oversize_policy: OversizePolicy = OversizePolicy.SKIP
    log_level: str = "WARNING"


def _env(env: Mapping[str, str], name: str) -> Optional[str]:
    value = env.get(ENV_PREFIX + name)
    if value is None or not value.strip():
        return None
    return value.strip()


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """
    Build Settings from BOX_PACKER_* variables.

    When `env` is None the process environment is used, after loading a .env
    file if one is present (existing variables are not overridden).
    """
    if env is None:
        load_dotenv()
        env = os.environ

    defaults = Settings()
    try:
        raw_capacity = _env(env, "CAPACITY")
        capacity = (
            to_positive_decimal(raw_capacity, what=ENV_PREFIX + "CAPACITY")
            if raw_capacity is not None
            else None
        )
        raw_strategy = _env(env, "STRATEGY")
        strategy = PackingStrategy.parse(raw_strategy) if raw_strategy else defaults.strategy
        raw_policy = _env(env, "OVERSIZE_POLICY")
        policy = OversizePolicy.parse(raw_policy) if raw_policy else defaults.oversize_policy
    except PackingError as e:
        raise ConfigurationError(str(e)) from e

    log_level = (_env(env, "LOG_LEVEL") or defaults.log_level).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigurationError(f"Unknown log level '{log_level}' in {ENV_PREFIX}LOG_LEVEL")

    return Settings(
        capacity=capacity,
        strategy=strategy,
        oversize_policy=policy,
        log_level=log_level,
    )
