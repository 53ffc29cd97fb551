"""Environment-driven settings for the calcdeck CLI.

    CALCDECK_UNIT                metric | imperial         (metric)
    CALCDECK_DECIMALS            display decimals          (2)
    CALCDECK_COMPOUND_FREQUENCY  compounding periods/year  (12)
    CALCDECK_STRICT              1/true/yes/on             (off)

Unparseable values fall back to the defaults. Command-line options win over
anything set here.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from calcdeck.models import UnitSystem

_TRUTHY = ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Resolved CLI defaults."""

    unit: UnitSystem = UnitSystem.METRIC
    decimals: int = 2
    compound_frequency: int = 12
    strict: bool = False
    # Set by the CLI --verbose flag, not the environment
    verbose: bool = False


def _int_var(env: Mapping[str, str], key: str, default: int, minimum: int) -> int:
    try:
        value = int(env.get(key, default))
    except ValueError:
        return default
    return value if value >= minimum else default


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from CALCDECK_* variables (defaults to os.environ)."""
    env = os.environ if env is None else env
    defaults = Settings()

    try:
        unit = UnitSystem(env.get("CALCDECK_UNIT", defaults.unit.value).strip().lower())
    except ValueError:
        unit = defaults.unit

    return Settings(
        unit=unit,
        decimals=_int_var(env, "CALCDECK_DECIMALS", defaults.decimals, minimum=0),
        compound_frequency=_int_var(
            env, "CALCDECK_COMPOUND_FREQUENCY", defaults.compound_frequency, minimum=1
        ),
        strict=env.get("CALCDECK_STRICT", "").strip().lower() in _TRUTHY,
    )
