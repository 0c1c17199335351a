"""
Runtime configuration read from environment variables.

Load a .env file (python-dotenv) before calling TrackerConfig.from_env();
the run script does this on startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from asset_tracking.business.currency_converter import DEFAULT_RATES
from asset_tracking.business.lifecycle_classifier import TIER_SCHEMES

LEGEND_POLICIES = ("all", "present")

_TRUE_VALUES = ('true', '1', 'yes', 'on')
_FALSE_VALUES = ('false', '0', 'no', 'off')


def _env_bool(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean (true/false), got {raw!r}")


def _env_choice(environ: Mapping[str, str], name: str, default: str, choices) -> str:
    value = (environ.get(name) or default).strip().lower()
    if value not in choices:
        raise ValueError(f"{name} must be one of {', '.join(choices)}, got {value!r}")
    return value


@dataclass(frozen=True)
class TrackerConfig:
    base_currency: str = "USD"
    legend_policy: str = "all"
    tier_scheme: str = "four"
    seed_file: Optional[str] = None
    use_color: bool = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TrackerConfig":
        environ = os.environ if environ is None else environ

        base_currency = (environ.get("ASSET_TRACKING_BASE_CURRENCY") or "USD").strip().upper()
        if base_currency not in DEFAULT_RATES:
            raise ValueError(
                f"ASSET_TRACKING_BASE_CURRENCY must be one of {', '.join(DEFAULT_RATES)}, got {base_currency!r}"
            )

        # NO_COLOR is the common terminal convention and wins over the default
        use_color = _env_bool(environ, "ASSET_TRACKING_COLOR", True)
        if environ.get("NO_COLOR"):
            use_color = False

        return cls(
            base_currency=base_currency,
            legend_policy=_env_choice(environ, "ASSET_TRACKING_LEGEND", "all", LEGEND_POLICIES),
            tier_scheme=_env_choice(environ, "ASSET_TRACKING_TIERS", "four", tuple(TIER_SCHEMES)),
            seed_file=(environ.get("ASSET_TRACKING_SEED_FILE") or "").strip() or None,
            use_color=use_color,
        )

    def with_overrides(self, **overrides) -> "TrackerConfig":
        """Return a copy with every non-None override applied"""
        return replace(self, **{key: value for key, value in overrides.items() if value is not None})
