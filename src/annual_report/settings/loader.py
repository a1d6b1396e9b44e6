"""Settings helpers to centralize configuration access."""
from __future__ import annotations

from typing import Any, Optional

from config import Config


def load_settings(debug_override: Optional[bool] = None, **overrides: Any) -> Config:
    """Return a Config from the environment with CLI overrides applied.

    ``None`` overrides are ignored so unset command-line options keep the
    environment value. Unknown keys raise ``AttributeError``.
    """
    config = Config.from_env()
    if debug_override is not None:
        config.debug = debug_override
    for key, value in overrides.items():
        if value is None:
            continue
        if not hasattr(config, key):
            raise AttributeError(f"Unknown setting {key!r}")
        setattr(config, key, value)
    return config
