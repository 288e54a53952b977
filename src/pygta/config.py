"""Store configuration for pygta."""

from __future__ import annotations

import dataclasses
import os
from typing import Any


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class StoreConfig:
    """Store configuration.

    None of these settings change command semantics; they only control
    what the store logs.

    Parameters
    ----------
    warn_on_dangling : bool
        Log a WARNING (instead of DEBUG) when a command targets a record
        that is not held: patching with nothing open, a stale active
        structure id, a GTA period whose owner is not loaded.
    log_payloads : bool
        Include redacted command payloads in DEBUG logs.
    log_max_string : int
        Strings longer than this are truncated in logged payloads.
    """

    warn_on_dangling: bool = False
    log_payloads: bool = False
    log_max_string: int = 512

    @classmethod
    def from_env(cls, **overrides: Any) -> StoreConfig:
        """Create configuration from ``PYGTA_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        if "warn_on_dangling" not in overrides:
            config_kwargs["warn_on_dangling"] = _env_bool(env.get("PYGTA_WARN_ON_DANGLING"), False)

        if "log_payloads" not in overrides:
            config_kwargs["log_payloads"] = _env_bool(env.get("PYGTA_LOG_PAYLOADS"), False)

        max_string_env = env.get("PYGTA_LOG_MAX_STRING")
        if max_string_env is not None and "log_max_string" not in overrides:
            config_kwargs["log_max_string"] = int(max_string_env)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
