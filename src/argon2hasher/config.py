# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Environment-driven defaults.

All settings are read from ``ARGON2_*`` environment variables at call time,
so a host application (or a test) can change them before building a hasher.
"""

from __future__ import annotations

import os
from pathlib import Path

from argon2hasher.errors import ConfigurationError
from argon2hasher.params import (
    DEFAULT_MEMORY_COST,
    DEFAULT_THREADS,
    DEFAULT_TIME_COST,
    HashParameters,
    coerce_cost,
)

# Anchor default data paths to the project root, not the current working directory.
BASE_DIR = Path(__file__).resolve().parents[2]

ENV_MEMORY_COST = "ARGON2_MEMORY_COST"
ENV_TIME_COST = "ARGON2_TIME_COST"
ENV_THREADS = "ARGON2_THREADS"
ENV_USERS_PATH = "ARGON2_USERS_PATH"
ENV_LOG_LEVEL = "ARGON2_LOG_LEVEL"


def _env_cost(var: str, field: str, default: int) -> int:
    raw = os.getenv(var, "").strip()
    if not raw:
        return default
    try:
        return coerce_cost(field, raw)
    except ConfigurationError as exc:
        raise ConfigurationError(f"{var}: {exc}") from exc


def params_from_env() -> HashParameters:
    return HashParameters(
        memory_cost=_env_cost(ENV_MEMORY_COST, "memory_cost", DEFAULT_MEMORY_COST),
        time_cost=_env_cost(ENV_TIME_COST, "time_cost", DEFAULT_TIME_COST),
        parallelism=_env_cost(ENV_THREADS, "parallelism", DEFAULT_THREADS),
    )


def users_path() -> Path:
    return Path(os.getenv(ENV_USERS_PATH, str(BASE_DIR / "data" / "users.yml"))).resolve()


def log_level() -> str:
    return (os.getenv(ENV_LOG_LEVEL, "WARNING").strip() or "WARNING").upper()
