# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Cost parameters for Argon2i hashing.

`HashParameters` is an immutable snapshot of the three tunable costs. Per-call
overrides never mutate it: `with_options` returns a new snapshot with the
override map applied on top.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional, Union

import argon2
from argon2.exceptions import InvalidHashError
from argon2.low_level import ARGON2_VERSION, Type

from argon2hasher.errors import ConfigurationError, DecodeError

DEFAULT_MEMORY_COST = 1024  # KiB
DEFAULT_TIME_COST = 3
DEFAULT_THREADS = 1

MIN_MEMORY_COST = 8  # KiB, Argon2 floor for a single lane
MIN_TIME_COST = 1
MIN_PARALLELISM = 1

# argon2-cffi hands costs to libargon2 as 32-bit unsigned ints.
MAX_COST = 2**32 - 1

# Hashes are always derived with a single lane, whatever the caller asks for.
# Existing stored hashes were produced that way.
PINNED_PARALLELISM = 1

HASH_TYPE = Type.I
HASH_LEN = 32
SALT_LEN = 16

# Option keys accepted by make / needs_rehash.
OPT_MEMORY_COST = "memory_cost"
OPT_TIME_COST = "time_cost"
OPT_THREADS = "threads"

_MINIMUMS = {
    "memory_cost": MIN_MEMORY_COST,
    "time_cost": MIN_TIME_COST,
    "parallelism": MIN_PARALLELISM,
}


def coerce_cost(name: str, value: Any) -> int:
    """Return `value` as an int, or raise ConfigurationError if it is unusable."""
    if isinstance(value, bool):
        raise ConfigurationError(f"'{name}' debe ser un entero, no {value!r}")
    try:
        n = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"'{name}' debe ser un entero, no {value!r}") from None
    floor = _MINIMUMS[name]
    if n < floor:
        raise ConfigurationError(f"'{name}' debe ser >= {floor} (recibido {n})")
    if n > MAX_COST:
        raise ConfigurationError(f"'{name}' debe ser <= {MAX_COST} (recibido {n})")
    return n


@dataclass(frozen=True)
class HashParameters:
    memory_cost: int = DEFAULT_MEMORY_COST
    time_cost: int = DEFAULT_TIME_COST
    parallelism: int = DEFAULT_THREADS

    def __post_init__(self) -> None:
        for name in ("memory_cost", "time_cost", "parallelism"):
            object.__setattr__(self, name, coerce_cost(name, getattr(self, name)))

    def with_options(self, options: Optional[Mapping[str, Any]] = None) -> "HashParameters":
        """Apply an override map (`memory_cost`, `time_cost`, `threads`).

        Missing keys and None values fall back to this snapshot. Unknown keys
        are ignored.
        """
        if not options:
            return self
        changes = {}
        if options.get(OPT_MEMORY_COST) is not None:
            changes["memory_cost"] = options[OPT_MEMORY_COST]
        if options.get(OPT_TIME_COST) is not None:
            changes["time_cost"] = options[OPT_TIME_COST]
        if options.get(OPT_THREADS) is not None:
            changes["parallelism"] = options[OPT_THREADS]
        if not changes:
            return self
        return replace(self, **changes)

    def to_argon2(self) -> argon2.Parameters:
        """Parameters actually handed to argon2-cffi (parallelism pinned)."""
        return argon2.Parameters(
            type=HASH_TYPE,
            version=ARGON2_VERSION,
            salt_len=SALT_LEN,
            hash_len=HASH_LEN,
            time_cost=self.time_cost,
            memory_cost=self.memory_cost,
            parallelism=PINNED_PARALLELISM,
        )


def decode_parameters(encoded_hash: Union[str, bytes, None]) -> argon2.Parameters:
    """Read the parameters embedded in an encoded Argon2 hash.

    Raises DecodeError for anything argon2-cffi cannot parse.
    """
    if not encoded_hash:
        raise DecodeError("Hash vacío")
    if isinstance(encoded_hash, bytes):
        try:
            encoded_hash = encoded_hash.decode("ascii")
        except UnicodeDecodeError as exc:
            raise DecodeError("El hash no es ASCII") from exc
    if not isinstance(encoded_hash, str):
        raise DecodeError(f"Tipo de hash no soportado: {type(encoded_hash).__name__}")
    try:
        return argon2.extract_parameters(encoded_hash)
    except (InvalidHashError, ValueError, KeyError) as exc:
        raise DecodeError("Hash Argon2 mal formado") from exc
