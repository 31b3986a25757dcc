# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Argon2i password hashing facade.

This package provides:
- Argon2Hasher: make / check / needs_rehash over argon2-cffi
- HashParameters: immutable cost parameters with per-call overrides
- A YAML user store that upgrades stale hashes on login
"""

from argon2hasher.contracts import Hasher
from argon2hasher.errors import (
    Argon2HasherError,
    ConfigurationError,
    DecodeError,
    HashingUnsupportedError,
)
from argon2hasher.hasher import Argon2Hasher
from argon2hasher.params import PINNED_PARALLELISM, HashParameters

__all__ = [
    "Argon2Hasher",
    "Argon2HasherError",
    "ConfigurationError",
    "DecodeError",
    "HashParameters",
    "Hasher",
    "HashingUnsupportedError",
    "PINNED_PARALLELISM",
]
