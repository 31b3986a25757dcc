# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import threading
from typing import Optional

from argon2hasher.hasher import Argon2Hasher

_HASHER: Optional[Argon2Hasher] = None
_LOCK = threading.Lock()


def get_hasher() -> Argon2Hasher:
    """Shared hasher built from ARGON2_* environment variables on first use."""
    global _HASHER
    if _HASHER is None:
        with _LOCK:
            if _HASHER is None:
                _HASHER = Argon2Hasher.from_env()
    return _HASHER


def reset_hasher() -> None:
    global _HASHER
    with _LOCK:
        _HASHER = None


def hash_password(plain: str) -> str:
    if not plain:
        raise ValueError("Password vacío")
    return get_hasher().make(plain)


def verify_password(hash_value: str, plain: str) -> bool:
    if not hash_value or not plain:
        return False
    return get_hasher().check(plain, hash_value)


def needs_rehash(hash_value: str) -> bool:
    return get_hasher().needs_rehash(hash_value)
