# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Union, runtime_checkable

Password = Union[str, bytes]


@runtime_checkable
class Hasher(Protocol):
    """What a host application needs from a password hashing service."""

    def make(self, password: Password, options: Optional[Mapping[str, Any]] = None) -> str:
        ...

    def check(
        self,
        password: Password,
        encoded_hash: Optional[str],
        options: Optional[Mapping[str, Any]] = None,
    ) -> bool:
        ...

    def needs_rehash(self, encoded_hash: Optional[str], options: Optional[Mapping[str, Any]] = None) -> bool:
        ...
