# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Argon2i password hasher.

Cryptographic work (salting, derivation, constant-time verification) is done
by argon2-cffi. This module decides which parameters are used and answers the
three questions a host application asks: hash this, does it match, is it
stale.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Any, Mapping, Optional

import argon2
from argon2.exceptions import HashingError, InvalidHashError, VerificationError

from argon2hasher.config import params_from_env
from argon2hasher.contracts import Password
from argon2hasher.errors import DecodeError, HashingUnsupportedError
from argon2hasher.params import OPT_THREADS, PINNED_PARALLELISM, HashParameters, decode_parameters

logger = logging.getLogger(__name__)

# verify() picks the variant from the hash prefix, so one instance serves all.
_VERIFIER = argon2.PasswordHasher()


def _fingerprint(p: argon2.Parameters) -> tuple:
    return (p.type, p.version, p.memory_cost, p.time_cost, p.parallelism)


class Argon2Hasher:
    def __init__(
        self,
        params: Optional[HashParameters] = None,
        *,
        memory_cost: Optional[int] = None,
        time_cost: Optional[int] = None,
        threads: Optional[int] = None,
    ) -> None:
        base = params if params is not None else HashParameters()
        self._params = base.with_options(
            {"memory_cost": memory_cost, "time_cost": time_cost, "threads": threads}
        )
        self._lock = threading.Lock()
        self._warn_if_unpinned(self._params.parallelism)

    @classmethod
    def from_env(cls) -> "Argon2Hasher":
        return cls(params_from_env())

    @property
    def params(self) -> HashParameters:
        return self._params

    def make(self, password: Password, options: Optional[Mapping[str, Any]] = None) -> str:
        """Hash `password` with Argon2i and return the encoded hash.

        `options` may override `memory_cost` and `time_cost` for this call.
        A `threads` override is still validated like the other costs, but
        derivation always uses PINNED_PARALLELISM lanes.

        Raises ConfigurationError for an invalid override (`threads`
        included) and HashingUnsupportedError if argon2-cffi cannot produce
        a hash.
        """
        params = self._params.with_options(options)
        if options and options.get(OPT_THREADS) is not None:
            self._warn_if_unpinned(params.parallelism)

        ph = argon2.PasswordHasher.from_parameters(params.to_argon2())
        try:
            return ph.hash(password)
        except HashingError as exc:
            raise HashingUnsupportedError("Hashing Argon2i no soportado en esta plataforma.") from exc

    def check(
        self,
        password: Password,
        encoded_hash: Optional[str],
        options: Optional[Mapping[str, Any]] = None,
    ) -> bool:
        """Return True if `password` matches `encoded_hash`.

        An empty hash never matches. Malformed hashes count as a mismatch.
        """
        if not encoded_hash:
            return False
        try:
            return _VERIFIER.verify(encoded_hash, password)
        except (VerificationError, InvalidHashError, UnicodeEncodeError):
            return False

    def needs_rehash(self, encoded_hash: Optional[str], options: Optional[Mapping[str, Any]] = None) -> bool:
        """Return True if `encoded_hash` was not made with the current parameters.

        Compares algorithm, version, memory cost, time cost and parallelism.
        Hashes that cannot be decoded always need a rehash.
        """
        try:
            current = decode_parameters(encoded_hash)
        except DecodeError as exc:
            logger.debug("Hash no decodificable, se marca para rehash: %s", exc)
            return True
        target = self._params.with_options(options).to_argon2()
        return _fingerprint(current) != _fingerprint(target)

    def set_memory_cost(self, memory_cost: Any) -> "Argon2Hasher":
        return self._update(memory_cost=memory_cost)

    def set_time_cost(self, time_cost: Any) -> "Argon2Hasher":
        return self._update(time_cost=time_cost)

    def set_threads(self, threads: Any) -> "Argon2Hasher":
        self._update(parallelism=threads)
        self._warn_if_unpinned(self._params.parallelism)
        return self

    def _update(self, **changes: Any) -> "Argon2Hasher":
        # replace() re-validates, so a bad value leaves the snapshot untouched.
        with self._lock:
            self._params = replace(self._params, **changes)
        return self

    @staticmethod
    def _warn_if_unpinned(parallelism: int) -> None:
        if parallelism != PINNED_PARALLELISM:
            logger.warning(
                "threads=%d ignorado: los hashes Argon2i se derivan con %d hilo(s)",
                parallelism,
                PINNED_PARALLELISM,
            )
