# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations


class Argon2HasherError(Exception):
    """Base class for every error raised by argon2hasher."""


class HashingUnsupportedError(Argon2HasherError, RuntimeError):
    """The Argon2 primitive could not produce a hash on this platform/build."""


class ConfigurationError(Argon2HasherError, ValueError):
    """A cost parameter is not an integer or is below its minimum."""


class DecodeError(Argon2HasherError, ValueError):
    """An encoded hash could not be parsed into Argon2 parameters."""
