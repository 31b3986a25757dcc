# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from argon2hasher.config import users_path
from argon2hasher.contracts import Hasher
from argon2hasher.passwords import get_hasher

logger = logging.getLogger(__name__)

DEFAULT_USERS_PATH = users_path()


@dataclass(frozen=True)
class UserRecord:
    username: str
    role: str
    active: bool
    password_hash: str


# path -> (mtime, users), oldest entry evicted first
_CACHE: Dict[Path, Tuple[float, Dict[str, UserRecord]]] = {}
_CACHE_MAX = 8


def _read_raw(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {"version": 1, "users": {}}
    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raw = {}
    if not isinstance(raw.get("users"), dict):
        raw["users"] = {}
    return raw


def _raw_key(users: Dict[Any, Any], username: str) -> Optional[Any]:
    """Key in the raw YAML mapping that loads as `username`."""
    for k in users:
        if str(k).strip() == username:
            return k
    return None


def _write_raw(path: Path, raw: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(raw, sort_keys=False, allow_unicode=True), encoding="utf-8")
    _CACHE.pop(path, None)


def _load_users_file(path: Path) -> Dict[str, UserRecord]:
    if not path.exists():
        return {}
    users = _read_raw(path)["users"]
    out: Dict[str, UserRecord] = {}
    for uname, udata in users.items():
        if not isinstance(udata, dict):
            continue
        username = str(uname).strip()
        if not username:
            continue
        role = str(udata.get("role") or "viewer").strip().lower()
        active = bool(udata.get("active", True))
        ph = str(udata.get("password_hash") or "").strip()
        out[username] = UserRecord(
            username=username,
            role=role,
            active=active,
            password_hash=ph,
        )
    return out


def get_users(*, path: Path = DEFAULT_USERS_PATH) -> Dict[str, UserRecord]:
    try:
        mtime = path.stat().st_mtime if path.exists() else 0.0
    except OSError:
        mtime = 0.0

    cached_mtime, cached_users = _CACHE.get(path, (0.0, {}))
    if mtime and mtime == cached_mtime and cached_users:
        return cached_users

    users = _load_users_file(path)
    _CACHE.pop(path, None)
    if len(_CACHE) >= _CACHE_MAX:
        _CACHE.pop(next(iter(_CACHE)))
    _CACHE[path] = (mtime, users)
    return users


def get_user(username: str, *, path: Path = DEFAULT_USERS_PATH) -> Optional[UserRecord]:
    u = (username or "").strip()
    if not u:
        return None
    return get_users(path=path).get(u)


def upsert_user(
    username: str,
    *,
    password_hash: str,
    role: str = "viewer",
    active: bool = True,
    path: Path = DEFAULT_USERS_PATH,
) -> UserRecord:
    u = (username or "").strip()
    if not u:
        raise ValueError("El nombre de usuario no puede estar vacío.")
    raw = _read_raw(path)
    old_key = _raw_key(raw["users"], u)
    if old_key is not None:
        del raw["users"][old_key]
    raw["users"][u] = {
        "role": (role or "viewer").strip().lower(),
        "active": bool(active),
        "password_hash": password_hash,
    }
    _write_raw(path, raw)
    return UserRecord(username=u, role=raw["users"][u]["role"], active=bool(active), password_hash=password_hash)


def set_password_hash(username: str, password_hash: str, *, path: Path = DEFAULT_USERS_PATH) -> None:
    raw = _read_raw(path)
    key = _raw_key(raw["users"], (username or "").strip())
    entry = raw["users"].get(key) if key is not None else None
    if not isinstance(entry, dict):
        raise KeyError(username)
    entry["password_hash"] = password_hash
    _write_raw(path, raw)


def authenticate(
    username: str,
    password: str,
    *,
    path: Path = DEFAULT_USERS_PATH,
    hasher: Optional[Hasher] = None,
) -> Optional[UserRecord]:
    """Return the active user whose password matches, or None.

    On success a hash made with stale parameters is replaced in the store by
    one made with the hasher's current parameters.
    """
    u = get_user(username, path=path)
    if not u or not u.active:
        return None
    h = hasher if hasher is not None else get_hasher()
    if not h.check(password, u.password_hash):
        return None
    if h.needs_rehash(u.password_hash):
        new_hash = h.make(password)
        set_password_hash(u.username, new_hash, path=path)
        logger.info("Hash de '%s' actualizado a los parámetros actuales", u.username)
        u = replace(u, password_hash=new_hash)
    return u
