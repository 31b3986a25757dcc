#!/usr/bin/env python3
from __future__ import annotations

from getpass import getpass

from argon2hasher.passwords import hash_password
from argon2hasher.users import DEFAULT_USERS_PATH, upsert_user

USERS_PATH = DEFAULT_USERS_PATH


def main() -> None:
    username = input("Username: ").strip()
    role = (input("Role [viewer/editor/admin]: ").strip().lower() or "viewer")
    active_in = input("Active? [Y/n]: ").strip().lower()
    active = (active_in != "n")

    pw1 = getpass("Password: ")
    pw2 = getpass("Repeat password: ")
    if pw1 != pw2:
        raise SystemExit("Passwords no coinciden")

    upsert_user(username, password_hash=hash_password(pw1), role=role, active=active, path=USERS_PATH)
    print(f"OK -> {USERS_PATH}")


if __name__ == "__main__":
    main()
