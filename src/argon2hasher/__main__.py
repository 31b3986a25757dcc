"""argon2hasher command line.

Run with:
  python -m argon2hasher hash
  python -m argon2hasher check '$argon2i$...'
  python -m argon2hasher needs-rehash '$argon2i$...' --memory-cost 2048
"""

import argparse
import logging
import sys
from getpass import getpass

from argon2hasher.config import log_level
from argon2hasher.errors import Argon2HasherError
from argon2hasher.hasher import Argon2Hasher


def _read_password(args: argparse.Namespace) -> str:
    if args.password_stdin:
        return sys.stdin.readline().rstrip("\r\n")
    return getpass("Password: ")


def _cost_options(args: argparse.Namespace) -> dict:
    return {"memory_cost": args.memory_cost, "time_cost": args.time_cost}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="argon2hasher", description="Argon2i password hashes")
    sub = parser.add_subparsers(dest="command", required=True)

    p_hash = sub.add_parser("hash", help="hash a password")
    p_check = sub.add_parser("check", help="check a password against a hash")
    p_check.add_argument("hash")
    p_rehash = sub.add_parser("needs-rehash", help="exit 0 if the hash uses other parameters")
    p_rehash.add_argument("hash")

    for p in (p_hash, p_rehash):
        p.add_argument("--memory-cost", type=int, default=None, help="KiB")
        p.add_argument("--time-cost", type=int, default=None)
    for p in (p_hash, p_check):
        p.add_argument("--password-stdin", action="store_true", help="read the password from stdin")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=log_level(), format="%(levelname)s %(name)s: %(message)s")

    try:
        hasher = Argon2Hasher.from_env()
        if args.command == "hash":
            print(hasher.make(_read_password(args), _cost_options(args)))
            return 0
        if args.command == "check":
            ok = hasher.check(_read_password(args), args.hash)
            print("ok" if ok else "mismatch")
            return 0 if ok else 1
        stale = hasher.needs_rehash(args.hash, _cost_options(args))
        print("yes" if stale else "no")
        return 0 if stale else 1
    except Argon2HasherError as exc:
        raise SystemExit(f"error: {exc}")


if __name__ == "__main__":
    sys.exit(main())
