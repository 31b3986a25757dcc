import sys
from pathlib import Path as _Path
sys.path.insert(0, str(_Path(__file__).resolve().parents[1] / "src"))

from pathlib import Path

import pytest
import yaml

from argon2hasher import passwords
from argon2hasher.hasher import Argon2Hasher


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # Hasher defaults must come from the code, not from the developer's shell.
    for var in ("ARGON2_MEMORY_COST", "ARGON2_TIME_COST", "ARGON2_THREADS", "ARGON2_LOG_LEVEL", "ARGON2_USERS_PATH"):
        monkeypatch.delenv(var, raising=False)
    passwords.reset_hasher()
    yield
    passwords.reset_hasher()


@pytest.fixture()
def hasher() -> Argon2Hasher:
    return Argon2Hasher()


@pytest.fixture()
def users_file(tmp_path: Path) -> Path:
    """
    users.yml with:
      - alice: active, hashed with stale memory cost (512 KiB)
      - bob: active, hashed with current defaults
      - carol: inactive
    """
    stale = Argon2Hasher(memory_cost=512)
    current = Argon2Hasher()
    raw = {
        "version": 1,
        "users": {
            "alice": {"role": "Admin", "active": True, "password_hash": stale.make("alice-pw")},
            "bob": {"role": "editor", "active": True, "password_hash": current.make("bob-pw")},
            "carol": {"active": False, "password_hash": current.make("carol-pw")},
        },
    }
    path = tmp_path / "data" / "users.yml"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(raw, sort_keys=False), encoding="utf-8")
    return path
