"""
Shared fixtures: every ledger-level test runs against both the in-memory
and the SQLite store.
"""

import pytest

from account_ledger.storage import InMemoryStorage, SQLiteStorage


@pytest.fixture(params=["memory", "sqlite"])
def storage(request, tmp_path):
    """Initialized store of each adapter kind"""
    if request.param == "memory":
        backend = InMemoryStorage(lock_timeout=10.0)
    else:
        backend = SQLiteStorage(str(tmp_path / "ledger.db"), timeout=10.0)
    backend.initialize_schema()
    yield backend
    backend.close()


def add_customer(storage, name: str, phone: str) -> int:
    """Insert a customer directly, skipping password hashing"""
    return storage.insert_customer(
        name=name,
        email=f"{name.lower()}@example.com",
        phone=phone,
        password_verifier="scrypt$salt$digest",
    )
