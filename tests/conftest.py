"""Shared pytest fixtures for the harvest-blame test suite.

Provides:
    alice / bob   -- sample users
    fake_client   -- FakeClient seeded with alice and bob
    date_range    -- 2024-01-01 to 2024-01-03 (three days)
    config_env    -- a complete, valid set of environment variables
    blame_config  -- BlameConfig built from config_env
    clean_env     -- monkeypatch with every config variable unset
"""

import datetime

import pytest

from harvest_blame.config import load_config
from harvest_blame.models import DateRange, User

from fakes import FakeClient, make_entry


# ---------------------------------------------------------------------------
# Users and client
# ---------------------------------------------------------------------------

@pytest.fixture()
def alice() -> User:
    return User(id="alice", first_name="Alice", last_name="Adams",
                email="alice@example.com")


@pytest.fixture()
def bob() -> User:
    return User(id="bob", first_name="Bob", last_name="Brown",
                email="bob@example.com")


@pytest.fixture()
def date_range() -> DateRange:
    return DateRange(datetime.date(2024, 1, 1), datetime.date(2024, 1, 3))


@pytest.fixture()
def fake_client(alice, bob) -> FakeClient:
    """FakeClient where alice logs 3h then 5h; bob logs full days."""
    return FakeClient(
        users={"alice": alice, "bob": bob},
        entries={
            "alice": [
                make_entry("alice", "2024-01-01", 3),
                make_entry("alice", "2024-01-02", 5),
            ],
            "bob": [
                make_entry("bob", "2024-01-01", 8),
                make_entry("bob", "2024-01-02", 7.5),
                make_entry("bob", "2024-01-03", 6),
            ],
        },
    )


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@pytest.fixture()
def config_env() -> dict:
    """A complete set of configuration variables."""
    return {
        "HARVEST_USER": "reports@example.com",
        "HARVEST_PASSWORD": "secret",
        "HARVEST_ACCOUNT": "acme",
        "HARVEST_USE_SSL": "true",
        "BLAME_START": "2024-01-01",
        "BLAME_END": "2024-01-03",
        "BLAME_USERS": "alice, bob",
        "EMAIL_FROM": "harvest@example.com",
        "EMAIL_TO": "leads@example.com",
        "EMAIL_CC": "pm@example.com",
        "EMAIL_CC_USERS": "false",
    }


@pytest.fixture()
def blame_config(config_env):
    return load_config(config_env)


@pytest.fixture()
def clean_env(monkeypatch):
    """Remove every configuration variable from os.environ."""
    for name in (
        "HARVEST_USER", "HARVEST_PASSWORD", "HARVEST_ACCOUNT",
        "HARVEST_USE_SSL", "HARVEST_HTTP_PROXY", "HARVEST_HTTP_PROXY_PORT",
        "BLAME_TIMEZONE", "BLAME_START", "BLAME_END", "BLAME_USERS",
        "EMAIL_FROM", "EMAIL_TO", "EMAIL_CC", "EMAIL_CC_USERS",
        "SMTP_HOST", "SMTP_PORT", "SMTP_USER", "SMTP_PASSWORD", "SMTP_USE_SSL",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
