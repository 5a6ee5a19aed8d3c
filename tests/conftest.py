from __future__ import annotations

import logging
import os

import pytest

from user_rights.configs.settings import reset_settings
from user_rights.domain.entities.principal import Principal
from user_rights.policy.memory_store import MemoryPolicyStore

ADMINISTRATORS = Principal("S-1-5-32-544")
USERS = Principal("S-1-5-32-545")
BACKUP_OPERATORS = Principal("S-1-5-32-551")
REMOTE_USER = Principal("S-1-5-21-1004336348-1177238915-682003330-1001")
REMOTE_GROUP = Principal("S-1-5-21-1004336348-1177238915-682003330-513")

ACCOUNTS = {
    "BUILTIN\\Administrators": ADMINISTRATORS,
    "BUILTIN\\Users": USERS,
    "BUILTIN\\Backup Operators": BACKUP_OPERATORS,
}


def build_store(assignments=None, accounts=None, connect: bool = True) -> MemoryPolicyStore:
    store = MemoryPolicyStore(assignments or {}, ACCOUNTS if accounts is None else accounts)
    if connect:
        store.connect()
    return store


@pytest.fixture
def store_factory():
    return build_store


@pytest.fixture(autouse=True)
def _isolate_logging_and_settings(monkeypatch):
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    for name in list(os.environ):
        if name.startswith("USER_RIGHTS_"):
            monkeypatch.delenv(name)
    reset_settings()
    yield
    root.handlers = handlers
    root.setLevel(level)
    reset_settings()
