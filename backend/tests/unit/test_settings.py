import pytest
from pydantic import ValidationError

from huddle.settings import Settings


def test_admin_usernames_accept_comma_and_json(monkeypatch):
    monkeypatch.setenv("ADMIN_USERNAMES", "Alice, bob")
    assert Settings().admin_username_set() == frozenset({"alice", "bob"})
    monkeypatch.setenv("ADMIN_USERNAMES", '["carol"]')
    assert Settings().admin_username_set() == frozenset({"carol"})


def test_data_dir_alias(monkeypatch):
    monkeypatch.setenv("HUDDLE_DATA_DIR", "/tmp/huddle-data")
    assert Settings().data_dir == "/tmp/huddle-data"


def test_corruption_policy_validated(monkeypatch):
    monkeypatch.setenv("STORAGE_CORRUPTION_POLICY", "Strict")
    assert Settings().storage_corruption_policy == "strict"
    monkeypatch.setenv("STORAGE_CORRUPTION_POLICY", "ignore")
    with pytest.raises(ValidationError):
        Settings()
