import pytest
from config import Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    s = Settings(_env_file=None)
    assert s.PORT == 3000
    assert s.HOST == "0.0.0.0"
    assert s.MAX_MESSAGE_HISTORY == 50
    assert s.cors_origins == ["*"]


def test_port_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "4321")
    assert Settings(_env_file=None).PORT == 4321


def test_cors_origins_are_split(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test,")
    assert Settings(_env_file=None).cors_origins == ["http://a.test", "http://b.test"]


def test_history_must_hold_at_least_one_message(monkeypatch):
    monkeypatch.setenv("MAX_MESSAGE_HISTORY", "0")
    s = Settings(_env_file=None)
    with pytest.raises(ValueError):
        s._post_init()
