from pathlib import Path

import pytest

import run
from inventory_service.core.config import Settings


def test_settings_defaults(monkeypatch):
    for var in ("HOST", "PORT", "CACHE_DIR", "CORS_ALLOWED_ORIGINS"):
        monkeypatch.delenv(var, raising=False)
    s = Settings(_env_file=None)
    assert (s.HOST, s.PORT, s.CACHE_DIR) == ("127.0.0.1", 3001, "cache")
    assert s.cors_origins_list() == ["*"]
    assert s.origin() == "http://127.0.0.1:3001"


def test_settings_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("CACHE_DIR", str(tmp_path / "photos"))
    monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "http://a.test, http://b.test")
    s = Settings(_env_file=None)
    assert s.PORT == 8080
    assert s.cache_path() == (tmp_path / "photos").resolve()
    assert s.cors_origins_list() == ["http://a.test", "http://b.test"]


class TestCommandLine:

    def test_flags_override_settings(self, tmp_path):
        s = run.resolve_settings(["-h", "0.0.0.0", "-p", "9000", "-c", str(tmp_path / "c")])
        assert (s.HOST, s.PORT, s.CACHE_DIR) == ("0.0.0.0", 9000, str(tmp_path / "c"))

    def test_long_flags(self):
        s = run.resolve_settings(["--host", "localhost", "--port", "3100", "--cache", "photos"])
        assert (s.HOST, s.PORT, s.CACHE_DIR) == ("localhost", 3100, "photos")

    def test_missing_flags_fall_back_to_settings(self):
        s = run.resolve_settings([])
        defaults = run.get_settings()
        assert (s.HOST, s.PORT, s.CACHE_DIR) == (defaults.HOST, defaults.PORT, defaults.CACHE_DIR)

    def test_non_numeric_port_is_rejected(self):
        with pytest.raises(SystemExit):
            run.resolve_settings(["-p", "abc"])

    def test_main_starts_uvicorn_with_resolved_settings(self, monkeypatch, tmp_path):
        calls = {}

        def fake_run(app, **kwargs):
            calls["app"] = app
            calls.update(kwargs)

        monkeypatch.setattr(run.uvicorn, "run", fake_run)
        run.main(["-p", "3222", "-c", str(tmp_path / "cache")])

        assert calls["port"] == 3222
        assert calls["app"].state.photo_store.root == Path(tmp_path / "cache").resolve()


def test_uvicorn_log_level_follows_settings(monkeypatch, tmp_path):
    calls = {}
    monkeypatch.setattr(run, "get_settings", lambda: Settings(_env_file=None, LOG_LEVEL="WARNING"))
    monkeypatch.setattr(run.uvicorn, "run", lambda app, **kwargs: calls.update(kwargs))

    run.main(["-c", str(tmp_path / "cache")])

    assert calls["log_level"] == "warning"
