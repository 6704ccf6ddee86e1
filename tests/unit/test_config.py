"""Tests for settings, structured logging and the CLI entry points."""

import json
import logging

import pytest
from typer.testing import CliRunner

from tests.conftest import SECRET_KEY, make_settings
from viralgif_engine.common.config import ViralGifSettings, get_settings
from viralgif_engine.common.logging import JSONFormatter
from viralgif_engine.common.security import SessionVerifier


class TestSettings:
    def test_defaults(self):
        settings = ViralGifSettings()
        assert settings.anonymous_lifetime_limit == 1
        assert settings.registered_daily_limit == 3
        assert settings.anon_cookie_name == "anon_user_id"
        assert settings.is_production_like is False

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("VIRALGIF_REGISTERED_DAILY_LIMIT", "5")
        monkeypatch.setenv("VIRALGIF_TRUST_FORWARDED_FOR", "true")
        settings = ViralGifSettings()
        assert settings.registered_daily_limit == 5
        assert settings.trust_forwarded_for is True

    def test_production_rejects_default_secret(self):
        settings = ViralGifSettings(environment="production")
        with pytest.raises(RuntimeError, match="VIRALGIF_SECRET_KEY"):
            settings.validate_for_production()

    def test_development_warns_on_default_secret(self):
        with pytest.warns(UserWarning):
            ViralGifSettings().validate_for_production()

    def test_production_with_secret_ok(self):
        make_settings(environment="production").validate_for_production()


class TestJSONFormatter:
    def test_includes_context(self):
        record = logging.LogRecord("viralgif_engine.quota", logging.INFO, __file__, 1, "Quota check passed", None, None)
        record.context = {"used": 1, "limit": 3}
        entry = json.loads(JSONFormatter().format(record))
        assert entry["level"] == "INFO"
        assert entry["logger"] == "viralgif_engine.quota"
        assert entry["message"] == "Quota check passed"
        assert entry["context"] == {"used": 1, "limit": 3}

    def test_exception_text(self):
        try:
            raise ValueError("boom")
        except ValueError:
            import sys
            record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())
        entry = json.loads(JSONFormatter().format(record))
        assert "ValueError: boom" in entry["exception"]


class TestCli:
    @pytest.fixture(autouse=True)
    def _env(self, monkeypatch):
        monkeypatch.setenv("VIRALGIF_SECRET_KEY", SECRET_KEY)
        get_settings.cache_clear()
        yield
        get_settings.cache_clear()

    def test_industries(self):
        from viralgif_engine.cli import app

        result = CliRunner().invoke(app, ["industries"])
        assert result.exit_code == 0
        assert "saas" in result.output
        assert "real estate" not in result.output

    def test_industries_bad_data_dir(self, tmp_path, monkeypatch):
        from viralgif_engine.cli import app

        monkeypatch.setenv("VIRALGIF_DATA_DIR", str(tmp_path))
        get_settings.cache_clear()
        result = CliRunner().invoke(app, ["industries"])
        assert result.exit_code == 1
        assert "CATALOG_ERROR" in result.output

    def test_issue_token_round_trips(self):
        from viralgif_engine.cli import app

        result = CliRunner().invoke(app, ["issue-token", "user-7"])
        assert result.exit_code == 0
        token = result.output.strip()
        assert SessionVerifier(make_settings()).verify(token) == "user-7"
