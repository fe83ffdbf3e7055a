import json
import sys

import pytest
from pydantic import ValidationError

from adapters.json_exporter import export_results_json
from conftest import CHECKED_AT
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.domain.models import HandleResult, HandleStatus
from core.domain.models import ValidationError as HandleValidationError


def test_settings_defaults():
    settings = AppSettings(_env_file=None)

    assert settings.max_handles_per_submission == 50
    assert settings.api_key is None
    assert settings.log_level == "WARNING"


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("HANDLE_CHECK_CHECKER_URL", "https://example.test/check")
    monkeypatch.setenv("HANDLE_CHECK_LOG_LEVEL", "debug")
    monkeypatch.setenv("HANDLE_CHECK_HTTP_TIMEOUT_SECONDS", "5")

    settings = AppSettings(_env_file=None)

    assert settings.checker_url == "https://example.test/check"
    assert settings.log_level == "DEBUG"
    assert settings.http_timeout_seconds == 5.0


@pytest.mark.parametrize("field,value", [
    ("log_level", "loud"),
    ("max_handles_per_submission", 0),
    ("http_timeout_seconds", 0),
])
def test_settings_reject_bad_values(field, value):
    with pytest.raises(ValidationError):
        AppSettings(_env_file=None, **{field: value})


@pytest.mark.skipif(not sys.platform.startswith("linux"), reason="XDG layout")
def test_write_user_env_vars_merges(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

    write_user_env_vars({"HANDLE_CHECK_CHECKER_URL": "https://a.test", "HANDLE_CHECK_API_KEY": "k1"})
    path = write_user_env_vars({"HANDLE_CHECK_CHECKER_URL": "https://b.test", "HANDLE_CHECK_API_KEY": None})

    assert path == get_user_env_file() == tmp_path / "handle-check" / ".env"
    lines = path.read_text(encoding="utf-8").splitlines()
    assert "HANDLE_CHECK_CHECKER_URL=https://b.test" in lines
    assert "HANDLE_CHECK_API_KEY=k1" in lines


def test_export_results_json(tmp_path):
    results = [HandleResult(handle="abc", status=HandleStatus.AVAILABLE, checked_at=CHECKED_AT)]
    errors = [HandleValidationError(handle="ab", message="Handle must be at least 3 characters long")]

    path = export_results_json(results=results, errors=errors, output_path=tmp_path / "x" / "out.json")

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["results"] == [
        {"handle": "abc", "status": "available", "error": None, "checkedAt": "2024-05-01T12:00:00Z"},
    ]
    assert payload["validation_errors"] == [{"handle": "ab", "message": "Handle must be at least 3 characters long"}]
