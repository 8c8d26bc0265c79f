"""Settings and the user .env writer."""

import sys

import pytest
from pydantic import ValidationError

from core.config import (
    USER_ENV_HEADER,
    AppSettings,
    _parse_env_lines,
    get_user_config_dir,
    write_user_env_vars,
)


def test_env_prefix(monkeypatch):
    monkeypatch.setenv("COLLABKIT_SITE_ID", "contoso.sharepoint.com")
    monkeypatch.setenv("COLLABKIT_MAX_RETRIES", "5")
    settings = AppSettings(_env_file=None)
    assert settings.site_id == "contoso.sharepoint.com"
    assert settings.max_retries == 5
    assert settings.access_token is None


def test_retry_budget_is_validated():
    with pytest.raises(ValidationError):
        AppSettings(_env_file=None, max_retries=50)


def test_write_user_env_vars_merges_existing_values(tmp_path):
    env_path = tmp_path / "collabkit" / ".env"
    write_user_env_vars({"COLLABKIT_SITE_ID": "a", "COLLABKIT_ACCESS_TOKEN": "t1"}, env_path)
    write_user_env_vars({"COLLABKIT_ACCESS_TOKEN": "t2", "COLLABKIT_GRAPH_BASE_URL": None}, env_path)

    data = _parse_env_lines(env_path.read_text(encoding="utf-8"))
    assert data == {"COLLABKIT_ACCESS_TOKEN": "t2", "COLLABKIT_SITE_ID": "a"}
    assert env_path.read_text(encoding="utf-8").splitlines()[0] == USER_ENV_HEADER


def test_user_config_dir_follows_xdg(monkeypatch, tmp_path):
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert get_user_config_dir() == tmp_path / "collabkit"
