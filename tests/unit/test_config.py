from pathlib import Path

import pytest

from linkylink.app_shell.config import ConfigError, load_settings


def test_defaults():
    settings = load_settings({})

    assert settings.api_url == "http://localhost:8080"
    assert settings.rules_path is None
    assert settings.log_level == "INFO"
    assert settings.port == 8550
    assert settings.view == "web"
    assert settings.state_path == Path.home() / ".linkylink" / "session.json"


def test_environment_overrides(tmp_path):
    settings = load_settings(
        {
            "LINKY_API_URL": "https://go.example.com",
            "LINKY_RULES_PATH": str(tmp_path / "rules.yaml"),
            "LINKY_LOG_LEVEL": "debug",
            "LINKY_PORT": "9000",
            "LINKY_VIEW": "Desktop",
            "LINKY_STATE_PATH": str(tmp_path / "s.json"),
        }
    )

    assert settings.api_url == "https://go.example.com"
    assert settings.rules_path == tmp_path / "rules.yaml"
    assert settings.log_level == "DEBUG"
    assert settings.port == 9000
    assert settings.view == "desktop"
    assert settings.state_path == tmp_path / "s.json"


@pytest.mark.parametrize(
    "env, match",
    [
        ({"LINKY_API_URL": "ftp://go.example.com"}, "LINKY_API_URL"),
        ({"LINKY_API_URL": "localhost:8080"}, "LINKY_API_URL"),
        ({"LINKY_VIEW": "tui"}, "LINKY_VIEW"),
        ({"LINKY_PORT": "eighty"}, "LINKY_PORT"),
        ({"LINKY_PORT": "70000"}, "LINKY_PORT"),
    ],
)
def test_invalid_settings(env, match):
    with pytest.raises(ConfigError, match=match):
        load_settings(env)
