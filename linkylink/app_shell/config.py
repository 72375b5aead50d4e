import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

VIEW_MODES = ("web", "desktop")


class ConfigError(ValueError):
    """Raised when the environment describes an unusable setup."""


@dataclass(frozen=True)
class Settings:
    api_url: str
    rules_path: Path | None
    log_level: str
    port: int
    view: str
    state_path: Path


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """
    Read runtime settings from the environment (with defaults for local dev).
    """
    env = os.environ if environ is None else environ

    port_raw = env.get("LINKY_PORT", "8550")
    try:
        port = int(port_raw)
    except ValueError as e:
        raise ConfigError(f"LINKY_PORT must be an integer, got {port_raw!r}") from e

    settings = Settings(
        api_url=env.get("LINKY_API_URL", "http://localhost:8080"),
        rules_path=Path(env["LINKY_RULES_PATH"]) if env.get("LINKY_RULES_PATH") else None,
        log_level=env.get("LINKY_LOG_LEVEL", "INFO").upper(),
        port=port,
        view=env.get("LINKY_VIEW", "web").lower(),
        state_path=Path(
            env.get("LINKY_STATE_PATH", str(Path.home() / ".linkylink" / "session.json"))
        ),
    )
    validate_settings(settings)
    return settings


def validate_settings(settings: Settings) -> None:
    """
    Validate operational requirements before startup.
    """
    # 1. API origin
    parsed = urlparse(settings.api_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigError(f"LINKY_API_URL must be an http(s) URL, got {settings.api_url!r}")

    # 2. View mode
    if settings.view not in VIEW_MODES:
        raise ConfigError(
            f"LINKY_VIEW must be one of {', '.join(VIEW_MODES)}, got {settings.view!r}"
        )

    # 3. Port
    if not 0 < settings.port < 65536:
        raise ConfigError(f"LINKY_PORT out of range: {settings.port}")
