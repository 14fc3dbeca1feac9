"""Configuration loading.

Settings are resolved once at startup: built-in defaults, then the optional
TOML file, then environment variables. The result is an immutable SetupConfig.

Example config.toml:
  language = "ES"
  fetch_retries = 5
  version_urls = ["https://mirror.example.com/cursor-version.txt"]
  min_artifact_bytes = 104857600
"""

import string
import tomllib
from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Literal
from urllib.parse import urlsplit

Language = Literal["EN", "ES"]

DEFAULT_VERSION_URLS = (
    "https://www.cursor.com/changelog",
    "https://cursor.com/changelog",
    "https://changelog.cursor.sh",
)
DEFAULT_DOWNLOAD_URL_TEMPLATE = (
    "https://downloads.cursor.com/production/client/linux/{arch}/appimage/"
    "Cursor-{version}-{machine}.AppImage"
)
DEFAULT_ICON_URL = "https://mintlify.s3-us-west-1.amazonaws.com/cursor/images/logo/app-logo.svg"


class ConfigError(Exception):
    """Raised when a configuration value cannot be parsed."""


@dataclass(frozen=True)
class SetupConfig:
    """In-memory representation of merged file + environment configuration."""

    language: Language = "EN"
    debug: bool = False
    color: bool = True
    version_urls: tuple[str, ...] = DEFAULT_VERSION_URLS
    download_url_template: str = DEFAULT_DOWNLOAD_URL_TEMPLATE
    icon_url: str = DEFAULT_ICON_URL
    http_timeout: float = 15.0
    fetch_retries: int = 3
    retry_delay: float = 2.0
    min_content_bytes: int = 64
    min_artifact_bytes: int = 50 * 1024 * 1024
    sniff_file_type: bool = True
    busy_retries: int = 5
    busy_initial_delay: float = 1.0
    busy_max_delay: float = 8.0
    input_timeout: float = 300.0
    probe_host: str = "8.8.8.8"
    keep_backups: int = 1


def _parse_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("1", "true", "yes", "on"):
        return True
    if text in ("0", "false", "no", "off", ""):
        return False
    raise ConfigError(f"{key}: expected a boolean, got {value!r}")


def _parse_int(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{key}: expected an integer, got {value!r}")
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{key}: expected an integer, got {value!r}") from None
    if parsed < 0:
        raise ConfigError(f"{key}: must not be negative, got {parsed}")
    return parsed


def _parse_float(key: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ConfigError(f"{key}: expected a number, got {value!r}")
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{key}: expected a number, got {value!r}") from None
    if parsed < 0:
        raise ConfigError(f"{key}: must not be negative, got {parsed}")
    return parsed


def _parse_str(key: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"{key}: expected a string, got {value!r}")
    return value.strip()


def _parse_language(key: str, value: Any) -> str:
    text = _parse_str(key, value).upper()
    if text not in ("EN", "ES"):
        raise ConfigError(f"{key}: expected EN or ES, got {value!r}")
    return text


def _parse_urls(key: str, value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, list):
        items = [_parse_str(key, item) for item in value]
    else:
        raise ConfigError(f"{key}: expected a list of URLs, got {value!r}")
    urls = tuple(_check_url(key, item.strip()) for item in items if item.strip())
    if not urls:
        raise ConfigError(f"{key}: at least one URL is required")
    return urls


def _check_url(key: str, url: str) -> str:
    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise ConfigError(f"{key}: malformed URL {url!r}: {e}") from e
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ConfigError(f"{key}: expected an http(s) URL, got {url!r}")
    return url


def _parse_url(key: str, value: Any) -> str:
    return _check_url(key, _parse_str(key, value))


TEMPLATE_FIELDS = frozenset({"version", "arch", "machine"})


def _parse_template(key: str, value: Any) -> str:
    text = _parse_url(key, value)
    try:
        names = {name for _, name, _, _ in string.Formatter().parse(text) if name is not None}
    except ValueError as e:
        raise ConfigError(f"{key}: malformed template {value!r}: {e}") from e
    unknown = sorted(names - TEMPLATE_FIELDS)
    if unknown:
        raise ConfigError(
            f"{key}: unknown placeholders {unknown} in {value!r}; "
            f"allowed: {{version}}, {{arch}}, {{machine}}"
        )
    if "version" not in names:
        raise ConfigError(f"{key}: template must contain {{version}}, got {value!r}")
    return text


_Parser = Callable[[str, Any], Any]

# field name -> (environment variable, parser)
_FIELD_SOURCES: dict[str, tuple[str, _Parser]] = {
    "language": ("CURSOR_SETUP_LANG", _parse_language),
    "debug": ("CURSOR_SETUP_DEBUG", _parse_bool),
    "color": ("CURSOR_SETUP_COLOR", _parse_bool),
    "version_urls": ("CURSOR_SETUP_VERSION_URLS", _parse_urls),
    "download_url_template": ("CURSOR_SETUP_DOWNLOAD_URL", _parse_template),
    "icon_url": ("CURSOR_SETUP_ICON_URL", _parse_url),
    "http_timeout": ("CURSOR_SETUP_HTTP_TIMEOUT", _parse_float),
    "fetch_retries": ("CURSOR_SETUP_RETRIES", _parse_int),
    "retry_delay": ("CURSOR_SETUP_RETRY_DELAY", _parse_float),
    "min_content_bytes": ("CURSOR_SETUP_MIN_CONTENT_BYTES", _parse_int),
    "min_artifact_bytes": ("CURSOR_SETUP_MIN_SIZE", _parse_int),
    "sniff_file_type": ("CURSOR_SETUP_SNIFF", _parse_bool),
    "busy_retries": ("CURSOR_SETUP_BUSY_RETRIES", _parse_int),
    "busy_initial_delay": ("CURSOR_SETUP_BUSY_DELAY", _parse_float),
    "busy_max_delay": ("CURSOR_SETUP_BUSY_MAX_DELAY", _parse_float),
    "input_timeout": ("CURSOR_SETUP_INPUT_TIMEOUT", _parse_float),
    "probe_host": ("CURSOR_SETUP_PROBE_HOST", _parse_str),
    "keep_backups": ("CURSOR_SETUP_KEEP_BACKUPS", _parse_int),
}


def default_config_path(real_home: Path, environ: Mapping[str, str]) -> Path:
    """Return the config file location, honoring XDG_CONFIG_HOME."""
    xdg = environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else real_home / ".config"
    return base / "cursor-setup" / "config.toml"


def load_config(config_path: Path, environ: Mapping[str, str]) -> SetupConfig:
    """Load configuration from an optional TOML file and the environment.

    Args:
        config_path: TOML file to read if it exists
        environ: Environment variables (usually os.environ)

    Returns:
        Merged SetupConfig

    Raises:
        ConfigError: If the file is malformed or any value fails to parse
    """
    overrides: dict[str, Any] = {}
    known = {f.name for f in fields(SetupConfig)}

    if config_path.exists():
        try:
            data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"{config_path}: {e}") from e

        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"{config_path}: unknown settings: {', '.join(unknown)}")

        for name, value in data.items():
            _, parser = _FIELD_SOURCES[name]
            overrides[name] = parser(f"{config_path}:{name}", value)

    for name, (env_var, parser) in _FIELD_SOURCES.items():
        if env_var in environ:
            overrides[name] = parser(env_var, environ[env_var])

    # https://no-color.org: presence disables color unless explicitly re-enabled
    if "NO_COLOR" in environ and "CURSOR_SETUP_COLOR" not in environ:
        overrides["color"] = False

    return replace(SetupConfig(), **overrides)
