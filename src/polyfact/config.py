"""Configuration management module.

Settings are resolved in this order (later wins):
    built-in defaults -> ~/.polyfact/config.toml -> POLYFACT_* environment
    variables -> explicit overrides (CLI flags)

The config file is TOML. It is read with tomli/tomllib and written with
tomlkit so that user comments survive `polyfact config set`.

Security:
- Config file permissions: 0600 (owner read/write only)
- Tokens are masked whenever the config is displayed
"""

import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

try:
    import tomli  # type: ignore[import]
except ImportError:
    # Python 3.11+ ships the same parser as tomllib
    try:
        import tomllib as tomli  # type: ignore[import]
    except ImportError as e:
        raise ImportError("toml library not available. Install with: pip install tomli") from e

try:
    import tomlkit
except ImportError as e:
    raise ImportError("tomlkit library not available. Install with: pip install tomlkit") from e

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://api2.polyfact.com"
TOKEN_URL = "https://app.polyfact.com/"


class ConfigError(Exception):
    """Raised when configuration operations fail."""

    pass


@dataclass
class PolyfactConfig:
    """Polyfact client configuration.

    Polling cadences and the wait budget are in seconds.
    """

    token: str | None = None
    endpoint: str = DEFAULT_ENDPOINT
    request_timeout: float = 30.0

    # Fractional stages (references, folders) report counters and are polled fast
    progress_poll_interval: float = 0.3
    # Status stages only flip to "ok" once
    status_poll_interval: float = 1.0
    # Maximum time a single stage may be polled before giving up
    poll_timeout: float = 1800.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, excluding None values."""
        data = asdict(self)
        # TOML has no null
        return {k: v for k, v in data.items() if v is not None}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PolyfactConfig":
        """Create from dictionary, ignoring unknown keys."""
        config = cls()
        for key, value in data.items():
            if key in CONFIG_KEYS:
                setattr(config, key, coerce_value(key, value))
            else:
                logger.debug(f"Ignoring unknown config key: {key}")
        return config

    def merged(self, **overrides: Any) -> "PolyfactConfig":
        """Return a copy with the non-None overrides applied."""
        data = asdict(self)
        for key, value in overrides.items():
            if value is None:
                continue
            if key not in CONFIG_KEYS:
                raise ConfigError(f"Unknown configuration key: {key}")
            data[key] = coerce_value(key, value)
        return PolyfactConfig(**data)


CONFIG_KEYS = {f.name for f in fields(PolyfactConfig)}
_FLOAT_KEYS = {"request_timeout", "progress_poll_interval", "status_poll_interval", "poll_timeout"}

# Environment variable -> config key
ENV_VARS = {
    "POLYFACT_TOKEN": "token",
    "POLYFACT_ENDPOINT": "endpoint",
    "POLYFACT_REQUEST_TIMEOUT": "request_timeout",
    "POLYFACT_PROGRESS_POLL_INTERVAL": "progress_poll_interval",
    "POLYFACT_STATUS_POLL_INTERVAL": "status_poll_interval",
    "POLYFACT_POLL_TIMEOUT": "poll_timeout",
}


def coerce_value(key: str, value: Any) -> Any:
    """Convert a raw value (from TOML, env or CLI) to the type of ``key``.

    Raises:
        ConfigError: If a numeric setting is not a valid number or is negative
    """
    if key not in _FLOAT_KEYS:
        return None if value is None else str(value)

    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value for {key}: {value!r} (expected a number)") from e

    if number < 0:
        raise ConfigError(f"Invalid value for {key}: {value!r} (must not be negative)")
    return number


class ConfigManager:
    """Manage the polyfact configuration file.

    Configuration is stored at ~/.polyfact/config.toml with secure permissions.
    """

    DEFAULT_CONFIG_DIR = Path.home() / ".polyfact"
    DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"

    @classmethod
    def get_config_path(cls) -> Path:
        """Get configuration file path (honours POLYFACT_CONFIG)."""
        custom_path = os.getenv("POLYFACT_CONFIG")
        if custom_path:
            return Path(custom_path).expanduser()
        return cls.DEFAULT_CONFIG_FILE

    @classmethod
    def load_file(cls) -> dict[str, Any]:
        """Load raw values from the config file.

        Returns:
            Parsed TOML table, or an empty dict when the file does not exist

        Raises:
            ConfigError: If the file cannot be read or parsed
        """
        config_path = cls.get_config_path()

        if not config_path.exists():
            logger.debug("Config file not found, using defaults")
            return {}

        try:
            mode = config_path.stat().st_mode & 0o777
            if mode & 0o077:
                logger.warning(
                    f"Config file has insecure permissions: {oct(mode)}. Fixing to 0600..."
                )
                os.chmod(config_path, 0o600)

            with open(config_path, "rb") as f:
                data = tomli.load(f)  # type: ignore[attr-defined]

            logger.debug(f"Loaded config from: {config_path}")
            return data

        except Exception as e:
            raise ConfigError(f"Failed to load config: {e}") from e

    @classmethod
    def load_environment(cls) -> dict[str, Any]:
        """Collect settings from POLYFACT_* environment variables."""
        values = {}
        for env_var, key in ENV_VARS.items():
            raw = os.getenv(env_var)
            if raw:
                values[key] = raw
        return values

    @classmethod
    def load_config(cls, **overrides: Any) -> PolyfactConfig:
        """Resolve the effective configuration.

        Args:
            **overrides: Explicit values (CLI flags); None values are ignored

        Returns:
            PolyfactConfig with every layer applied

        Raises:
            ConfigError: If any layer holds an invalid value
        """
        config = PolyfactConfig.from_dict(cls.load_file())
        config = config.merged(**cls.load_environment())
        return config.merged(**overrides)

    @classmethod
    def save_value(cls, key: str, value: Any) -> Any:
        """Persist a single setting to the config file.

        Args:
            key: Config key (see PolyfactConfig)
            value: Raw value; numeric settings are validated

        Returns:
            The coerced value that was written

        Raises:
            ConfigError: If the key is unknown, the value invalid, or the write fails
        """
        if key not in CONFIG_KEYS:
            raise ConfigError(
                f"Unknown configuration key: {key}. Valid keys: {', '.join(sorted(CONFIG_KEYS))}"
            )
        coerced = coerce_value(key, value)

        config_path = cls.get_config_path()
        temp_path = config_path.with_suffix(".tmp")
        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            if config_path.parent == cls.DEFAULT_CONFIG_DIR:
                os.chmod(config_path.parent, 0o700)

            # Load existing file if it exists (preserves comments/formatting)
            if config_path.exists():
                with open(config_path) as f:
                    doc = tomlkit.load(f)
            else:
                doc = tomlkit.document()
            doc[key] = coerced

            with open(temp_path, "w") as f:
                tomlkit.dump(doc, f)
            os.chmod(temp_path, 0o600)

            # Atomic rename
            temp_path.replace(config_path)
            logger.debug(f"Saved {key} to: {config_path}")
            return coerced

        except Exception as e:
            if temp_path.exists():
                temp_path.unlink()
            raise ConfigError(f"Failed to save config: {e}") from e


# Global configuration instance (lazily loaded)
_config: PolyfactConfig | None = None


def get_config() -> PolyfactConfig:
    """Get the process-wide configuration used by the SDK helpers.

    Returns:
        PolyfactConfig (loaded from file and environment on first access)
    """
    global _config
    if _config is None:
        _config = ConfigManager.load_config()
    return _config


def reset_config() -> None:
    """Reset global configuration.

    Forces reload from file and environment on next access.
    """
    global _config
    _config = None


__all__ = [
    "ConfigError",
    "ConfigManager",
    "PolyfactConfig",
    "get_config",
    "reset_config",
]
