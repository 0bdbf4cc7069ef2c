"""Configuration management for Ledgerchat.

Reads configuration from ~/.config/ledgerchat.toml and creates default config if needed.
Secrets may also be supplied through environment variables, which take precedence.
"""

import os
from pathlib import Path
from dataclasses import dataclass
from typing import Optional
import tomllib
import tomli_w


@dataclass
class Config:
    """Application configuration."""

    base_dir: Path
    db_data_dir: Path
    db_filename: str
    log_level: str
    log_dir: Path
    chat_history_limit: int = 20
    llm_enabled: bool = True
    llm_provider: Optional[str] = "openai"
    llm_openai_api_key: str = ""
    llm_openai_model: Optional[str] = None
    plaid_client_id: str = ""
    plaid_secret: str = ""
    plaid_env: str = "sandbox"
    venmo_username: str = ""

    @property
    def db_path(self) -> Path:
        """Get the full database path (data_dir/filename)."""
        return self.db_data_dir / self.db_filename

    @property
    def plaid_configured(self) -> bool:
        """True when both Plaid credentials are present."""
        return bool(self.plaid_client_id and self.plaid_secret)

    @classmethod
    def default(cls) -> "Config":
        """Create a Config with default values."""
        home = Path.home()
        base_dir = home / "data" / "ledgerchat"
        return cls(
            base_dir=base_dir,
            db_data_dir=base_dir / "db",
            db_filename="ledgerchat.db",
            log_level="INFO",
            log_dir=base_dir / "logs",
        )


def get_config_path() -> Path:
    """Get the path to the config file."""
    return Path.home() / ".config" / "ledgerchat.toml"


def get_migrations_dir() -> Path:
    """Get the path to the migrations directory.

    This is always relative to the code location, not configurable.
    """
    return Path(__file__).parent / "db" / "migrations"


def load_config() -> Config:
    """Load configuration from file, creating default if it doesn't exist.

    Returns:
        Config object with loaded or default values, with environment
        overrides applied.
    """
    config_path = get_config_path()

    # If config doesn't exist, create it with defaults
    if not config_path.exists():
        config = Config.default()
        _write_config(config)
        return apply_env_overrides(config)

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    # Parse with defaults for any missing values
    base_dir = Path(data.get("base_dir", Path.home() / "data" / "ledgerchat"))

    db_config = data.get("database", {})
    db_data_dir = Path(db_config.get("data_dir", base_dir / "db"))
    db_filename = db_config.get("filename", "ledgerchat.db")

    log_config = data.get("logging", {})
    log_level = log_config.get("level", "INFO")
    log_dir = Path(log_config.get("log_dir", base_dir / "logs"))

    chat_config = data.get("chat", {})
    chat_history_limit = int(chat_config.get("history_limit", 20))

    llm_config = data.get("llm", {})
    plaid_config = data.get("plaid", {})
    payments_config = data.get("payments", {})

    config = Config(
        base_dir=base_dir,
        db_data_dir=db_data_dir,
        db_filename=db_filename,
        log_level=log_level,
        log_dir=log_dir,
        chat_history_limit=chat_history_limit,
        llm_enabled=llm_config.get("enabled", True),
        llm_provider=llm_config.get("provider", "openai"),
        llm_openai_api_key=llm_config.get("openai_api_key", ""),
        llm_openai_model=llm_config.get("openai_model") or None,
        plaid_client_id=plaid_config.get("client_id", ""),
        plaid_secret=plaid_config.get("secret", ""),
        plaid_env=plaid_config.get("env", "sandbox"),
        venmo_username=payments_config.get("venmo_username", ""),
    )
    return apply_env_overrides(config)


def apply_env_overrides(config: Config, environ=None) -> Config:
    """Overlay secrets from environment variables onto a config.

    Args:
        config: Config to update in place.
        environ: Mapping to read from. Defaults to os.environ.

    Returns:
        The same Config object.
    """
    environ = os.environ if environ is None else environ

    config.llm_openai_api_key = environ.get(
        "OPENAI_API_KEY", config.llm_openai_api_key
    )
    config.plaid_client_id = environ.get("PLAID_CLIENT_ID", config.plaid_client_id)
    config.plaid_secret = environ.get("PLAID_SECRET", config.plaid_secret)
    config.plaid_env = environ.get("PLAID_ENV", config.plaid_env)
    config.venmo_username = environ.get("VENMO_USERNAME", config.venmo_username)
    return config


def _write_config(config: Config) -> None:
    """Write config to the config file.

    Secrets are never written; they are expected in the environment or added
    to the file by hand.

    Args:
        config: Config object to write.
    """
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "base_dir": str(config.base_dir),
        "database": {
            "data_dir": str(config.db_data_dir),
            "filename": config.db_filename,
        },
        "logging": {
            "level": config.log_level,
            "log_dir": str(config.log_dir),
        },
        "chat": {
            "history_limit": config.chat_history_limit,
        },
        "llm": {
            "enabled": config.llm_enabled,
            "provider": config.llm_provider or "",
        },
        "plaid": {
            "env": config.plaid_env,
        },
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
