"""
Configuration management for the Stellar transaction maker

Loads settings from environment variables and .env file.
Includes logging configuration with file output and correlation ID support.
"""

import os
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional, List

from dotenv import load_dotenv


def _load_env_file():
    """Load .env file from project root"""
    current = Path(__file__).parent.parent  # txmaker package parent
    env_file = current / ".env"

    if env_file.exists():
        load_dotenv(env_file)


# Load .env on module import
_load_env_file()


def _get_env(key: str, default: Optional[str] = "") -> Optional[str]:
    """Get environment variable with default"""
    value = os.getenv(key)
    if value is None:
        return default
    return value


def _get_env_float(key: str, default: float) -> float:
    """Get environment variable as float"""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        logging.getLogger(__name__).warning(
            f"Invalid float value for {key}='{value}', using default={default}"
        )
        return default


def _get_env_int(key: str, default: int) -> int:
    """Get environment variable as int"""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logging.getLogger(__name__).warning(
            f"Invalid int value for {key}='{value}', using default={default}"
        )
        return default


def _get_env_bool(key: str, default: bool) -> bool:
    """Get environment variable as bool"""
    value = os.getenv(key)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


@dataclass
class StellarConfig:
    """Endpoints and network selection"""
    horizon_url: str = field(default_factory=lambda: _get_env("HORIZON_URL", "http://localhost:8000"))
    soroban_url: str = field(default_factory=lambda: _get_env("SOROBAN_RPC_URL", "http://localhost:8000/soroban/rpc"))
    friendbot_url: str = field(default_factory=lambda: _get_env("FRIENDBOT_URL", "http://localhost:8000/friendbot?addr="))
    router_contract_address: str = field(default_factory=lambda: _get_env("ROUTER_CONTRACT_ADDRESS", ""))
    # standalone | testnet
    network: str = field(default_factory=lambda: _get_env("STELLAR_NETWORK", "standalone"))
    # Router discovery API (serves /api/router)
    soroswap_api_url: str = field(default_factory=lambda: _get_env("SOROSWAP_API_URL", ""))
    # Local quickstart images serve plain http
    allow_http: bool = field(default_factory=lambda: _get_env_bool("ALLOW_HTTP", True))


@dataclass
class TxConfig:
    """Transaction assembly and confirmation settings"""
    # Fee per operation in stroops
    base_fee: int = field(default_factory=lambda: _get_env_int("TX_BASE_FEE", 100))
    # Envelope validity window from construction time
    timeout_seconds: int = field(default_factory=lambda: _get_env_int("TX_TIMEOUT_SECONDS", 30))
    poll_interval: float = field(default_factory=lambda: _get_env_float("TX_POLL_INTERVAL", 1.0))
    confirmation_timeout: float = field(default_factory=lambda: _get_env_float("TX_CONFIRMATION_TIMEOUT", 60.0))
    # Poll until a terminal status with no deadline
    wait_forever: bool = field(default_factory=lambda: _get_env_bool("TX_WAIT_FOREVER", False))

    @property
    def effective_confirmation_timeout(self) -> Optional[float]:
        """Deadline handed to the poller (None means unbounded)"""
        if self.wait_forever:
            return None
        return self.confirmation_timeout


@dataclass
class RouterConfig:
    """Soroswap router call settings"""
    # Added to the current unix time for the router's trailing deadline argument.
    # 36000 reproduces the deadline older deployments were called with.
    deadline_seconds: int = field(default_factory=lambda: _get_env_int("ROUTER_DEADLINE_SECONDS", 3600))


@dataclass
class HttpConfig:
    """Plain HTTP helpers (friendbot, router discovery)"""
    timeout: float = field(default_factory=lambda: _get_env_float("HTTP_TIMEOUT_SECONDS", 30.0))


def _get_default_log_path() -> str:
    """Get default log file path under txmaker/log/ with UTC timestamp"""
    from datetime import datetime, timezone
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    log_dir = Path(__file__).parent / "log"
    return str(log_dir / f"txmaker_{timestamp}.log")


@dataclass
class LoggingConfig:
    """
    Logging configuration with file output and correlation ID support.

    Environment variables:
        LOG_FILE: Path to log file (empty disables file output)
        LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL (default: INFO)
        LOG_FORMAT: Custom log format string
        LOG_CONSOLE: Enable console output (default: true)
        LOG_MAX_BYTES: Max log file size before rotation (default: 10MB)
        LOG_BACKUP_COUNT: Number of backup files to keep (default: 5)

    Example .env:
        LOG_LEVEL=DEBUG
        LOG_CONSOLE=true
    """
    log_file: str = field(default_factory=lambda: _get_env("LOG_FILE", _get_default_log_path()))
    log_level: str = field(default_factory=lambda: _get_env("LOG_LEVEL", "INFO"))
    log_format: str = field(default_factory=lambda: _get_env(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    ))
    console_output: bool = field(default_factory=lambda: _get_env_bool("LOG_CONSOLE", True))
    max_bytes: int = field(default_factory=lambda: _get_env_int("LOG_MAX_BYTES", 10 * 1024 * 1024))  # 10MB
    backup_count: int = field(default_factory=lambda: _get_env_int("LOG_BACKUP_COUNT", 5))

    @property
    def level(self) -> int:
        """Get numeric log level"""
        return getattr(logging, self.log_level.upper(), logging.INFO)


@dataclass
class Config:
    """
    Main configuration container

    Loads all settings from environment variables and .env file.

    Usage:
        from txmaker.config import config

        print(config.stellar.horizon_url)
        print(config.tx.poll_interval)
    """
    stellar: StellarConfig = field(default_factory=StellarConfig)
    tx: TxConfig = field(default_factory=TxConfig)
    router: RouterConfig = field(default_factory=RouterConfig)
    http: HttpConfig = field(default_factory=HttpConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def reload(cls) -> "Config":
        """Reload configuration from environment"""
        _load_env_file()
        return cls()


# Global config instance
config = Config()


def reload_config() -> Config:
    """
    Re-read the environment into the global config

    The existing instance is updated in place; modules hold a reference to
    it from import time.
    """
    fresh = Config.reload()
    for f in fields(Config):
        setattr(config, f.name, getattr(fresh, f.name))
    return config


def setup_logging(
    log_config: Optional[LoggingConfig] = None,
    logger_name: str = "txmaker",
) -> logging.Logger:
    """
    Set up logging based on configuration.

    Creates handlers for file and/or console output with optional rotation.
    The log file directory is created automatically if it doesn't exist.

    Args:
        log_config: Logging configuration (uses global config if None)
        logger_name: Name of the logger to configure (default: txmaker)

    Returns:
        Configured logger instance

    Example:
        from txmaker.config import LoggingConfig, setup_logging
        logger = setup_logging(LoggingConfig(log_file="", log_level="DEBUG"))
    """
    if log_config is None:
        log_config = config.logging

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_config.level)

    # Close handlers before removing to flush buffers and release file handles
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(log_config.log_format)

    handlers: List[logging.Handler] = []

    if log_config.log_file:
        from logging.handlers import RotatingFileHandler

        log_path = Path(log_config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_config.log_file,
            maxBytes=log_config.max_bytes,
            backupCount=log_config.backup_count,
            encoding='utf-8',
        )
        file_handler.setLevel(log_config.level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if log_config.console_output:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_config.level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    for handler in handlers:
        logger.addHandler(handler)

    # Child loggers inherit handlers from parent
    for name in [
        f"{logger_name}.infra",
        f"{logger_name}.protocols",
    ]:
        logging.getLogger(name).setLevel(log_config.level)

    if log_config.log_file:
        logger.info(f"Logging initialized: file={log_config.log_file}, level={log_config.log_level}")

    return logger
