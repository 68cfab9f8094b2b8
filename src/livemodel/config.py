"""
Configuration Management for LiveModel

🔧 Environment-aware settings:
Holds the few knobs the library exposes (logging and observer error policy)
and resolves them from code, dictionaries or environment variables.
"""

from typing import Dict, Any, Optional
from dataclasses import dataclass, field
from enum import Enum
import logging
import os

LOGGER_NAME = "livemodel"

_TRUE_VALUES = ("1", "true", "yes", "on")


class Environment(Enum):
    """Application environments"""
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class ObserverConfig:
    """Observer dispatch configuration"""
    # Re-raise observer exceptions instead of logging them
    propagate_errors: bool = False


@dataclass
class ApplicationConfig:
    """Complete library configuration"""
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    observers: ObserverConfig = field(default_factory=ObserverConfig)

    @classmethod
    def for_environment(cls, environment: Environment) -> 'ApplicationConfig':
        """Create configuration for specific environment"""
        config = cls(environment=environment)

        if environment == Environment.DEVELOPMENT:
            config.debug = True
            config.logging.level = "DEBUG"

        elif environment == Environment.TESTING:
            config.logging.level = "WARNING"
            config.observers.propagate_errors = True

        elif environment == Environment.PRODUCTION:
            config.debug = False
            config.logging.level = "INFO"

        return config

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'ApplicationConfig':
        """Create configuration from dictionary"""
        environment = Environment(config_dict.get("environment", Environment.DEVELOPMENT.value))
        config = cls.for_environment(environment)

        if "debug" in config_dict:
            config.debug = bool(config_dict["debug"])

        for section in ("logging", "observers"):
            target = getattr(config, section)
            for key, value in config_dict.get(section, {}).items():
                if not hasattr(target, key):
                    raise ValueError(f"Unknown {section} option: {key}")
                setattr(target, key, value)

        return config

    @classmethod
    def from_environment(cls) -> 'ApplicationConfig':
        """Create configuration from environment variables"""
        env_name = os.getenv('LIVEMODEL_ENV', 'development')
        config = cls.for_environment(Environment(env_name.lower()))

        if os.getenv('LIVEMODEL_DEBUG'):
            config.debug = os.getenv('LIVEMODEL_DEBUG').lower() in _TRUE_VALUES

        if os.getenv('LIVEMODEL_LOG_LEVEL'):
            config.logging.level = os.getenv('LIVEMODEL_LOG_LEVEL').upper()

        if os.getenv('LIVEMODEL_PROPAGATE_OBSERVER_ERRORS'):
            flag = os.getenv('LIVEMODEL_PROPAGATE_OBSERVER_ERRORS').lower()
            config.observers.propagate_errors = flag in _TRUE_VALUES

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary"""
        return {
            "environment": self.environment.value,
            "debug": self.debug,
            "logging": {
                "level": self.logging.level,
                "format": self.logging.format,
            },
            "observers": {
                "propagate_errors": self.observers.propagate_errors,
            },
        }


# Global configuration management
_current_config: Optional[ApplicationConfig] = None


def set_config(config: ApplicationConfig):
    """Set the global configuration"""
    global _current_config
    _current_config = config


def get_config() -> ApplicationConfig:
    """Get the current global configuration"""
    global _current_config

    if _current_config is None:
        # Auto-create from environment if not set
        _current_config = ApplicationConfig.from_environment()

    return _current_config


def reset_config():
    """Drop the global configuration so the next get_config() re-reads the environment"""
    global _current_config
    _current_config = None


def configure_logging(config: Optional[ApplicationConfig] = None) -> logging.Logger:
    """
    Attach a stream handler to the library logger.

    Calling this more than once replaces the handler installed by the previous
    call rather than stacking another one.

    Args:
        config: Configuration to apply, defaults to get_config()

    Returns:
        The configured ``livemodel`` logger
    """
    config = config or get_config()
    logger = logging.getLogger(LOGGER_NAME)

    for handler in list(logger.handlers):
        if getattr(handler, "_livemodel_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(config.logging.format))
    handler._livemodel_handler = True
    logger.addHandler(handler)
    logger.setLevel(config.logging.level)
    return logger


__all__ = [
    "ApplicationConfig", "Environment", "LoggingConfig", "ObserverConfig",
    "set_config", "get_config", "reset_config", "configure_logging",
    "LOGGER_NAME",
]
