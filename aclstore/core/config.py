"""
Configuration management for the ACL store.
Settings are loaded from environment variables (and a .env file) on top of defaults.
"""

import os
from enum import Enum
from typing import Dict, List, Optional
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


class BackendType(Enum):
    """Supported key-value backends"""
    MEMORY = "memory"
    SQL = "sql"


class StoreConfig(BaseModel):
    """Key-value backend configuration"""
    backend: BackendType = BackendType.MEMORY
    database_url: str = "sqlite:///aclstore.db"
    table_name: str = "acl_entries"
    max_attempts: int = 100

    @field_validator('max_attempts')
    @classmethod
    def validate_max_attempts(cls, v):
        if v < 1:
            raise ValueError("max_attempts must be at least 1")
        return v


class ManagerConfig(BaseModel):
    """ACL manager configuration"""
    initial_admin_users: List[str] = Field(default_factory=list)


class AuthConfig(BaseModel):
    """Static bearer-token authentication (token -> username)"""
    tokens: Dict[str, str] = Field(default_factory=dict)


class APIConfig(BaseModel):
    """API server configuration"""
    host: str = "0.0.0.0"
    port: int = 8000
    root_path: str = "/acls"


class LoggingConfig(BaseModel):
    """Logging configuration"""
    level: str = "INFO"
    format: str = "{time} | {level} | {message}"
    file_path: Optional[str] = None
    rotation: str = "daily"
    retention: str = "7 days"
    colorize: bool = True


class AppConfig(BaseModel):
    """Main application configuration"""
    app_name: str = "ACL Store"
    version: str = "0.1.0"
    environment: str = "development"
    debug: bool = False

    store: StoreConfig = StoreConfig()
    manager: ManagerConfig = ManagerConfig()
    auth: AuthConfig = AuthConfig()
    api: APIConfig = APIConfig()
    logging: LoggingConfig = LoggingConfig()


def parse_list(raw: str) -> List[str]:
    """Parse a comma-separated list, ignoring blanks: 'alice, bob' -> ['alice', 'bob']."""
    return [item.strip() for item in raw.split(",") if item.strip()]


def parse_tokens(raw: str) -> Dict[str, str]:
    """Parse 'alice:tok1,bob:tok2' into a token -> username mapping."""
    tokens: Dict[str, str] = {}
    for pair in parse_list(raw):
        if ":" not in pair:
            continue
        user, token = pair.split(":", 1)
        if user and token:
            tokens[token] = user
    return tokens


class ConfigManager:
    """Configuration manager for loading settings from environment variables"""

    def __init__(self):
        self._config: Optional[AppConfig] = None

    def load_config(self) -> AppConfig:
        """Load configuration from environment variables with sensible defaults"""
        if self._config is None:
            self._config = AppConfig()
            self._override_from_env()
        return self._config

    def _override_from_env(self) -> None:
        """Override configuration values from environment variables"""
        if not self._config:
            return

        # Store overrides
        if os.getenv('ACLSTORE_BACKEND'):
            self._config.store.backend = BackendType(os.getenv('ACLSTORE_BACKEND', 'memory').lower())
        if os.getenv('ACLSTORE_DATABASE_URL'):
            self._config.store.database_url = os.getenv('ACLSTORE_DATABASE_URL', self._config.store.database_url)
        if os.getenv('ACLSTORE_MAX_ATTEMPTS'):
            self._config.store.max_attempts = int(os.getenv('ACLSTORE_MAX_ATTEMPTS', str(self._config.store.max_attempts)))

        # Manager overrides
        if os.getenv('ACLSTORE_ADMIN_USERS'):
            self._config.manager.initial_admin_users = parse_list(os.getenv('ACLSTORE_ADMIN_USERS', ''))

        # Auth overrides
        if os.getenv('ACLSTORE_TOKENS'):
            self._config.auth.tokens = parse_tokens(os.getenv('ACLSTORE_TOKENS', ''))

        # API overrides
        if os.getenv('ACLSTORE_ROOT_PATH') is not None:
            self._config.api.root_path = os.getenv('ACLSTORE_ROOT_PATH', self._config.api.root_path)
        if os.getenv('API_HOST'):
            self._config.api.host = os.getenv('API_HOST', self._config.api.host)
        if os.getenv('API_PORT'):
            self._config.api.port = int(os.getenv('API_PORT', str(self._config.api.port)))

        # Logging overrides
        if os.getenv('LOG_LEVEL'):
            self._config.logging.level = os.getenv('LOG_LEVEL', self._config.logging.level).upper()
        if os.getenv('LOG_FILE'):
            self._config.logging.file_path = os.getenv('LOG_FILE')

        # App overrides
        if os.getenv('APP_ENV'):
            self._config.environment = os.getenv('APP_ENV', self._config.environment)
        if os.getenv('DEBUG'):
            self._config.debug = os.getenv('DEBUG', 'false').lower() == 'true'

    def get_config(self) -> AppConfig:
        """Get current configuration"""
        return self.load_config()

    def reload_config(self) -> AppConfig:
        """Reload configuration from environment variables"""
        self._config = None
        return self.load_config()


# Global configuration instance
config_manager = ConfigManager()


def get_config() -> AppConfig:
    """Get the global configuration instance"""
    return config_manager.get_config()


def reload_config() -> AppConfig:
    """Reload the global configuration"""
    return config_manager.reload_config()
