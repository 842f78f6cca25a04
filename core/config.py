"""
=======================================
Configuration management for db-helper.
=======================================

Loads database settings from environment variables (.env file) and provides
a centralized Config singleton for application-wide access.

The configuration system ensures:
- Single source of truth for connection and pool settings
- Type conversion of numeric settings
- Secure handling of credentials (password is URL-quoted, never logged)

Example:
    >>> from core.config import config
    >>>
    >>> # Connection URL for the connection registry
    >>> url = config.get_connection_string()
    >>>
    >>> # Pool bounds
    >>> print(config.db.max_open, config.db.max_idle, config.db.max_lifetime)
"""

import os
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote_plus

from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(dotenv_path=env_path)


@dataclass
class DatabaseConfig:
    """Database connection and pool settings.

    Attributes:
        driver: SQLAlchemy driver name (e.g. mysql+pymysql)
        host: Database server hostname or IP address
        port: Database server port number
        user: Database username
        password: Database password
        database: Database (schema) name
        max_open: Maximum number of open connections
        max_idle: Maximum number of idle connections kept in the pool
        max_lifetime: Seconds before a connection is recycled; keep this
            below the server's wait_timeout
    """

    driver: str
    host: str
    port: int
    user: str
    password: str
    database: str
    max_open: int = 10
    max_idle: int = 5
    max_lifetime: int = 3600

    def get_connection_string(self) -> str:
        """Get the SQLAlchemy connection URL.

        Returns:
            URL string with the password URL-quoted
        """
        return (
            f"{self.driver}://{self.user}:{quote_plus(self.password)}"
            f"@{self.host}:{self.port}/{self.database}"
        )

    def get_pool_params(self) -> dict:
        """Get pool settings as keyword arguments for ConnectionRegistry.init_connection.

        Returns:
            Dictionary with keys: max_open, max_idle, max_lifetime
        """
        return {
            'max_open': self.max_open,
            'max_idle': self.max_idle,
            'max_lifetime': self.max_lifetime,
        }


class Config:
    """Centralized configuration manager.

    Attributes:
        db: DatabaseConfig built from DB_* environment variables

    Example:
        >>> config = Config()
        >>> print(f"Connecting to {config.db_host}:{config.db_port}")
    """

    def __init__(self):
        """Initialize configuration from environment variables."""
        self.db = DatabaseConfig(
            driver=os.getenv('DB_DRIVER', 'mysql+pymysql'),
            host=os.getenv('DB_HOST', 'localhost'),
            port=int(os.getenv('DB_PORT', '3306')),
            user=os.getenv('DB_USER', 'root'),
            password=os.getenv('DB_PASSWORD', ''),
            database=os.getenv('DB_NAME', 'app'),
            max_open=int(os.getenv('DB_MAX_OPEN', '10')),
            max_idle=int(os.getenv('DB_MAX_IDLE', '5')),
            max_lifetime=int(os.getenv('DB_MAX_LIFETIME', '3600')),
        )

    @property
    def db_host(self) -> str:
        """Get database server hostname."""
        return self.db.host

    @property
    def db_port(self) -> int:
        """Get database server port number."""
        return self.db.port

    @property
    def db_name(self) -> str:
        """Get database name."""
        return self.db.database

    def get_connection_string(self) -> str:
        """Get database connection URL (see DatabaseConfig.get_connection_string)."""
        return self.db.get_connection_string()


# Global configuration instance
config = Config()
