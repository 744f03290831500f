# Path: docref/config_loader.py
"""
Configuration Loader for docref (Document Reference Resolution)

Loads configuration from .env file for the reference resolution engine.
Singleton pattern ensures consistent configuration across all components.

NO hardcoded paths, NO magic numbers.
All configuration comes from environment variables, with defaults
that let the engine run with no environment at all.
"""

import os
from typing import Optional, Any
from pathlib import Path
from dotenv import load_dotenv

from docref.constants import DEFAULT_MAX_RESULTS, DEFAULT_CACHE_MAX_ENTRIES


# ==============================================================================
# DEFAULT CONFIGURATION VALUES
# ==============================================================================

DEFAULT_ENVIRONMENT: str = 'development'
DEFAULT_LOG_LEVEL: str = 'INFO'

# Packaged reference dictionary (docref/dictionary/)
DEFAULT_DICTIONARY_DIR: Path = Path(__file__).resolve().parent / 'dictionary'


class ConfigLoader:
    """
    Singleton configuration loader for docref.

    Loads configuration from environment variables with type
    conversion and sensible defaults.

    Example:
        config = ConfigLoader()
        dictionary_dir = config.get('dictionary_dir')  # Returns Path object
        max_results = config.get('default_max_results')  # Returns int
    """

    _instance: Optional['ConfigLoader'] = None
    _initialized: bool = False

    def __new__(cls) -> 'ConfigLoader':
        """Ensure only one instance exists (singleton pattern)."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """
        Initialize configuration loader.

        Only runs once due to singleton pattern. Loads .env file
        on first instantiation.
        """
        if ConfigLoader._initialized:
            return

        # docref/config_loader.py -> .env is in same directory
        env_path = Path(__file__).resolve().parent / '.env'

        if env_path.exists():
            load_dotenv(dotenv_path=env_path, interpolate=True)

        self._config = self._load_configuration()
        ConfigLoader._initialized = True

    def _load_configuration(self) -> dict[str, Any]:
        """
        Load all configuration from environment.

        Returns:
            Dictionary of configuration values with proper types
        """
        config = {
            # ================================================================
            # ENVIRONMENT & DEBUG
            # ================================================================
            'environment': self._get_env('DOCREF_ENVIRONMENT', DEFAULT_ENVIRONMENT),
            'debug': self._get_bool('DOCREF_DEBUG', False),

            # ================================================================
            # CATALOG PATHS
            # ================================================================
            'dictionary_dir': (
                self._get_path('DOCREF_DICTIONARY_DIR') or DEFAULT_DICTIONARY_DIR
            ),
            'user_references_dir': self._get_path('DOCREF_USER_REFERENCES_DIR'),
            'strict_signal_validation': self._get_bool(
                'DOCREF_STRICT_SIGNAL_VALIDATION', False
            ),

            # ================================================================
            # LOGGING CONFIGURATION
            # ================================================================
            'log_dir': self._get_path('DOCREF_LOG_DIR'),
            'log_level': self._get_env('DOCREF_LOG_LEVEL', DEFAULT_LOG_LEVEL),
            'log_console': self._get_bool('DOCREF_LOG_CONSOLE', True),
            'diagnostics': self._get_bool('DOCREF_DIAGNOSTICS', True),

            # ================================================================
            # CACHE CONFIGURATION
            # ================================================================
            'enable_caching': self._get_bool('DOCREF_ENABLE_CACHING', True),
            'cache_max_entries': self._get_int(
                'DOCREF_CACHE_MAX_ENTRIES', DEFAULT_CACHE_MAX_ENTRIES
            ),

            # ================================================================
            # RESOLUTION DEFAULTS
            # ================================================================
            'default_max_results': self._get_int(
                'DOCREF_DEFAULT_MAX_RESULTS', DEFAULT_MAX_RESULTS
            ),
        }

        return config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key.

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        return self._config.get(key, default)

    def _get_path(self, key: str) -> Optional[Path]:
        """
        Get path from environment variable.

        Args:
            key: Environment variable name

        Returns:
            Path object or None when unset
        """
        value = os.getenv(key)

        if not value:
            return None

        # Handle variable interpolation
        if '${' in value:
            value = os.path.expandvars(value)

        return Path(value)

    def _get_env(self, key: str, default: str = '') -> str:
        """Get string environment variable."""
        return os.getenv(key, default)

    def _get_int(self, key: str, default: int) -> int:
        """Get integer environment variable."""
        value = os.getenv(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            return default

    def _get_bool(self, key: str, default: bool) -> bool:
        """Get boolean environment variable."""
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ('true', '1', 'yes', 'on')

    def __repr__(self) -> str:
        """String representation showing key paths."""
        return (
            f"ConfigLoader("
            f"dictionary_dir={self._config.get('dictionary_dir')}, "
            f"environment={self._config.get('environment')})"
        )


__all__ = ['ConfigLoader']
