"""
redicore Configuration Module

Provides configuration management for connections and client
identification defaults.
"""

from redicore.core.constants import LIB_NAME, SETINFO_MIN_VERSION


# Default configuration values
DEFAULT_CONFIG = {
    # Network settings
    'host': 'localhost',
    'port': 6379,
    'socket_timeout': None,  # Seconds; None = block until the server replies
    'socket_connect_timeout': None,

    # Encoding for str command tokens
    'encoding': 'utf-8',

    # Client identification
    'lib_name': LIB_NAME,
    'setinfo_min_version': SETINFO_MIN_VERSION,
}


class Config:
    """
    Configuration manager for redicore.

    Provides get/set access to configuration values. Only keys present in
    DEFAULT_CONFIG are accepted.
    """

    __slots__ = ('_config',)

    def __init__(self, initial_config=None):
        """
        Initialize configuration with defaults.

        Args:
            initial_config: dict - Optional initial configuration to merge with defaults
        """
        self._config = dict(DEFAULT_CONFIG)
        if initial_config:
            for key, value in initial_config.items():
                if key in DEFAULT_CONFIG:
                    self._config[key] = value

    def get(self, key, default=None):
        """
        Get configuration value.

        Args:
            key: str - Configuration key
            default: Any - Default value if key not found

        Returns:
            Configuration value or default
        """
        return self._config.get(key, default)

    def set(self, key, value):
        """
        Set configuration value.

        Args:
            key: str - Configuration key
            value: Any - Value to set

        Returns:
            bool: True if key exists and was set, False if unknown key
        """
        if key in DEFAULT_CONFIG:
            self._config[key] = value
            return True
        return False

    def get_all(self):
        """
        Get all configuration values.

        Returns:
            dict: Copy of all configuration values
        """
        return dict(self._config)


# Global configuration instance
_global_config = None


def get_config():
    """
    Get global configuration instance.

    Returns:
        Config: Global configuration instance
    """
    global _global_config
    if _global_config is None:
        _global_config = Config()
    return _global_config


def init_config(config_dict=None):
    """
    Initialize global configuration.

    Args:
        config_dict: dict - Optional initial configuration

    Returns:
        Config: Initialized configuration instance
    """
    global _global_config
    _global_config = Config(config_dict)
    return _global_config
