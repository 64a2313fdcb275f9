"""
bicameral.config.defaults - Default configuration values.
"""

DEFAULT_CONFIG = {
    "editor": {
        "font_size": "medium",
        "font_family": "sans",
        "alignment": "left",
    },
    "tracking": {
        "enabled": False,
        "idle_window_ms": 1000,
        "author": "Current User",
    },
    "server": {
        "host": "127.0.0.1",
        "port": 8080,
    },
    "logging": {
        "level": "WARNING",
    },
}

CONFIG_FILENAME = ".bicameral.toml"
