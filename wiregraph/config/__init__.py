"""Settings for the wiregraph engine.

Settings come from built-in defaults, an optional YAML file and
``WIREGRAPH_*`` environment variables, in increasing priority.
"""

from .loader import ConfigurationLoader
from .settings import (
    WiregraphSettings,
    configure,
    current_settings,
    get_settings,
    load_settings,
    reset_settings,
)

__all__ = [
    "ConfigurationLoader",
    "WiregraphSettings",
    "configure",
    "current_settings",
    "get_settings",
    "load_settings",
    "reset_settings",
]
