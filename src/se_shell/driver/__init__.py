"""
Driver Module

Selenium driver lifecycle for the shell: options from config, one
controller per browser, and the manager that names and tracks them.
"""

from .options import DriverConfig, build_options, validate_config, normalize_browser
from .controller import DriverController, launch_driver
from .session import DriverSession, ElementStore, SessionManager

__all__ = [
    "DriverConfig",
    "build_options",
    "validate_config",
    "normalize_browser",
    "DriverController",
    "launch_driver",
    "DriverSession",
    "ElementStore",
    "SessionManager",
]
