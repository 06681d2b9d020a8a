"""
Utils Module
通用工具函数
"""
from .logger import setup_logger, get_logger, configure_package_loggers
from .exceptions import (
    EnrichFindError,
    ConfigurationError,
    SearchCommandError,
    SearchCommandUnavailableError,
)

__all__ = [
    "setup_logger",
    "get_logger",
    "configure_package_loggers",
    "EnrichFindError",
    "ConfigurationError",
    "SearchCommandError",
    "SearchCommandUnavailableError",
]
