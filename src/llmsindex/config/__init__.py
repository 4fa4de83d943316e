"""
Configuration module for llmsindex.

Exports the main components for convenient imports.
"""

from .loader import load_config
from .schema import (
    AppConfig,
    GitMCPConfig,
    IndexConfig,
    LoggingConfig,
    OutputConfig,
    ProjectConfig,
)

__all__ = [
    "load_config",
    "AppConfig",
    "GitMCPConfig",
    "IndexConfig",
    "LoggingConfig",
    "OutputConfig",
    "ProjectConfig",
]
