"""Configuration module for DocAnalyzer."""

from .manager import ConfigManager, get_config, get_config_manager
from .models import (
    AnalysisServiceSettings,
    DocAnalyzerConfig,
    LoggingSettings,
    ProcessingSettings,
    ReportSettings,
    StorageSettings,
)

__all__ = [
    "DocAnalyzerConfig",
    "AnalysisServiceSettings",
    "ProcessingSettings",
    "ReportSettings",
    "LoggingSettings",
    "StorageSettings",
    "ConfigManager",
    "get_config",
    "get_config_manager",
]
