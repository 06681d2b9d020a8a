"""
Configuration Management Module
统一配置管理
"""
from .settings import (
    Settings,
    SearchSettings,
    SourceSettings,
    EnrichSettings,
    MIN_DESCRIPTION_CHARS,
    check_url_template,
    get_settings,
    get_search_settings,
    get_source_settings,
    get_enrich_settings,
)

__all__ = [
    "Settings",
    "SearchSettings",
    "SourceSettings",
    "EnrichSettings",
    "MIN_DESCRIPTION_CHARS",
    "check_url_template",
    "get_settings",
    "get_search_settings",
    "get_source_settings",
    "get_enrich_settings",
]
