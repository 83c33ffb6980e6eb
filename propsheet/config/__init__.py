from .core import (
    ExportSettings,
    LoggingSettings,
    ProviderSettings,
    Settings,
    load_settings,
    last_yaml_path,
    sanitize_dict,
    _project_root,
)

__all__ = [
    "ExportSettings",
    "LoggingSettings",
    "ProviderSettings",
    "Settings",
    "load_settings",
    "last_yaml_path",
    "sanitize_dict",
    "_project_root",
]
