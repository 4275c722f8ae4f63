from .loader import load_config
from .models import (
    FreepoConfig,
    IgnoreConfig,
    ReportConfig,
    StorageConfig,
    WalkerConfig,
)

__all__ = [
    "FreepoConfig",
    "IgnoreConfig",
    "ReportConfig",
    "StorageConfig",
    "WalkerConfig",
    "load_config",
]
