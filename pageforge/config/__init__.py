from .loader import load_config
from .models import LogLevel, PageforgeConfig

__all__ = [
    "LogLevel",
    "PageforgeConfig",
    "load_config",
]
