"""pageforge - page transformation pipeline for static-content generation."""

from pageforge.completion import Completion
from pageforge.config import PageforgeConfig, load_config
from pageforge.errors import (
    CompletionError,
    DataLoadError,
    HandlerContractError,
    HandlerFailure,
    PageforgeError,
    RegistrationError,
)
from pageforge.loaders import DataLoader
from pageforge.page import Page, create_page
from pageforge.patterns import PatternMatcher, matches
from pageforge.sources import collect_pages, load_page
from pageforge.transformer import Transformer

__version__ = "0.1.0"

__all__ = [
    "Completion",
    "CompletionError",
    "DataLoadError",
    "DataLoader",
    "HandlerContractError",
    "HandlerFailure",
    "Page",
    "PageforgeConfig",
    "PageforgeError",
    "PatternMatcher",
    "RegistrationError",
    "Transformer",
    "collect_pages",
    "create_page",
    "load_config",
    "load_page",
    "matches",
]
