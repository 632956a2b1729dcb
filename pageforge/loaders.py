"""File-based data sources for the data stage."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml

from pageforge.errors import DataLoadError


def _parse_json(text: str) -> Any:
    return json.loads(text)


def _parse_yaml(text: str) -> Any:
    return yaml.safe_load(text)


DEFAULT_PARSERS: dict[str, Callable[[str], Any]] = {
    ".json": _parse_json,
    ".yaml": _parse_yaml,
    ".yml": _parse_yaml,
}


class DataLoader:
    """Resolves ``(source_dir, file_name)`` to a parsed value.

    The format is chosen by file suffix. Extra parsers can be passed in as
    ``{".toml": parse_fn}``; they take the decoded text and return a value.
    """

    def __init__(self, parsers: dict[str, Callable[[str], Any]] | None = None) -> None:
        self.parsers = dict(DEFAULT_PARSERS)
        if parsers:
            self.parsers.update({k.lower(): v for k, v in parsers.items()})

    def resolve(self, source_dir: str | Path, file_name: str) -> Path:
        return Path(source_dir) / file_name

    def load(self, source_dir: str | Path, file_name: str) -> Any:
        path = self.resolve(source_dir, file_name)
        parser = self.parsers.get(path.suffix.lower())
        if parser is None:
            supported = ", ".join(sorted(self.parsers))
            raise DataLoadError(file_name, f"unsupported format (expected one of {supported})")

        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise DataLoadError(file_name, f"file not found at {path}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise DataLoadError(file_name, str(e)) from e

        try:
            value = parser(text)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise DataLoadError(file_name, f"malformed content: {e}") from e

        return value

    async def load_async(self, source_dir: str | Path, file_name: str) -> Any:
        return await asyncio.to_thread(self.load, source_dir, file_name)
