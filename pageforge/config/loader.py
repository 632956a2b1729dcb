"""YAML config loading with env var expansion."""

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import PageforgeConfig


def config_paths(cli_path: str | None = None) -> list[Path]:
    """Candidate config files, highest priority first."""
    paths = [Path("./pageforge.yaml"), Path.home() / ".pageforge" / "config.yaml"]
    if cli_path:
        paths.insert(0, Path(cli_path))
    return paths


def load_config(cli_path: str | None = None) -> PageforgeConfig:
    """Load config with resolution order: CLI > project-local > user-global > defaults.

    A relative ``source_dir`` is taken relative to the file that sets it, so
    a project config keeps pointing at the project's data from any working
    directory.
    """
    for path in config_paths(cli_path):
        if not path.exists():
            continue
        raw = _read_yaml(path)
        if raw is None:
            continue
        try:
            config = PageforgeConfig(**_expand_env_vars(raw))
        except ValidationError as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e
        if "source_dir" in config.model_fields_set:
            config.source_dir = _relative_to(path, config.source_dir)
        return config

    return PageforgeConfig()


def _read_yaml(path: Path) -> dict[str, Any] | None:
    try:
        with open(path) as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    if raw is not None and not isinstance(raw, dict):
        raise ValueError(f"Invalid config in {path}: expected a mapping, got {type(raw).__name__}")
    return raw


def _relative_to(config_path: Path, source_dir: str) -> str:
    expanded = Path(source_dir).expanduser()
    if expanded.is_absolute():
        return str(expanded)
    return str((config_path.parent / expanded).resolve())


def _expand_env_vars(obj: Any) -> Any:
    """Recursively expand ${VAR} references; unset variables become empty."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    if isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `pageforge config init`
DEFAULT_CONFIG_TEMPLATE = """\
# pageforge.yaml

# Directory that file-based data sources are resolved against,
# relative to this file
source_dir: "."

# Pages picked up by `pageforge inspect`
page_pattern: "**/*"

# Logging
log_level: "info"              # debug | info | warn | error | silent
log_format: "text"             # text | json
"""
