"""Build pages from files on disk, reading YAML front matter as local metadata."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from pageforge.page import Page, create_page
from pageforge.patterns import ALL_PAGES, PatternMatcher

logger = logging.getLogger(__name__)


def split_front_matter(content: str) -> tuple[dict, str]:
    """Extract YAML front matter and body from page content."""
    if not content.startswith("---"):
        return {}, content
    end = content.find("\n---", 3)
    if end == -1:
        return {}, content
    fm_text = content[3:end].strip()
    body = content[end + 4:].lstrip("\n")
    metadata = yaml.safe_load(fm_text) or {}
    if not isinstance(metadata, dict):
        raise ValueError(f"Front matter must be a mapping, got {type(metadata).__name__}")
    return metadata, body


def load_page(path: str | Path, root: str | Path) -> Page:
    """Create a page for ``path`` whose ``src`` is its POSIX path under ``root``."""
    path = Path(path)
    src = path.relative_to(root).as_posix()
    content = path.read_text(encoding="utf-8")
    try:
        metadata, body = split_front_matter(content)
    except (yaml.YAMLError, ValueError) as e:
        raise ValueError(f"Invalid front matter in {src}: {e}") from e
    return create_page(src, body, metadata)


def collect_pages(root: str | Path, pattern: str = ALL_PAGES) -> list[Page]:
    """Pages for every file under ``root`` matching ``pattern``, sorted by src."""
    root = Path(root)
    if not root.is_dir():
        raise NotADirectoryError(f"Page source is not a directory: {root}")
    matcher = PatternMatcher(pattern)
    pages = [
        load_page(p, root)
        for p in sorted(root.rglob("*"))
        if p.is_file() and matcher.match(p.relative_to(root).as_posix())
    ]
    logger.debug("Collected %d pages from %s", len(pages), root)
    return pages
