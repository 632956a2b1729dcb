"""Directive stages: ignore, metadata and layout.

Directives carry plain data rather than user code, so they never fail.
"""

from __future__ import annotations

from collections.abc import Sequence

from pageforge.page import Page
from pageforge.patterns import PatternMatcher
from pageforge.registry import IgnoreOperation, LayoutOperation, MetadataOperation

from .base import Stage, StageContext


class IgnoreStage(Stage):
    kind = "ignore"

    async def run(
        self, pages: list[Page], operations: Sequence[IgnoreOperation], context: StageContext
    ) -> list[Page]:
        for op in operations:
            for page in PatternMatcher(op.pattern).filter(pages):
                page.ignore = True
                context.logger.debug("Ignoring %s (pattern %s)", page.src, op.pattern)
        return pages


class MetadataStage(Stage):
    """Merges directive values into pages without overwriting existing keys."""

    kind = "metadata"

    async def run(
        self, pages: list[Page], operations: Sequence[MetadataOperation], context: StageContext
    ) -> list[Page]:
        for op in operations:
            for page in PatternMatcher(op.pattern).filter(pages):
                added = page.merge_metadata(op.values)
                if len(added) < len(op.values):
                    context.logger.debug(
                        "Kept local metadata on %s for %s",
                        page.src,
                        sorted(set(op.values) - set(added)),
                    )
        return pages


class LayoutStage(Stage):
    """Sets the layout of matching pages; the last matching registration wins."""

    kind = "layout"

    async def run(
        self, pages: list[Page], operations: Sequence[LayoutOperation], context: StageContext
    ) -> list[Page]:
        for op in operations:
            for page in PatternMatcher(op.pattern).filter(pages):
                page.layout = op.layout
        return pages
