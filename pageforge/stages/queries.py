"""Query stage: attach named views of the collection to every page."""

from __future__ import annotations

from collections.abc import Sequence

from pageforge.page import Page
from pageforge.patterns import PatternMatcher
from pageforge.registry import QueryOperation

from .base import Stage, StageContext, expect_pages


class QueryStage(Stage):
    """Results are snapshots: pages generated later are not added to them.

    Each query stores one tuple that every page shares.
    """

    kind = "query"

    async def run(
        self, pages: list[Page], operations: Sequence[QueryOperation], context: StageContext
    ) -> list[Page]:
        for op in operations:
            selected = tuple(self._select(op, pages))
            for page in pages:
                page.queries[op.name] = selected
            context.logger.debug(
                "Query '%s' selected %d of %d pages", op.name, len(selected), len(pages)
            )
        return pages

    def _select(self, op: QueryOperation, pages: list[Page]) -> list[Page]:
        if op.selector is None:
            return list(pages)
        if isinstance(op.selector, str):
            return PatternMatcher(op.selector).filter(pages)
        return expect_pages(f"query '{op.name}'", op.selector(list(pages)))
