"""Generation stage: let generators append new pages to the collection."""

from __future__ import annotations

from collections.abc import Sequence

from pageforge.completion import call_async_handler
from pageforge.page import Page
from pageforge.registry import GenerateOperation

from .base import Stage, StageContext, expect_pages


class GenerateStage(Stage):
    """Runs generators one after another.

    A generator is called as ``fn(pages, create_page, done)`` (or awaited as
    ``fn(pages, create_page)`` when it is a coroutine function). Its pages are
    appended as delivered and are visible to the generators after it. They do
    not go through the earlier stages.
    """

    kind = "generate"

    async def run(
        self, pages: list[Page], operations: Sequence[GenerateOperation], context: StageContext
    ) -> list[Page]:
        working = list(pages)
        for n, op in enumerate(operations, start=1):
            label = f"generator #{n}"
            delivered = await call_async_handler(
                label, op.handler, list(working), context.page_factory, logger=context.logger
            )
            generated = expect_pages(label, delivered)
            working.extend(generated)
            context.logger.debug("%s added %d pages", label, len(generated))
        return working
