"""Transform stages: per-page handlers, then whole-collection handlers."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

from pageforge.completion import call_async_handler
from pageforge.page import Page
from pageforge.patterns import PatternMatcher
from pageforge.registry import TransformAllOperation, TransformOperation

from .base import Stage, StageContext, expect_page, expect_pages


class TransformStage(Stage):
    """Applies per-page handlers in registration order, sync and async interleaved.

    Matching pages of one async operation are handled concurrently. A
    handler's result takes the position of the page it was given, so the
    collection keeps its order no matter when each handler finishes.
    """

    kind = "transform"

    async def run(
        self, pages: list[Page], operations: Sequence[TransformOperation], context: StageContext
    ) -> list[Page]:
        working = list(pages)
        for op in operations:
            matcher = PatternMatcher(op.pattern)
            positions = [i for i, page in enumerate(working) if matcher.match(page.src)]
            if not positions:
                continue

            if op.is_async:
                results = await asyncio.gather(
                    *(
                        call_async_handler(
                            _label(op, working[i]), op.handler, working[i], logger=context.logger
                        )
                        for i in positions
                    )
                )
                for i, result in zip(positions, results):
                    working[i] = expect_page(_label(op, working[i]), result)
            else:
                for i in positions:
                    result = op.handler(working[i])
                    working[i] = expect_page(_label(op, working[i]), result)

            context.logger.debug("Transform '%s' applied to %d pages", op.pattern, len(positions))
        return working


class TransformAllStage(Stage):
    """Each handler gets the whole collection and returns its replacement."""

    kind = "transformAll"

    async def run(
        self, pages: list[Page], operations: Sequence[TransformAllOperation], context: StageContext
    ) -> list[Page]:
        working = list(pages)
        for n, op in enumerate(operations, start=1):
            label = f"transformAll #{n}"
            if op.is_async:
                result = await call_async_handler(
                    label, op.handler, list(working), logger=context.logger
                )
            else:
                result = op.handler(list(working))
            working = expect_pages(label, result)
            context.logger.debug("%s returned %d pages", label, len(working))
        return working


def _label(op: TransformOperation, page: Page) -> str:
    return f"transform '{op.pattern}' on {page.src}"
