"""Data stage: load global values and attach them to every page."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Any

from pageforge.completion import call_async_handler
from pageforge.page import Page
from pageforge.registry import DataOperation

from .base import Stage, StageContext


class DataStage(Stage):
    kind = "data"

    async def run(
        self, pages: list[Page], operations: Sequence[DataOperation], context: StageContext
    ) -> list[Page]:
        if not operations:
            return pages

        # Nothing is attached unless every source loads
        values = await asyncio.gather(*(self._fetch(op, context) for op in operations))

        for op, value in zip(operations, values):
            for page in pages:
                page.data[op.namespace] = value
            context.logger.debug("Attached data '%s' to %d pages", op.namespace, len(pages))
        return pages

    async def _fetch(self, op: DataOperation, context: StageContext) -> Any:
        if op.is_file:
            return await context.loader.load_async(context.source_dir, op.source)
        return await call_async_handler(
            f"data '{op.namespace}'", op.source, logger=context.logger
        )
