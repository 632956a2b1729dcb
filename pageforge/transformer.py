"""Transformer: registers page operations and runs them in a fixed stage order."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any

from pageforge.config.models import LogLevel, PageforgeConfig
from pageforge.errors import RegistrationError
from pageforge.loaders import DataLoader
from pageforge.log import pipeline_logger
from pageforge.page import Page, create_page
from pageforge.registry import (
    DataOperation,
    GenerateOperation,
    IgnoreOperation,
    LayoutOperation,
    MetadataOperation,
    OperationRegistry,
    QueryOperation,
    TransformAllOperation,
    TransformOperation,
)
from pageforge.stages import DEFAULT_STAGES, Stage, StageContext

class Transformer:
    """Pipeline over a page collection.

    Operations may be registered in any order; they always execute as
    data -> ignore -> metadata -> layout -> query -> transform ->
    transformAll -> generate. Within a stage, operations run in
    registration order.

    The first failure raised by any handler ends the run and reaches the
    caller of :meth:`transform_pages` unchanged. Callback rejections with a
    value that is not an exception arrive as :class:`HandlerFailure` with
    the original object in ``.value``.

    A ``log_level`` passed here, or set in the given config, applies to this
    pipeline only. Otherwise it logs at the level the application set on the
    ``pageforge`` logger.
    """

    def __init__(
        self,
        config: PageforgeConfig | None = None,
        *,
        source_dir: str | Path | None = None,
        log_level: LogLevel | None = None,
        loader: DataLoader | None = None,
        page_factory: Callable[..., Page] = create_page,
    ) -> None:
        overrides: dict[str, Any] = {}
        if source_dir is not None:
            overrides["source_dir"] = str(source_dir)
        if log_level is not None:
            overrides["log_level"] = log_level
        base = config or PageforgeConfig()
        self.config = (
            PageforgeConfig.model_validate({**base.model_dump(), **overrides})
            if overrides
            else base
        )

        if log_level is None and config is not None and "log_level" in config.model_fields_set:
            log_level = config.log_level
        self.logger: logging.Logger = pipeline_logger(log_level)

        self.registry = OperationRegistry(self.logger)
        self.loader = loader or DataLoader()
        self.page_factory = page_factory
        self.stages: tuple[Stage, ...] = DEFAULT_STAGES

    # -- registration ------------------------------------------------------

    def transform(self, pattern: str, handler: Callable[[Page], Page]) -> Transformer:
        """Register ``handler(page) -> page`` for pages matching ``pattern``."""
        _check_pattern("transform", pattern)
        _check_callable("transform", handler)
        self.registry.add(TransformOperation(pattern=pattern, handler=handler))
        return self

    def transform_async(self, pattern: str, handler: Callable[..., Any]) -> Transformer:
        """Register an async per-page handler.

        Either ``async def handler(page) -> page`` or a callback-style
        ``handler(page, done)`` that settles ``done`` once.
        """
        _check_pattern("transform_async", pattern)
        _check_callable("transform_async", handler)
        self.registry.add(TransformOperation(pattern=pattern, handler=handler, is_async=True))
        return self

    def transform_all(self, handler: Callable[[list[Page]], Iterable[Page]]) -> Transformer:
        _check_callable("transform_all", handler)
        self.registry.add(TransformAllOperation(handler=handler))
        return self

    def transform_all_async(self, handler: Callable[..., Any]) -> Transformer:
        _check_callable("transform_all_async", handler)
        self.registry.add(TransformAllOperation(handler=handler, is_async=True))
        return self

    def data(self, namespace: str, source: str | Callable[..., Any]) -> Transformer:
        """Attach a value to every page under ``page.data[namespace]``.

        ``source`` is a file name relative to ``config.source_dir`` or a
        function delivering the value (coroutine or callback style).
        """
        _check_name("data", namespace)
        if isinstance(source, str):
            if not source:
                raise RegistrationError("data", "file name must not be empty")
        else:
            _check_callable("data", source)
        self.registry.add(DataOperation(namespace=namespace, source=source))
        return self

    def ignore(self, pattern: str) -> Transformer:
        _check_pattern("ignore", pattern)
        self.registry.add(IgnoreOperation(pattern=pattern))
        return self

    def metadata(self, pattern: str, values: Mapping[str, Any]) -> Transformer:
        _check_pattern("metadata", pattern)
        if not isinstance(values, Mapping):
            raise RegistrationError("metadata", "values must be a mapping")
        self.registry.add(MetadataOperation(pattern=pattern, values=dict(values)))
        return self

    def layout(self, pattern: str, layout: str) -> Transformer:
        _check_pattern("layout", pattern)
        if not isinstance(layout, str):
            raise RegistrationError("layout", "layout must be a string")
        self.registry.add(LayoutOperation(pattern=pattern, layout=layout))
        return self

    def query(
        self, name: str, selector: str | Callable[[list[Page]], Iterable[Page]] | None = None
    ) -> Transformer:
        """Store a view of the collection as ``page.queries[name]`` on every page.

        ``selector`` is a function of the whole collection, a glob pattern,
        or None for all pages in collection order.
        """
        _check_name("query", name)
        if isinstance(selector, str):
            _check_pattern("query", selector)
        elif selector is not None:
            _check_callable("query", selector)
        self.registry.add(QueryOperation(name=name, selector=selector))
        return self

    def generate(self, handler: Callable[..., Any]) -> Transformer:
        """Register ``handler(pages, create_page, done)`` that delivers new pages."""
        _check_callable("generate", handler)
        self.registry.add(GenerateOperation(handler=handler))
        return self

    # -- execution ---------------------------------------------------------

    async def transform_pages(self, pages: Iterable[Page]) -> list[Page]:
        """Run every stage over ``pages`` and return the final collection."""
        working = list(pages)
        context = StageContext(
            source_dir=Path(self.config.source_dir),
            loader=self.loader,
            page_factory=self.page_factory,
            logger=self.logger,
        )
        self.logger.info(
            "Transforming %d pages with %d operations", len(working), len(self.registry)
        )
        start = time.monotonic()

        for stage in self.stages:
            operations = self.registry.operations(stage.kind)
            if not operations:
                continue
            self.logger.debug("Stage %s: %d operations", stage.name, len(operations))
            try:
                working = await stage.run(working, operations, context)
            except Exception as exc:
                self.logger.error("Stage %s failed: %r", stage.name, exc)
                raise

        self.logger.info(
            "Transformed into %d pages in %.2fs", len(working), time.monotonic() - start
        )
        return working

    def run(self, pages: Iterable[Page]) -> list[Page]:
        """Blocking wrapper around :meth:`transform_pages`."""
        return asyncio.run(self.transform_pages(pages))


def _check_pattern(kind: str, pattern: Any) -> None:
    if not isinstance(pattern, str) or not pattern:
        raise RegistrationError(kind, "pattern must be a non-empty string")


def _check_name(kind: str, name: Any) -> None:
    if not isinstance(name, str) or not name:
        raise RegistrationError(kind, "name must be a non-empty string")


def _check_callable(kind: str, handler: Any) -> None:
    if not callable(handler):
        raise RegistrationError(kind, f"handler must be callable, got {type(handler).__name__}")
