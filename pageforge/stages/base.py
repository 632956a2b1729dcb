"""Stage interface shared by every executor."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping, Sequence
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pageforge.errors import HandlerContractError
from pageforge.loaders import DataLoader
from pageforge.log import pipeline_logger
from pageforge.page import Page, create_page
from pageforge.registry import Operation, OperationKind


@dataclass
class StageContext:
    """Collaborators available to every stage of one run."""

    source_dir: Path
    loader: DataLoader = field(default_factory=DataLoader)
    page_factory: Callable[..., Page] = create_page
    logger: logging.Logger = field(default_factory=pipeline_logger)


class Stage(ABC):
    """One phase of the pipeline.

    ``run`` receives the whole working collection and the operations of
    ``kind`` in registration order, and returns the collection the next
    stage should see. It must not return before all of its work is done.
    """

    kind: OperationKind

    @property
    def name(self) -> str:
        return self.kind

    @abstractmethod
    async def run(
        self, pages: list[Page], operations: Sequence[Operation], context: StageContext
    ) -> list[Page]:
        ...


def expect_page(label: str, value: Any) -> Page:
    if not isinstance(value, Page):
        raise HandlerContractError(label, "a Page", value)
    return value


def expect_pages(label: str, value: Any) -> list[Page]:
    if isinstance(value, (str, bytes, Page, Mapping)) or not isinstance(value, Iterable):
        raise HandlerContractError(label, "a sequence of Page", value)
    pages = list(value)
    for item in pages:
        if not isinstance(item, Page):
            raise HandlerContractError(label, "a sequence of Page", item)
    return pages
