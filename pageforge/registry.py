"""Ordered storage of registered pipeline operations.

Each operation kind has its own list, kept in registration order. Sync and
async variants of the same kind share a list so their interleaving survives.

Usage:
    registry = OperationRegistry()
    registry.add(TransformOperation(pattern="**/*.md", handler=fn, is_async=False))
    for op in registry.operations("transform"):
        ...
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Literal, Union

_logger = logging.getLogger(__name__)

OperationKind = Literal[
    "data", "ignore", "metadata", "layout", "query", "transform", "transformAll", "generate"
]

KINDS: tuple[OperationKind, ...] = (
    "data",
    "ignore",
    "metadata",
    "layout",
    "query",
    "transform",
    "transformAll",
    "generate",
)


@dataclass(frozen=True)
class DataOperation:
    """Loads one value and attaches it to every page under ``namespace``."""

    namespace: str
    source: str | Callable[..., Any]
    kind: OperationKind = field(default="data", init=False)

    @property
    def is_file(self) -> bool:
        return isinstance(self.source, str)


@dataclass(frozen=True)
class IgnoreOperation:
    pattern: str
    kind: OperationKind = field(default="ignore", init=False)


@dataclass(frozen=True)
class MetadataOperation:
    pattern: str
    values: Mapping[str, Any]
    kind: OperationKind = field(default="metadata", init=False)


@dataclass(frozen=True)
class LayoutOperation:
    pattern: str
    layout: str
    kind: OperationKind = field(default="layout", init=False)


@dataclass(frozen=True)
class QueryOperation:
    """Named view over the page collection. ``selector`` None means all pages."""

    name: str
    selector: str | Callable[..., Any] | None = None
    kind: OperationKind = field(default="query", init=False)


@dataclass(frozen=True)
class TransformOperation:
    pattern: str
    handler: Callable[..., Any]
    is_async: bool = False
    kind: OperationKind = field(default="transform", init=False)


@dataclass(frozen=True)
class TransformAllOperation:
    handler: Callable[..., Any]
    is_async: bool = False
    kind: OperationKind = field(default="transformAll", init=False)


@dataclass(frozen=True)
class GenerateOperation:
    handler: Callable[..., Any]
    kind: OperationKind = field(default="generate", init=False)


Operation = Union[
    DataOperation,
    IgnoreOperation,
    MetadataOperation,
    LayoutOperation,
    QueryOperation,
    TransformOperation,
    TransformAllOperation,
    GenerateOperation,
]


class OperationRegistry:
    """Per-kind ordered lists of operations.

    Nothing is checked against a page set here; patterns and handlers are
    stored as given and only matched when a stage runs.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or _logger
        self._operations: dict[str, list[Operation]] = {kind: [] for kind in KINDS}

    def add(self, operation: Operation) -> Operation:
        self._operations[operation.kind].append(operation)
        self._logger.debug(
            "Registered %s operation #%d", operation.kind, len(self._operations[operation.kind])
        )
        return operation

    def operations(self, kind: OperationKind) -> list[Operation]:
        """Operations of ``kind`` in registration order (a copy)."""
        if kind not in self._operations:
            raise KeyError(f"Unknown operation kind: {kind}")
        return list(self._operations[kind])

    def counts(self) -> dict[str, int]:
        return {kind: len(ops) for kind, ops in self._operations.items()}

    def __len__(self) -> int:
        return sum(len(ops) for ops in self._operations.values())

    def clear(self) -> None:
        for ops in self._operations.values():
            ops.clear()
        self._logger.debug("Cleared all operations from registry")
