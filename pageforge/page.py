"""Page record and the page factory."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(eq=False)
class Page:
    """One output document flowing through the pipeline.

    Pages compare by identity. ``queries`` usually contains the page itself,
    so the repr is limited to ``src``.
    """

    src: str
    content: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)
    data: dict[str, Any] = field(default_factory=dict)
    ignore: bool = False
    layout: str | None = None
    queries: dict[str, tuple[Page, ...]] = field(default_factory=dict)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "src" and "src" in self.__dict__:
            raise AttributeError("Page.src is read-only")
        super().__setattr__(name, value)

    def __repr__(self) -> str:
        return f"Page(src={self.src!r})"

    # -- metadata bag ------------------------------------------------------

    def __getitem__(self, key: str) -> Any:
        return self.metadata[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self.metadata[key] = value

    def __delitem__(self, key: str) -> None:
        del self.metadata[key]

    def __contains__(self, key: object) -> bool:
        return key in self.metadata

    def __iter__(self) -> Iterator[str]:
        return iter(self.metadata)

    def get(self, key: str, default: Any = None) -> Any:
        return self.metadata.get(key, default)

    def merge_metadata(self, values: Mapping[str, Any]) -> list[str]:
        """Add keys the page does not already own. Returns the keys added."""
        added = []
        for key, value in values.items():
            if key not in self.metadata:
                self.metadata[key] = value
                added.append(key)
        return added


def create_page(
    src: str, content: str = "", metadata: Mapping[str, Any] | None = None
) -> Page:
    """Build a fresh page for ``src`` with optional body and local metadata."""
    return Page(src=src, content=content, metadata=dict(metadata or {}))
