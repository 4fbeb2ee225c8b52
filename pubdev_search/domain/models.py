"""Pydantic models shared across the search and rendering layers."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

PrimaryAction = Literal["copy-install-command", "open-in-browser"]

COPY_INSTALL_COMMAND: PrimaryAction = "copy-install-command"
OPEN_IN_BROWSER: PrimaryAction = "open-in-browser"


class SearchResult(BaseModel):
    """A single package hit.

    ``id`` is a local rendering key, unique per search only. ``url`` is always
    ``<registry>/api/packages/<name>``; ``page_url`` is the browsable page.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    url: str
    page_url: str


class SearchState(BaseModel):
    model_config = ConfigDict(frozen=True)

    results: tuple[SearchResult, ...] = ()
    is_loading: bool = True


__all__ = [
    "COPY_INSTALL_COMMAND",
    "OPEN_IN_BROWSER",
    "PrimaryAction",
    "SearchResult",
    "SearchState",
]
