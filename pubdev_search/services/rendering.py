"""Projection of search results into palette list entries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

from pubdev_search.domain.models import OPEN_IN_BROWSER, PrimaryAction, SearchResult

DEFAULT_PACKAGE_MANAGER = "flutter pub"
COPY_ACTION_TITLE = "Copy Install Command"
OPEN_ACTION_TITLE = "Open in Browser"


@dataclass(slots=True, frozen=True)
class CopyToClipboardAction:
    title: str
    content: str


@dataclass(slots=True, frozen=True)
class OpenInBrowserAction:
    title: str
    url: str


Action = Union[CopyToClipboardAction, OpenInBrowserAction]


@dataclass(slots=True, frozen=True)
class ListEntry:
    key: str
    title: str
    actions: tuple[Action, ...]

    @property
    def primary_action(self) -> Action:
        return self.actions[0]


def install_command(name: str, package_manager: str = DEFAULT_PACKAGE_MANAGER) -> str:
    return f"{package_manager} add {name}"


def render_results(
    results: Sequence[SearchResult],
    primary_action: PrimaryAction,
    *,
    package_manager: str = DEFAULT_PACKAGE_MANAGER,
    open_package_page: bool = False,
    copy_title: str = COPY_ACTION_TITLE,
    open_title: str = OPEN_ACTION_TITLE,
) -> list[ListEntry]:
    """Build one entry per result, keeping the server order.

    Every entry has exactly two actions; the one matching ``primary_action``
    comes first.
    """

    entries: list[ListEntry] = []
    for result in results:
        copy = CopyToClipboardAction(
            title=copy_title,
            content=install_command(result.name, package_manager),
        )
        open_ = OpenInBrowserAction(
            title=open_title,
            url=result.page_url if open_package_page else result.url,
        )
        actions = (open_, copy) if primary_action == OPEN_IN_BROWSER else (copy, open_)
        entries.append(ListEntry(key=result.id, title=result.name, actions=actions))
    return entries


__all__ = [
    "Action",
    "CopyToClipboardAction",
    "ListEntry",
    "OpenInBrowserAction",
    "install_command",
    "render_results",
]
