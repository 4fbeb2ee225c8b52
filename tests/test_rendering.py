"""Tests for the result renderer."""

from __future__ import annotations

from pubdev_search.services.rendering import (
    CopyToClipboardAction,
    OpenInBrowserAction,
    install_command,
    render_results,
)


def test_open_in_browser_first_when_preferred(make_result):
    results = [make_result("http"), make_result("dio")]

    entries = render_results(results, "open-in-browser")

    assert [entry.title for entry in entries] == ["http", "dio"]
    for entry, result in zip(entries, results):
        assert len(entry.actions) == 2
        assert isinstance(entry.actions[0], OpenInBrowserAction)
        assert entry.actions[0].url == result.url
        assert isinstance(entry.actions[1], CopyToClipboardAction)


def test_copy_install_command_first_when_preferred(make_result):
    entries = render_results([make_result("http"), make_result("dio")], "copy-install-command")

    assert [entry.primary_action.content for entry in entries] == [
        "flutter pub add http",
        "flutter pub add dio",
    ]
    assert all(isinstance(entry.actions[1], OpenInBrowserAction) for entry in entries)


def test_entry_keys_come_from_result_ids(make_result):
    entries = render_results([make_result("http")], "copy-install-command")

    assert entries[0].key == "id-http"


def test_open_action_can_target_package_page(make_result):
    entries = render_results([make_result("http")], "open-in-browser", open_package_page=True)

    assert entries[0].primary_action.url == "https://pub.dev/packages/http"


def test_custom_package_manager_and_titles(make_result):
    entries = render_results(
        [make_result("args")],
        "copy-install-command",
        package_manager="dart pub",
        copy_title="Copy",
        open_title="Open",
    )

    copy, open_ = entries[0].actions
    assert copy == CopyToClipboardAction(title="Copy", content="dart pub add args")
    assert open_.title == "Open"


def test_render_empty_results():
    assert render_results([], "open-in-browser") == []


def test_install_command_default_manager():
    assert install_command("provider") == "flutter pub add provider"
