"""Unit tests for navigation menus and base URL rewriting."""

from __future__ import annotations

import pytest

from cms_pages.content import (
    MenuConfigError,
    MenuItem,
    MenuItemCollection,
    MenuSeekError,
    build_menu,
)


def _items(*urls: str) -> MenuItemCollection:
    return MenuItemCollection(MenuItem(f"item {i}", url) for i, url in enumerate(urls))


def test_seek_past_end_raises() -> None:
    """Seeking to an unoccupied position is rejected with the position."""
    items = _items("/a", "/b", "/c")

    with pytest.raises(MenuSeekError, match="Invalid seek position: 5"):
        items.seek(5)
    with pytest.raises(MenuSeekError):
        items.seek(-1)


def test_seek_moves_cursor() -> None:
    items = _items("/a", "/b", "/c")

    items.seek(2)

    assert items.key() == 2
    assert items.current().url == "/c", "cursor should point at the third item"


def test_cursor_walk_and_rewind() -> None:
    """The explicit cursor visits every item and can be restarted."""
    items = _items("/a", "/b")
    visited = []
    items.rewind()
    while items.valid():
        visited.append(items.current().url)
        items.next()

    assert visited == ["/a", "/b"]
    with pytest.raises(MenuSeekError):
        items.current()
    items.rewind()
    assert items.current().url == "/a"


def test_set_base_urls_rewrites_prefix_recursively() -> None:
    """Prefixes are replaced at every depth; other URLs are left alone."""
    child = MenuItem("Page", "/old/page")
    parent = MenuItem("Section", "/old", children=_items("/old/deep/page", "/x"))
    parent.children.add(child)
    items = MenuItemCollection([parent, MenuItem("Other", "/other")])

    result = items.set_base_urls("/old", "/new")

    assert result is items
    assert [item.url for item in items] == ["/new", "/other"]
    assert [item.url for item in parent.children] == [
        "/new/deep/page",
        "/x",
        "/new/page",
    ]


def test_set_base_url_with_empty_old_url_is_noop() -> None:
    item = MenuItem("Home", "/cms/")

    item.set_base_url("", "/site")

    assert item.url == "/cms/"


def test_set_base_urls_keeps_cursor() -> None:
    items = _items("/cms/a", "/cms/b")
    items.seek(1)

    items.set_base_urls("/cms", "")

    assert items.key() == 1
    assert items.current().url == "/b"


def test_build_menu_from_config_entries() -> None:
    menu = build_menu(
        "main",
        [
            {"label": "Home", "url": "/", "id": 1},
            {
                "label": "News",
                "url": "/news",
                "children": [{"label": "Latest", "url": "/news/latest"}],
            },
        ],
    )

    assert menu.name == "main"
    assert len(menu.items) == 2
    assert menu.items[0].id == "1"
    assert menu.items[1].children[0].label == "Latest"
    assert build_menu("empty", None).items == MenuItemCollection()


def test_build_menu_rejects_entries_without_url() -> None:
    with pytest.raises(MenuConfigError, match="main > News"):
        build_menu(
            "main",
            [{"label": "News", "url": "/news", "children": [{"label": "Oops"}]}],
        )
