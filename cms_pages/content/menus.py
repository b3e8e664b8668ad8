"""Navigation menus: items, seekable item collections, and base URL rewriting.

Menus are trees. Each :class:`MenuItem` owns a :class:`MenuItemCollection` of
children, and collections expose an explicit cursor (``rewind``/``next``/
``current``/``seek``) for templates that walk a level positionally, next to
plain Python iteration. :meth:`MenuItemCollection.set_base_urls` rewrites
URL prefixes across the whole tree, which is how a menu authored against the
CMS host is re-pointed at the public site.

Examples
--------
>>> menu = build_menu("main", [
...     {"label": "News", "url": "/cms/news", "children": [
...         {"label": "Latest", "url": "/cms/news/latest"},
...     ]},
... ])
>>> _ = menu.items.set_base_urls("/cms", "")
>>> menu.items[0].url
'/news'
>>> menu.items[0].children[0].url
'/news/latest'
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class MenuSeekError(IndexError):
    """Raised when seeking a menu item collection to an unoccupied position."""


class MenuConfigError(ValueError):
    """Raised when a menu definition is malformed."""


@dc.dataclass(slots=True)
class MenuItem:
    """A navigation entry with optional nested children."""

    label: str
    url: str
    children: MenuItemCollection = dc.field(default_factory=lambda: MenuItemCollection())
    id: str | None = None

    def set_base_url(self, old_url: str, new_url: str) -> None:
        """Replace a leading ``old_url`` in this item's url with ``new_url``."""
        if old_url and self.url.startswith(old_url):
            self.url = new_url + self.url[len(old_url) :]


class MenuItemCollection:
    """Ordered, seekable sequence of menu items."""

    def __init__(self, items: cabc.Iterable[MenuItem] = ()) -> None:
        self._items: list[MenuItem] = list(items)
        self._position = 0

    def add(self, item: MenuItem) -> MenuItemCollection:
        self._items.append(item)
        return self

    def rewind(self) -> None:
        self._position = 0

    def next(self) -> None:
        self._position += 1

    def key(self) -> int:
        return self._position

    def valid(self) -> bool:
        return 0 <= self._position < len(self._items)

    def current(self) -> MenuItem:
        """Return the item at the cursor.

        Raises
        ------
        MenuSeekError
            If the cursor has moved past the last item.
        """
        if not self.valid():
            msg = f"No menu item at position {self._position}"
            raise MenuSeekError(msg)
        return self._items[self._position]

    def seek(self, position: int) -> None:
        """Move the cursor to ``position``, which must hold an item."""
        if not 0 <= position < len(self._items):
            msg = f"Invalid seek position: {position}"
            raise MenuSeekError(msg)
        self._position = position

    def set_base_urls(self, old_url: str = "", new_url: str = "") -> MenuItemCollection:
        """Rewrite the ``old_url`` prefix to ``new_url`` on every item in the tree.

        Children are rewritten before their parent, and the cursor is left
        untouched.
        """
        for item in list(self._items):
            if item.children:
                item.children.set_base_urls(old_url, new_url)
            item.set_base_url(old_url, new_url)
        return self

    def __iter__(self) -> cabc.Iterator[MenuItem]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> MenuItem:
        return self._items[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MenuItemCollection):
            return NotImplemented
        return self._items == other._items

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"


@dc.dataclass(slots=True)
class Menu:
    """A named navigation menu."""

    name: str
    items: MenuItemCollection = dc.field(default_factory=MenuItemCollection)


def build_menu(name: str, payload: cabc.Iterable[typ.Any] | None) -> Menu:
    """Build a Menu from a list of ``{label, url, children?, id?}`` mappings.

    Raises
    ------
    MenuConfigError
        If an entry is not a mapping or lacks ``label``/``url``.
    """
    return Menu(name=name, items=_build_items(payload or [], path=name))


def _build_items(entries: cabc.Iterable[typ.Any], *, path: str) -> MenuItemCollection:
    items = MenuItemCollection()
    for entry in entries:
        match entry:
            case {"label": label, "url": url, **rest}:
                pass
            case _:
                msg = f"Menu items in '{path}' require 'label' and 'url'."
                raise MenuConfigError(msg)
        children = rest.get("children") or []
        item_id = rest.get("id")
        items.add(
            MenuItem(
                label=str(label),
                url=str(url),
                children=_build_items(children, path=f"{path} > {label}"),
                id=None if item_id is None else str(item_id),
            )
        )
    return items


__all__ = [
    "Menu",
    "MenuConfigError",
    "MenuItem",
    "MenuItemCollection",
    "MenuSeekError",
    "build_menu",
]
