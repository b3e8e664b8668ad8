"""Jinja rendering for materialized pages and navigation menus.

:class:`PageRenderer` loads the templates shipped in ``cms_pages/templates``
(or a caller-provided directory) and renders a :class:`~cms_pages.content.Page`
or :class:`~cms_pages.content.Menu` to HTML. Templates address fields through
the collection's single named accessor, ``page.content.get("name")``, or walk
``page.content`` in field order.

Typical usage:

>>> renderer = PageRenderer()  # doctest: +SKIP
>>> html = renderer.render_page(page, menus=[main_menu])  # doctest: +SKIP
>>> renderer.write(html, Path("public/news-1.html"))  # doctest: +SKIP
PosixPath('public/news-1.html')
"""

from __future__ import annotations

import datetime as dt
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .content import Menu, Page


class PageRenderer:
    """Render pages and menus with the package's Jinja templates."""

    def __init__(self, *, templates_dir: Path | None = None) -> None:
        """Initialize the renderer and its Jinja environment.

        Parameters
        ----------
        templates_dir : Path, optional
            Directory containing ``page.jinja`` and ``menu.jinja``. Defaults
            to ``cms_pages/templates``.
        """
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.page_template = self.env.get_template("page.jinja")
        self.menu_template = self.env.get_template("menu.jinja")

    def render_page(self, page: Page, *, menus: cabc.Sequence[Menu] = ()) -> str:
        """Return the HTML document for ``page`` with optional navigation menus."""
        context = {
            "page": page,
            "content_type": page.content_type,
            "menus": list(menus),
            "generated_at": dt.datetime.now(dt.UTC),
        }
        return _ensure_newline(self.page_template.render(**context))

    def render_menu(self, menu: Menu) -> str:
        """Return the HTML ``<nav>`` fragment for ``menu``."""
        return _ensure_newline(self.menu_template.render(menu=menu))

    @staticmethod
    def write(html: str, output_path: Path) -> Path:
        """Write ``html`` to ``output_path``, creating parent directories."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html, encoding="utf-8")
        return output_path


def _ensure_newline(html: str) -> str:
    return html if html.endswith("\n") else html + "\n"


__all__ = ["PageRenderer"]
