"""Cyclopts CLI entrypoint for fetching and rendering CMS content.

The ``cms-pages`` console script defined here loads ``config/content.yaml``,
fetches records from the configured content API, materializes them against
the content model, and prints or writes the rendered HTML. It is mainly a
way to inspect what a content type looks like once materialized, and to
debug records that fail to build.

Examples
--------
Render one news record to stdout:

>>> from cms_pages.cli import app
>>> app(["show", "news", "42"])  # doctest: +SKIP

Write the main menu with links re-pointed at the public site:

>>> app(
...     ["menu", "main", "--old-base-url", "/cms", "--output", "public/menu.html"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .api import RestApiClient
from .cache import MemoryCache
from .config import SiteConfig, load_site_config
from .renderer import PageRenderer
from .repository import ContentRepository

DEFAULT_CONFIG = Path("config/content.yaml")

app = App(name="cms-pages", config=cyclopts.config.Env("CMS_PAGES_", command=False))  # type: ignore[unknown-argument]

ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to site config", env_var="CMS_PAGES_CONFIG")
]
ApiUrlOption = typ.Annotated[
    str | None,
    Parameter(help="Override the API base URL", env_var="CMS_PAGES_API_URL"),
]
VerboseOption = typ.Annotated[bool, Parameter(help="Log debug output to stderr")]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _build_repository(site_config: SiteConfig) -> ContentRepository:
    client = RestApiClient(site_config.api.base_url, timeout=site_config.api.timeout)
    return ContentRepository(
        client,
        site_config.content_model,
        cache=MemoryCache(),
        cache_lifetime=site_config.cache_lifetime,
    )


@app.command(help="Fetch one record and render it as HTML.")
def show(
    content_type: str,
    record_id: str,
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    api_url: ApiUrlOption = None,
    menu: typ.Annotated[
        list[str] | None, Parameter(help="Menus to include in the page")
    ] = None,
    output: typ.Annotated[
        Path | None, Parameter(help="Write HTML here instead of stdout")
    ] = None,
    text: typ.Annotated[
        bool, Parameter(help="Print the plain-text field projection instead")
    ] = False,
    verbose: VerboseOption = False,
) -> None:
    """Fetch ``record_id`` of ``content_type`` and render it.

    Parameters
    ----------
    content_type : str
        Name of a content type defined in the site config.
    record_id : str
        Identifier passed to the API's single-record endpoint.
    config : Path, optional
        Path to the YAML site config (overridable via ``CMS_PAGES_CONFIG``).
    api_url : str or None, optional
        Override for ``api.base_url``.
    menu : list[str] or None, optional
        Names of configured menus to render into the page.
    output : Path or None, optional
        Destination file; the HTML is printed when omitted.
    text : bool, optional
        Print the space-joined field values rather than HTML.
    verbose : bool, optional
        Enable debug logging.

    Raises
    ------
    ContentFieldError
        If the record does not match the content model.
    """
    _configure_logging(verbose)
    site_config = load_site_config(config, api_url=api_url)
    repository = _build_repository(site_config)
    page = repository.set_content_type(content_type).get_one(record_id)
    if text:
        print(page)
        return

    menus = [site_config.get_menu(name) for name in menu or []]
    html = PageRenderer().render_page(page, menus=menus)
    if output is None:
        print(html, end="")
        return
    written = PageRenderer.write(html, output)
    print(f"wrote {_format_path(written)}")


@app.command(name="list", help="List one page of records for a content type.")
def list_records(
    content_type: str,
    *,
    page: typ.Annotated[int, Parameter(help="Page number")] = 1,
    config: ConfigOption = DEFAULT_CONFIG,
    api_url: ApiUrlOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print one line per record followed by pagination details."""
    _configure_logging(verbose)
    site_config = load_site_config(config, api_url=api_url)
    repository = _build_repository(site_config)
    pages = repository.set_content_type(content_type).list(page)
    for index, record in enumerate(pages, start=1):
        print(f"{index}. {record}")
    pagination = pages.pagination
    print(
        f"page {pagination.page} of {pagination.total_pages} "
        f"({pagination.total_results} results)"
    )
    for key, value in sorted(pages.metadata.items()):
        print(f"{key}: {value}")


@app.command(help="Render a configured navigation menu.")
def menu(
    name: str,
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    old_base_url: typ.Annotated[
        str | None, Parameter(help="URL prefix to replace")
    ] = None,
    new_base_url: typ.Annotated[str, Parameter(help="Replacement prefix")] = "",
    output: typ.Annotated[
        Path | None, Parameter(help="Write HTML here instead of stdout")
    ] = None,
) -> None:
    """Render menu ``name``, optionally rewriting its URL prefix first."""
    site_config = load_site_config(config)
    selected = site_config.get_menu(name)
    if old_base_url:
        selected.items.set_base_urls(old_base_url, new_base_url)
    html = PageRenderer().render_menu(selected)
    if output is None:
        print(html, end="")
        return
    written = PageRenderer.write(html, output)
    print(f"wrote {_format_path(written)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``cms-pages`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
