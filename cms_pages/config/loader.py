"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ

from ruamel.yaml import YAML

from cms_pages._constants import DEFAULT_CACHE_LIFETIME
from cms_pages.content import Menu, MenuConfigError, build_menu
from cms_pages.content_model import ContentModelError, build_content_model

from .models import ApiConfig, SiteConfig, SiteConfigError

if typ.TYPE_CHECKING:
    from pathlib import Path


def load_site_config(path: Path, *, api_url: str | None = None) -> SiteConfig:
    """Load the YAML configuration describing the API, content model, and menus.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``config/content.yaml``).
    api_url : str, optional
        Override for ``api.base_url``.

    Returns
    -------
    SiteConfig
        Parsed configuration with the content model and menus built.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If required settings are missing, or the content model or a menu is
        malformed.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> config = load_site_config(Path("config/content.yaml"))  # doctest: +SKIP
    >>> config.content_model.get_content_type("news").api_endpoint  # doctest: +SKIP
    'news'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    api_raw = _section(raw, "api")
    cache_raw = _section(raw, "cache")
    base_url = api_url or api_raw.get("base_url")
    if not base_url:
        msg = "Configuration requires 'api.base_url'."
        raise SiteConfigError(msg)
    api = ApiConfig(
        base_url=str(base_url),
        timeout=_number(api_raw.get("timeout", 10.0), "api.timeout", float),
    )

    try:
        content_model = build_content_model(raw.get("content_types"))
    except ContentModelError as exc:
        msg = f"Invalid content model in '{path}': {exc}"
        raise SiteConfigError(msg) from exc

    return SiteConfig(
        api=api,
        content_model=content_model,
        cache_lifetime=_number(
            cache_raw.get("lifetime", DEFAULT_CACHE_LIFETIME), "cache.lifetime", int
        ),
        menus=_build_menus(raw.get("menus")),
    )


def _section(raw: dict[str, typ.Any], key: str) -> dict[str, typ.Any]:
    """Return the ``key`` block of the config, which must be a mapping if set."""
    match raw.get(key):
        case None:
            return {}
        case dict() as section:
            return section
        case _:
            msg = f"Configuration section '{key}' must be a mapping."
            raise SiteConfigError(msg)


_N = typ.TypeVar("_N", int, float)


def _number(value: object, key: str, kind: type[_N]) -> _N:
    """Convert ``value`` with ``kind``, reporting bad values as config errors."""
    if isinstance(value, bool):
        msg = f"Configuration value '{key}' must be a number, got {value!r}."
        raise SiteConfigError(msg)
    try:
        return kind(typ.cast("typ.Any", value))
    except (TypeError, ValueError) as exc:
        msg = f"Configuration value '{key}' must be a number, got {value!r}."
        raise SiteConfigError(msg) from exc


def _build_menus(payload: typ.Mapping[str, typ.Any] | None) -> dict[str, Menu]:
    """Build named menus from the ``menus`` mapping."""
    menus: dict[str, Menu] = {}
    match payload:
        case None:
            return menus
        case dict():
            pass
        case _:
            msg = "Menus must be defined as a mapping of name to items."
            raise SiteConfigError(msg)
    for name, entries in payload.items():
        try:
            menus[str(name)] = build_menu(str(name), entries)
        except MenuConfigError as exc:
            raise SiteConfigError(str(exc)) from exc
    return menus


__all__ = ["load_site_config"]
