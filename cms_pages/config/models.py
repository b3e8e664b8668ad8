"""Typed dataclasses describing cms_pages site configuration."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from cms_pages._constants import DEFAULT_CACHE_LIFETIME
from cms_pages.content_model import ContentModel

if typ.TYPE_CHECKING:
    from cms_pages.content import Menu


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class ApiConfig:
    """Connection settings for the content API."""

    base_url: str
    timeout: float = 10.0


@dc.dataclass(slots=True)
class SiteConfig:
    """API settings, content model, and menus loaded from YAML."""

    api: ApiConfig
    content_model: ContentModel = dc.field(default_factory=ContentModel)
    cache_lifetime: int = DEFAULT_CACHE_LIFETIME
    menus: dict[str, Menu] = dc.field(default_factory=dict)

    def get_menu(self, name: str) -> Menu:
        """Return the configured menu called ``name``."""
        try:
            return self.menus[name]
        except KeyError as exc:
            available = ", ".join(sorted(self.menus)) or "none"
            msg = f"Unknown menu '{name}'. Known menus: {available}"
            raise KeyError(msg) from exc


__all__ = ["ApiConfig", "SiteConfig", "SiteConfigError"]
