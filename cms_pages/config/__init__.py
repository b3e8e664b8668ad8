"""Load and validate the cms_pages site configuration YAML.

This subpackage parses the project's ``content.yaml`` file: API connection
settings, cache lifetime, the content model (content types and their schema
fields), and named navigation menus. The primary entry point is
:func:`load_site_config`, which returns a :class:`SiteConfig` ready for the
repository and renderer.

Examples
--------
>>> from pathlib import Path
>>> from cms_pages.config import load_site_config
>>> site = load_site_config(Path("config/content.yaml"))  # doctest: +SKIP
>>> site.api.base_url  # doctest: +SKIP
'https://cms.example.invalid/api'
"""

from .loader import load_site_config
from .models import ApiConfig, SiteConfig, SiteConfigError

__all__ = ["ApiConfig", "SiteConfig", "SiteConfigError", "load_site_config"]
