"""Common literal values used across cms_pages.

These constants keep API keys, cache key layout, and config defaults
centralized so the repository, client, and tests can import the same values
without drifting. Intended for internal use within the cms_pages package.

Examples
--------
>>> from cms_pages import _constants
>>> _constants.CACHE_KEY_TEMPLATE.format(
...     content_type="news", operation="list", digest="abc"
... )
'news.list.abc'
>>> "page" in _constants.RESERVED_METADATA_KEYS
True
"""

CACHE_KEY_TEMPLATE = "{content_type}.{operation}.{digest}"
DEFAULT_CACHE_LIFETIME = 3600
RESERVED_METADATA_KEYS = frozenset({"total_results", "limit", "results", "page"})
FLEXIBLE_COMPONENT_KEY = "component"
