"""Skincare storefront admin API.

This package contains the admin dashboard backend and the storefront glue layer:
catalog persistence, Sanity and Shopify proxies, content management, and the
role-based admin authentication used to gate write operations.
"""

__version__ = "0.1.0"
