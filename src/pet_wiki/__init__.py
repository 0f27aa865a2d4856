"""
Pet Wiki - a pet encyclopedia and blog.

This package provides tools to:
- Import breed profiles, categories and blog articles into a relational store
- Serve breed collections per species and per breed slug
- Filter, sort and match breed listings (search, facets, advanced properties)
- Normalize image paths for the site's static assets
"""

__version__ = "0.1.0"
__author__ = "Pet Wiki Team"

from pet_wiki.config import Settings, get_settings

__all__ = ["Settings", "get_settings", "__version__"]
