"""Retrieval of passage lookup pages."""

from bg2md.fetch.client import build_lookup_url, fetch_page, load_page

__all__ = ["build_lookup_url", "fetch_page", "load_page"]
