"""Operations built on top of the HTTP client."""

from .pagination import PageWalkResult, fetch_all_pages, iter_pages

__all__ = ["PageWalkResult", "fetch_all_pages", "iter_pages"]
