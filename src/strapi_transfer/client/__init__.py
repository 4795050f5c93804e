"""HTTP clients for the Strapi admin API."""

from .sync_client import SyncClient

__all__ = ["SyncClient"]
