"""Pytest configuration and shared fixtures."""

import os

import pytest

from strapi_transfer import StrapiConfig

BASE_URL = "http://localhost:1337"
ARTICLE_UID = "api::article.article"
AUTHOR_UID = "api::author.author"
HOMEPAGE_UID = "api::homepage.homepage"

# Field names double as settings aliases
UNPREFIXED_SETTINGS = {"BASE_URL", "API_TOKEN", "FILE", "ORDER", "OUTPUT"}


@pytest.fixture(autouse=True)
def clean_strapi_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep settings variables from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.upper().startswith("STRAPI_") or key.upper() in UNPREFIXED_SETTINGS:
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def strapi_config() -> StrapiConfig:
    """Create a test Strapi configuration.

    Returns:
        Test configuration with mock values
    """
    return StrapiConfig(
        base_url=BASE_URL,
        api_token="test-token-12345678",
    )


@pytest.fixture
def snapshot_dict() -> dict:
    """A snapshot as written by the exporter.

    Returns:
        Snapshot with two collection types and one single type
    """
    return {
        "meta": {
            "exportedAt": "2024-01-01T00:00:00.000Z",
            "source": "https://cms.example.com",
            "formatVersion": 1,
            "pageSize": 250,
        },
        "collection-types": {
            ARTICLE_UID: {
                "kind": "collectionType",
                "meta": {
                    "count": 2,
                    "pagination": {"page": 1, "pageSize": 250, "pageCount": 1, "total": 2},
                    "fetchedAt": "2024-01-01T00:00:01.000Z",
                },
                "data": [
                    {
                        "id": 1,
                        "documentId": "doc1",
                        "title": "First",
                        "createdAt": "2024-01-01T00:00:00.000Z",
                        "seo": {"id": 10, "metaTitle": "First"},
                    },
                    {"id": 2, "documentId": "doc2", "title": "Second"},
                ],
                "results": [
                    {
                        "id": 1,
                        "documentId": "doc1",
                        "title": "First",
                        "createdAt": "2024-01-01T00:00:00.000Z",
                        "seo": {"id": 10, "metaTitle": "First"},
                    },
                    {"id": 2, "documentId": "doc2", "title": "Second"},
                ],
            },
            AUTHOR_UID: {
                "kind": "collectionType",
                "meta": {"count": 1, "pagination": None, "fetchedAt": None},
                "data": [{"id": 5, "name": "Ada"}],
            },
        },
        "single-types": {
            HOMEPAGE_UID: {
                "kind": "singleType",
                "meta": {"fetchedAt": "2024-01-01T00:00:02.000Z"},
                "data": {"id": 1, "headline": "Welcome", "updatedAt": "2024-01-01"},
            },
        },
    }
