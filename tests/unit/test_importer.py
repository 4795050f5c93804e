"""Tests for snapshot replay."""

import json
from typing import Any

import httpx
import pytest
import respx

from strapi_transfer import StrapiConfig, SyncClient
from strapi_transfer.exceptions import (
    ConnectionError as StrapiConnectionError,
)
from strapi_transfer.exceptions import (
    MethodNotAllowedError,
    ServerError,
    ValidationError,
)
from strapi_transfer.export.importer import StrapiImporter, plan_import
from strapi_transfer.export.protection import ProtectionGuard
from strapi_transfer.models.import_options import ImportOptions
from strapi_transfer.models.snapshot import Snapshot

BASE_URL = "http://localhost:1337"
ARTICLES_URL = f"{BASE_URL}/content-manager/collection-types/articles"


class RecordingClient:
    """Stand-in client that records writes and replays scripted outcomes.

    ``outcomes`` maps a UID to a list of exceptions (or None for success),
    consumed one per request.
    """

    def __init__(self, outcomes: dict[str, list[Exception | None]] | None = None) -> None:
        self.outcomes = outcomes or {}
        self.calls: list[tuple[str, str, dict[str, Any]]] = []

    def _respond(self, method: str, uid: str, data: dict[str, Any]) -> dict[str, Any]:
        self.calls.append((method, uid, data))
        scripted = self.outcomes.get(uid)
        if scripted:
            outcome = scripted.pop(0)
            if outcome is not None:
                raise outcome
        return {"id": len(self.calls), **data}

    def create_entry(self, uid: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._respond("POST", uid, data)

    def update_single(self, uid: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._respond("PUT", uid, data)


def method_not_allowed() -> MethodNotAllowedError:
    return MethodNotAllowedError("Method not allowed", status_code=405)


def server_error() -> ServerError:
    return ServerError("Server error", status_code=500, body="boom")


def make_snapshot(
    collections: dict[str, list[dict]] | None = None,
    singles: dict[str, dict | None] | None = None,
) -> Snapshot:
    return Snapshot.model_validate(
        {
            "collection-types": {
                uid: {"kind": "collectionType", "data": entries}
                for uid, entries in (collections or {}).items()
            },
            "single-types": {
                uid: {"kind": "singleType", "data": data}
                for uid, data in (singles or {}).items()
            },
        }
    )


def unprotected() -> ImportOptions:
    return ImportOptions(include_protected=True)


# End to end


@respx.mock
def test_end_to_end_two_articles(strapi_config: StrapiConfig) -> None:
    """Identifiers and timestamps are stripped and both entries created."""
    route = respx.post(ARTICLES_URL).mock(return_value=httpx.Response(200, json={"id": 99}))
    snapshot = Snapshot.model_validate(
        {
            "collection-types": {
                "articles": {
                    "data": [
                        {"id": 1, "title": "A", "createdAt": "t"},
                        {"id": 2, "title": "B"},
                    ]
                }
            }
        }
    )

    with SyncClient(strapi_config) as client:
        result = StrapiImporter(client).import_snapshot(snapshot)

    assert route.call_count == 2
    bodies = [json.loads(call.request.content) for call in route.calls]
    assert bodies == [{"title": "A"}, {"title": "B"}]
    assert (result.items, result.created, result.skipped, result.failed) == (2, 2, 0, 0)
    assert result.success


@respx.mock
def test_end_to_end_single_type_put(strapi_config: StrapiConfig) -> None:
    """Single types are upserted with PUT."""
    route = respx.put(f"{BASE_URL}/content-manager/single-types/api%3A%3Ahomepage.homepage").mock(
        return_value=httpx.Response(200, json={"id": 1})
    )
    snapshot = make_snapshot(singles={"api::homepage.homepage": {"id": 1, "headline": "Hi"}})

    with SyncClient(strapi_config) as client:
        result = StrapiImporter(client, unprotected()).import_snapshot(snapshot)

    assert route.call_count == 1
    assert json.loads(route.calls[0].request.content) == {"headline": "Hi"}
    assert result.created == 1


@respx.mock
def test_end_to_end_405_detected(strapi_config: StrapiConfig) -> None:
    """A real 405 response short-circuits the model."""
    route = respx.post(ARTICLES_URL).mock(
        return_value=httpx.Response(405, text="Method Not Allowed")
    )
    snapshot = make_snapshot(collections={"articles": [{"title": "A"}, {"title": "B"}]})

    with SyncClient(strapi_config) as client:
        result = StrapiImporter(client).import_snapshot(snapshot)

    assert route.call_count == 1
    assert result.skipped == 2
    assert result.failed == 0
    assert result.protected_detected == ["articles"]


@respx.mock
def test_end_to_end_validation_error_recorded(strapi_config: StrapiConfig) -> None:
    """A 400 response is recorded with its body and the run continues."""
    respx.post(ARTICLES_URL).mock(
        side_effect=[
            httpx.Response(400, json={"error": {"message": "title must be unique"}}),
            httpx.Response(200, json={"id": 2}),
        ]
    )
    snapshot = make_snapshot(collections={"articles": [{"title": "A"}, {"title": "A"}]})

    with SyncClient(strapi_config) as client:
        result = StrapiImporter(client).import_snapshot(snapshot)

    assert result.failed == 1
    assert result.created == 1
    failure = result.failures[0]
    assert failure.uid == "articles"
    assert failure.index == 0
    assert failure.status_code == 400
    assert failure.body == {"error": {"message": "title must be unique"}}


@respx.mock
def test_end_to_end_undecodable_response_recorded(strapi_config: StrapiConfig) -> None:
    """A response body that cannot be decoded fails one entry, not the run."""
    route = respx.post(ARTICLES_URL).mock(
        side_effect=[
            httpx.Response(
                200,
                headers={"Content-Encoding": "gzip"},
                stream=httpx.ByteStream(b"not gzip"),
            ),
            httpx.Response(200, json={"id": 2}),
        ]
    )
    snapshot = make_snapshot(collections={"articles": [{"title": "A"}, {"title": "B"}]})

    with SyncClient(strapi_config) as client:
        result = StrapiImporter(client).import_snapshot(snapshot)

    assert route.call_count == 2
    assert (result.items, result.created, result.failed) == (2, 1, 1)
    assert result.failures[0].index == 0
    assert result.failures[0].status_code is None


# Executor behaviour


def test_creates_entries_in_stored_order() -> None:
    """Entries of a model are submitted in snapshot order."""
    client = RecordingClient()
    snapshot = make_snapshot(collections={"a": [{"n": 1}, {"n": 2}, {"n": 3}]})

    StrapiImporter(client, unprotected()).import_snapshot(snapshot)  # type: ignore[arg-type]

    assert [data["n"] for _, _, data in client.calls] == [1, 2, 3]


def test_models_processed_in_manual_order() -> None:
    """Manual order puts listed models first, across both groups."""
    client = RecordingClient()
    snapshot = make_snapshot(
        collections={"b": [{"x": 1}], "a": [{"x": 1}], "c": [{"x": 1}]},
        singles={"s": {"x": 1}},
    )
    options = ImportOptions(include_protected=True, order="s,c")

    StrapiImporter(client, options).import_snapshot(snapshot)  # type: ignore[arg-type]

    assert [uid for _, uid, _ in client.calls] == ["s", "c", "a", "b"]
    assert client.calls[0][0] == "PUT"


def test_protected_model_skipped_without_requests() -> None:
    """Statically protected models issue no requests and count as skipped."""
    client = RecordingClient()
    snapshot = make_snapshot(
        collections={"api::header.header": [{"x": 1}, {"x": 2}, {"x": 3}]},
        singles={"api::global.global": {"x": 1}},
    )

    result = StrapiImporter(client).import_snapshot(snapshot)  # type: ignore[arg-type]

    assert client.calls == []
    assert result.skipped == 4
    assert result.items == 0


def test_protected_empty_collection_counts_one() -> None:
    """A protected collection without entries still counts one skip."""
    client = RecordingClient()
    snapshot = make_snapshot(collections={"locked": []})
    options = ImportOptions(include_protected=True, protected_uids="locked")

    result = StrapiImporter(client, options).import_snapshot(snapshot)  # type: ignore[arg-type]

    assert result.skipped == 1


def test_empty_model_skipped_not_failed() -> None:
    """A model with zero entries issues no request and is skipped."""
    client = RecordingClient()
    snapshot = make_snapshot(collections={"empty": []}, singles={"blank": None})

    result = StrapiImporter(client, unprotected()).import_snapshot(snapshot)  # type: ignore[arg-type]

    assert client.calls == []
    assert result.skipped == 2
    assert result.failed == 0
    assert result.success


def test_405_on_first_write_short_circuits_model() -> None:
    """First write 405: one request, model marked, every entry skipped."""
    client = RecordingClient({"locked": [method_not_allowed()]})
    guard = ProtectionGuard(include_protected=True)
    snapshot = make_snapshot(
        collections={"locked": [{"n": 1}, {"n": 2}, {"n": 3}], "open": [{"n": 1}]}
    )

    result = StrapiImporter(client, unprotected(), guard=guard).import_snapshot(  # type: ignore[arg-type]
        snapshot
    )

    assert [uid for _, uid, _ in client.calls] == ["locked", "open"]
    assert guard.is_protected("locked")
    assert result.skipped == 3
    assert result.created == 1
    assert result.failed == 0
    assert result.items == 2


def test_405_mid_model_counts_remaining() -> None:
    """405 after some successes skips the attempted and remaining entries."""
    client = RecordingClient({"m": [None, method_not_allowed()]})
    snapshot = make_snapshot(collections={"m": [{"n": i} for i in range(5)]})

    result = StrapiImporter(client, unprotected()).import_snapshot(snapshot)  # type: ignore[arg-type]

    assert len(client.calls) == 2
    assert result.created == 1
    assert result.skipped == 4
    assert result.items == 2


def test_405_on_single_type() -> None:
    """405 on a single type is a skip, not a failure."""
    client = RecordingClient({"s": [method_not_allowed()]})
    snapshot = make_snapshot(singles={"s": {"x": 1}})

    result = StrapiImporter(client, unprotected()).import_snapshot(snapshot)  # type: ignore[arg-type]

    assert result.skipped == 1
    assert result.failed == 0
    assert result.protected_detected == ["s"]


def test_detected_protection_applies_to_other_group() -> None:
    """A UID detected in one group is skipped when seen again in the other."""
    client = RecordingClient({"dup": [method_not_allowed()]})
    snapshot = make_snapshot(collections={"dup": [{"n": 1}]}, singles={"dup": {"n": 2}})

    result = StrapiImporter(client, unprotected()).import_snapshot(snapshot)  # type: ignore[arg-type]

    assert len(client.calls) == 1
    assert result.skipped == 2


def test_generic_error_isolated_per_entry() -> None:
    """A failing entry does not stop its siblings or other models."""
    client = RecordingClient({"m": [None, server_error(), None]})
    snapshot = make_snapshot(
        collections={"m": [{"n": 1}, {"n": 2}, {"n": 3}], "z": [{"n": 1}]}
    )

    result = StrapiImporter(client, unprotected()).import_snapshot(snapshot)  # type: ignore[arg-type]

    assert len(client.calls) == 4
    assert (result.items, result.created, result.skipped, result.failed) == (4, 3, 0, 1)
    assert not result.success
    assert result.failures[0].index == 1
    assert result.failures[0].body == "boom"


def test_transport_failure_counts_as_failed() -> None:
    """Connection errors are per-entry failures."""
    client = RecordingClient({"m": [StrapiConnectionError("refused")]})
    snapshot = make_snapshot(collections={"m": [{"n": 1}]})

    result = StrapiImporter(client, unprotected()).import_snapshot(snapshot)  # type: ignore[arg-type]

    assert result.failed == 1
    assert result.failures[0].status_code is None


def test_single_type_failure() -> None:
    """Single type errors increment failed."""
    client = RecordingClient({"s": [ValidationError("bad", status_code=400)]})
    snapshot = make_snapshot(singles={"s": {"x": 1}})

    result = StrapiImporter(client, unprotected()).import_snapshot(snapshot)  # type: ignore[arg-type]

    assert result.failed == 1
    assert result.items == 1
    assert result.failures[0].index is None


def test_payload_is_sanitized() -> None:
    """Submitted bodies have immutable fields removed at every depth."""
    client = RecordingClient()
    snapshot = make_snapshot(
        collections={"m": [{"id": 1, "documentId": "d", "t": "x", "c": {"id": 2, "v": 1}}]}
    )

    StrapiImporter(client, unprotected()).import_snapshot(snapshot)  # type: ignore[arg-type]

    assert client.calls[0][2] == {"t": "x", "c": {"v": 1}}


def test_dry_run_sends_nothing() -> None:
    """Dry run counts would-be writes without calling the client."""
    client = RecordingClient()
    snapshot = make_snapshot(collections={"m": [{"n": 1}, {"n": 2}]}, singles={"s": {"x": 1}})
    options = ImportOptions(include_protected=True, dry_run=True)

    result = StrapiImporter(client, options).import_snapshot(snapshot)  # type: ignore[arg-type]

    assert client.calls == []
    assert result.created == 3
    assert result.dry_run


@pytest.mark.parametrize(
    ("order", "expected"),
    [
        ([], [("a", "collection-types"), ("b", "single-types"), ("c", "collection-types")]),
        (["c", "b"], [("c", "collection-types"), ("b", "single-types"), ("a", "collection-types")]),
    ],
)
def test_plan_import(order: list[str], expected: list[tuple[str, str]]) -> None:
    """Plan orders both groups together."""
    snapshot = make_snapshot(collections={"c": [], "a": []}, singles={"b": None})

    plan = plan_import(snapshot, order)

    assert [(uid, group) for uid, group, _ in plan] == expected


def test_plan_import_same_uid_in_both_groups() -> None:
    """A UID in both groups is planned collection group first."""
    snapshot = make_snapshot(collections={"x": []}, singles={"x": None})

    plan = plan_import(snapshot)

    assert [group for _, group, _ in plan] == ["collection-types", "single-types"]
