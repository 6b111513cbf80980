"""API tests for the selection router."""

import hashlib
from pathlib import Path

import pytest
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId
from fastapi.testclient import TestClient

from api import app
from language_restrict.dependencies import get_current_user, init_services
from language_restrict.services.i18n.language_manager import LanguageManager
from language_restrict.services.user.account_proxy import AccountProxy

LOCALES_PATH = str(Path(__file__).resolve().parent.parent / "locales")


# ─────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────


@pytest.fixture
def fields_collection():
    collection = AsyncMock()
    collection.find_one.return_value = None
    return collection


@pytest.fixture
def nodes_collection(make_cursor):
    collection = AsyncMock()
    collection.find = MagicMock(return_value=make_cursor([]))
    return collection


@pytest.fixture
def users_collection():
    collection = AsyncMock()
    collection.find_one.return_value = None
    return collection


@pytest.fixture
def client(fields_collection, nodes_collection, users_collection):
    init_services(
        db={"referencefields": fields_collection, "nodes": nodes_collection, "users": users_collection},
        locales_path=LOCALES_PATH,
        supported_languages=["en", "sv", "fr"],
        default_language="en",
    )
    # No lifespan: the database connection is replaced by the mocks above
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def stored_field(fields_collection):
    def _store(handler, settings):
        fields_collection.find_one.return_value = {
            "fieldName": "field_related",
            "handler": handler,
            "handlerSettings": settings,
        }

    return _store


# ─────────────────────────────────────────────────────────────────
# Discovery
# ─────────────────────────────────────────────────────────────────


def test_list_entity_types(client):
    response = client.get("/api/v1/selection/entity-types")

    body = response.json()
    assert response.status_code == 200
    assert body["success"] is True
    assert {item["id"] for item in body["data"]} >= {"node", "taxonomy_term", "redirect"}


def test_list_languages(client):
    response = client.get("/api/v1/selection/languages")

    codes = [item["code"] for item in response.json()["data"]]
    assert codes == ["en", "sv", "fr", "und", "zxx"]


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["data"]["status"] == "ok"


# ─────────────────────────────────────────────────────────────────
# Field configuration
# ─────────────────────────────────────────────────────────────────


def test_get_field_not_found(client):
    response = client.get("/api/v1/selection/fields/field_missing")

    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "FIELD_NOT_FOUND"


def test_get_field(client, stored_field):
    stored_field("default", {"target_type": "node"})

    response = client.get("/api/v1/selection/fields/field_related")

    assert response.status_code == 200
    assert response.json()["data"] == {
        "fieldName": "field_related",
        "handler": "default",
        "handlerSettings": {"target_type": "node"},
    }


def test_save_field(client, fields_collection):
    response = client.put(
        "/api/v1/selection/fields/field_related",
        json={
            "handler": "entity_reference_language_restrict",
            "handlerSettings": {"target_type": "node", "language_restriction": "current_interface"},
        },
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["handlerSettings"]["language_restriction"] == "current_interface"
    assert data["handlerSettings"]["sort"] == {"field": "_none", "direction": "ASC"}
    fields_collection.update_one.assert_awaited_once()


def test_save_field_invalid_restriction(client, fields_collection):
    response = client.put(
        "/api/v1/selection/fields/field_related",
        json={
            "handler": "entity_reference_language_restrict",
            "handlerSettings": {"target_type": "node", "language_restriction": "it"},
        },
    )

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "INVALID_LANGUAGE_RESTRICTION"
    fields_collection.update_one.assert_not_called()


def test_save_field_requires_target_type(client):
    response = client.put(
        "/api/v1/selection/fields/field_related",
        json={"handler": "default", "handlerSettings": {}},
    )
    assert response.status_code == 422


def test_delete_field(client, fields_collection):
    fields_collection.delete_one.return_value = MagicMock(deleted_count=1)

    response = client.delete("/api/v1/selection/fields/field_related")

    assert response.status_code == 200
    assert response.json()["message"] == "Selection configuration deleted"


# ─────────────────────────────────────────────────────────────────
# Form, autocomplete and validation
# ─────────────────────────────────────────────────────────────────


def test_form_is_localized(client, stored_field):
    stored_field("entity_reference_language_restrict", {"target_type": "node", "language_restriction": "sv"})

    response = client.get(
        "/api/v1/selection/fields/field_related/form",
        headers={"Accept-Language": "sv"},
    )

    assert response.status_code == 200
    assert response.headers["Content-Language"] == "sv"
    element = response.json()["data"]["form"]["language_restriction"]
    assert element["title"] == "Begränsa tillgängliga objekt efter språk"
    assert element["defaultValue"] == "sv"
    assert element["options"]["site_default"] == "Webbplatsens standardspråk (English)"


def test_autocomplete_current_interface(client, stored_field, nodes_collection, make_cursor):
    node_id = ObjectId()
    nodes_collection.find.return_value = make_cursor([
        {"_id": node_id, "type": "article", "title": "Fika", "langcode": "sv"},
    ])
    stored_field("entity_reference_language_restrict", {"target_type": "node", "language_restriction": "current_interface"})

    response = client.get(
        "/api/v1/selection/fields/field_related/autocomplete",
        params={"q": "fi", "limit": 5},
        headers={"Accept-Language": "sv"},
    )

    assert response.status_code == 200
    assert response.json()["data"] == [{"id": str(node_id), "label": "Fika", "bundle": "article"}]
    nodes_collection.find.assert_called_once_with({
        "$and": [
            {"title": {"$regex": "fi", "$options": "i"}},
            {"langcode": "sv"},
        ]
    })


def test_autocomplete_authors_default_from_session(client, stored_field, nodes_collection, users_collection):
    stored_field("entity_reference_language_restrict", {"target_type": "node", "language_restriction": "authors_default"})
    token_hash = hashlib.sha256(b"session-token").hexdigest()
    users_collection.find_one.return_value = {
        "_id": ObjectId(),
        "profile": {"preferredLanguage": "fr"},
        "sessions": [{"tokenHash": token_hash}],
    }

    response = client.get(
        "/api/v1/selection/fields/field_related/autocomplete",
        headers={"Accept-Language": "sv", "Authorization": "Bearer session-token"},
    )

    assert response.status_code == 200
    nodes_collection.find.assert_called_once_with({"langcode": "fr"})
    session_filter = users_collection.find_one.call_args[0][0]
    assert session_filter["sessions"]["$elemMatch"]["tokenHash"] == token_hash
    users_collection.update_one.assert_awaited_once()


def test_autocomplete_authors_default_anonymous(client, stored_field, nodes_collection, users_collection):
    stored_field("entity_reference_language_restrict", {"target_type": "node", "language_restriction": "authors_default"})

    response = client.get(
        "/api/v1/selection/fields/field_related/autocomplete",
        headers={"Accept-Language": "sv"},
    )

    assert response.status_code == 200
    nodes_collection.find.assert_called_once_with({"langcode": "sv"})
    users_collection.find_one.assert_not_called()


def test_autocomplete_expired_session_is_anonymous(client, stored_field, nodes_collection, users_collection):
    stored_field("entity_reference_language_restrict", {"target_type": "node", "language_restriction": "authors_default"})

    response = client.get(
        "/api/v1/selection/fields/field_related/autocomplete",
        headers={"Accept-Language": "sv", "Authorization": "Bearer stale-token"},
    )

    assert response.status_code == 200
    nodes_collection.find.assert_called_once_with({"langcode": "sv"})
    users_collection.update_one.assert_not_called()


def test_autocomplete_current_user_override(client, stored_field, nodes_collection):
    stored_field("entity_reference_language_restrict", {"target_type": "node", "language_restriction": "authors_default"})
    author = {"_id": ObjectId(), "profile": {"preferredLanguage": "fr"}}
    app.dependency_overrides[get_current_user] = lambda: AccountProxy(
        author, LanguageManager(supported_languages=["en", "sv", "fr"])
    )

    response = client.get("/api/v1/selection/fields/field_related/autocomplete")

    assert response.status_code == 200
    nodes_collection.find.assert_called_once_with({"langcode": "fr"})


def test_autocomplete_invalid_operator(client, stored_field):
    stored_field("default", {"target_type": "node"})

    response = client.get(
        "/api/v1/selection/fields/field_related/autocomplete",
        params={"q": "x", "operator": "LIKE"},
    )

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "INVALID_QUERY_OPERATOR"


def test_validate_references(client, stored_field, nodes_collection, make_cursor):
    allowed, rejected = ObjectId(), ObjectId()
    nodes_collection.find.return_value = make_cursor([{"_id": allowed, "type": "page", "langcode": "en"}])
    stored_field("entity_reference_language_restrict", {"target_type": "node", "language_restriction": "en"})

    response = client.post(
        "/api/v1/selection/fields/field_related/validate",
        json={"ids": [str(rejected), str(allowed)]},
    )

    assert response.status_code == 200
    assert response.json()["data"] == {"valid": [str(allowed)], "invalid": [str(rejected)]}
