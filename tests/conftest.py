"""Shared test fixtures for the selection service tests."""

import pytest
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId

from language_restrict.services.entity.entity_type_manager import EntityTypeManager
from language_restrict.services.i18n.language_manager import LanguageManager
from language_restrict.services.user.account_proxy import AccountProxy


def _make_cursor(documents):
    """Motor-like cursor whose chain methods return itself."""
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.skip.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.to_list = AsyncMock(return_value=documents)
    return cursor


@pytest.fixture
def mock_collection():
    collection = AsyncMock()
    # Motor's find() returns a cursor synchronously (not a coroutine),
    # so use MagicMock for it. Async methods like find_one, update_one,
    # count_documents etc. stay as AsyncMock.
    collection.find = MagicMock(return_value=_make_cursor([]))
    return collection


@pytest.fixture
def mock_db(mock_collection):
    db = MagicMock()
    db.__getitem__ = MagicMock(return_value=mock_collection)
    return db


@pytest.fixture
def language_manager():
    return LanguageManager(supported_languages=["en", "sv", "fr", "de", "es", "it"])


@pytest.fixture
def entity_type_manager():
    return EntityTypeManager()


@pytest.fixture
def anonymous_user(language_manager):
    return AccountProxy(None, language_manager)


@pytest.fixture
def italian_author(language_manager):
    return AccountProxy(
        {"_id": ObjectId(), "profile": {"preferredLanguage": "it"}},
        language_manager,
    )


@pytest.fixture
def sample_nodes():
    return [
        {"_id": ObjectId(), "type": "article", "title": "Fika & friends", "langcode": "sv"},
        {"_id": ObjectId(), "type": "article", "title": "Weekly news", "langcode": "en"},
        {"_id": ObjectId(), "type": "page", "title": "About us", "langcode": "en"},
    ]


@pytest.fixture
def make_cursor():
    return _make_cursor
