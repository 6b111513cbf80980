"""Unit tests for the language restriction policy."""

import pytest

from language_restrict.services.entity.entity_type_manager import EntityTypeDefinition
from language_restrict.services.entity.query import EntityQuery
from language_restrict.services.i18n.language_manager import Language
from language_restrict.services.selection.language_restriction import (
    AUTHORS_DEFAULT,
    CURRENT_INTERFACE,
    SITE_DEFAULT,
    ResolutionContext,
    apply_language_filter,
    list_restriction_options,
    resolve_language_code,
)


NODE = EntityTypeDefinition(
    id="node",
    collection="nodes",
    keys={"id": "_id", "bundle": "type", "label": "title", "langcode": "langcode"},
)


@pytest.fixture
def ctx():
    return ResolutionContext(
        current_interface_langcode="es",
        site_default_langcode="fr",
        preferred_langcode="",
    )


# ─────────────────────────────────────────────────────────────────
# resolve_language_code
# ─────────────────────────────────────────────────────────────────


class TestResolveLanguageCode:
    def test_empty_means_no_restriction(self, ctx):
        assert resolve_language_code("", ctx) == ""

    def test_none_means_no_restriction(self, ctx):
        assert resolve_language_code(None, ctx) == ""

    def test_site_default(self, ctx):
        assert resolve_language_code(SITE_DEFAULT, ctx) == "fr"

    def test_current_interface(self):
        ctx = ResolutionContext(current_interface_langcode="de", site_default_langcode="en")
        assert resolve_language_code(CURRENT_INTERFACE, ctx) == "de"

    def test_authors_default_uses_preference(self):
        ctx = ResolutionContext(
            current_interface_langcode="es",
            site_default_langcode="en",
            preferred_langcode="it",
        )
        assert resolve_language_code(AUTHORS_DEFAULT, ctx) == "it"

    def test_authors_default_falls_back_to_interface_not_site_default(self, ctx):
        assert resolve_language_code(AUTHORS_DEFAULT, ctx) == "es"

    @pytest.mark.parametrize("value", ["sv", "und", "zxx", "pt-br", "SITE_DEFAULT", " site_default", "bogus"])
    def test_other_values_pass_through(self, ctx, value):
        assert resolve_language_code(value, ctx) == value


# ─────────────────────────────────────────────────────────────────
# list_restriction_options
# ─────────────────────────────────────────────────────────────────


class TestListRestrictionOptions:
    def test_fixed_entries_first_then_languages_in_order(self):
        languages = [
            Language(code="sv", name="Swedish"),
            Language(code="en", name="English", is_default=True),
            Language(code="und", name="Not specified", locked=True),
            Language(code="zxx", name="Not applicable", locked=True),
        ]

        options = list_restriction_options(languages, "English")

        assert list(options.items()) == [
            ("", "No restrictions"),
            ("site_default", "Site's default language (English)"),
            ("current_interface", "Interface text language selected for page"),
            ("authors_default", "Author's preferred language"),
            ("sv", "Swedish"),
            ("en", "English"),
            ("und", "- Not specified -"),
            ("zxx", "- Not applicable -"),
        ]

    def test_uses_injected_localize(self):
        calls = []

        def localize(key, params):
            calls.append((key, params))
            return f"[{key}]"

        options = list_restriction_options([Language(code="de", name="German")], "German", localize)

        assert options["site_default"] == "[selection.language_restriction.site_default]"
        assert ("selection.language_restriction.site_default", {"language_name": "German"}) in calls
        # Unlocked language names are not localized
        assert options["de"] == "German"

    def test_no_languages(self):
        options = list_restriction_options([], "English")
        assert list(options.keys()) == ["", "site_default", "current_interface", "authors_default"]


# ─────────────────────────────────────────────────────────────────
# apply_language_filter
# ─────────────────────────────────────────────────────────────────


class TestApplyLanguageFilter:
    def _base_query(self):
        return EntityQuery(NODE).condition("type", ["article"], "IN")

    def test_no_language_key_leaves_query_unchanged(self):
        query = self._base_query()
        before = query.to_filter()

        result = apply_language_filter(query, None, "fr")

        assert result is query
        assert result.to_filter() == before

    def test_empty_langcode_leaves_query_unchanged(self):
        query = self._base_query()
        before = query.to_filter()

        result = apply_language_filter(query, "langcode", "")

        assert result.to_filter() == before

    def test_adds_equality_condition(self):
        query = self._base_query()

        result = apply_language_filter(query, "langcode", "fr")

        assert result.to_filter() == {
            "$and": [
                {"type": {"$in": ["article"]}},
                {"langcode": "fr"},
            ]
        }

    def test_applying_twice_is_idempotent(self):
        query = self._base_query()

        apply_language_filter(query, "langcode", "fr")
        once = query.to_filter()
        apply_language_filter(query, "langcode", "fr")

        assert query.to_filter() == once
        assert len(query.conditions) == 2
