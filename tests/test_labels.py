#!/usr/bin/env python3
"""Tests for checklist catalog and label resolution."""

from fleet import ChecklistCatalog, ChecklistCategory, ChecklistField, format_key
from fleet.labels import catalog_from_list


class TestFormatKey:
    """Tests for format_key fallback rendering."""

    def test_underscores_become_spaces(self):
        assert format_key("brake_lights") == "Brake Lights"

    def test_single_word(self):
        assert format_key("tyre") == "Tyre"

    def test_repeated_underscores(self):
        assert format_key("ac__heater_") == "Ac Heater"


class TestChecklistCatalog:
    """Tests for ChecklistCatalog.resolve_label."""

    def test_known_key(self):
        catalog = ChecklistCatalog.default()
        assert catalog.resolve_label("brake_lights") == "Brake lights"
        assert catalog.resolve_label("horn") == "Horn"

    def test_strips_parenthetical_detail(self):
        catalog = ChecklistCatalog.default()
        assert catalog.resolve_label("tyres") == "Tyres"
        assert catalog.resolve_label("mirrors") == "Mirrors"
        assert catalog.resolve_label("body_condition") == "Body condition"

    def test_unknown_key_falls_back(self):
        catalog = ChecklistCatalog.default()
        assert catalog.resolve_label("wheel_nuts") == "Wheel Nuts"
        assert catalog.resolve_label("alignment") == "Alignment"

    def test_empty_catalog_always_falls_back(self):
        catalog = ChecklistCatalog()
        assert len(catalog) == 0
        assert catalog.resolve_label("brake_lights") == "Brake Lights"

    def test_first_definition_wins(self):
        catalog = ChecklistCatalog(
            [
                ChecklistCategory("a", "A", [ChecklistField("horn", "Horn (loud)")]),
                ChecklistCategory("b", "B", [ChecklistField("horn", "Klaxon")]),
            ]
        )
        assert catalog.resolve_label("horn") == "Horn"

    def test_contains(self):
        catalog = ChecklistCatalog.default()
        assert "steering" in catalog
        assert "flux_capacitor" not in catalog

    def test_default_catalog_size(self):
        assert len(ChecklistCatalog.default()) == 28


class TestCatalogFromList:
    """Tests for catalog_from_list."""

    def test_builds_categories(self):
        catalog = catalog_from_list(
            [
                {
                    "key": "cabin",
                    "label": "Cabin",
                    "fields": [{"key": "ac", "label": "Air con (cooling)"}],
                },
                {"key": "misc_checks", "fields": []},
            ]
        )
        assert catalog.resolve_label("ac") == "Air con"
        assert [c.label for c in catalog.categories] == ["Cabin", "Misc Checks"]
