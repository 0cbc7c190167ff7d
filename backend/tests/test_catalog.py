"""
Test Catalogs

Unit tests for category matching, value pattern tables and templates.
"""

import pytest

from catalog.categories import (
    INSURANCE_CATEGORIES,
    find_category,
    get_category,
    get_matching_categories,
    match_column_to_category,
)
from catalog.templates import (
    DASHBOARD_TEMPLATES,
    GENERIC_TEMPLATE_ID,
    get_generic_template,
    get_template,
)
from catalog.value_patterns import (
    detect_product_type,
    get_status_hex_color,
    get_status_pattern_color,
)


class TestCategoryCatalog:
    def test_catalog_ids_are_unique(self):
        ids = [c.id for c in INSURANCE_CATEGORIES]
        assert len(ids) == len(set(ids))
        assert ids[0] == "manufacturers"
        assert "identifiers" in ids

    def test_every_category_declares_metrics(self):
        for category in INSURANCE_CATEGORIES:
            assert category.metrics
            assert category.patterns

    def test_single_category_match(self):
        """A column matching one category gets it as primary."""
        category = match_column_to_category("יצרן")

        assert category is not None
        assert category.id == "manufacturers"
        assert [c.id for c in get_matching_categories("יצרן")] == ["manufacturers"]

    def test_no_match(self):
        assert match_column_to_category("xyz") is None
        assert get_matching_categories("xyz") == []

    def test_case_insensitive_match(self):
        assert match_column_to_category("Total_AMOUNT").id == "financial"

    def test_multiple_matches_keep_catalog_order(self):
        """Commission date matches financial and dates; financial is declared first."""
        matches = get_matching_categories("תאריך_עמלה")

        assert [c.id for c in matches] == ["financial", "dates"]
        assert match_column_to_category("תאריך_עמלה").id == "financial"

    def test_primary_ignores_pattern_specificity(self):
        """'status' (processes) wins over 'date' because processes comes first."""
        assert [c.id for c in get_matching_categories("status_date")] == ["processes", "dates"]
        assert match_column_to_category("status_date").id == "processes"

    def test_opening_date_is_a_date(self):
        assert match_column_to_category("תאריך_פתיחה").id == "dates"

    def test_lookup(self):
        assert get_category("agents").name_en == "Agents"
        assert find_category("missing") is None
        with pytest.raises(KeyError):
            get_category("missing")


class TestValuePatterns:
    @pytest.mark.parametrize("value,color", [
        ("פעיל", "green"),
        ("Approved", "green"),
        ("נדחה", "red"),
        ("ממתין", "yellow"),
        ("חדש", "blue"),
        ("xyz", "gray"),
    ])
    def test_status_colors(self, value, color):
        assert get_status_pattern_color(value) == color

    def test_positive_checked_first(self):
        """'לא_פעיל' contains 'פעיל', so the positive bucket wins."""
        assert get_status_pattern_color("לא_פעיל") == "green"

    def test_hex_colors(self):
        assert get_status_hex_color("active") == "#10b981"
        assert get_status_hex_color("failed") == "#ef4444"
        assert get_status_hex_color("unknown thing") is None

    def test_product_types(self):
        assert detect_product_type("ביטוח חיים") == "life"
        assert detect_product_type("Car insurance") == "elementary"
        assert detect_product_type("פנסיה מקיפה") == "pension"
        assert detect_product_type("xyz") is None


class TestTemplateCatalog:
    def test_generic_template(self):
        template = get_generic_template()

        assert template.id == GENERIC_TEMPLATE_ID
        assert template.required_categories == ()
        assert template.is_generic

    def test_template_lookup(self):
        assert get_template("commission_report").required_categories == (
            "financial", "manufacturers", "agents",
        )
        with pytest.raises(KeyError):
            get_template("missing")

    def test_layouts_fit_grid(self):
        for template in DASHBOARD_TEMPLATES:
            assert template.layout
            assert all(1 <= item.span <= 4 for item in template.layout)

    def test_required_categories_exist(self):
        for template in DASHBOARD_TEMPLATES:
            for category_id in template.required_categories:
                assert find_category(category_id) is not None
