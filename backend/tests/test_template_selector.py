"""
Test Template Selector

Unit tests for dashboard template scoring and fallback.
"""

import pytest

from analysis.template_selector import TemplateSelector, select_template
from catalog.templates import get_template
from schemas.catalog import DashboardTemplate, LayoutItem, LayoutItemType


@pytest.fixture
def selector():
    return TemplateSelector()


class TestTemplateSelector:
    def test_full_match_selected(self, selector):
        template = selector.select(["financial", "manufacturers", "agents"])

        assert template.id == "commission_report"

    def test_empty_detection_returns_generic(self, selector):
        assert selector.select([]).id == "general"

    def test_unknown_categories_return_generic(self, selector):
        assert selector.select(["nothing", "here"]).id == "general"

    def test_partial_match(self, selector):
        assert selector.select(["processes", "dates"]).id == "process_tracking"

    def test_first_template_wins_ties(self, selector):
        """financial alone scores 1/3 for both commission and client templates."""
        assert selector.select(["financial"]).id == "commission_report"

    def test_higher_score_beats_earlier_template(self, selector):
        template = selector.select(["clients", "products", "financial"])

        assert template.id == "client_overview"

    def test_match_score(self):
        template = get_template("process_tracking")

        assert TemplateSelector.match_score(template, {"processes", "agents"}) == pytest.approx(2 / 3)
        assert TemplateSelector.match_score(get_template("general"), {"processes"}) == 0.0

    def test_custom_templates(self):
        custom = DashboardTemplate(
            id="agents_only",
            name="Agents",
            description="",
            required_categories=("agents",),
            layout=(LayoutItem(type=LayoutItemType.TABLE, span=4),),
        )
        selector = TemplateSelector(templates=[custom])

        assert selector.select(["agents"]).id == "agents_only"
        assert selector.select(["dates"]).id == "general"

    def test_accepts_any_iterable(self):
        detected = (c for c in ["financial", "manufacturers", "agents"])

        assert select_template(detected).id == "commission_report"
