"""
Template Selector

Picks the dashboard template whose required categories are best covered
by the detected categories.
"""

from typing import Iterable, Optional, Sequence

from catalog.templates import DASHBOARD_TEMPLATES, get_generic_template
from schemas.catalog import DashboardTemplate


class TemplateSelector:
    """Scores templates by required-category coverage."""

    def __init__(self, templates: Optional[Sequence[DashboardTemplate]] = None):
        self.templates = tuple(templates) if templates is not None else DASHBOARD_TEMPLATES

    @staticmethod
    def match_score(template: DashboardTemplate, detected: set[str]) -> float:
        """Fraction of the template's required categories that were detected."""
        if not template.required_categories:
            return 0.0
        matched = sum(1 for cat in template.required_categories if cat in detected)
        return matched / len(template.required_categories)

    def select(self, detected_category_ids: Iterable[str]) -> DashboardTemplate:
        """
        Select the best-scoring template.

        The first template reaching the highest score wins ties. Falls back
        to the generic template when nothing scores above zero.
        """
        detected = set(detected_category_ids)
        best_template = get_generic_template()
        best_score = 0.0

        for template in self.templates:
            if not template.required_categories:
                continue
            score = self.match_score(template, detected)
            if score > best_score:
                best_score = score
                best_template = template

        return best_template


# Global selector instance
template_selector = TemplateSelector()


def select_template(detected_category_ids: Iterable[str]) -> DashboardTemplate:
    """Select a template from the static catalog."""
    return template_selector.select(detected_category_ids)
