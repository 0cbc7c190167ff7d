"""
Dashboard Template Catalog

Static dashboard layouts, each keyed by the categories it needs.
"""

from schemas.catalog import DashboardTemplate, LayoutItem, LayoutItemType


GENERIC_TEMPLATE_ID = "general"


def _cards(*categories) -> tuple[LayoutItem, ...]:
    return tuple(
        LayoutItem(type=LayoutItemType.CARD, category=category, span=1)
        for category in categories
    )


def _charts(*categories) -> tuple[LayoutItem, ...]:
    return tuple(
        LayoutItem(type=LayoutItemType.CHART, category=category, span=2, height="md")
        for category in categories
    )


_FOOTER: tuple[LayoutItem, ...] = (
    LayoutItem(type=LayoutItemType.FILTER, span=4),
    LayoutItem(type=LayoutItemType.TABLE, span=4, height="lg"),
)


DASHBOARD_TEMPLATES: tuple[DashboardTemplate, ...] = (
    DashboardTemplate(
        id="commission_report",
        name="דוח עמלות",
        description="מעקב אחר עמלות, יצרנים וסוכנים",
        required_categories=("financial", "manufacturers", "agents"),
        layout=(
            _cards("financial", "manufacturers", "agents", "processes")
            + _charts("manufacturers", "financial")
            + _FOOTER
        ),
    ),
    DashboardTemplate(
        id="process_tracking",
        name="מעקב תהליכים",
        description="מעקב אחר סטטוסים ותהליכים",
        required_categories=("processes", "dates", "agents"),
        layout=(
            _cards("processes", "dates", "agents", "identifiers")
            + _charts("processes", "dates")
            + _FOOTER
        ),
    ),
    DashboardTemplate(
        id="client_overview",
        name="סקירת לקוחות",
        description="מבט על לקוחות ומוצרים",
        required_categories=("clients", "products", "financial"),
        layout=(
            _cards("clients", "products", "financial", "processes")
            + _charts("products", "clients")
            + _FOOTER
        ),
    ),
    DashboardTemplate(
        id=GENERIC_TEMPLATE_ID,
        name="דשבורד כללי",
        description="סקירה כללית של כל הנתונים",
        required_categories=(),
        layout=_cards(None, None, None, None) + _charts(None, None) + _FOOTER,
    ),
)

_TEMPLATES_BY_ID: dict[str, DashboardTemplate] = {t.id: t for t in DASHBOARD_TEMPLATES}


def get_template(template_id: str) -> DashboardTemplate:
    """
    Look up a template by id.

    Raises:
        KeyError: if the id is not in the catalog
    """
    return _TEMPLATES_BY_ID[template_id]


def get_generic_template() -> DashboardTemplate:
    """The fallback template used when no specific template fits."""
    return _TEMPLATES_BY_ID[GENERIC_TEMPLATE_ID]
