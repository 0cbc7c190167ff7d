"""
Insurance Category Catalog

Hebrew-first business categories for insurance agency data. A column
belongs to every category whose pattern appears in its lower-cased name;
the first category in catalog order is its primary category.
"""

from typing import Optional

from schemas.catalog import (
    AggregationKind,
    Category,
    ChartType,
    DisplayFormat,
    MetricDefinition,
)


def _metric(
    metric_id: str,
    name: str,
    kind: AggregationKind,
    fmt: DisplayFormat = DisplayFormat.NUMBER,
) -> MetricDefinition:
    return MetricDefinition(id=metric_id, name=name, kind=kind, format=fmt)


# Declaration order is the tie-break for columns matching several categories
INSURANCE_CATEGORIES: tuple[Category, ...] = (
    Category(
        id="manufacturers",
        name="יצרנים",
        name_en="Manufacturers",
        icon="🏢",
        color="#3b82f6",
        description="חברות הביטוח והיצרנים",
        patterns=(
            "יצרן", "חברה", "חברת_ביטוח", "מבטח", "ספק", "גוף_מוסדי",
            "שם_יצרן", "יצרן_חדש", "יצרן_קודם", "company", "manufacturer", "insurer",
            "הפניקס", "מגדל", "הראל", "כלל", "מנורה", "איילון", "הכשרה",
            "אלטשולר", "מיטב", "אנליסט", "פסגות", "אקסלנס",
        ),
        chart_type=ChartType.PIE,
        metrics=(
            _metric("total_manufacturers", 'סה"כ יצרנים', AggregationKind.DISTINCT),
            _metric("records_per_manufacturer", "ממוצע רשומות ליצרן", AggregationKind.AVG),
        ),
    ),
    Category(
        id="financial",
        name="כספים",
        name_en="Financial",
        icon="💰",
        color="#10b981",
        description="סכומים, עמלות, פרמיות והכנסות",
        patterns=(
            "סכום", "עמלה", "פרמיה", "תשלום", "הכנסה", "הוצאה",
            'סה"כ', "סהכ", "נטו", "ברוטו", 'מע"מ', "עלות", "מחיר",
            "צבירה", "הפקדה", "יתרה", "חיסכון", "ערך", "שווי",
            "amount", "commission", "premium", "payment", "income",
            "סכום_נטו", "סכום_ברוטו", "עמלה_חודשית", "עמלה_שנתית",
            "פרמיה_חודשית", "פרמיה_שנתית", "דמי_ניהול",
        ),
        chart_type=ChartType.BAR,
        metrics=(
            _metric("total_amount", 'סה"כ סכום', AggregationKind.SUM, DisplayFormat.CURRENCY),
            _metric("avg_amount", "ממוצע לרשומה", AggregationKind.AVG, DisplayFormat.CURRENCY),
            _metric("total_commission", 'סה"כ עמלות', AggregationKind.SUM, DisplayFormat.CURRENCY),
        ),
    ),
    Category(
        id="processes",
        name="תהליכים",
        name_en="Processes",
        icon="📋",
        color="#8b5cf6",
        description="סטטוסים, שלבים ומצבי תהליך",
        # "פתיחה"/"סגירה" are left to the dates category ("תאריך_פתיחה")
        patterns=(
            "סטטוס", "מצב", "שלב", "סוג", "קטגוריה", "סיווג",
            "תהליך", "פעולה", "אירוע", "סוג_תהליך", "סוג_פעולה",
            "status", "state", "stage", "type", "category",
            "ניוד", "חידוש", "ביטול",
            "פעיל", "לא_פעיל", "ממתין", "בטיפול", "הושלם",
        ),
        chart_type=ChartType.FUNNEL,
        metrics=(
            _metric("status_count", "מספר סטטוסים", AggregationKind.DISTINCT),
            _metric("active_count", "תהליכים פעילים", AggregationKind.COUNT),
        ),
    ),
    Category(
        id="agents",
        name="סוכנים",
        name_en="Agents",
        icon="👤",
        color="#f59e0b",
        description="סוכנים, מטפלים ונציגים",
        patterns=(
            "סוכן", "מטפל", "נציג", "עובד", "יועץ", "משווק",
            "שם_סוכן", "סוכן_משנה", "סוכן_ראשי", "מנהל",
            "agent", "handler", "representative", "advisor",
            "איש_קשר", "אחראי", "מפקח", "מנהל_לקוח",
        ),
        chart_type=ChartType.LEADERBOARD,
        metrics=(
            _metric("total_agents", 'סה"כ סוכנים', AggregationKind.DISTINCT),
            _metric("records_per_agent", "ממוצע רשומות לסוכן", AggregationKind.AVG),
        ),
    ),
    Category(
        id="clients",
        name="לקוחות",
        name_en="Clients",
        icon="👥",
        color="#ec4899",
        description="לקוחות, מבוטחים ופרטי קשר",
        patterns=(
            "לקוח", "מבוטח", "בעל_פוליסה", "שם", "שם_פרטי", "שם_משפחה",
            "ת.ז", "תעודת_זהות", 'ת"ז', "מספר_זהות", "ח.פ", "עוסק",
            "client", "customer", "insured", "policyholder",
            "טלפון", "נייד", "מייל", "אימייל", "כתובת", "עיר",
            "phone", "mobile", "email", "address", "city",
        ),
        chart_type=ChartType.BAR,
        metrics=(
            _metric("total_clients", 'סה"כ לקוחות', AggregationKind.DISTINCT),
            _metric("new_clients", "לקוחות חדשים", AggregationKind.COUNT),
        ),
    ),
    Category(
        id="products",
        name="מוצרים",
        name_en="Products",
        icon="📦",
        color="#06b6d4",
        description="סוגי ביטוח, מוצרים ופוליסות",
        patterns=(
            "מוצר", "פוליסה", "ביטוח", "ענף", "תכנית", "מסלול",
            "סוג_ביטוח", "סוג_מוצר", "סוג_פוליסה", "שם_מוצר",
            "product", "policy", "insurance_type", "plan",
            "חיים", "בריאות", "רכב", "דירה", "עסק", "אלמנטרי",
            "פנסיה", "גמל", "השתלמות", "קרן", "ביטוח_מנהלים",
        ),
        chart_type=ChartType.PIE,
        metrics=(
            _metric("total_products", 'סה"כ מוצרים', AggregationKind.DISTINCT),
            _metric("products_per_client", "מוצרים ללקוח", AggregationKind.AVG),
        ),
    ),
    Category(
        id="dates",
        name="תאריכים",
        name_en="Dates",
        icon="📅",
        color="#6366f1",
        description="תאריכים, תקופות וזמנים",
        patterns=(
            "תאריך", "יום", "חודש", "שנה", "מועד", "זמן", "תקופה",
            "תאריך_פתיחה", "תאריך_סגירה", "תאריך_עדכון", "תאריך_יצירה",
            "תאריך_תחילה", "תאריך_סיום", "תאריך_חידוש",
            "date", "created_at", "updated_at", "start_date", "end_date",
            "תוקף", "תוקף_מ", "תוקף_עד", "תחילת_ביטוח", "סיום_ביטוח",
        ),
        chart_type=ChartType.TIMELINE,
        metrics=(
            _metric("date_range", "טווח תאריכים", AggregationKind.MIN),
            _metric("records_per_month", "ממוצע לחודש", AggregationKind.AVG),
        ),
    ),
    Category(
        id="identifiers",
        name="מזהים",
        name_en="Identifiers",
        icon="#️⃣",
        color="#64748b",
        description="מספרים מזהים, קודים והפניות",
        patterns=(
            "מספר", "מזהה", "קוד", "id", "מספר_תהליך", "מספר_פוליסה",
            "מספר_לקוח", "מספר_סוכן", "מספר_חשבון", "מספר_בקשה",
            "reference", "code", "number", "serial",
            "אסמכתא", "הפניה", "אישור", "מספר_אישור",
        ),
        chart_type=ChartType.BAR,
        metrics=(
            _metric("total_records", 'סה"כ רשומות', AggregationKind.COUNT),
        ),
    ),
)

_CATEGORIES_BY_ID: dict[str, Category] = {c.id: c for c in INSURANCE_CATEGORIES}


def get_category(category_id: str) -> Category:
    """
    Look up a category by id.

    Raises:
        KeyError: if the id is not in the catalog
    """
    return _CATEGORIES_BY_ID[category_id]


def find_category(category_id: str) -> Optional[Category]:
    """Look up a category by id, returning None when unknown."""
    return _CATEGORIES_BY_ID.get(category_id)


def _name_matches(lower_name: str, category: Category) -> bool:
    return any(pattern.lower() in lower_name for pattern in category.patterns)


def match_column_to_category(column_name: str) -> Optional[Category]:
    """
    Get the primary category of a column from its name alone.

    Args:
        column_name: Source column name

    Returns:
        First category in catalog order with a pattern contained in the
        lower-cased name, or None
    """
    lower_name = str(column_name).lower()
    for category in INSURANCE_CATEGORIES:
        if _name_matches(lower_name, category):
            return category
    return None


def get_matching_categories(column_name: str) -> list[Category]:
    """Get every category matching a column name, in catalog order."""
    lower_name = str(column_name).lower()
    return [c for c in INSURANCE_CATEGORIES if _name_matches(lower_name, c)]
