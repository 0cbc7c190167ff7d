"""
Value Pattern Tables

Substring vocabularies mapping free-text cell values to status buckets
(for chart colouring) and to insurance product families.
"""

from typing import Optional


STATUS_PATTERNS: dict[str, tuple[str, ...]] = {
    "positive": (
        "פעיל", "הושלם", "אושר", "הצלחה", "תקין", "מאושר", "סגור",
        "active", "completed", "approved", "success",
        "משולם", "בוצע", "הופק", "נקלט",
    ),
    "negative": (
        "רג'קט", "ביטול", "נכשל", "נדחה", "מבוטל", "לא_פעיל",
        "rejected", "cancelled", "failed", "declined",
        "חסום", "שגיאה", "בעיה", "נמחק",
    ),
    "warning": (
        "ממתין", "בתהליך", "בטיפול", "בבדיקה", "בהמתנה", "עיכוב",
        "pending", "processing", "in_progress", "waiting",
        "דחוי", "מושהה", "לטיפול",
    ),
    "info": (
        "חדש", "טיוטה", "התחלה", "ראשוני", "פתוח",
        "new", "draft", "initial", "open",
        "נפתח", "נוצר", "התקבל",
    ),
}

# Bucket -> colour name, checked in this order
STATUS_COLORS: dict[str, str] = {
    "positive": "green",
    "negative": "red",
    "warning": "yellow",
    "info": "blue",
}

NEUTRAL_COLOR = "gray"

# Colour name -> hex used for chart data; gray means "no override"
COLOR_HEX: dict[str, Optional[str]] = {
    "green": "#10b981",
    "red": "#ef4444",
    "yellow": "#f59e0b",
    "blue": "#3b82f6",
    NEUTRAL_COLOR: None,
}

PRODUCT_PATTERNS: dict[str, tuple[str, ...]] = {
    "life": ("חיים", "ריסק", "מוות", "life", "risk"),
    "health": ("בריאות", "רפואי", "תרופות", "health", "medical"),
    "pension": ("פנסיה", "גמל", "השתלמות", "pension", "provident"),
    "elementary": ("רכב", "דירה", "עסק", "אלמנטרי", "רכוש", "car", "home", "property"),
    "managers": ("מנהלים", "ביטוח_מנהלים", "managers"),
    "travel": ("נסיעות", 'חו"ל', "travel"),
}


def _first_match(value: str, table: dict[str, tuple[str, ...]]) -> Optional[str]:
    lower_value = str(value).lower()
    for bucket, patterns in table.items():
        if any(pattern.lower() in lower_value for pattern in patterns):
            return bucket
    return None


def get_status_bucket(value: str) -> Optional[str]:
    """Get the status bucket (positive/negative/warning/info) of a value."""
    return _first_match(value, STATUS_PATTERNS)


def get_status_pattern_color(value: str) -> str:
    """
    Map a status value to a colour name.

    Returns:
        'green', 'red', 'yellow', 'blue', or 'gray' when no pattern matches
    """
    bucket = get_status_bucket(value)
    if bucket is None:
        return NEUTRAL_COLOR
    return STATUS_COLORS[bucket]


def get_status_hex_color(value: str) -> Optional[str]:
    """Hex colour for a status value, or None when it has no override."""
    return COLOR_HEX[get_status_pattern_color(value)]


def detect_product_type(value: str) -> Optional[str]:
    """Detect the insurance product family of a value, if any."""
    return _first_match(value, PRODUCT_PATTERNS)
