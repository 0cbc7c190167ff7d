"""
Cell Value Parsing

Helpers turning heterogeneous cell values (strings, numbers, booleans,
dates, None) into strings and numbers. Vectorised parts run on Polars
Utf8 series; unparseable cells become nulls rather than raising.
"""

import math
from datetime import date, datetime
from typing import Any, Iterable

import polars as pl


# Characters dropped before reading a number: thousands separators,
# currency symbols, percent signs and whitespace
NUMBER_STRIP_PATTERN = r"[,₪$€%\s]"

# Longest numeric prefix, the way a lenient float reader consumes "12.5abc"
NUMBER_PREFIX_PATTERN = r"^\+?(-?(?:[0-9]+(?:\.[0-9]+)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)"

ISO_DATE_PATTERN = r"^[0-9]{4}-[0-9]{2}-[0-9]{2}"
DELIMITED_DATE_PATTERN = r"^[0-9]{1,2}[/.\-][0-9]{1,2}[/.\-][0-9]{2,4}$"
# A bare four-digit year such as "2023"
YEAR_PATTERN = r"^([0-9]{4})$"

# Free-form layouts tried for values the patterns above miss
DATE_FORMATS = [
    "%Y/%m/%d",
    "%Y.%m.%d",
    "%Y/%m/%d %H:%M:%S",
    "%d/%m/%Y %H:%M",
    "%d/%m/%Y %H:%M:%S",
    "%B %d, %Y",      # January 15, 2024
    "%b %d, %Y",      # Jan 15, 2024
    "%B %d %Y",
    "%b %d %Y",
    "%d %B %Y",       # 15 January 2024
    "%d %b %Y",       # 15 Jan 2024
]

MIN_YEAR_EXCLUSIVE = 1900
MAX_YEAR_EXCLUSIVE = 2100


def is_blank(value: Any) -> bool:
    """True for None and the empty string."""
    return value is None or (isinstance(value, str) and value == "")


def is_truthy(value: Any) -> bool:
    """True unless the value is None, empty, False, zero or NaN."""
    if is_blank(value) or value is False:
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0 and not (isinstance(value, float) and math.isnan(value))
    return True


def stringify(value: Any) -> str:
    """
    Render a cell value as display text.

    Integral floats drop their ".0", booleans are lower-case and dates
    use ISO format, so the same value always yields the same key.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def to_text_series(values: Iterable[Any], name: str = "") -> pl.Series:
    """Stringify values into a Utf8 series, keeping None as null."""
    return pl.Series(
        name,
        [None if v is None else stringify(v) for v in values],
        dtype=pl.Utf8,
    )


def parse_numbers(texts: pl.Series) -> pl.Series:
    """
    Parse a Utf8 series into floats.

    Strips separators and symbols, then reads the leading number of each
    value. Values without one become null.
    """
    return (
        texts.str.replace_all(NUMBER_STRIP_PATTERN, "")
        .str.extract(NUMBER_PREFIX_PATTERN, 1)
        .cast(pl.Float64, strict=False)
    )


def numeric_cells(values: Iterable[Any]) -> pl.Series:
    """
    Parse raw cells for aggregation.

    Empty cells (None, "", False, 0) read as 0; anything else without a
    leading number is null.
    """
    texts = to_text_series(stringify(v) if is_truthy(v) else "0" for v in values)
    return parse_numbers(texts)


def count_numeric(texts: pl.Series) -> int:
    """Count values that parse to a finite number."""
    if texts.len() == 0:
        return 0
    numbers = parse_numbers(texts)
    return int(numbers.is_finite().fill_null(False).sum())


def count_date_like(texts: pl.Series) -> int:
    """
    Count values that look like calendar dates.

    A value counts if it starts ISO-style or is a delimited numeric date.
    Bare four-digit years and values parsing with one of DATE_FORMATS count
    when the year is strictly between 1900 and 2100.
    """
    if texts.len() == 0:
        return 0

    hits = (
        texts.str.contains(ISO_DATE_PATTERN)
        | texts.str.contains(DELIMITED_DATE_PATTERN)
    ).fill_null(False)

    years = texts.str.extract(YEAR_PATTERN, 1)
    hits = hits | years.cast(pl.Int32, strict=False).is_between(
        MIN_YEAR_EXCLUSIVE + 1, MAX_YEAR_EXCLUSIVE - 1
    ).fill_null(False)

    for fmt in DATE_FORMATS:
        parsed = texts.str.to_datetime(fmt, strict=False)
        in_range = parsed.dt.year().is_between(
            MIN_YEAR_EXCLUSIVE + 1, MAX_YEAR_EXCLUSIVE - 1
        )
        hits = hits | in_range.fill_null(False)

    return int(hits.sum())
