"""
Column Classifier

Assigns business categories to a column from its name and infers its
data type, cardinality and key status from its values. Never raises on
malformed cells; anything that fails to parse falls through to text.
"""

from typing import Any, Optional, Sequence

import polars as pl

from catalog.categories import get_matching_categories
from config import AnalyzerSettings, get_settings
from core.values import count_date_like, count_numeric, is_blank, to_text_series
from schemas.analysis import ColumnClassification, DataType


BOOLEAN_VOCABULARY = ["true", "false", "כן", "לא", "yes", "no", "1", "0"]

# Hebrew for "identifier"
IDENTIFIER_TOKEN = "מזהה"


class ColumnClassifier:
    """Classifies source columns into categories and data types."""

    def __init__(self, settings: Optional[AnalyzerSettings] = None):
        self.settings = settings or get_settings().analyzer

    def classify(self, column_name: Any, values: Sequence[Any]) -> ColumnClassification:
        """
        Classify one column.

        Args:
            column_name: Source column name (non-strings are stringified)
            values: Every cell of the column, in row order

        Returns:
            ColumnClassification for the column
        """
        name = str(column_name)
        values = list(values)

        categories = get_matching_categories(name)
        non_null = [v for v in values if not is_blank(v)]
        texts = to_text_series(non_null, name)
        unique_count = texts.n_unique() if texts.len() > 0 else 0

        return ColumnClassification(
            column_name=name,
            categories=categories,
            primary_category=categories[0] if categories else None,
            data_type=self.infer_data_type(texts),
            unique_count=unique_count,
            null_count=len(values) - len(non_null),
            sample_values=non_null[: self.settings.sample_size],
            is_key=self.is_key_column(name, unique_count, len(values)),
        )

    def infer_data_type(self, texts: pl.Series) -> DataType:
        """
        Infer a data type from stringified non-null values.

        Rules apply in order: boolean, date, number, text.
        """
        total = texts.len()
        if total == 0:
            return DataType.TEXT

        if texts.str.to_lowercase().is_in(BOOLEAN_VOCABULARY).all():
            return DataType.BOOLEAN

        threshold = total * self.settings.type_inference_threshold

        if count_date_like(texts) >= threshold:
            return DataType.DATE

        if count_numeric(texts) >= threshold:
            return DataType.NUMBER

        return DataType.TEXT

    def is_key_column(self, name: str, unique_count: int, row_count: int) -> bool:
        """
        Decide whether a column looks like a unique key.

        Name rules: exactly "id", a "_id" suffix, or the Hebrew identifier
        token. Otherwise every row must hold a distinct value; the row count
        includes empty cells, so a column with blanks never qualifies here.
        """
        lower_name = name.lower()
        if lower_name == "id" or lower_name.endswith("_id") or IDENTIFIER_TOKEN in lower_name:
            return True
        return unique_count == row_count and row_count > self.settings.key_min_rows


# Global classifier instance
column_classifier = ColumnClassifier()


def classify_column(column_name: Any, values: Sequence[Any]) -> ColumnClassification:
    """Classify a column with the default settings."""
    return column_classifier.classify(column_name, values)
