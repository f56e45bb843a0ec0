"""Search and filter utilities for record tables."""

from __future__ import annotations

from typing import Dict, List

import pandas as pd

from config import ALL_OPTION


def get_filter_options(dataframe: pd.DataFrame, columns: List[str]) -> Dict[str, List[str]]:
    """Build sorted non-empty options for each filterable column."""
    options: Dict[str, List[str]] = {}
    for column in columns:
        if column not in dataframe.columns:
            options[column] = []
            continue
        values = [value for value in dataframe[column].astype(str).tolist() if value.strip()]
        options[column] = sorted(set(values))
    return options


def apply_search(dataframe: pd.DataFrame, search_term: str, columns: List[str]) -> pd.DataFrame:
    """Keep rows where any search column contains the term, ignoring case."""
    term = (search_term or "").strip().lower()
    search_columns = [column for column in columns if column in dataframe.columns]
    if not term or not search_columns:
        return dataframe

    matches = pd.Series(False, index=dataframe.index)
    for column in search_columns:
        matches |= dataframe[column].astype(str).str.lower().str.contains(term, regex=False)
    return dataframe[matches]


def apply_filters(dataframe: pd.DataFrame, selected_filters: Dict[str, str]) -> pd.DataFrame:
    """Apply exact-match filters; blank or "All" leaves a column unfiltered."""
    filtered = dataframe
    for column, value in selected_filters.items():
        if not value or value == ALL_OPTION or column not in filtered.columns:
            continue
        filtered = filtered[filtered[column].astype(str) == str(value)]
    return filtered


def filters_signature(search_term: str, selected_filters: Dict[str, str]) -> tuple:
    """Build a hashable signature used to detect filter changes."""
    return ((search_term or "").strip().lower(), *sorted(selected_filters.items()))
