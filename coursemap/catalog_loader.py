#!/usr/bin/env python3
"""
Catalog loading and cleaning
"""

import json
from pathlib import Path
from typing import List

import pandas as pd
from pydantic import ValidationError

from coursemap.models import CourseRecord

LIST_COLUMNS = ["previousCourseCodes", "alternativeCourseCodes", "courseAttributes"]


def read_catalog_json(path: str) -> pd.DataFrame:
    """
    Read a catalog JSON file into a DataFrame, one row per course.

    Accepts either a top-level array of course objects or an object with a
    "courses" array.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file isn't a list of course objects
    """
    if not Path(path).exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        payload = json.load(f)

    if isinstance(payload, dict) and "courses" in payload:
        payload = payload["courses"]
    if not isinstance(payload, list):
        raise ValueError(f"Catalog must be a JSON array of courses: {path}")

    return pd.DataFrame([c for c in payload if isinstance(c, dict)])


def clean_catalog(df: pd.DataFrame) -> pd.DataFrame:
    """Basic cleaning: trimmed text, no NaNs, every row has a course code"""
    df = df.copy()

    if "courseCode" not in df.columns:
        return df.iloc[0:0]

    #list-valued columns: anything that isn't a list becomes []
    for col in LIST_COLUMNS:
        if col in df.columns:
            df[col] = df[col].apply(lambda v: list(v) if isinstance(v, (list, tuple)) else [])

    #remove extra spaces from text columns, missing text becomes ""
    text_cols = [c for c in df.columns if c not in LIST_COLUMNS]
    for col in text_cols:
        df[col] = df[col].apply(lambda v: "" if v is None or (isinstance(v, float) and pd.isna(v)) else v)
        df[col] = df[col].apply(lambda v: v.strip() if isinstance(v, str) else v)

    df["courseCode"] = df["courseCode"].astype(str).str.replace(r"\s+", "", regex=True).str.upper()

    #drop rows without a usable code
    df = df[df["courseCode"] != ""]

    return df.reset_index(drop=True)


def load_catalog(path: str, verbose: bool = True) -> List[CourseRecord]:
    """
    Load a catalog file as CourseRecords.

    Args:
        path: Path to catalog JSON (e.g., "catalog.json")
        verbose: Print loading status messages (default: True)

    Returns:
        List of CourseRecord in file order; rows that fail validation are skipped

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the file isn't a list of course objects
    """
    if verbose:
        print(f"Loading catalog from {path}...")

    df = clean_catalog(read_catalog_json(path))
    records = []
    for row in df.to_dict("records"):
        try:
            records.append(CourseRecord.model_validate(row))
        except ValidationError as e:
            if verbose:
                print(f"Warning: skipping course {row.get('courseCode')}: {e.error_count()} invalid field(s)")

    if verbose:
        print(f"Loaded {len(records)} courses")

    return records


__all__ = [
    'read_catalog_json',
    'clean_catalog',
    'load_catalog',
]
