"""
CSV discovery, structural validation, and typed loading of the three input tables.
"""
from __future__ import annotations

import csv
import io
import logging
from pathlib import Path

import pandas as pd

from superstore.config import (
    INBOX_FOLDER, ORDERS_KEYWORDS, PEOPLE_KEYWORDS, RETURNS_KEYWORDS,
    ORDERS_COLUMN_MAP, PEOPLE_COLUMN_MAP, RETURNS_COLUMN_MAP,
    INTEGER_COLS, FLOAT_COLS, NULLABLE_INTEGER_COLS, ORDER_KEY,
)
from superstore.errors import LoadError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# CSV discovery
# ---------------------------------------------------------------------------

def discover_csvs(
    inbox: Path = INBOX_FOLDER,
    keywords: list[str] | None = None,
    exclude_keywords: list[str] | None = None,
) -> list[Path]:
    """Recursively find CSVs in inbox whose filename contains a keyword."""
    matches: list[Path] = []
    if not inbox.exists():
        return matches

    for csv_file in inbox.rglob("*.csv"):
        filename_lower = csv_file.name.lower()
        if exclude_keywords and any(ex in filename_lower for ex in exclude_keywords):
            continue
        if any(kw in filename_lower for kw in keywords or []):
            matches.append(csv_file)

    return sorted(matches)


def discover_inputs(inbox: Path = INBOX_FOLDER) -> dict[str, Path]:
    """Locate the orders, people and returns files in inbox.

    Raises LoadError naming the first table with no matching file.
    """
    found = {
        "orders": discover_csvs(inbox, ORDERS_KEYWORDS, PEOPLE_KEYWORDS + RETURNS_KEYWORDS),
        "people": discover_csvs(inbox, PEOPLE_KEYWORDS),
        "returns": discover_csvs(inbox, RETURNS_KEYWORDS),
    }
    result = {}
    for table, files in found.items():
        if not files:
            raise LoadError(f"No {table} CSV found in {inbox}")
        if len(files) > 1:
            logger.warning("Multiple %s CSVs found, using %s", table, files[0].name)
        result[table] = files[0]
    return result


# ---------------------------------------------------------------------------
# Structure validation
# ---------------------------------------------------------------------------

def _data_records_before(raw: bytes, offset: int) -> int:
    """Non-blank data lines (header excluded) fully read before byte offset."""
    complete = raw[:offset].split(b"\n")[:-1]
    return sum(1 for line in complete[1:] if line.strip())


def read_text(csv_file: Path) -> str:
    """Decode the whole file as UTF-8; undecodable bytes raise LoadError."""
    raw = Path(csv_file).read_bytes()
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        row = 0 if b"\n" not in raw[:exc.start] else _data_records_before(raw, exc.start) + 1
        raise LoadError(
            f"{Path(csv_file).name} is not valid UTF-8",
            row=row, value=raw[exc.start:exc.end],
        ) from exc


def validate_csv_structure(csv_file: Path, expected_fields: int) -> list[str]:
    """Check that the file has a header and every record has expected_fields.

    Blank lines are skipped and not numbered, matching how the records are
    later read into a DataFrame. Returns the header row. Raises LoadError on
    the first malformed record.
    """
    reader = csv.reader(io.StringIO(read_text(csv_file), newline=""))
    header = next(reader, None)
    if not header:
        raise LoadError(f"{Path(csv_file).name} is empty or has no header")
    if len(header) != expected_fields:
        raise LoadError(
            f"{Path(csv_file).name} header has {len(header)} fields, expected {expected_fields}",
            row=0, value=",".join(header),
        )
    record_num = 0
    for record in reader:
        if not record:
            continue
        record_num += 1
        if len(record) != expected_fields:
            raise LoadError(
                f"Malformed record in {Path(csv_file).name}: "
                f"{len(record)} fields, expected {expected_fields}",
                row=record_num, value=",".join(record),
            )
    return header


def _peek_header(csv_file: Path) -> list[str]:
    # Undecodable bytes are replaced here; validate_csv_structure reports them.
    with open(csv_file, newline="", encoding="utf-8", errors="replace") as f:
        return next(csv.reader(f), None) or []


# ---------------------------------------------------------------------------
# Typed loading
# ---------------------------------------------------------------------------

def read_table(csv_file: Path, columns: list[str]) -> pd.DataFrame:
    """Validate then read a CSV as text, naming columns by position."""
    validate_csv_structure(csv_file, len(columns))
    df = pd.read_csv(
        csv_file,
        header=0,
        names=columns,
        dtype=str,
        keep_default_na=False,
        quotechar='"',
        encoding="utf-8",
    )
    for col in columns:
        df[col] = df[col].str.strip()
    return df.reset_index(drop=True)


def _first_bad(mask: pd.Series) -> int:
    return int(mask.idxmax())


def _coerce_integer(df: pd.DataFrame, col: str, nullable: bool = False) -> pd.Series:
    raw = df[col]
    empty = raw == ""
    parsed = pd.to_numeric(raw.where(~empty), errors="coerce")
    bad = parsed.isna() & ~empty
    bad |= parsed.notna() & (parsed % 1 != 0)
    if not nullable:
        bad |= empty
    if bad.any():
        idx = _first_bad(bad)
        raise LoadError("Invalid integer", row=idx + 1, column=col, value=raw.iloc[idx])
    return parsed.astype("Int64") if nullable else parsed.astype("int64")


def _coerce_float(df: pd.DataFrame, col: str) -> pd.Series:
    raw = df[col]
    parsed = pd.to_numeric(raw, errors="coerce")
    bad = parsed.isna()
    if bad.any():
        idx = _first_bad(bad)
        raise LoadError("Invalid number", row=idx + 1, column=col, value=raw.iloc[idx])
    return parsed.astype("float64")


def _apply_load_types(df: pd.DataFrame) -> pd.DataFrame:
    for col in INTEGER_COLS:
        if col in df.columns:
            df[col] = _coerce_integer(df, col)
    for col in NULLABLE_INTEGER_COLS:
        if col in df.columns:
            df[col] = _coerce_integer(df, col, nullable=True)
    for col in FLOAT_COLS:
        if col in df.columns:
            df[col] = _coerce_float(df, col)
    return df


def load_orders(csv_file: Path) -> pd.DataFrame:
    """Load order lines. Dates and currency fields stay as text for the cleaner.

    The Postal Code column may be missing from the file entirely; it then
    loads as an all-null column.
    """
    columns = list(ORDERS_COLUMN_MAP.values())
    header = [h.strip().lower() for h in _peek_header(csv_file)]
    missing_postal = "postal code" not in header and len(header) == len(columns) - 1
    if missing_postal:
        columns = [c for c in columns if c != "postal_code"]

    df = read_table(csv_file, columns)
    if missing_postal:
        df.insert(list(ORDERS_COLUMN_MAP.values()).index("postal_code"), "postal_code", "")

    df = _apply_load_types(df)

    dupes = df.duplicated(subset=ORDER_KEY, keep="first")
    if dupes.any():
        idx = _first_bad(dupes)
        key = tuple(df.loc[idx, ORDER_KEY])
        raise LoadError("Duplicate order line key", row=idx + 1, column=", ".join(ORDER_KEY), value=key)

    logger.info("Loaded %s order lines from %s", f"{len(df):,}", Path(csv_file).name)
    return df


def load_people(csv_file: Path) -> pd.DataFrame:
    """Load the region-manager table."""
    df = read_table(csv_file, list(PEOPLE_COLUMN_MAP.values()))
    logger.info("Loaded %s people from %s", f"{len(df):,}", Path(csv_file).name)
    return df


def load_returns(csv_file: Path) -> pd.DataFrame:
    """Load the returned-orders table."""
    df = read_table(csv_file, list(RETURNS_COLUMN_MAP.values()))
    logger.info("Loaded %s returns from %s", f"{len(df):,}", Path(csv_file).name)
    return df
