"""CSV loading and saving for rosters."""
from pathlib import Path
from typing import Iterable, List, Union

import pandas as pd


def _safe_bool(value, default: bool = True) -> bool:
    """Safely convert value to bool; blanks keep the default."""
    if hasattr(value, "item"):  # numpy scalar from a DataFrame
        value = value.item()
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        if not value.strip():
            return default
        return value.strip().lower() in ("1", "true", "yes", "y")
    return default


def load_roster(source: Union[str, Path, pd.DataFrame]) -> List[str]:
    """
    Load a roster from CSV file or DataFrame.

    The ``name`` column is required. An optional ``active`` column excludes
    rows marked 0/false/no. Blank names are skipped and duplicates collapse.

    Args:
        source: Path to CSV file or pandas DataFrame

    Returns:
        Sorted list of unique names
    """
    if isinstance(source, pd.DataFrame):
        df = source.copy()
    else:
        df = pd.read_csv(source, dtype=str, keep_default_na=False)

    df = df.fillna("")

    if "name" not in df.columns:
        raise ValueError("CSV must have a 'name' column")

    names = set()
    for _, row in df.iterrows():
        name = str(row["name"]).strip()
        if not name:
            continue
        if not _safe_bool(row.get("active", True)):
            continue
        names.add(name)

    return sorted(names)


def save_roster(names: Iterable[str], path: Union[str, Path]) -> None:
    """Save a roster to CSV, one name per row."""
    df = pd.DataFrame({"name": sorted(set(names))}, columns=["name"])
    df.to_csv(path, index=False)


def parse_pair_arg(value: str) -> tuple:
    """Parse a ``"Alice,Bob"`` command-line pair."""
    parts = [part.strip() for part in value.split(",")]
    if len(parts) != 2 or not all(parts):
        raise ValueError(f"Expected NAME,NAME, got {value!r}")
    return parts[0], parts[1]
