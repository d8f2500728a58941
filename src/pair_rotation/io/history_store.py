"""JSON persistence of past rounds."""
import json
from pathlib import Path
from typing import List, Union

import pandas as pd

from pair_rotation.errors import InvalidPairError
from pair_rotation.models.distribution import Distribution
from pair_rotation.solver.history import HistoryLedger
from pair_rotation.utils.logging_setup import get_logger

logger = get_logger("pair_rotation.io.history_store")


def load_history(path: Union[str, Path]) -> HistoryLedger:
    """
    Load rounds from a JSON file, oldest first.

    Each round is ``{"pairs": [[a, b], ...], "leftover": c}``; a bare list of
    pairs is accepted as a round without leftover. A missing file is an empty
    history.
    """
    path = Path(path)
    if not path.exists():
        logger.info(f"No history at {path}, starting fresh")
        return HistoryLedger()

    with path.open(encoding="utf-8") as fh:
        try:
            records = json.load(fh)
        except json.JSONDecodeError as e:
            raise ValueError(f"History file {path} is not valid JSON: {e}") from e

    if not isinstance(records, list):
        raise ValueError(f"History file {path} must contain a list of rounds")

    try:
        ledger = HistoryLedger.from_records(records)
    except InvalidPairError as e:
        raise ValueError(f"History file {path} has a malformed round: {e}") from e

    logger.info(f"Loaded {len(ledger)} rounds from {path}")
    return ledger


def save_history(history: HistoryLedger, path: Union[str, Path]) -> None:
    """Write rounds to a JSON file in canonical form."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = [distribution.to_dict() for distribution in history]
    with path.open("w", encoding="utf-8") as fh:
        json.dump(payload, fh, ensure_ascii=False, indent=2)
    logger.info(f"Saved {len(payload)} rounds to {path}")


def append_round(distribution: Distribution, path: Union[str, Path]) -> HistoryLedger:
    """Record ``distribution`` as the newest round of the history file."""
    ledger = load_history(path).append(distribution)
    save_history(ledger, path)
    return ledger


def history_to_dataframe(history: HistoryLedger) -> pd.DataFrame:
    """One row per pair (or leftover) per round, for display."""
    frames: List[pd.DataFrame] = []
    for idx, distribution in enumerate(history, start=1):
        df = distribution.to_dataframe()
        df.insert(0, "round", idx)
        frames.append(df)
    if not frames:
        return pd.DataFrame(columns=["round", "person_a", "person_b"])
    return pd.concat(frames, ignore_index=True)
