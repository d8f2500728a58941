# pair_rotation/io - Roster and history input/output
from .csv_loader import load_roster, parse_pair_arg, save_roster
from .history_store import append_round, history_to_dataframe, load_history, save_history

__all__ = [
    "load_roster", "save_roster", "parse_pair_arg",
    "load_history", "save_history", "append_round", "history_to_dataframe",
]
