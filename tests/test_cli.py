"""Tests for the command-line entry point."""
import json

import pytest

from pair_rotation.cli import EXIT_INFEASIBLE, EXIT_INVALID, EXIT_OK, EXIT_TIMEOUT, main


@pytest.fixture
def roster_csv(tmp_path):
    path = tmp_path / "team.csv"
    path.write_text("name\nA\nB\nC\nD\n", encoding="utf-8")
    return path


@pytest.fixture
def history_json(tmp_path):
    path = tmp_path / "history.json"
    path.write_text(json.dumps([{"pairs": [["A", "B"], ["C", "D"]], "leftover": None}]), encoding="utf-8")
    return path


class TestCliPlan:
    """Tests for successful planning."""

    def test_json_output(self, roster_csv, history_json, capsys):
        code = main(["--roster", str(roster_csv), "--history", str(history_json), "--json"])

        assert code == EXIT_OK
        out = json.loads(capsys.readouterr().out)
        assert out["round"] == {"pairs": [["A", "C"], ["B", "D"]], "leftover": None}
        assert out["forgotten"] == []
        assert out["window_size"] == 1

    def test_text_output(self, roster_csv, capsys):
        code = main(["--roster", str(roster_csv)])

        assert code == EXIT_OK
        out = capsys.readouterr().out
        assert " - A / B" in out
        assert " - C / D" in out

    def test_desire_and_block(self, roster_csv, capsys):
        code = main(["--roster", str(roster_csv), "--desire", "A,D", "--block", "B,C", "--json"])

        assert code == EXIT_INFEASIBLE
        out = json.loads(capsys.readouterr().out)
        assert out["error"] == "infeasible"

    def test_record_appends_round(self, roster_csv, history_json, capsys):
        code = main(["--roster", str(roster_csv), "--history", str(history_json), "--record"])

        assert code == EXIT_OK
        rounds = json.loads(history_json.read_text(encoding="utf-8"))
        assert len(rounds) == 2
        assert rounds[-1] == {"pairs": [["A", "C"], ["B", "D"]], "leftover": None}

    def test_window_and_cp_sat(self, roster_csv, history_json, capsys):
        code = main([
            "--roster", str(roster_csv), "--history", str(history_json),
            "--window", "0", "--matcher", "cp-sat", "--time-limit", "10", "--json",
        ])

        assert code == EXIT_OK
        pairs = {tuple(p) for p in json.loads(capsys.readouterr().out)["round"]["pairs"]}
        assert not pairs & {("A", "B"), ("C", "D")}


class TestCliErrors:
    """Tests for exit codes on failure."""

    def test_desire_outside_roster(self, roster_csv):
        assert main(["--roster", str(roster_csv), "--desire", "A,Z"]) == EXIT_INVALID

    def test_malformed_desire(self, roster_csv):
        assert main(["--roster", str(roster_csv), "--desire", "A"]) == EXIT_INVALID

    def test_roster_without_name_column(self, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("who\nA\n", encoding="utf-8")
        assert main(["--roster", str(path)]) == EXIT_INVALID

    def test_missing_roster_file(self, tmp_path):
        assert main(["--roster", str(tmp_path / "none.csv")]) == EXIT_INVALID

    def test_negative_window(self, roster_csv):
        assert main(["--roster", str(roster_csv), "--window", "-1"]) == EXIT_INVALID

    def test_infeasible(self, tmp_path, capsys):
        path = tmp_path / "pair.csv"
        path.write_text("name\nA\nB\n", encoding="utf-8")

        assert main(["--roster", str(path), "--block", "A,B"]) == EXIT_INFEASIBLE

    def test_timeout(self, roster_csv, capsys):
        code = main(["--roster", str(roster_csv), "--max-steps", "1", "--json"])

        assert code == EXIT_TIMEOUT
        assert json.loads(capsys.readouterr().out)["error"] == "timeout"

    def test_record_requires_history(self, roster_csv):
        with pytest.raises(SystemExit) as exc:
            main(["--roster", str(roster_csv), "--record"])
        assert exc.value.code == 2
