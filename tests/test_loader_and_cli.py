"""Tests for dataset loading and the command-line interface."""

import json

import pytest

from madness_sim.config import SimulationConfig
from madness_sim.data.loader import STAT_FILES, DataLoader
from madness_sim.main import main
from madness_sim.models.bracket import Bracket


@pytest.fixture
def data_dir(tmp_path, stats):
    """Data directory laid out the way the fetcher writes it."""
    directory = tmp_path / "data"
    for key, data in stats.items():
        DataLoader.save_json(data, DataLoader.stat_path(directory, key))
    return directory


class TestDataLoader:
    def test_save_json_creates_parent(self, tmp_path):
        path = tmp_path / "nested" / "out.json"
        DataLoader.save_json({"a": [1, 2]}, path)
        assert DataLoader.load_json(path) == {"a": [1, 2]}

    def test_stat_path(self, tmp_path):
        assert DataLoader.stat_path(tmp_path, "winningPercentage").name == "winning-percentage.json"
        assert DataLoader.stat_path(tmp_path, "custom-file").name == "custom-file.json"

    def test_every_dataset_has_a_file(self):
        assert len(STAT_FILES) == 30
        assert STAT_FILES["bracket"] == "bracket-2025"

    def test_load_stats_skips_missing(self, data_dir, caplog):
        stats = DataLoader.load_stats(data_dir)
        assert set(stats) == {"winningPercentage", "historicalWinners", "bracket"}
        assert "reboundsPerGame not found" in caplog.text

    def test_load_stats_skips_corrupt_file(self, data_dir, caplog):
        DataLoader.stat_path(data_dir, "reboundsPerGame").write_text('[{"data": [{"Team": "Duke", "RPG": "3')
        stats = DataLoader.load_stats(data_dir)
        assert "reboundsPerGame" not in stats
        assert "winningPercentage" in stats
        assert "not valid JSON" in caplog.text

    def test_load_stats_subset(self, data_dir):
        assert list(DataLoader.load_stats(data_dir, keys=["bracket"])) == ["bracket"]

    def test_load_bracket(self, data_dir, bracket):
        assert DataLoader.load_bracket(DataLoader.stat_path(data_dir, "bracket")) == bracket

    def test_config_round_trip(self, tmp_path):
        config = SimulationConfig(enabled=["winPct"], randomness=10, random_seed=3)
        DataLoader.save_config(config, tmp_path / "config.json")
        assert DataLoader.load_config(tmp_path / "config.json") == config


class TestCLI:
    def test_simulate(self, data_dir, tmp_path, capsys):
        output = tmp_path / "result.json"
        assert main(["simulate", "--data-dir", str(data_dir), "--output", str(output), "--seed", "3"]) == 0

        result = json.loads(output.read_text())
        assert result["champion"] == "West 1"
        assert set(result["regionalRounds"]) == {"East", "West", "South", "Midwest"}
        assert "CHAMPION: West 1 (Seed 1, West)" in capsys.readouterr().out

    def test_simulate_with_config_and_randomness(self, data_dir, tmp_path):
        config_path = tmp_path / "config.json"
        DataLoader.save_config(SimulationConfig(enabled=["winPct"]), config_path)
        outputs = []
        for name in ("a.json", "b.json"):
            output = tmp_path / name
            args = ["simulate", "-d", str(data_dir), "-c", str(config_path), "-o", str(output),
                    "--seed", "11", "--randomness", "80"]
            assert main(args) == 0
            outputs.append(json.loads(output.read_text()))
        assert outputs[0] == outputs[1]

    def test_simulate_field(self, data_dir, tmp_path):
        output = tmp_path / "field.json"
        assert main(["simulate", "-d", str(data_dir), "-o", str(output), "--field", "--field-size", "16"]) == 0
        result = json.loads(output.read_text())
        assert [len(r) for r in result["rounds"]] == [8, 4, 2, 1]
        assert result["champion"] == result["rounds"][-1][0]["winner"]

    def test_simulate_with_corrupt_stat_file(self, data_dir, tmp_path):
        DataLoader.stat_path(data_dir, "reboundsPerGame").write_text('[{"data": [{"Team": "Duke", "RPG": "3')
        output = tmp_path / "result.json"
        assert main(["simulate", "-d", str(data_dir), "-o", str(output)]) == 0
        assert json.loads(output.read_text())["champion"] == "West 1"

    def test_simulate_missing_bracket(self, tmp_path, capsys):
        assert main(["simulate", "-d", str(tmp_path), "-o", str(tmp_path / "out.json")]) == 1
        assert "Error loading bracket" in capsys.readouterr().out

    def test_simulate_bad_config(self, data_dir, tmp_path, capsys):
        config_path = tmp_path / "config.json"
        DataLoader.save_json({"weights": {"winPct": 500}}, config_path)
        assert main(["simulate", "-d", str(data_dir), "-c", str(config_path)]) == 1
        assert "Error loading config" in capsys.readouterr().out

    def test_sample_config(self, tmp_path):
        output = tmp_path / "config.json"
        assert main(["sample-config", "--output", str(output)]) == 0
        assert DataLoader.load_config(output) == SimulationConfig()

    def test_audit_names(self, data_dir, tmp_path, capsys):
        bracket_path = tmp_path / "bracket.json"
        bracket = Bracket.from_seed_lists({"East": ["UConn", "Michigan St.", "Gonzaga"]})
        DataLoader.save_json(bracket.to_dict(), bracket_path)

        assert main(["audit-names", "-d", str(data_dir), "--bracket", str(bracket_path)]) == 0
        out = capsys.readouterr().out
        lines = out.splitlines()
        assert lines[1].startswith("UConn")
        assert "michigan state" in lines[2]
        assert lines[2].rstrip().endswith("alias")
        assert "1 bracket teams have no titles on record" in out
        assert out.rstrip().endswith("Gonzaga")

    def test_fetch_rejects_unknown_stat(self, tmp_path, capsys):
        assert main(["fetch", "--output-dir", str(tmp_path), "--stat", "kenpom"]) == 1
        assert "unknown stat keys" in capsys.readouterr().out

    def test_no_command(self):
        assert main([]) == 1
