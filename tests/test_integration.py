"""Integration test — full end-to-end schedule generation and validation."""

import sys
from pathlib import Path

import pytest

from fairsched import schedule as cli
from fairsched.config import load_config
from fairsched.constraints import validate_schedule
from fairsched.output import write_schedule
from fairsched.roundrobin import generate_group_pairings
from fairsched.scheduler import schedule
from fairsched.stats import analyze_fairness
from fairsched.verify import parse_csv_schedule, run_verify, verify_schedule

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yaml"


@pytest.fixture
def config():
    return load_config(CONFIG_PATH)


class TestEndToEnd:
    def test_generate_and_validate(self, config, capsys):
        result = schedule(config)
        assert result.complete
        check = validate_schedule(
            result.matches,
            pairings=generate_group_pairings(config.teams),
            min_rest_slots=config.min_rest_slots,
            fields=config.fields,
        )
        assert check["valid"], check["errors"]

    def test_every_team_plays_its_group(self, config, capsys):
        result = schedule(config)
        analysis = analyze_fairness(result.matches)
        for group, members in config.groups.items():
            for t in members:
                assert len(analysis.team_stats[t].match_slots) == len(members) - 1

    def test_deterministic(self, config, capsys):
        first = schedule(config)
        second = schedule(config)
        assert ([(m.home_team, m.away_team, m.slot, m.field) for m in first.matches]
                == [(m.home_team, m.away_team, m.slot, m.field) for m in second.matches])

    def test_csv_round_trip_verifies(self, config, tmp_path, capsys):
        result = schedule(config)
        write_schedule(result, config, output_prefix=str(tmp_path))
        matches = parse_csv_schedule(tmp_path / "schedule.csv")
        assert len(matches) == len(result.matches)
        assert verify_schedule(matches, config)["valid"]

    def test_tampered_csv_fails_verification(self, config, tmp_path, capsys):
        result = schedule(config)
        write_schedule(result, config, output_prefix=str(tmp_path))
        csv_path = tmp_path / "schedule.csv"
        lines = csv_path.read_text().splitlines()
        csv_path.write_text("\n".join(lines[:-1]) + "\n")
        matches = parse_csv_schedule(csv_path)
        check = verify_schedule(matches, config)
        assert not check["valid"]
        assert any("missing from schedule" in e for e in check["errors"])


class TestCommandLine:
    def test_generate(self, tmp_path, monkeypatch, capsys):
        out = tmp_path / "out"
        monkeypatch.setattr(sys, "argv", [
            "fairsched", str(CONFIG_PATH), "-o", str(out), "--trace",
        ])
        cli.main()
        text = capsys.readouterr().out
        assert "Schedule generated successfully!" in text
        assert "score=" in text
        for name in ("schedule.txt", "schedule.csv", "stats.txt"):
            assert (out / name).exists()

    def test_verify(self, tmp_path, monkeypatch, capsys):
        out = tmp_path / "out"
        monkeypatch.setattr(sys, "argv", [
            "fairsched", str(CONFIG_PATH), "-o", str(out),
        ])
        cli.main()
        monkeypatch.setattr(sys, "argv", [
            "fairsched", str(CONFIG_PATH), "--verify", str(out / "schedule.csv"),
        ])
        with pytest.raises(SystemExit) as exc:
            cli.main()
        assert exc.value.code == 0

    def test_infeasible_exits_nonzero(self, tmp_path, monkeypatch, capsys):
        cfg = tmp_path / "tight.yaml"
        cfg.write_text(
            "tournament:\n"
            "  fields: 1\n"
            "  min_rest_slots: 5\n"
            "  max_slots: 3\n"
            "teams: [A, B, C]\n"
        )
        monkeypatch.setattr(sys, "argv", [
            "fairsched", str(cfg), "-o", str(tmp_path / "out"),
        ])
        with pytest.raises(SystemExit) as exc:
            cli.main()
        assert exc.value.code == 1
        assert "UNSCHEDULED: A vs C" in capsys.readouterr().out

    def test_bad_config_exits_nonzero(self, tmp_path, monkeypatch, capsys):
        cfg = tmp_path / "bad.yaml"
        cfg.write_text("tournament:\n  fields: 0\nteams: [A, B]\n")
        monkeypatch.setattr(sys, "argv", ["fairsched", str(cfg)])
        with pytest.raises(SystemExit) as exc:
            cli.main()
        assert exc.value.code == 1
        assert "Need at least 1 field" in capsys.readouterr().out

    def test_verify_bad_config_exits_nonzero(self, tmp_path, monkeypatch, capsys):
        out = tmp_path / "out"
        monkeypatch.setattr(sys, "argv", [
            "fairsched", str(CONFIG_PATH), "-o", str(out),
        ])
        cli.main()
        cfg = tmp_path / "bad.yaml"
        cfg.write_text("tournament:\n  fields:\nteams: [A, B]\n")
        monkeypatch.setattr(sys, "argv", [
            "fairsched", str(cfg), "--verify", str(out / "schedule.csv"),
        ])
        with pytest.raises(SystemExit) as exc:
            cli.main()
        assert exc.value.code == 1
        text = capsys.readouterr().out
        assert "Config validation errors:" in text
        assert "fields must be an integer" in text


class TestVerifyCsv:
    def test_bad_slot_raises_value_error(self, tmp_path):
        path = tmp_path / "schedule.csv"
        path.write_text(
            "Match,Slot,Start,End,Field,Group,Home,Away\n"
            "1,one,9:00,9:10,1,A,Lions,Tigers\n"
        )
        with pytest.raises(ValueError, match="line 2"):
            parse_csv_schedule(path)

    def test_run_verify_reports_bad_csv(self, tmp_path, capsys):
        path = tmp_path / "schedule.csv"
        path.write_text(
            "Match,Slot,Start,End,Field,Group,Home,Away\n"
            "1,1,9:00,9:10,x,A,Lions,Tigers\n"
        )
        assert run_verify(str(path), str(CONFIG_PATH)) == 1
        assert "cannot parse" in capsys.readouterr().out
