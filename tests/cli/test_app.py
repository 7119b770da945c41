from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest
from typer.testing import CliRunner

from draftswipe.cli.app import app

if TYPE_CHECKING:
    from pathlib import Path

runner = CliRunner()

_ROSTER_CSV = """\
Player_Name,Position,Team,Pass_Yd,Pass_TD,Rush_Yd,Rush_TD,Rec,Rec_Yd,Rec_TD,ADP,Bye
Josh Allen,QB,BUF,4300,32,550,10,0,0,0,20,7
Patrick Mahomes,QB,KC,4200,28,350,2,0,0,0,45,10
Jared Goff,QB,DET,4400,29,40,1,0,0,0,90,8
Geno Smith,QB,SEA,3700,20,150,1,0,0,0,140,10
Bijan Robinson,RB,ATL,0,0,1400,11,60,450,2,3,12
Tyler Allgeier,RB,ATL,0,0,650,4,12,90,0,130,12
Jahmyr Gibbs,RB,DET,0,0,1300,12,55,500,3,5,8
Kenneth Walker,RB,SEA,0,0,1000,9,30,250,1,40,10
Isiah Pacheco,RB,KC,0,0,950,8,35,250,1,50,10
James Cook,RB,BUF,0,0,1100,10,40,350,1,35,7
Ja'Marr Chase,WR,CIN,0,0,0,0,110,1500,12,2,10
Amon-Ra St. Brown,WR,DET,0,0,0,0,115,1300,10,8,8
Rashee Rice,WR,KC,0,0,0,0,95,1100,8,30,10
DK Metcalf,WR,SEA,0,0,0,0,70,1000,7,55,10
Khalil Shakir,WR,BUF,0,0,0,0,70,850,5,90,7
Drake London,WR,ATL,0,0,0,0,95,1100,7,25,12
Travis Kelce,TE,KC,0,0,0,0,85,900,6,45,10
Sam LaPorta,TE,DET,0,0,0,0,80,850,7,50,8
Dalton Kincaid,TE,BUF,0,0,0,0,65,650,4,100,7
Kyle Pitts,TE,ATL,0,0,0,0,55,650,3,120,12
"""

_PREFS = {
    "patrick-mahomes-kc": 2,
    "rashee-rice-kc": 2,
    "travis-kelce-kc": 1,
    "bijan-robinson-atl": 2,
    "tyler-allgeier-atl": -1,
    "ja-marr-chase-cin": -1,
}


@pytest.fixture
def roster(tmp_path: Path) -> Path:
    path = tmp_path / "roster.csv"
    path.write_text(_ROSTER_CSV)
    return path


@pytest.fixture
def prefs(tmp_path: Path) -> Path:
    path = tmp_path / "storage.json"
    path.write_text(json.dumps({"draftswipe_prefs_v3_4direction": json.dumps(_PREFS)}))
    return path


@pytest.fixture
def config(tmp_path: Path) -> Path:
    # Never created, so only defaults apply.
    return tmp_path / "draftswipe.yaml"


class TestRoot:
    def test_help(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "fantasy football draft prep" in result.output

    def test_no_command(self) -> None:
        result = runner.invoke(app, [])
        assert result.exit_code == 0

    def test_quiet_keeps_stdout_for_json(self, roster: Path, config: Path) -> None:
        result = runner.invoke(app, ["--quiet", "valuate", str(roster), "--config", str(config), "--json"])
        assert result.exit_code == 0, result.output
        assert len(json.loads(result.stdout)) == 20


class TestValuate:
    def test_table(self, roster: Path, config: Path) -> None:
        result = runner.invoke(app, ["valuate", str(roster), "--config", str(config), "--top", "5"])
        assert result.exit_code == 0, result.output
        assert "VORP" in result.output

    def test_json_by_position(self, roster: Path, config: Path) -> None:
        result = runner.invoke(app, ["valuate", str(roster), "--config", str(config), "--json", "--position", "te"])
        assert result.exit_code == 0, result.output
        players = json.loads(result.stdout)
        assert [p["id"] for p in players] == [
            "travis-kelce-kc",
            "sam-laporta-det",
            "dalton-kincaid-buf",
            "kyle-pitts-atl",
        ]
        assert all(p["position"] == "TE" for p in players)

    def test_format_changes_points(self, roster: Path, config: Path) -> None:
        args = ["valuate", str(roster), "--config", str(config), "--json", "--position", "WR"]
        ppr = json.loads(runner.invoke(app, args).stdout)
        std = json.loads(runner.invoke(app, [*args, "--format", "std"]).stdout)
        assert ppr[0]["fantasy_pts"] - std[0]["fantasy_pts"] == pytest.approx(110)

    def test_unknown_position(self, roster: Path, config: Path) -> None:
        result = runner.invoke(app, ["valuate", str(roster), "--config", str(config), "--position", "LB"])
        assert result.exit_code == 1
        assert "Unknown position: 'LB'" in result.output

    def test_unknown_format(self, roster: Path, config: Path) -> None:
        result = runner.invoke(app, ["valuate", str(roster), "--config", str(config), "--format", "xyz"])
        assert result.exit_code == 1
        assert "Unknown scoring format" in result.output

    def test_unsupported_roster_file(self, tmp_path: Path, config: Path) -> None:
        path = tmp_path / "roster.xml"
        path.write_text("<players/>")
        result = runner.invoke(app, ["valuate", str(path), "--config", str(config)])
        assert result.exit_code == 1
        assert "Unsupported roster file type" in result.output

    def test_missing_roster_file(self, tmp_path: Path, config: Path) -> None:
        result = runner.invoke(app, ["valuate", str(tmp_path / "missing.csv"), "--config", str(config)])
        assert result.exit_code == 1

    def test_json_roster(self, tmp_path: Path, config: Path) -> None:
        path = tmp_path / "roster.json"
        path.write_text(json.dumps({"players": [{"Name": "A", "Pos": "K", "Rush_TD": 10}]}))
        result = runner.invoke(app, ["valuate", str(path), "--config", str(config), "--json"])
        assert result.exit_code == 0, result.output
        [player] = json.loads(result.stdout)
        assert player["id"] == "a-fa"
        assert player["fantasy_pts"] == 60


class TestTiers:
    def test_all_positions(self, roster: Path, prefs: Path, config: Path) -> None:
        result = runner.invoke(app, ["tiers", str(roster), "--prefs", str(prefs), "--config", str(config)])
        assert result.exit_code == 0, result.output
        assert "Position scarcity" in result.output

    def test_single_position(self, roster: Path, config: Path) -> None:
        result = runner.invoke(app, ["tiers", str(roster), "--config", str(config), "--position", "QB"])
        assert result.exit_code == 0, result.output
        assert "QB" in result.output
        assert "RB:" not in result.output


class TestPlan:
    def test_sixteen_rounds(self, roster: Path, prefs: Path, config: Path) -> None:
        result = runner.invoke(app, ["plan", str(roster), "--prefs", str(prefs), "--config", str(config)])
        assert result.exit_code == 0, result.output
        assert "Round 1 (pick 6)" in result.output
        assert "Round 16" in result.output

    def test_yaml_settings_and_slot_option(self, roster: Path, tmp_path: Path) -> None:
        config = tmp_path / "league.yaml"
        config.write_text("valuation:\n  league_size: 10\ndraft:\n  draft_slot: 3\n")
        result = runner.invoke(app, ["plan", str(roster), "--config", str(config)])
        assert result.exit_code == 0, result.output
        assert "Round 1 (pick 3)" in result.output
        assert "Round 2 (pick 18)" in result.output

        result = runner.invoke(app, ["plan", str(roster), "--config", str(config), "--slot", "10"])
        assert "Round 1 (pick 10)" in result.output
        assert "Round 2 (pick 11)" in result.output

    def test_slot_out_of_range(self, roster: Path, config: Path) -> None:
        result = runner.invoke(app, ["plan", str(roster), "--config", str(config), "--slot", "13"])
        assert result.exit_code == 1
        assert "draft_slot must be between 1 and 12" in result.output


class TestAnalyze:
    def test_nothing_rated(self, roster: Path, config: Path) -> None:
        result = runner.invoke(app, ["analyze", str(roster), "--config", str(config)])
        assert result.exit_code == 0, result.output
        assert "The Balanced Builder" in result.output
        assert "(overall)" in result.output

    def test_position_scope(self, roster: Path, prefs: Path, config: Path) -> None:
        result = runner.invoke(
            app, ["analyze", str(roster), "--prefs", str(prefs), "--config", str(config), "--position", "wr"]
        )
        assert result.exit_code == 0, result.output
        assert "(WR)" in result.output

    def test_stale_preferences_degrade_to_unrated(self, roster: Path, tmp_path: Path, config: Path) -> None:
        stale = tmp_path / "stale.json"
        stale.write_text(json.dumps({"draftswipe_prefs_v2": {"josh-allen-buf": 2}}))
        result = runner.invoke(app, ["analyze", str(roster), "--prefs", str(stale), "--config", str(config)])
        assert result.exit_code == 0, result.output
        assert "Rated 0" in result.output


class TestAuction:
    def test_default_plan(self, roster: Path, prefs: Path, config: Path) -> None:
        result = runner.invoke(app, ["auction", str(roster), "--prefs", str(prefs), "--config", str(config)])
        assert result.exit_code == 0, result.output
        assert "Auction plan $200 (Preference-weighted)" in result.output

    def test_preset(self, roster: Path, prefs: Path, config: Path) -> None:
        result = runner.invoke(
            app, ["auction", str(roster), "--prefs", str(prefs), "--config", str(config), "--strategy", "balanced"]
        )
        assert result.exit_code == 0, result.output
        assert "Balanced Roster" in result.output

    def test_unknown_strategy(self, roster: Path, config: Path) -> None:
        result = runner.invoke(app, ["auction", str(roster), "--config", str(config), "--strategy", "yolo"])
        assert result.exit_code == 1
        assert "Unknown strategy: 'yolo'" in result.output

    def test_strategy_file(self, roster: Path, tmp_path: Path, config: Path) -> None:
        path = tmp_path / "strategy.yaml"
        path.write_text("name: zero_rb\nlabel: Zero RB\nslot_weights:\n  RB1: 0.5\n  WR1: 3\n")
        result = runner.invoke(app, ["auction", str(roster), "--config", str(config), "--strategy-file", str(path)])
        assert result.exit_code == 0, result.output
        assert "Zero RB" in result.output

    def test_bad_strategy_file(self, roster: Path, tmp_path: Path, config: Path) -> None:
        path = tmp_path / "strategy.yaml"
        path.write_text("- not a mapping\n")
        result = runner.invoke(app, ["auction", str(roster), "--config", str(config), "--strategy-file", str(path)])
        assert result.exit_code == 1

    def test_null_slot_weight(self, roster: Path, tmp_path: Path, config: Path) -> None:
        path = tmp_path / "strategy.yaml"
        path.write_text("slot_weights:\n  RB1: null\n")
        result = runner.invoke(app, ["auction", str(roster), "--config", str(config), "--strategy-file", str(path)])
        assert result.exit_code == 1
        assert "slot weight for RB1" in result.output


class TestSynergy:
    def test_report(self, roster: Path, prefs: Path, config: Path) -> None:
        result = runner.invoke(app, ["synergy", str(roster), "--prefs", str(prefs), "--config", str(config)])
        assert result.exit_code == 0, result.output
        assert "QB stacks" in result.output
        assert "KC" in result.output

    def test_nothing_rated(self, roster: Path, config: Path) -> None:
        result = runner.invoke(app, ["synergy", str(roster), "--config", str(config)])
        assert result.exit_code == 0, result.output
        assert "Your bye weeks are well distributed" in result.output
