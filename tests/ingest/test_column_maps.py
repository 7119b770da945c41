import math

from draftswipe.ingest.column_maps import canonical_header, has_identity, normalize_row, slugify


class TestCanonicalHeader:
    def test_folds_separators_and_case(self) -> None:
        assert canonical_header("Pass Yds") == canonical_header("Pass_Yds") == canonical_header("passYds")

    def test_slugify(self) -> None:
        assert slugify("Ja'Marr Chase") == "ja-marr-chase"


class TestHasIdentity:
    def test_requires_name_and_position(self) -> None:
        assert has_identity({"Name": "A", "Pos": "WR"})
        assert not has_identity({"Name": "A"})
        assert not has_identity({"Name": "  ", "Pos": "WR"})


class TestNormalizeRow:
    def test_spreadsheet_headers(self) -> None:
        record = normalize_row(
            {
                "Player_Name": "Josh Allen",
                "Team": "buf",
                "Position": "QB",
                "Pass_Yd": "4,306",
                "Pass_TD": "29",
                "Rush_Yd": "523",
                "ADP": "24.5",
                "Bye": "12",
            }
        )
        assert record.id == "josh-allen-buf"
        assert record.team == "BUF"
        assert record.position == "QB"
        assert record.stat("pass_yds") == 4306.0
        assert record.stat("pass_td") == 29.0
        assert record.stat("rush_yds") == 523.0
        assert record.adp == 24.5
        assert record.bye_week == 12

    def test_camel_case_headers(self) -> None:
        record = normalize_row({"Name": "A", "Pos": "WR", "recYds": 1100, "recTD": 9, "Rec": 95})
        assert record.stat("rec_yds") == 1100.0
        assert record.stat("rec_td") == 9.0
        assert record.stat("receptions") == 95.0

    def test_explicit_id_wins(self) -> None:
        assert normalize_row({"id": "p-17", "Name": "A", "Pos": "RB"}).id == "p-17"

    def test_missing_fields_fall_back(self) -> None:
        record = normalize_row({"Pass_Yd": "abc", "Rush_TD": math.nan}, index=7)
        assert record.id == "player-7"
        assert record.name == ""
        assert record.team == "FA"
        assert record.position == ""
        assert record.stat("pass_yds") == 0.0
        assert record.stat("rush_td") == 0.0
        assert record.adp is None
        assert record.overall_rank is None
        assert record.experience is None
        assert record.bye_week is None

    def test_every_stat_field_present(self) -> None:
        record = normalize_row({"Name": "A", "Pos": "TE"})
        assert set(record.raw_stats) == {
            "pass_yds",
            "pass_td",
            "pass_int",
            "rush_yds",
            "rush_td",
            "receptions",
            "rec_yds",
            "rec_td",
            "fumbles_lost",
        }
        assert all(v == 0.0 for v in record.raw_stats.values())

    def test_position_aliases(self) -> None:
        assert normalize_row({"Name": "Bills", "Pos": "def"}).position == "DST"
        assert normalize_row({"Name": "Bills", "Pos": "D/ST"}).position == "DST"

    def test_rookie_markers(self) -> None:
        assert normalize_row({"Name": "A", "Pos": "RB", "Rookie": "Y"}).rookie
        assert normalize_row({"Name": "A", "Pos": "RB", "Is_Rookie": True}).rookie
        assert not normalize_row({"Name": "A", "Pos": "RB", "Rookie": "N"}).rookie

    def test_non_positive_adp_and_rank_are_unknown(self) -> None:
        record = normalize_row({"Name": "A", "Pos": "RB", "ADP": "0", "Overall_Rank": "-3"})
        assert record.adp is None
        assert record.overall_rank is None

    def test_experience_zero_is_kept(self) -> None:
        assert normalize_row({"Name": "A", "Pos": "RB", "Experience": "0"}).experience == 0

    def test_derived_values_left_at_zero(self) -> None:
        record = normalize_row({"Name": "A", "Pos": "RB", "Rush_Yd": 1000})
        assert record.fantasy_pts == 0.0
        assert record.vorp == 0.0
        assert record.auction == 0
