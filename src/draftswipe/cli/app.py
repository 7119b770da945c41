import dataclasses
from pathlib import Path
from typing import Annotated

import typer
import yaml
from config import ConfigurationSet

from draftswipe.cli._logging import configure_logging
from draftswipe.cli._output import (
    players_to_json,
    print_auction_plan,
    print_error,
    print_preference_analysis,
    print_round_targets,
    print_synergy_report,
    print_tiers,
    print_transitions,
    print_valuated_players,
)
from draftswipe.config import (
    ConfigError,
    build_overrides,
    create_config,
    load_draft_settings,
    load_valuation_config,
    narrative_limit,
    preferences_storage_key,
)
from draftswipe.domain.auction import AuctionStrategy
from draftswipe.domain.player import PlayerRecord, Position
from draftswipe.draft.strategy_presets import STRATEGY_PRESETS, load_strategy_file
from draftswipe.draft.tables import DEFAULT_PLAN_SETTINGS
from draftswipe.ingest.loader import load_roster_rows
from draftswipe.ingest.preference_store import load_preferences
from draftswipe.services import (
    analyze_preferences,
    analyze_synergies,
    analyze_tier_transitions,
    build_tiers,
    generate_auction_strategy,
    generate_round_targets,
)
from draftswipe.valuation import ValuationConfig, valuate


app = typer.Typer(name="draftswipe", help="Draftswipe - fantasy football draft prep from your player ratings")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable DEBUG logging")] = False,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Only log warnings")] = False,
) -> None:
    """Draftswipe - fantasy football draft prep from your player ratings."""
    configure_logging(verbose=verbose, quiet=quiet)
    if ctx.invoked_subcommand is None:
        raise typer.Exit()


_RosterArg = Annotated[Path, typer.Argument(help="Roster file (CSV, TSV or JSON)")]
_PrefsOpt = Annotated[Path | None, typer.Option("--prefs", help="JSON dump of the client's key-value storage")]
_ConfigOpt = Annotated[str, typer.Option("--config", help="YAML config file")]
_FormatOpt = Annotated[str | None, typer.Option("--format", help="Scoring format: std, half or ppr")]
_LeagueSizeOpt = Annotated[int | None, typer.Option("--league-size", help="Teams in the league")]
_PositionOpt = Annotated[str | None, typer.Option("--position", help="Limit to one position (QB, RB, WR, TE, K, DST)")]


@dataclasses.dataclass(frozen=True)
class _Session:
    cfg: ConfigurationSet
    valuation_config: ValuationConfig
    players: list[PlayerRecord]
    prefs: dict[str, int]


def _load_session(
    roster: Path,
    prefs_path: Path | None,
    config_path: str,
    scoring_format: str | None = None,
    league_size: int | None = None,
    draft_slot: int | None = None,
) -> _Session:
    """Load config, valuate the roster and read preferences; exit with code 1 on bad input."""
    try:
        cfg = create_config(
            yaml_path=config_path,
            overrides=build_overrides(scoring_format, league_size, draft_slot),
        )
        valuation_config = load_valuation_config(cfg)
        rows = load_roster_rows(roster)
        prefs = load_preferences(prefs_path, preferences_storage_key(cfg)) if prefs_path else {}
    except (ConfigError, ValueError, OSError, yaml.YAMLError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    return _Session(cfg=cfg, valuation_config=valuation_config, players=valuate(rows, valuation_config), prefs=prefs)


def _validate_position(position: str | None) -> str | None:
    if position is None:
        return None
    normalized = position.upper()
    options = [p.value for p in Position]
    if normalized not in options:
        print_error(f"Unknown position: {position!r}. Options: {', '.join(options)}")
        raise typer.Exit(code=1)
    return normalized


@app.command("valuate")
def valuate_roster(
    roster: _RosterArg,
    prefs: _PrefsOpt = None,
    config: _ConfigOpt = "draftswipe.yaml",
    scoring_format: _FormatOpt = None,
    league_size: _LeagueSizeOpt = None,
    position: _PositionOpt = None,
    top: Annotated[int | None, typer.Option("--top", help="Show top N players")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print the valuated roster as JSON")] = False,
) -> None:
    """Score a roster and compute VORP and auction values."""
    position = _validate_position(position)
    session = _load_session(roster, prefs, config, scoring_format, league_size)
    players = [p for p in session.players if position is None or p.position == position]
    if as_json:
        typer.echo(players_to_json(players))
        return
    print_valuated_players(players, session.prefs, top=top)


@app.command()
def tiers(
    roster: _RosterArg,
    prefs: _PrefsOpt = None,
    config: _ConfigOpt = "draftswipe.yaml",
    scoring_format: _FormatOpt = None,
    league_size: _LeagueSizeOpt = None,
    position: _PositionOpt = None,
) -> None:
    """Group each position into VORP tiers and flag the breaks that force decisions."""
    position = _validate_position(position)
    session = _load_session(roster, prefs, config, scoring_format, league_size)
    position_tiers = build_tiers(session.players, session.prefs)
    if position is not None:
        position_tiers = {pos: t for pos, t in position_tiers.items() if pos == position}
    print_tiers(position_tiers, session.prefs)
    print_transitions(analyze_tier_transitions(position_tiers))


@app.command()
def plan(
    roster: _RosterArg,
    prefs: _PrefsOpt = None,
    config: _ConfigOpt = "draftswipe.yaml",
    scoring_format: _FormatOpt = None,
    league_size: _LeagueSizeOpt = None,
    slot: Annotated[int | None, typer.Option("--slot", help="Your 1-based draft slot")] = None,
) -> None:
    """Build a 16-round snake draft plan from your ratings."""
    session = _load_session(roster, prefs, config, scoring_format, league_size, slot)
    try:
        settings = load_draft_settings(session.cfg)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    plan_settings = dataclasses.replace(DEFAULT_PLAN_SETTINGS, min_targets=settings.min_targets)
    targets = generate_round_targets(
        session.players,
        session.prefs,
        build_tiers(session.players, session.prefs),
        league_size=settings.league_size,
        draft_slot=settings.draft_slot,
        settings=plan_settings,
    )
    print_round_targets(targets)


@app.command()
def analyze(
    roster: _RosterArg,
    prefs: _PrefsOpt = None,
    config: _ConfigOpt = "draftswipe.yaml",
    position: _PositionOpt = None,
) -> None:
    """Classify your drafting personality and explain your tendencies."""
    position = _validate_position(position)
    session = _load_session(roster, prefs, config)
    try:
        limit = narrative_limit(session.cfg)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_preference_analysis(analyze_preferences(session.players, session.prefs, position, narrative_limit=limit))


@app.command()
def auction(
    roster: _RosterArg,
    prefs: _PrefsOpt = None,
    config: _ConfigOpt = "draftswipe.yaml",
    scoring_format: _FormatOpt = None,
    league_size: _LeagueSizeOpt = None,
    strategy: Annotated[
        str | None, typer.Option("--strategy", help=f"Auction strategy. Options: {', '.join(STRATEGY_PRESETS)}")
    ] = None,
    strategy_file: Annotated[
        Path | None, typer.Option("--strategy-file", help="YAML file with a custom auction strategy")
    ] = None,
) -> None:
    """Plan an auction budget, bid targets and nominations."""
    preset: AuctionStrategy | None = None
    if strategy is not None:
        if strategy not in STRATEGY_PRESETS:
            print_error(f"Unknown strategy: {strategy!r}. Options: {', '.join(STRATEGY_PRESETS)}")
            raise typer.Exit(code=1)
        preset = STRATEGY_PRESETS[strategy]
    if strategy_file is not None:
        try:
            preset = load_strategy_file(strategy_file)
        except (ValueError, OSError, yaml.YAMLError) as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e

    session = _load_session(roster, prefs, config, scoring_format, league_size)
    position_tiers = build_tiers(session.players, session.prefs)
    print_auction_plan(
        generate_auction_strategy(position_tiers, session.prefs, session.valuation_config.budget_per_team, preset)
    )


@app.command()
def synergy(
    roster: _RosterArg,
    prefs: _PrefsOpt = None,
    config: _ConfigOpt = "draftswipe.yaml",
) -> None:
    """Find stacks, handcuffs, bye-week clusters and divisional concentration."""
    session = _load_session(roster, prefs, config)
    print_synergy_report(analyze_synergies(session.players, session.prefs))
