import dataclasses
import json
from collections.abc import Mapping, Sequence

from rich.console import Console
from rich.table import Table

from draftswipe.domain.analysis import PreferenceAnalysis
from draftswipe.domain.auction import AuctionPlan
from draftswipe.domain.draft_plan import RoundTarget
from draftswipe.domain.player import PlayerRecord
from draftswipe.domain.preferences import PreferenceMap
from draftswipe.domain.synergy import SynergyReport
from draftswipe.domain.tier import Tier, TierTransitions

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)

_RATING_LABELS: dict[int, str] = {2: "[green]love[/green]", 1: "like", 0: "meh", -1: "[red]pass[/red]"}


def print_error(message: str) -> None:
    err_console.print(f"[red bold]Error:[/red bold] {message}")


def _rating_label(prefs: PreferenceMap, player_id: str) -> str:
    rating = prefs.get(player_id)
    return "" if rating is None else _RATING_LABELS.get(rating, str(rating))


def players_to_json(players: Sequence[PlayerRecord]) -> str:
    return json.dumps([dataclasses.asdict(p) for p in players], indent=2)


def print_valuated_players(players: Sequence[PlayerRecord], prefs: PreferenceMap, top: int | None = None) -> None:
    """Print the valuated roster, best VORP first."""
    if not players:
        console.print("No players to value.")
        return
    ranked = sorted(players, key=lambda p: p.vorp, reverse=True)
    if top is not None:
        ranked = ranked[:top]
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Rank", justify="right")
    table.add_column("Player")
    table.add_column("Pos")
    table.add_column("Team")
    table.add_column("Points", justify="right")
    table.add_column("VORP", justify="right")
    table.add_column("$", justify="right")
    table.add_column("Rating")
    for rank, p in enumerate(ranked, start=1):
        table.add_row(
            str(rank),
            p.name,
            p.position,
            p.team,
            f"{p.fantasy_pts:.1f}",
            f"{p.vorp:.1f}",
            f"${p.auction}",
            _rating_label(prefs, p.id),
        )
    console.print(table)


def print_tiers(tiers: Mapping[str, Sequence[Tier]], prefs: PreferenceMap) -> None:
    if not any(tiers.values()):
        console.print("No tiers built.")
        return
    for position, position_tiers in tiers.items():
        if not position_tiers:
            continue
        console.print(f"\n[bold]{position}[/bold]")
        table = Table(show_edge=False, pad_edge=False)
        table.add_column("Tier", justify="right")
        table.add_column("Quality")
        table.add_column("Players")
        table.add_column("Avg VORP", justify="right")
        table.add_column("Price", justify="right")
        table.add_column("Drop", justify="right")
        table.add_column("Advice")
        for tier in position_tiers:
            names = ", ".join(
                f"{p.name} ({label})" if (label := _rating_label(prefs, p.id)) else p.name for p in tier.players
            )
            drop = f"{tier.vorp_drop_to_next:.1f}"
            if tier.is_chasm:
                drop = f"[red bold]{drop}[/red bold]"
            table.add_row(
                str(tier.tier_number),
                tier.quality,
                names,
                f"{tier.stats.avg_vorp:.1f}",
                f"${tier.price_range.min}-{tier.price_range.max}",
                drop,
                f"{tier.recommendation.priority}: {tier.recommendation.strategy}",
            )
        console.print(table)


def print_transitions(transitions: TierTransitions) -> None:
    if transitions.critical_decisions:
        console.print("\n[bold]Critical decisions[/bold]")
        for decision in transitions.critical_decisions:
            console.print(f"  [{decision.urgency}] {decision.position} tier {decision.tier_number}: {decision.message}")
    if transitions.position_priority:
        console.print("\n[bold]Position scarcity[/bold]")
        for scarcity in transitions.position_priority:
            console.print(
                f"  {scarcity.position}: {scarcity.priority}"
                f" (top-tier targets {scarcity.top_tier_count}, liked {scarcity.total_liked},"
                f" dropoffs {scarcity.major_dropoffs})"
            )


def print_round_targets(plan: Sequence[RoundTarget]) -> None:
    for target in plan:
        console.print(f"\n[bold]Round {target.round}[/bold] (pick {target.pick_number}) {target.strategy}")
        console.print(f"  [dim]{target.context}[/dim]")
        if not target.recommendations:
            console.print("  No targets projected for this round.")
            continue
        for rec in target.recommendations:
            names = ", ".join(p.name for p in rec.targets)
            console.print(f"  {rec.position} [{rec.priority}] {names}")
            console.print(f"    {rec.reason}")


def print_preference_analysis(analysis: PreferenceAnalysis) -> None:
    stats = analysis.stats
    scope = stats.position or "overall"
    console.print(f"[bold]{analysis.archetype.icon} {analysis.archetype.name}[/bold] ({scope})")
    console.print(f"  {analysis.archetype.description}")
    dist = stats.distribution.formatted()
    console.print(
        f"  Rated {stats.total_rated}: love {dist['love']}%, like {dist['like']}%,"
        f" meh {dist['meh']}%, pass {dist['pass']}%"
    )
    if stats.sleepers:
        console.print(f"  Sleepers: {', '.join(p.name for p in stats.sleepers)}")
    for narrative in analysis.narratives:
        console.print(f"\n{narrative.icon} [bold]{narrative.title}[/bold] [dim]({narrative.priority})[/dim]")
        console.print(f"  {narrative.summary}")
        console.print(f"  {narrative.full_text}")
        for action in narrative.actionable:
            console.print(f"  - {action}")


def print_auction_plan(plan: AuctionPlan) -> None:
    label = plan.strategy.label if plan.strategy is not None else "Preference-weighted"
    console.print(f"[bold]Auction plan[/bold] ${plan.budget} ({label})")
    for position, amount in plan.budget_allocation.items():
        console.print(f"  {position}: ${amount}")
    if plan.strategy is not None:
        rules = plan.strategy.nomination_rules
        console.print(f"  Early: {rules.early}")
        console.print(f"  Mid: {rules.mid}")
        console.print(f"  Late: {rules.late}")

    if plan.target_values:
        table = Table(show_edge=False, pad_edge=False)
        table.add_column("Target")
        table.add_column("Pos")
        table.add_column("Value", justify="right")
        table.add_column("Max bid", justify="right")
        table.add_column("Why")
        for target in plan.target_values:
            table.add_row(
                target.player.name,
                target.player.position,
                f"${target.player.auction}",
                f"${target.max_bid}",
                target.reason,
            )
        console.print(table)

    if plan.nominations:
        console.print("\n[bold]Nominations[/bold]")
        for nomination in plan.nominations:
            console.print(f"  [{nomination.priority}] {nomination.player.name}: {nomination.reason}")


def print_synergy_report(report: SynergyReport) -> None:
    if report.qb_stacks:
        console.print("[bold]QB stacks[/bold]")
        for stack in report.qb_stacks:
            console.print(f"  {stack.team} ({stack.strength:.1f}): {stack.narrative}")
    if report.team_stacks:
        console.print("[bold]Team stacks[/bold]")
        for team_stack in report.team_stacks:
            console.print(f"  {team_stack.team} ({team_stack.risk} risk): {team_stack.narrative}")
    if report.handcuffs:
        console.print("[bold]Handcuffs[/bold]")
        for handcuff in report.handcuffs:
            console.print(f"  {handcuff.team} ({handcuff.strategy}): {handcuff.narrative}")
    console.print(f"[bold]Bye weeks[/bold] ({report.bye_weeks.risk} risk) {report.bye_weeks.narrative}")
    for division in report.divisional_stacks:
        console.print(f"[bold]{division.division}[/bold] ({division.risk} risk): {division.narrative}")
    for insight in report.insights:
        console.print(f"\n[bold]{insight.title}[/bold] [dim]({insight.priority})[/dim]")
        console.print(f"  {insight.summary}")
        console.print(f"  {insight.detail}")
        for action in insight.actionable:
            console.print(f"  - {action}")
