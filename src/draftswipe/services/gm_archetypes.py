"""GM archetypes: ordered predicate tables over a user's rating profile.

Each table is evaluated top to bottom and the first archetype whose predicate
holds wins. Predicates overlap, so the order is the priority. Every table ends
in a Balanced Builder that always matches.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING, TypeAlias

from draftswipe.domain.analysis import GMArchetype
from draftswipe.domain.preferences import Rating
from draftswipe.numbers import mean, safe_ratio

if TYPE_CHECKING:
    from collections.abc import Sequence

    from draftswipe.domain.analysis import PreferenceStats
    from draftswipe.domain.player import PlayerRecord
    from draftswipe.domain.preferences import PreferenceMap

logger = logging.getLogger(__name__)

Roster: TypeAlias = "Sequence[PlayerRecord]"


# -- Helpers -----------------------------------------------------------------


def _rated_at_least(prefs: PreferenceMap, player: PlayerRecord, rating: int) -> bool:
    value = prefs.get(player.id)
    return value is not None and value >= rating


def _rated(prefs: PreferenceMap, player: PlayerRecord, rating: int) -> bool:
    return prefs.get(player.id) == rating


def _at_position(roster: Roster, position: str) -> list[PlayerRecord]:
    """Players at a position, best fantasy points first."""
    return sorted((p for p in roster if p.position == position), key=lambda p: p.fantasy_pts, reverse=True)


def _position_ranks(roster: Roster) -> dict[str, tuple[int, int]]:
    """Player id -> (1-based rank within position, position pool size)."""
    by_position: dict[str, list[PlayerRecord]] = defaultdict(list)
    for p in roster:
        by_position[p.position].append(p)
    ranks: dict[str, tuple[int, int]] = {}
    for players in by_position.values():
        ordered = sorted(players, key=lambda p: p.fantasy_pts, reverse=True)
        for rank, p in enumerate(ordered, start=1):
            ranks.setdefault(p.id, (rank, len(ordered)))
    return ranks


def _by_team(players: Sequence[PlayerRecord]) -> dict[str, list[PlayerRecord]]:
    teams: dict[str, list[PlayerRecord]] = defaultdict(list)
    for p in players:
        teams[p.team].append(p)
    return teams


def _is_young(player: PlayerRecord, max_experience: int = 2) -> bool:
    return player.rookie or (player.experience is not None and player.experience <= max_experience)


# -- Overall -----------------------------------------------------------------


def _architect_of_chaos(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    ranks = _position_ranks(roster)
    loved = [p for p in roster if _rated(prefs, p, Rating.LOVE)]
    top_loved = [p for p in loved if ranks[p.id][0] <= 10]
    bottom_loved = [p for p in loved if ranks[p.id][0] > ranks[p.id][1] * 0.6]
    high_variance = stats.distribution.love > 5 and stats.distribution.passed > 40
    return len(top_loved) >= 3 and len(bottom_loved) >= 3 and high_variance


def _moneyball_gm(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    liked = [p for p in roster if _rated_at_least(prefs, p, Rating.LIKE)]
    value_ratio = sum(1 for p in liked if p.auction <= 10) / (len(liked) or 1)
    avoids_expensive = sum(1 for p in roster if p.auction > 30 and _rated(prefs, p, Rating.PASS))
    loves_rookies = stats.rookie_love >= 4 or sum(1 for p in liked if p.rookie) >= 4
    return value_ratio > 0.6 and avoids_expensive >= 5 and loves_rookies


def _studs_and_duds(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    expensive_loved = sum(1 for p in roster if _rated(prefs, p, Rating.LOVE) and p.auction >= 25)
    cheap_kept = sum(1 for p in roster if _rated_at_least(prefs, p, Rating.MEH) and p.auction <= 5)
    middle_passed = sum(1 for p in roster if 5 < p.auction < 25 and _rated(prefs, p, Rating.PASS))
    return expensive_loved >= 6 and cheap_kept >= 15 and middle_passed >= 20


def _position_specialist(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    loved_counts = dict.fromkeys(("QB", "RB", "WR", "TE"), 0)
    fade_counts = dict.fromkeys(("QB", "RB", "WR", "TE"), 0)
    for p in roster:
        if p.position not in loved_counts:
            continue
        if _rated(prefs, p, Rating.LOVE):
            loved_counts[p.position] += 1
        elif _rated(prefs, p, Rating.PASS):
            fade_counts[p.position] += 1
    max_loved = max(loved_counts.values())
    dominant = safe_ratio(max_loved, sum(loved_counts.values())) > 0.4
    return dominant and max_loved >= 8 and max(fade_counts.values()) >= 15


def _correlation_commander(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    teams = _by_team([p for p in roster if _rated_at_least(prefs, p, Rating.LIKE)])
    stacks = sum(1 for players in teams.values() if len(players) >= 3)
    qb_stacks = sum(
        1
        for players in teams.values()
        if any(p.position == "QB" for p in players) and any(p.position in ("WR", "TE") for p in players)
    )
    return stacks >= 3 and qb_stacks >= 2


def _tinker_tailor(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    dist = stats.distribution
    balanced = abs(dist.love - dist.like) < 10 and abs(dist.like - dist.meh) < 15 and dist.passed < 30
    diverse = len(stats.value_metrics.high_value) >= 5 and len(stats.value_metrics.low_value) >= 10
    no_extreme_bias = dist.love < 15 and dist.passed < 40
    return balanced and diverse and no_extreme_bias


def _anti_fantasy(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    top_players = [p for position in ("QB", "RB", "WR", "TE") for p in _at_position(roster, position)[:5]]
    faded_elites = sum(1 for p in top_players if _rated(prefs, p, Rating.PASS))
    ranks = _position_ranks(roster)
    loved_deep = sum(
        1 for p in roster if _rated(prefs, p, Rating.LOVE) and ranks[p.id][0] > ranks[p.id][1] * 0.7
    )
    return faded_elites >= 10 and loved_deep >= 8


def _fantasy_scientist(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    loved = [p for p in roster if _rated(prefs, p, Rating.LOVE)]
    if not loved:
        return False
    follows_projections = mean([p.fantasy_pts for p in loved]) > mean([p.fantasy_pts for p in roster]) * 1.5
    consistent = sum(1 for p in loved if abs(p.auction - p.fantasy_pts / 10) < 5) / len(loved) > 0.7
    return follows_projections and consistent and stats.distribution.love < 10


def _dynasty_in_disguise(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    liked = [p for p in roster if _rated_at_least(prefs, p, Rating.LIKE)]
    young = [p for p in liked if _is_young(p)]
    avoids_veterans = sum(
        1 for p in roster if p.experience is not None and p.experience >= 8 and _rated(prefs, p, Rating.PASS)
    )
    return safe_ratio(len(young), len(liked)) > 0.4 and len(young) >= 15 and avoids_veterans >= 10


def _risk_averse_ruler(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    liked = [p for p in roster if _rated_at_least(prefs, p, Rating.LIKE)]
    rookies_liked = sum(1 for p in liked if p.rookie)
    consistent = sum(1 for p in liked if p.fantasy_pts > 150 and 10 < p.auction < 40)
    avoided_young = sum(1 for p in roster if _is_young(p) and _rated(prefs, p, Rating.PASS))
    high_pass_rate = stats.distribution.passed > 50
    low_love_rate = stats.distribution.love < 8
    return rookies_liked <= 1 and consistent >= 10 and (avoided_young >= 5 or high_pass_rate) and low_love_rate


def _value_seeker(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    return len(stats.value_metrics.low_value) > 20


def _enthusiast(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    return stats.distribution.love > 12


def _always(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    return True


BALANCED_BUILDER = GMArchetype(
    key="balanced",
    name="The Balanced Builder",
    icon="⚖️",
    description="You maintain a measured approach",
    predicate=_always,
)

OVERALL_ARCHETYPES: tuple[GMArchetype, ...] = (
    GMArchetype(
        "architectOfChaos",
        "The Architect of Chaos",
        "🌪️",
        "You blend elite talent with deep sleepers across all positions",
        _architect_of_chaos,
    ),
    GMArchetype(
        "moneyballGM", "The Moneyball GM", "💰", "You find inefficiencies and build through value", _moneyball_gm
    ),
    GMArchetype(
        "studsAndDuds",
        "The Studs and Duds Strategist",
        "💎",
        "You go all-in on elite players and punt the rest",
        _studs_and_duds,
    ),
    GMArchetype(
        "positionSpecialist",
        "The Position Specialist",
        "🎯",
        "You heavily favor specific positions in your build",
        _position_specialist,
    ),
    GMArchetype(
        "correlationCommander",
        "The Correlation Commander",
        "🔗",
        "You build around team stacks and game theory",
        _correlation_commander,
    ),
    GMArchetype(
        "theTinkerTailor",
        "The Tinker Tailor",
        "🔧",
        "You see every player as having potential value at the right price",
        _tinker_tailor,
    ),
    GMArchetype(
        "antifantasy",
        "The Anti-Fantasy Contrarian",
        "🙃",
        "Your board completely defies consensus rankings",
        _anti_fantasy,
    ),
    GMArchetype(
        "theScientist",
        "The Fantasy Scientist",
        "🧪",
        "You follow projections and analytics religiously",
        _fantasy_scientist,
    ),
    GMArchetype(
        "dynastyInDisguise",
        "Dynasty in Disguise",
        "👶",
        "You draft for the future even in redraft",
        _dynasty_in_disguise,
    ),
    GMArchetype(
        "riskAverseRuler",
        "The Risk-Averse Ruler",
        "🛡️",
        "You prioritize floor and proven production",
        _risk_averse_ruler,
    ),
    GMArchetype("valueSeeker", "The Value Seeker", "💵", "You consistently find underpriced talent", _value_seeker),
    GMArchetype("enthusiast", "The Fantasy Enthusiast", "🎊", "You see potential everywhere", _enthusiast),
    BALANCED_BUILDER,
)


# -- QB ----------------------------------------------------------------------


def _elite_qb_truther(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    loved_elites = [p for p in _at_position(roster, "QB")[:5] if _rated(prefs, p, Rating.LOVE)]
    return len(loved_elites) >= 2 and any(p.auction >= 20 for p in loved_elites)


def _matchup_maestro(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    mid_tier = _at_position(roster, "QB")[7:18]
    liked_mid = sum(1 for p in mid_tier if _rated_at_least(prefs, p, Rating.LIKE))
    return liked_mid >= 4 and stats.distribution.love < 15


def _stack_architect(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    liked_receivers_by_team = {
        p.team for p in roster if p.position in ("WR", "TE") and _rated_at_least(prefs, p, Rating.LIKE)
    }
    stacked = sum(
        1
        for p in roster
        if p.position == "QB" and _rated_at_least(prefs, p, Rating.LIKE) and p.team in liked_receivers_by_team
    )
    return stacked >= 2


def _konami_code(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    qbs = _at_position(roster, "QB")
    loved_late = sum(1 for p in qbs[11:] if _rated(prefs, p, Rating.LOVE))
    passed_elites = sum(1 for p in qbs[:8] if _rated(prefs, p, Rating.PASS))
    return loved_late == 2 and passed_elites >= 4


def _chaos_agent(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    qbs = _at_position(roster, "QB")
    loved_elite = any(_rated(prefs, p, Rating.LOVE) for p in qbs[:5])
    loved_sleeper = any(_rated(prefs, p, Rating.LOVE) for p in qbs[15:])
    high_variance = stats.ratings.love > 0 and stats.ratings.passed > 0
    return loved_elite and loved_sleeper and high_variance


def _field_general(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    liked = [p for p in roster if p.position == "QB" and _rated_at_least(prefs, p, Rating.LIKE)]
    average = mean([p.fantasy_pts for p in liked])
    proven = sum(1 for p in liked if p.fantasy_pts > average and not p.rookie)
    return proven >= 3 and stats.ratings.love <= 3


QB_ARCHETYPES: tuple[GMArchetype, ...] = (
    GMArchetype(
        "eliteTruther",
        "The Elite QB Truther",
        "👑",
        "You believe championships require elite QB play",
        _elite_qb_truther,
    ),
    GMArchetype(
        "matchupMaestro",
        "The Matchup Maestro",
        "🎯",
        "You see value in the QB middle class and matchups",
        _matchup_maestro,
    ),
    GMArchetype(
        "stackArchitect", "The Stack Architect", "🏗️", "You build around QB-receiver synergy", _stack_architect
    ),
    GMArchetype(
        "konamiCode",
        "The Konami Code",
        "🎮",
        "You know the secret: wait on QB with surgical precision",
        _konami_code,
    ),
    GMArchetype("chaosAgent", "The Chaos Agent", "🌪️", "Your QB board defies conventional wisdom", _chaos_agent),
    GMArchetype("floorGeneral", "The Field General", "🛡️", "You value QB consistency above all", _field_general),
)


# -- RB ----------------------------------------------------------------------


def _bell_cow_believer(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    rbs = _at_position(roster, "RB")
    loved_top = sum(1 for p in rbs[:15] if _rated(prefs, p, Rating.LOVE))
    team_sizes = {team: len(players) for team, players in _by_team(rbs).items()}
    avoided_committees = sum(1 for p in rbs if team_sizes[p.team] > 1 and _rated(prefs, p, Rating.PASS))
    return loved_top >= 3 and avoided_committees >= 2


def _committee_fade_captain(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    faded = sum(
        1
        for players in _by_team(_at_position(roster, "RB")).values()
        if len(players) >= 2 and all(prefs.get(p.id) in (Rating.PASS, Rating.MEH) for p in players)
    )
    return faded >= 3


def _rookie_whisperer(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    loved = [p for p in roster if p.position == "RB" and _rated(prefs, p, Rating.LOVE)]
    young = [p for p in loved if _is_young(p)]
    return len(young) >= 2 and safe_ratio(len(young), len(loved)) >= 0.5


def _ppr_savant(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    def catches_passes(p: PlayerRecord) -> bool:
        rec_yds = p.stat("rec_yds")
        return safe_ratio(rec_yds, p.stat("rush_yds") + rec_yds) > 0.3 or rec_yds > 400

    liked = [p for p in roster if p.position == "RB" and _rated_at_least(prefs, p, Rating.LIKE)]
    return sum(1 for p in liked if catches_passes(p)) >= 3


def _handcuff_hoarder(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    pairs = 0
    for players in _by_team(_at_position(roster, "RB")).values():
        if len(players) < 2:
            continue
        starter, backup = players[0], players[1]
        if _rated_at_least(prefs, starter, Rating.LIKE) and _rated_at_least(prefs, backup, Rating.MEH):
            pairs += 1
    return pairs >= 2


def _zero_rb_zealot(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    rbs = _at_position(roster, "RB")
    faded_early = sum(1 for p in rbs[:20] if prefs.get(p.id) in (Rating.PASS, Rating.MEH))
    liked_late = sum(1 for p in rbs[30:] if _rated_at_least(prefs, p, Rating.LIKE))
    return faded_early >= 15 and liked_late >= 3


def _antifragile_architect(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    liked = [p for p in roster if p.position == "RB" and _rated_at_least(prefs, p, Rating.LIKE)]
    if len(liked) < 6:
        return False
    prices = [p.auction for p in liked]
    return len({p.team for p in liked}) >= 5 and max(prices) - min(prices) > 20


RB_ARCHETYPES: tuple[GMArchetype, ...] = (
    GMArchetype(
        "bellCowBeliever",
        "The Bell Cow Believer",
        "🐄",
        "You chase workhorse backs with guaranteed volume",
        _bell_cow_believer,
    ),
    GMArchetype(
        "committeeFadeCaptain",
        "The Committee Fade Captain",
        "🚫",
        "You avoid backfield committees like the plague",
        _committee_fade_captain,
    ),
    GMArchetype(
        "rookieWhisperer",
        "The Rookie Whisperer",
        "🌟",
        "You bet on young legs and untapped potential",
        _rookie_whisperer,
    ),
    GMArchetype(
        "pprSavant", "The PPR Savant", "🎯", "You target pass-catching backs for PPR dominance", _ppr_savant
    ),
    GMArchetype(
        "handcuffHoarder",
        "The Handcuff Hoarder",
        "🔒",
        "You secure your backfields with strategic handcuffs",
        _handcuff_hoarder,
    ),
    GMArchetype(
        "zeroRBZealot", "The Zero RB Zealot", "⭕", "You fade early RBs to build elite WR/TE cores", _zero_rb_zealot
    ),
    GMArchetype(
        "antifragileArchitect",
        "The Antifragile Architect",
        "🏛️",
        "You build RB depth to withstand any storm",
        _antifragile_architect,
    ),
)


# -- WR ----------------------------------------------------------------------


def _team_wr1_ids(roster: Roster) -> set[str]:
    return {players[0].id for players in _by_team(_at_position(roster, "WR")).values()}


def _alpha_accumulator(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    wr1_ids = _team_wr1_ids(roster)
    loved = [p for p in roster if p.position == "WR" and _rated(prefs, p, Rating.LOVE)]
    loved_wr1s = sum(1 for p in loved if p.id in wr1_ids)
    return loved_wr1s >= 3 and safe_ratio(loved_wr1s, len(loved)) >= 0.75


def _breakout_prophet(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    wr1_ids = _team_wr1_ids(roster)
    liked = [p for p in roster if p.position == "WR" and _rated_at_least(prefs, p, Rating.LIKE)]
    liked_secondary = sum(1 for p in liked if p.id not in wr1_ids)
    return liked_secondary >= 4 and any(p.auction <= 10 for p in liked)


def _target_hog_hunter(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    liked = [p for p in roster if p.position == "WR" and _rated_at_least(prefs, p, Rating.LIKE)]
    average = mean([p.fantasy_pts for p in liked])
    return sum(1 for p in liked if p.fantasy_pts > average * 1.1) >= 4


# Receptions are not always projected; yards over a typical 80-catch season stand in for YPR.
_ASSUMED_RECEPTIONS = 80


def _field_stretcher(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    liked = [p for p in roster if p.position == "WR" and _rated_at_least(prefs, p, Rating.LIKE)]
    big_play = sum(
        1 for p in liked if p.stat("rec_yds") / _ASSUMED_RECEPTIONS > 15 or p.stat("rec_yds") > 1200
    )
    return big_play >= 3 and stats.distribution.meh > 30


def _slot_surgeon(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    liked = [p for p in roster if p.position == "WR" and _rated_at_least(prefs, p, Rating.LIKE)]
    possession = sum(1 for p in liked if p.stat("rec_yds") / _ASSUMED_RECEPTIONS < 13 and p.fantasy_pts > 150)
    return possession >= 3 and stats.ratings.passed > stats.ratings.love * 2


def _value_vulture(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    cheap_liked = sum(
        1 for p in roster if p.position == "WR" and _rated_at_least(prefs, p, Rating.LIKE) and p.auction <= 15
    )
    expensive_fades = sum(
        1 for p in roster if p.position == "WR" and p.auction > 30 and _rated(prefs, p, Rating.PASS)
    )
    return cheap_liked >= 5 and expensive_fades >= 2


def _correlation_king(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    liked_qb_teams = {p.team for p in roster if p.position == "QB" and _rated_at_least(prefs, p, Rating.LIKE)}
    liked = [p for p in roster if p.position == "WR" and _rated_at_least(prefs, p, Rating.LIKE)]
    stacked = sum(1 for p in liked if p.team in liked_qb_teams)
    return stacked >= 3 and safe_ratio(stacked, len(liked)) >= 0.6


WR_ARCHETYPES: tuple[GMArchetype, ...] = (
    GMArchetype(
        "alphaAccumulator",
        "The Alpha Accumulator",
        "👑",
        "You target true WR1s who dominate targets",
        _alpha_accumulator,
    ),
    GMArchetype(
        "breakoutProphet", "The Breakout Prophet", "🔮", "You identify WR2/3s ready to ascend", _breakout_prophet
    ),
    GMArchetype(
        "targetHogHunter", "The Target Hog Hunter", "🎯", "You chase volume above all else", _target_hog_hunter
    ),
    GMArchetype(
        "fieldStretcher", "The Field Stretcher", "⚡", "You love explosive big-play receivers", _field_stretcher
    ),
    GMArchetype("slotSurgeon", "The Slot Surgeon", "🔧", "You value possession receivers and floor", _slot_surgeon),
    GMArchetype("valueVulture", "The Value Vulture", "💎", "You find WR gold in the discount bin", _value_vulture),
    GMArchetype(
        "correlationKing", "The Correlation King", "🔗", "You stack WRs with their QBs for ceiling", _correlation_king
    ),
)


# -- TE ----------------------------------------------------------------------


def _positional_advantage_pursuer(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    loved_elites = [p for p in _at_position(roster, "TE")[:4] if _rated(prefs, p, Rating.LOVE)]
    return len(loved_elites) >= 2 and any(p.auction >= 15 for p in loved_elites)


def _te_truther(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    tes = _at_position(roster, "TE")
    rated = [p for p in tes if p.id in prefs]
    if len(rated) < 8:
        return False
    liked = sum(1 for p in tes if _rated_at_least(prefs, p, Rating.LIKE))
    passed = sum(1 for p in tes if _rated(prefs, p, Rating.PASS))
    return liked / len(rated) >= 0.4 and passed / len(rated) <= 0.5 and liked >= 4


def _kelce_theory_subscriber(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    tes = _at_position(roster, "TE")
    rated = [p for p in tes if p.id in prefs]
    if len(rated) < 8:
        return False
    loved_elite = sum(1 for p in tes[:5] if _rated(prefs, p, Rating.LOVE))
    liked = sum(1 for p in tes if _rated_at_least(prefs, p, Rating.LIKE))
    pass_rate = sum(1 for p in tes if _rated(prefs, p, Rating.PASS)) / len(rated)
    return 1 <= loved_elite <= 2 and pass_rate >= 0.75 and liked <= 4


def _streamer_supreme(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    tes = _at_position(roster, "TE")
    liked_late = sum(1 for p in tes[10:] if _rated(prefs, p, Rating.LIKE))
    no_loves = not any(_rated(prefs, p, Rating.LOVE) for p in tes)
    return liked_late >= 4 and no_loves


def _fade_philosopher(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    tes = _at_position(roster, "TE")
    rated = sum(1 for p in tes if p.id in prefs)
    passed = sum(1 for p in tes if _rated(prefs, p, Rating.PASS))
    return safe_ratio(passed, rated) >= 0.8 and passed >= 5


def _breakout_believer(stats: PreferenceStats, roster: Roster, prefs: PreferenceMap) -> bool:
    liked = [p for p in roster if p.position == "TE" and _rated_at_least(prefs, p, Rating.LIKE)]
    cheap = sum(1 for p in liked if p.auction <= 5)
    young = sum(1 for p in liked if _is_young(p, max_experience=3))
    return cheap >= 2 and young >= 2 and len(liked) <= 4


TE_ARCHETYPES: tuple[GMArchetype, ...] = (
    GMArchetype(
        "positionalAdvantagePursuer",
        "The Positional Advantage Pursuer",
        "🎪",
        "You pay up for elite TE advantage",
        _positional_advantage_pursuer,
    ),
    GMArchetype(
        "teTruthers",
        "The TE Truther",
        "📣",
        "You believe a deep pool of tight ends can win weeks",
        _te_truther,
    ),
    GMArchetype(
        "kelceTheorySubscriber",
        "The Kelce Theory Subscriber",
        "🏈",
        "You want one of the elite few tight ends or nothing at all",
        _kelce_theory_subscriber,
    ),
    GMArchetype("streamerSupreme", "The Streamer Supreme", "🔄", "You'll find TE points on waivers", _streamer_supreme),
    GMArchetype(
        "fadePhilosopher", "The TE Fade Philosopher", "🤔", "You reject the TE position entirely", _fade_philosopher
    ),
    GMArchetype(
        "breakoutBeliever", "The Breakout Believer", "🚀", "You chase the next big TE breakout", _breakout_believer
    ),
)

POSITION_ARCHETYPES: dict[str, tuple[GMArchetype, ...]] = {
    "QB": QB_ARCHETYPES,
    "RB": RB_ARCHETYPES,
    "WR": WR_ARCHETYPES,
    "TE": TE_ARCHETYPES,
}


def position_fallback(position: str) -> GMArchetype:
    return GMArchetype(
        key="balanced",
        name="The Balanced Builder",
        icon="⚖️",
        description=f"You maintain flexibility at {position}",
        predicate=_always,
    )


def archetypes_for(position: str | None) -> tuple[GMArchetype, ...]:
    """The ordered archetype table for a position view, or the overall one."""
    if position is None:
        return OVERALL_ARCHETYPES
    return (*POSITION_ARCHETYPES.get(position, ()), position_fallback(position))


def match_archetype(
    stats: PreferenceStats,
    roster: Roster,
    prefs: PreferenceMap,
    position: str | None = None,
) -> GMArchetype:
    """First archetype whose predicate matches; the table's last entry always does."""
    for archetype in archetypes_for(position):
        if archetype.matches(stats, roster, prefs):
            logger.debug("Matched GM archetype %s (%s)", archetype.key, position or "overall")
            return archetype
    # Unreachable: every table ends with an always-true fallback.
    return BALANCED_BUILDER
