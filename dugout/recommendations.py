"""Weighted-sum heuristic for suggesting players for a depth-chart position.

Score = position fit + stat bonuses + eligibility remaining + health.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Optional

PITCHING_CODES = ("P", "SP", "RP", "CP")
UTILITY_CODES = ("UTIL", "IF", "OF")

POSITION_GROUPS = {
    "P": ("P", "SP", "RP", "CP"),
    "C": ("C",),
    "1B": ("1B", "IF"),
    "2B": ("2B", "IF", "MI"),
    "3B": ("3B", "IF", "CI"),
    "SS": ("SS", "IF", "MI"),
    "LF": ("LF", "OF"),
    "CF": ("CF", "OF"),
    "RF": ("RF", "OF"),
    "DH": ("DH", "UTIL"),
}

MAX_RECOMMENDATIONS = 10
MAX_REASONS = 3


@dataclass
class Score:
    points: int = 0
    reasons: List[str] = field(default_factory=list)

    def add(self, points: int, reason: str) -> None:
        self.points += points
        self.reasons.append(reason)


def position_match(player_position: Optional[str], target_code: Optional[str], score: Score) -> None:
    if not player_position or not target_code:
        return
    if player_position == target_code:
        score.add(100, "Exact position match")
    elif player_position in POSITION_GROUPS.get(target_code, ()):
        score.add(80, "Position group match")
    elif player_position in UTILITY_CODES:
        score.add(60, "Utility player")
    else:
        score.add(20, "Position mismatch")


def performance(player, target_code: Optional[str], score: Score) -> None:
    if target_code in PITCHING_CODES:
        era = player.era
        if era is not None and era < 3.0:
            score.add(50, f"Excellent ERA: {era}")
        elif era is not None and era < 4.0:
            score.add(30, f"Good ERA: {era}")

        if player.strikeouts is not None and player.strikeouts > 50:
            score.add(20, f"High strikeouts: {player.strikeouts}")

        if player.wins is not None and player.losses is not None and (player.wins + player.losses) > 0:
            win_rate = player.wins / (player.wins + player.losses)
            if win_rate > 0.6:
                score.add(25, f"Good win rate: {win_rate * 100:.0f}%")
        return

    avg = player.batting_avg
    if avg is not None and avg > 0.300:
        score.add(40, f"High average: {avg}")
    elif avg is not None and avg > 0.250:
        score.add(20, f"Good average: {avg}")

    if player.home_runs is not None and player.home_runs > 5:
        score.add(15, f"Power hitter: {player.home_runs} HR")
    if player.rbi is not None and player.rbi > 20:
        score.add(15, f"RBI producer: {player.rbi} RBI")
    if player.stolen_bases is not None and player.stolen_bases > 10:
        score.add(15, f"Speed: {player.stolen_bases} SB")


def score_player(player, target_code: Optional[str], *, current_year: Optional[int] = None) -> Score:
    score = Score()
    position_match(player.position, target_code, score)
    performance(player, target_code, score)

    if player.graduation_year:
        years_remaining = player.graduation_year - (current_year or date.today().year)
        if years_remaining > 0:
            score.add(years_remaining * 5, f"Graduation year: {player.graduation_year}")

    if not player.has_medical_issues:
        score.add(20, "No medical issues")
    else:
        score.add(-30, "Has medical issues")
    return score


def recommend(players: Iterable, target_code: Optional[str], *, current_year: Optional[int] = None):
    """Return ``(player, Score)`` pairs, best first, capped at ``MAX_RECOMMENDATIONS``.

    Ties keep the input order (``sorted`` is stable).
    """
    scored = [(p, score_player(p, target_code, current_year=current_year)) for p in players]
    scored.sort(key=lambda pair: pair[1].points, reverse=True)
    return scored[:MAX_RECOMMENDATIONS]
