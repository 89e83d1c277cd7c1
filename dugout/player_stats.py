"""Derived player statistics for the performance ranking.

Pitchers score on ERA, wins and strikeouts; everyone else on average,
power and speed. Missing stats count as zero.
"""

from typing import Any, Dict


def _num(value) -> float:
    return float(value) if value is not None else 0.0


def performance_score(player) -> float:
    if player.position == "P":
        era = _num(player.era)
        score = (50 / era if era > 0 else 0) + _num(player.wins) * 10 + _num(player.strikeouts) * 2
    else:
        score = (
            _num(player.batting_avg) * 100
            + _num(player.home_runs) * 5
            + _num(player.rbi) * 2
            + _num(player.stolen_bases) * 3
        )
    return round(score, 1)


def derived_stats(player) -> Dict[str, Dict[str, Any]]:
    wins, losses = _num(player.wins), _num(player.losses)
    decisions = wins + losses
    win_pct = wins / decisions if decisions else 0.0
    innings = _num(player.innings_pitched)
    k9 = _num(player.strikeouts) * 9 / innings if innings > 0 else 0.0

    return {
        "calculated_stats": {
            "win_pct": win_pct,
            "k9": k9,
            "performance_score": performance_score(player),
        },
        "display_stats": {
            "batting_avg": f"{_num(player.batting_avg):.3f}",
            "era": f"{_num(player.era):.2f}",
            "win_pct": f"{win_pct:.3f}",
            "k9": f"{k9:.1f}",
        },
    }
