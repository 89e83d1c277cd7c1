from types import SimpleNamespace

from dugout.recommendations import MAX_RECOMMENDATIONS, recommend, score_player


def _player(**fields):
    base = dict(
        position="SS",
        batting_avg=None,
        home_runs=None,
        rbi=None,
        stolen_bases=None,
        era=None,
        wins=None,
        losses=None,
        strikeouts=None,
        graduation_year=None,
        has_medical_issues=False,
    )
    base.update(fields)
    return SimpleNamespace(**base)


def test_position_fit_tiers():
    assert score_player(_player(position="SS"), "SS").points == 100 + 20
    assert score_player(_player(position="IF"), "SS").points == 80 + 20
    assert score_player(_player(position="OF"), "SS").points == 60 + 20
    assert score_player(_player(position="C"), "SS").points == 20 + 20


def test_pitching_stats_only_count_for_pitching_slots():
    ace = _player(position="P", era=2.1, strikeouts=80, wins=8, losses=2, batting_avg=0.350)
    as_pitcher = score_player(ace, "P")
    assert as_pitcher.points == 100 + 50 + 20 + 25 + 20
    assert "Good win rate: 80%" in as_pitcher.reasons

    as_hitter = score_player(ace, "DH")
    assert "High average: 0.35" in as_hitter.reasons


def test_no_decisions_means_no_win_rate():
    score = score_player(_player(position="P", wins=0, losses=0), "P")
    assert not any(reason.startswith("Good win rate") for reason in score.reasons)


def test_eligibility_and_health():
    young = score_player(_player(graduation_year=2028), "SS", current_year=2025)
    assert young.points == 100 + 15 + 20
    hurt = score_player(_player(has_medical_issues=True), "SS")
    assert hurt.points == 100 - 30
    assert hurt.reasons[-1] == "Has medical issues"


def test_recommend_caps_and_keeps_ties_stable():
    players = [_player(position="C", name=i) for i in range(15)]
    ranked = recommend(players, "SS")
    assert len(ranked) == MAX_RECOMMENDATIONS
    assert [p.name for p, _ in ranked] == list(range(MAX_RECOMMENDATIONS))
