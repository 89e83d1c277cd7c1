import asyncio

from dugout.models.user_permission import PermissionType


def test_player_crud_with_filters_and_sorting(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team)

            for first, position, avg in (("Alex", "SS", 0.310), ("Blake", "C", 0.250), ("Casey", "SS", 0.280)):
                response = await h.post(
                    "/api/v1/players",
                    coach,
                    json={
                        "first_name": first,
                        "last_name": "Player",
                        "school_type": "HS",
                        "position": position,
                        "batting_avg": avg,
                    },
                )
                assert response.status_code == 201
                assert response.json()["message"] == "Player created successfully"

            shortstops = await h.get(
                "/api/v1/players",
                coach,
                params={"position": "SS", "orderBy": "batting_avg", "sortDirection": "DESC"},
            )
            assert [p["first_name"] for p in shortstops.json()["data"]] == ["Alex", "Casey"]

            player_id = shortstops.json()["data"][1]["id"]
            updated = await h.put(f"/api/v1/players/{player_id}", coach, json={"status": "graduated"})
            assert updated.json()["data"]["status"] == "graduated"
            assert updated.json()["data"]["first_name"] == "Casey"

            graduated = await h.get("/api/v1/players", coach, params={"status": "graduated"})
            assert [p["id"] for p in graduated.json()["data"]] == [player_id]

            searched = await h.get("/api/v1/players", coach, params={"search": "bla"})
            assert [p["first_name"] for p in searched.json()["data"]] == ["Blake"]

    asyncio.run(_run())


def test_prospect_defaults_and_filters(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team)

            created = await h.post(
                "/api/v1/prospects",
                coach,
                json={
                    "first_name": "Jordan",
                    "last_name": "Miles",
                    "primary_position": "CF",
                    "graduation_year": 2026,
                    "email": "",
                    "gpa": 3.6,
                },
            )
            assert created.status_code == 201
            prospect = created.json()["data"]
            assert prospect["status"] == "identified"
            assert prospect["academic_eligibility"] == "unknown"
            assert prospect["email"] is None

            await h.put(f"/api/v1/prospects/{prospect['id']}", coach, json={"status": "offered"})
            offered = await h.get("/api/v1/prospects", coach, params={"status": "offered"})
            assert [p["id"] for p in offered.json()["data"]] == [prospect["id"]]
            assert (await h.get("/api/v1/prospects", coach, params={"graduation_year": 2027})).json()["data"] == []

            deleted = await h.delete(f"/api/v1/prospects/{prospect['id']}", coach)
            assert deleted.status_code == 200
            assert (await h.get(f"/api/v1/prospects/{prospect['id']}", coach)).status_code == 404

    asyncio.run(_run())


def test_prospect_rejects_out_of_range_scores(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team)

            response = await h.post(
                "/api/v1/prospects",
                coach,
                json={
                    "first_name": "Jordan",
                    "last_name": "Miles",
                    "primary_position": "CF",
                    "gpa": 4.5,
                    "sat_score": 100,
                },
            )
            assert response.status_code == 400
            assert sorted(err["path"] for err in response.json()["errors"]) == ["gpa", "sat_score"]

    asyncio.run(_run())


def test_player_stats_summary(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team, permissions=[PermissionType.reports_create])
            recruit = await h.make_player(team, coach, school_type="HS", batting_avg=0.300)
            await h.make_player(team, coach, school_type="COLL", batting_avg=0.250)
            await h.make_player(team, coach, school_type="HS", status="graduated", batting_avg=0.400)
            await h.make_player(team, coach, school_type="HS", is_active=False, batting_avg=0.100)

            await h.post(
                "/api/v1/reports/scouting",
                coach,
                json={"player_id": recruit.id, "report_date": "2024-03-01", "overall_grade": "B"},
            )

            summary = (await h.get("/api/v1/players/stats/summary", coach)).json()["data"]
            assert summary == {
                "total_players": 2,
                "active_recruits": 1,
                "recent_reports": 1,
                "team_avg": "0.275",
            }

            empty = await h.make_user(await h.make_team("Tigers"), email="coach@tigers.edu")
            blank = (await h.get("/api/v1/players/stats/summary", empty)).json()["data"]
            assert blank["team_avg"] == ".000"
            assert blank["total_players"] == 0

    asyncio.run(_run())


def test_player_performance_ranking(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team)
            await h.make_player(
                team,
                coach,
                first_name="Ace",
                position="P",
                era=2.0,
                wins=5,
                losses=5,
                strikeouts=40,
                innings_pitched=30,
            )
            await h.make_player(
                team, coach, first_name="Sam", batting_avg=0.300, home_runs=2, rbi=10, stolen_bases=5
            )
            await h.make_player(team, coach, first_name="Cal", position="C", batting_avg=0.250)

            response = await h.get("/api/v1/players/performance", coach)
            assert response.status_code == 200
            rows = response.json()["data"]
            assert [(r["rank"], r["first_name"]) for r in rows] == [(1, "Sam"), (2, "Cal"), (3, "Ace")]
            assert rows[0]["calculated_stats"]["performance_score"] == 75.0
            assert rows[0]["display_stats"]["batting_avg"] == "0.300"

            ace = rows[2]
            assert ace["calculated_stats"] == {"win_pct": 0.5, "k9": 12.0, "performance_score": 155.0}
            assert ace["display_stats"] == {
                "batting_avg": "0.000",
                "era": "2.00",
                "win_pct": "0.500",
                "k9": "12.0",
            }

            summary = response.json()["summary"]
            assert summary["total_players"] == 3
            assert abs(summary["team_batting_avg"] - 0.275) < 1e-9
            assert summary["team_era"] == 2.0
            assert summary["filters"]["sort_by"] == "batting_avg"

            pitchers = await h.get(
                "/api/v1/players/performance", coach, params={"position": "P", "sort_by": "era"}
            )
            assert [r["first_name"] for r in pitchers.json()["data"]] == ["Ace"]

            invalid = await h.get(
                "/api/v1/players/performance", coach, params={"sort_by": "password", "limit": 0}
            )
            assert invalid.status_code == 400
            assert {err["path"] for err in invalid.json()["errors"]} == {"sort_by", "limit"}

    asyncio.run(_run())
