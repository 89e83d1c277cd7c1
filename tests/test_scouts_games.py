import asyncio
from datetime import date, timedelta


def test_scout_crud_and_hard_delete(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team)

            created = await h.post(
                "/api/v1/scouts",
                coach,
                json={
                    "first_name": "Morgan",
                    "last_name": "Reed",
                    "organization_name": "Boston",
                    "position": "Area Scout",
                    "coverage_area": "New England",
                },
            )
            assert created.status_code == 201
            scout_id = created.json()["data"]["id"]
            assert created.json()["data"]["status"] == "active"

            found = await h.get("/api/v1/scouts", coach, params={"search": "england"})
            assert [s["id"] for s in found.json()["data"]] == [scout_id]

            await h.put(f"/api/v1/scouts/{scout_id}", coach, json={"status": "inactive"})
            assert (await h.get("/api/v1/scouts", coach)).json()["data"] == []
            inactive = await h.get("/api/v1/scouts", coach, params={"status": "inactive"})
            assert len(inactive.json()["data"]) == 1

            deleted = await h.delete(f"/api/v1/scouts/{scout_id}", coach)
            assert deleted.json()["message"] == "Scout deleted successfully"
            assert (await h.get(f"/api/v1/scouts/{scout_id}", coach)).status_code == 404
            assert (await h.get("/api/v1/scouts", coach, params={"status": "inactive"})).json()["data"] == []

    asyncio.run(_run())


def test_scout_position_is_validated(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team)

            response = await h.post(
                "/api/v1/scouts",
                coach,
                json={"first_name": "A", "last_name": "B", "organization_name": "C", "position": "Janitor"},
            )
            assert response.status_code == 400
            assert response.json()["errors"][0]["path"] == "position"

    asyncio.run(_run())


def _game(opponent, game_date, result=None, team_score=None, opponent_score=None, season="2024"):
    body = {"opponent": opponent, "game_date": game_date.isoformat(), "home_away": "home", "season": season}
    if result:
        body.update(result=result, team_score=team_score, opponent_score=opponent_score)
    return body


def test_team_stats_and_log(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team)
            past = date(2024, 4, 1)
            await h.post("/api/v1/games", coach, json=_game("Tigers", past, "W", 5, 2))
            await h.post("/api/v1/games", coach, json=_game("Lions", past + timedelta(days=1), "L", 1, 3))
            await h.post("/api/v1/games", coach, json=_game("Bears", past + timedelta(days=2), "W", 4, 3))

            stats = (await h.get("/api/v1/games/team-stats", coach)).json()["data"]
            assert stats["gamesPlayed"] == 3
            assert stats["wins"] == 2
            assert stats["losses"] == 1
            assert stats["ties"] == 0
            assert stats["totalRunsScored"] == 10
            assert stats["totalRunsAllowed"] == 8
            assert abs(stats["winRate"] - 2 / 3) < 1e-9

            log = (await h.get("/api/v1/games/log", coach, params={"limit": 2})).json()["data"]
            assert [g["opponent"] for g in log] == ["Bears", "Lions"]

            too_many = await h.get("/api/v1/games/log", coach, params={"limit": 51})
            assert too_many.status_code == 400

    asyncio.run(_run())


def test_team_stats_with_no_games(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team)

            stats = (await h.get("/api/v1/games/team-stats", coach)).json()["data"]
            assert stats["gamesPlayed"] == 0
            assert stats["winRate"] == 0
            assert stats["avgRunsScored"] == 0

    asyncio.run(_run())


def test_upcoming_games_and_sorting(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team)
            today = date.today()
            await h.post("/api/v1/games", coach, json=_game("Past", today - timedelta(days=3)))
            await h.post("/api/v1/games", coach, json=_game("Later", today + timedelta(days=10)))
            await h.post("/api/v1/games", coach, json=_game("Soon", today + timedelta(days=1)))

            upcoming = (await h.get("/api/v1/games/upcoming", coach)).json()["data"]
            assert [g["opponent"] for g in upcoming] == ["Soon", "Later"]

            by_opponent = await h.get(
                "/api/v1/games", coach, params={"orderBy": "opponent", "sortDirection": "asc"}
            )
            assert [g["opponent"] for g in by_opponent.json()["data"]] == ["Later", "Past", "Soon"]

    asyncio.run(_run())


def test_game_byid_routes_and_hard_delete(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team)
            created = await h.post("/api/v1/games", coach, json=_game("Tigers", date(2024, 5, 1)))
            game_id = created.json()["data"]["id"]

            updated = await h.put(
                f"/api/v1/games/byId/{game_id}",
                coach,
                json={"result": "T", "team_score": 3, "opponent_score": 3},
            )
            assert updated.json()["message"] == "Game updated successfully"
            assert updated.json()["data"]["result"] == "T"

            filtered = await h.get("/api/v1/games", coach, params={"result": "T"})
            assert len(filtered.json()["data"]) == 1

            deleted = await h.delete(f"/api/v1/games/byId/{game_id}", coach)
            assert deleted.json()["message"] == "Game deleted successfully"
            assert (await h.get(f"/api/v1/games/byId/{game_id}", coach)).status_code == 404

    asyncio.run(_run())


def test_season_stats_group_by_season(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team)
            day = date(2024, 4, 1)
            await h.post("/api/v1/games", coach, json=_game("Tigers", day, "W", 5, 2))
            await h.post("/api/v1/games", coach, json=_game("Lions", day, "L", 1, 3))
            await h.post("/api/v1/games", coach, json=_game("Bears", day, "T", 2, 2, season="2023"))
            await h.post("/api/v1/games", coach, json=_game("Hawks", day, "W", 4, 0, season=None))

            seasons = (await h.get("/api/v1/games/season-stats", coach)).json()["data"]
            assert [s["season"] for s in seasons] == ["2023", "2024", "Unknown"]
            current = seasons[1]
            assert current["gamesPlayed"] == 2
            assert (current["wins"], current["losses"], current["ties"]) == (1, 1, 0)
            assert current["winRate"] == 0.5
            assert current["totalRunsScored"] == 6
            assert current["avgRunsAllowed"] == 2.5

            only = (await h.get("/api/v1/games/season-stats", coach, params={"season": "2023"})).json()["data"]
            assert [(s["season"], s["ties"]) for s in only] == [("2023", 1)]

            other = await h.make_user(await h.make_team("Tigers"), email="coach@tigers.edu")
            assert (await h.get("/api/v1/games/season-stats", other)).json()["data"] == []

    asyncio.run(_run())
