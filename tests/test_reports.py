import asyncio

from dugout.models.user_permission import PermissionType

REPORT_GRANTS = (
    PermissionType.reports_view,
    PermissionType.reports_create,
    PermissionType.reports_edit,
    PermissionType.reports_delete,
)


def test_custom_report_lifecycle(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team, permissions=REPORT_GRANTS)

            created = await h.post(
                "/api/v1/reports",
                coach,
                json={
                    "title": "Weekly hitting",
                    "type": "player-performance",
                    "data_sources": ["players"],
                    "filters": {"position": "SS"},
                },
            )
            assert created.status_code == 201
            report = created.json()["data"]
            assert report["status"] == "draft"
            assert report["generation_count"] == 0

            published = await h.put(f"/api/v1/reports/{report['id']}", coach, json={"status": "published"})
            assert published.json()["data"]["status"] == "published"

            listed = await h.get("/api/v1/reports", coach, params={"status": "published"})
            assert [r["id"] for r in listed.json()["data"]] == [report["id"]]

            deleted = await h.delete(f"/api/v1/reports/{report['id']}", coach)
            assert deleted.json()["message"] == "Report deleted successfully"
            assert (await h.get(f"/api/v1/reports/{report['id']}", coach)).status_code == 404

    asyncio.run(_run())


def test_custom_reports_require_view_permission(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team)

            response = await h.get("/api/v1/reports", coach)
            assert response.status_code == 403
            assert response.json()["message"] == "Access denied. Required permission: reports_view"

    asyncio.run(_run())


def test_scouting_report_filters_and_update(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team, permissions=REPORT_GRANTS)
            first = await h.make_player(team, coach, first_name="Alex")
            second = await h.make_player(team, coach, first_name="Blake")

            for player, day in ((first, "2024-03-01"), (first, "2024-04-01"), (second, "2024-05-01")):
                response = await h.post(
                    "/api/v1/reports/scouting",
                    coach,
                    json={"player_id": player.id, "report_date": day, "projection": "College"},
                )
                assert response.status_code == 201

            by_player = await h.get("/api/v1/reports/scouting", coach, params={"player_id": first.id})
            assert [r["report_date"] for r in by_player.json()["data"]] == ["2024-04-01", "2024-03-01"]
            assert by_player.json()["data"][0]["player"]["first_name"] == "Alex"

            in_range = await h.get(
                "/api/v1/reports/scouting", coach, params={"start_date": "2024-03-15", "end_date": "2024-04-30"}
            )
            assert len(in_range.json()["data"]) == 1

            report_id = in_range.json()["data"][0]["id"]
            moved = await h.put(
                f"/api/v1/reports/scouting/{report_id}", coach, json={"player_id": second.id, "overall_grade": "A-"}
            )
            assert moved.status_code == 200
            assert moved.json()["data"]["player_id"] == second.id
            assert moved.json()["data"]["overall_grade"] == "A-"

    asyncio.run(_run())


def test_scouting_report_requires_create_permission(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team)
            player = await h.make_player(team, coach)

            response = await h.post(
                "/api/v1/reports/scouting", coach, json={"player_id": player.id, "report_date": "2024-03-01"}
            )
            assert response.status_code == 403
            assert response.json()["message"] == "Access denied. Required permission: reports_create"

    asyncio.run(_run())
