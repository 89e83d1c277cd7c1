import asyncio

from dugout.models.user_permission import PermissionType

SCHEDULE_GRANTS = (
    PermissionType.schedule_create,
    PermissionType.schedule_edit,
    PermissionType.schedule_delete,
)


def test_default_template_is_exclusive(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team, permissions=SCHEDULE_GRANTS)

            first = await h.post(
                "/api/v1/schedule-templates",
                coach,
                json={"name": "Weekday", "template_data": {"blocks": ["BP"]}, "is_default": True},
            )
            assert first.status_code == 201
            second = await h.post(
                "/api/v1/schedule-templates",
                coach,
                json={"name": "Weekend", "template_data": {"blocks": []}, "is_default": True},
            )

            defaults = await h.get("/api/v1/schedule-templates", coach, params={"is_default": "true"})
            assert [t["id"] for t in defaults.json()["data"]] == [second.json()["data"]["id"]]

    asyncio.run(_run())


def test_list_search_and_pagination(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team, permissions=SCHEDULE_GRANTS)
            for name in ("Practice A", "Practice B", "Game Day"):
                await h.post("/api/v1/schedule-templates", coach, json={"name": name, "template_data": {}})

            response = await h.get(
                "/api/v1/schedule-templates", coach, params={"search": "practice", "page": 1, "limit": 1}
            )
            body = response.json()
            assert len(body["data"]) == 1
            assert body["pagination"] == {"page": 1, "limit": 1, "total": 2, "pages": 2}

            too_big = await h.get("/api/v1/schedule-templates", coach, params={"limit": 101})
            assert too_big.status_code == 400

    asyncio.run(_run())


def test_duplicate_with_and_without_name(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team, permissions=SCHEDULE_GRANTS)
            created = await h.post(
                "/api/v1/schedule-templates",
                coach,
                json={"name": "Weekday", "template_data": {"start": "15:00"}, "is_default": True},
            )
            template_id = created.json()["data"]["id"]

            plain = await h.post(f"/api/v1/schedule-templates/{template_id}/duplicate", coach)
            assert plain.status_code == 201
            assert plain.json()["data"]["name"] == "Weekday (Copy)"
            assert plain.json()["data"]["is_default"] is False
            assert plain.json()["data"]["template_data"] == {"start": "15:00"}

            named = await h.post(
                f"/api/v1/schedule-templates/{template_id}/duplicate", coach, json={"name": "Tournament"}
            )
            assert named.json()["data"]["name"] == "Tournament"

    asyncio.run(_run())


def test_delete_hides_template(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team, permissions=SCHEDULE_GRANTS)
            created = await h.post("/api/v1/schedule-templates", coach, json={"name": "Old", "template_data": {}})
            template_id = created.json()["data"]["id"]

            deleted = await h.delete(f"/api/v1/schedule-templates/{template_id}", coach)
            assert deleted.json()["message"] == "Schedule template deleted successfully"
            assert (await h.get(f"/api/v1/schedule-templates/{template_id}", coach)).status_code == 404

    asyncio.run(_run())
