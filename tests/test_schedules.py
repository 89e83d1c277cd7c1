import asyncio
from datetime import date

from dugout.models.user_permission import PermissionType

SCHEDULE_GRANTS = (
    PermissionType.schedule_create,
    PermissionType.schedule_edit,
    PermissionType.schedule_delete,
)


def _schedule(day="2024-03-05", sections=None):
    return {
        "team_name": "Bulldogs",
        "program_name": "Varsity Baseball",
        "date": day,
        "motto": "Compete every pitch",
        "sections": sections if sections is not None else [
            {
                "type": "general",
                "title": "Team warmup",
                "activities": [
                    {"time": "3:00", "activity": "Dynamic stretch", "location": "Main Field"},
                    {"time": "3:15", "activity": "Throwing progression", "staff": "Coach Lee"},
                ],
            },
            {"type": "pitchers", "title": "Bullpens", "activities": []},
        ],
    }


def test_schedule_create_keeps_section_and_activity_order(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team, permissions=SCHEDULE_GRANTS)

            created = await h.post("/api/v1/schedules", coach, json=_schedule())
            assert created.status_code == 201
            assert created.json()["message"] == "Schedule created successfully"
            schedule = created.json()["data"]
            assert schedule["team_id"] == team.id
            assert [s["title"] for s in schedule["sections"]] == ["Team warmup", "Bullpens"]
            assert [s["sort_order"] for s in schedule["sections"]] == [0, 1]
            warmup = schedule["sections"][0]["activities"]
            assert [a["activity"] for a in warmup] == ["Dynamic stretch", "Throwing progression"]
            assert [a["sort_order"] for a in warmup] == [0, 1]

            fetched = await h.get(f"/api/v1/schedules/byId/{schedule['id']}", coach)
            assert fetched.json()["data"] == schedule

    asyncio.run(_run())


def test_schedule_list_filters_by_date_newest_first(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team, permissions=SCHEDULE_GRANTS)
            for day in ("2024-03-01", "2024-03-08", "2024-03-04"):
                await h.post("/api/v1/schedules", coach, json=_schedule(day, sections=[]))

            listing = await h.get("/api/v1/schedules", coach)
            assert [s["date"] for s in listing.json()["data"]] == ["2024-03-08", "2024-03-04", "2024-03-01"]
            assert listing.json()["pagination"]["total"] == 3

            one_day = await h.get("/api/v1/schedules", coach, params={"date": "2024-03-04"})
            assert [s["date"] for s in one_day.json()["data"]] == ["2024-03-04"]

    asyncio.run(_run())


def test_update_replaces_sections_only_when_given(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team, permissions=SCHEDULE_GRANTS)
            schedule = (await h.post("/api/v1/schedules", coach, json=_schedule())).json()["data"]
            url = f"/api/v1/schedules/byId/{schedule['id']}"

            renamed = await h.put(url, coach, json={"motto": "One pitch at a time"})
            assert renamed.status_code == 200
            assert renamed.json()["data"]["motto"] == "One pitch at a time"
            assert renamed.json()["data"]["sections"] == schedule["sections"]

            replaced = await h.put(
                url,
                coach,
                json={
                    "sections": [
                        {
                            "type": "live_bp",
                            "title": "Live BP",
                            "activities": [{"time": "4:00", "activity": "Hitters vs. pitchers"}],
                        }
                    ]
                },
            )
            sections = replaced.json()["data"]["sections"]
            assert [s["type"] for s in sections] == ["live_bp"]
            assert [a["activity"] for a in sections[0]["activities"]] == ["Hitters vs. pitchers"]

            old_activity = schedule["sections"][0]["activities"][0]["id"]
            gone = await h.delete(f"/api/v1/schedules/activities/{old_activity}", coach)
            assert gone.status_code == 404
            assert gone.json()["message"] == "Activity not found"

            null_date = await h.put(url, coach, json={"date": None})
            assert null_date.status_code == 400
            assert null_date.json()["errors"][0]["path"] == "date"

    asyncio.run(_run())


def test_sections_and_activities_append_and_delete(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team, permissions=SCHEDULE_GRANTS)
            schedule = (await h.post("/api/v1/schedules", coach, json=_schedule())).json()["data"]

            section = await h.post(
                f"/api/v1/schedules/{schedule['id']}/sections",
                coach,
                json={"type": "grinder_hitting", "title": "Tee work"},
            )
            assert section.status_code == 201
            assert section.json()["message"] == "Section added successfully"
            section = section.json()["data"]
            assert section["sort_order"] == 2
            assert section["activities"] == []

            for expected_order, time in enumerate(("4:00", "4:20")):
                activity = await h.post(
                    f"/api/v1/schedules/sections/{section['id']}/activities",
                    coach,
                    json={"time": time, "activity": "Tee", "group": "Infield"},
                )
                assert activity.status_code == 201
                assert activity.json()["data"]["sort_order"] == expected_order

            missing = await h.post(
                "/api/v1/schedules/sections/9999/activities", coach, json={"time": "4:00", "activity": "Tee"}
            )
            assert missing.status_code == 404
            assert missing.json()["message"] == "Section not found"

            first_activity = schedule["sections"][0]["activities"][0]["id"]
            removed = await h.delete(f"/api/v1/schedules/activities/{first_activity}", coach)
            assert removed.json()["message"] == "Activity deleted successfully"

            dropped = await h.delete(f"/api/v1/schedules/sections/{section['id']}", coach)
            assert dropped.json()["message"] == "Section deleted successfully"

            current = (await h.get(f"/api/v1/schedules/byId/{schedule['id']}", coach)).json()["data"]
            assert [s["title"] for s in current["sections"]] == ["Team warmup", "Bullpens"]
            assert [a["activity"] for a in current["sections"][0]["activities"]] == ["Throwing progression"]

    asyncio.run(_run())


def test_soft_deleted_schedule_hides_its_children(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team, permissions=SCHEDULE_GRANTS)
            schedule = (await h.post("/api/v1/schedules", coach, json=_schedule())).json()["data"]
            section_id = schedule["sections"][0]["id"]

            deleted = await h.delete(f"/api/v1/schedules/byId/{schedule['id']}", coach)
            assert deleted.json()["message"] == "Schedule deleted successfully"

            assert (await h.get(f"/api/v1/schedules/byId/{schedule['id']}", coach)).status_code == 404
            assert (await h.get("/api/v1/schedules", coach)).json()["data"] == []
            orphan = await h.post(
                f"/api/v1/schedules/sections/{section_id}/activities",
                coach,
                json={"time": "5:00", "activity": "Run"},
            )
            assert orphan.status_code == 404

    asyncio.run(_run())


def test_schedule_writes_need_schedule_grants(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            owner = await h.make_user(team, email="owner@bulldogs.edu", permissions=SCHEDULE_GRANTS)
            reader = await h.make_user(team, email="reader@bulldogs.edu")
            schedule = (await h.post("/api/v1/schedules", owner, json=_schedule())).json()["data"]

            assert (await h.get(f"/api/v1/schedules/byId/{schedule['id']}", reader)).status_code == 200

            create = await h.post("/api/v1/schedules", reader, json=_schedule())
            assert create.status_code == 403
            assert create.json()["message"] == "Access denied. Required permission: schedule_create"

            section = await h.post(
                f"/api/v1/schedules/{schedule['id']}/sections", reader, json={"type": "general", "title": "X"}
            )
            assert section.json()["message"] == "Access denied. Required permission: schedule_edit"

            delete = await h.delete(f"/api/v1/schedules/byId/{schedule['id']}", reader)
            assert delete.json()["message"] == "Access denied. Required permission: schedule_delete"

            assert (await h.get(f"/api/v1/schedules/byId/{schedule['id']}", reader)).json()["data"] == schedule

    asyncio.run(_run())


def test_schedule_stats_count_activities(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team, permissions=SCHEDULE_GRANTS)
            await h.post("/api/v1/schedules", coach, json=_schedule(date.today().isoformat()))
            await h.post("/api/v1/schedules", coach, json=_schedule("2001-06-01"))

            stats = (await h.get("/api/v1/schedules/stats", coach)).json()["data"]
            assert stats == {"totalEvents": 4, "thisWeek": 2, "thisMonth": 2}

    asyncio.run(_run())


def test_invalid_section_type_is_rejected(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team, permissions=SCHEDULE_GRANTS)

            response = await h.post(
                "/api/v1/schedules", coach, json=_schedule(sections=[{"type": "nap_time", "title": "Rest"}])
            )
            assert response.status_code == 400
            assert response.json()["errors"][0]["path"] == "sections.0.type"

    asyncio.run(_run())
