import asyncio

from dugout.models.user_permission import PermissionType

SCHEDULE_GRANTS = (
    PermissionType.schedule_create,
    PermissionType.schedule_edit,
    PermissionType.schedule_delete,
)


async def _template(h, coach, name="Weekday"):
    response = await h.post("/api/v1/schedule-templates", coach, json={"name": name, "template_data": {}})
    return response.json()["data"]["id"]


async def _location(h, coach, name, **fields):
    response = await h.post("/api/v1/locations", coach, json={"name": name, **fields})
    assert response.status_code == 201, response.json()
    return response.json()["data"]


def test_location_names_are_unique_per_team(harness):
    async def _run():
        async with harness() as h:
            home = await h.make_team("Bulldogs")
            away = await h.make_team("Tigers")
            home_coach = await h.make_user(home, email="coach@bulldogs.edu", permissions=SCHEDULE_GRANTS)
            away_coach = await h.make_user(away, email="coach@tigers.edu", permissions=SCHEDULE_GRANTS)

            field = await _location(h, home_coach, "Main Field", amenities=["lights", "dugouts"])
            assert field["location_type"] == "field"
            assert field["is_home_venue"] is False
            assert field["amenities"] == ["lights", "dugouts"]

            duplicate = await h.post("/api/v1/locations", home_coach, json={"name": "Main Field"})
            assert duplicate.status_code == 400
            assert duplicate.json()["message"] == "A location with this name already exists for your team"

            # another team may reuse the name
            await _location(h, away_coach, "Main Field")

            cage = await _location(h, home_coach, "Cage")
            clash = await h.put(f"/api/v1/locations/{cage['id']}", home_coach, json={"name": "Main Field"})
            assert clash.status_code == 400
            same = await h.put(f"/api/v1/locations/{field['id']}", home_coach, json={"name": "Main Field"})
            assert same.status_code == 200

    asyncio.run(_run())


def test_location_filters_and_inactive_venues_stay_readable(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team, permissions=SCHEDULE_GRANTS)
            await _location(h, coach, "Stadium", location_type="stadium", is_home_venue=True, city="Athens")
            gym = await _location(h, coach, "Gym", location_type="gym", is_active=False)
            await _location(h, coach, "Annex Cage", location_type="batting_cage")

            everything = await h.get("/api/v1/locations", coach)
            assert [loc["name"] for loc in everything.json()["data"]] == ["Annex Cage", "Gym", "Stadium"]

            home = await h.get("/api/v1/locations", coach, params={"is_home_venue": "true"})
            assert [loc["name"] for loc in home.json()["data"]] == ["Stadium"]

            active = await h.get("/api/v1/locations", coach, params={"is_active": "true"})
            assert [loc["name"] for loc in active.json()["data"]] == ["Annex Cage", "Stadium"]

            searched = await h.get("/api/v1/locations", coach, params={"search": "athens"})
            assert [loc["name"] for loc in searched.json()["data"]] == ["Stadium"]

            assert (await h.get(f"/api/v1/locations/{gym['id']}", coach)).status_code == 200

    asyncio.run(_run())


def test_location_writes_need_schedule_grants(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team, email="coach@bulldogs.edu", permissions=SCHEDULE_GRANTS)
            reader = await h.make_user(team, email="reader@bulldogs.edu")
            field = await _location(h, coach, "Main Field")

            assert (await h.get("/api/v1/locations", reader)).status_code == 200
            create = await h.post("/api/v1/locations", reader, json={"name": "Back Field"})
            assert create.status_code == 403
            assert create.json()["message"] == "Access denied. Required permission: schedule_create"
            update = await h.put(f"/api/v1/locations/{field['id']}", reader, json={"capacity": 10})
            assert update.json()["message"] == "Access denied. Required permission: schedule_edit"
            delete = await h.delete(f"/api/v1/locations/{field['id']}", reader)
            assert delete.json()["message"] == "Access denied. Required permission: schedule_delete"

    asyncio.run(_run())


def test_location_in_use_cannot_be_deleted(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team, permissions=SCHEDULE_GRANTS)
            template_id = await _template(h, coach)
            field = await _location(h, coach, "Main Field")
            backup = await _location(h, coach, "Back Field")
            spare = await _location(h, coach, "Spare Field")

            event = await h.post(
                "/api/v1/schedule-events",
                coach,
                json={
                    "title": "Practice",
                    "schedule_template_id": template_id,
                    "location_id": field["id"],
                    "event_dates": [
                        {"event_date": "2024-03-05"},
                        {"event_date": "2024-03-06", "location_id_override": backup["id"]},
                    ],
                },
            )
            assert event.status_code == 201

            for location in (field, backup):
                blocked = await h.delete(f"/api/v1/locations/{location['id']}", coach)
                assert blocked.status_code == 400
                assert blocked.json()["message"] == (
                    "Cannot delete location. It is being used in 1 schedule event(s). "
                    "Please remove or change the location in those events first."
                )

            removed = await h.delete(f"/api/v1/locations/{spare['id']}", coach)
            assert removed.json()["message"] == "Location deleted successfully"
            assert (await h.get(f"/api/v1/locations/{spare['id']}", coach)).status_code == 404

    asyncio.run(_run())


def test_schedule_event_lifecycle(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team, permissions=SCHEDULE_GRANTS)
            template_id = await _template(h, coach)
            field = await _location(h, coach, "Main Field")

            created = await h.post(
                "/api/v1/schedule-events",
                coach,
                json={
                    "title": "Team practice",
                    "event_type": "practice",
                    "schedule_template_id": template_id,
                    "location_id": field["id"],
                    "start_time": "15:00",
                    "end_time": "17:30",
                    "required_equipment": ["balls", "screens"],
                    "event_dates": [{"event_date": "2024-03-06"}, {"event_date": "2024-03-05"}],
                },
            )
            assert created.status_code == 201
            assert created.json()["message"] == "Schedule event created successfully"
            event = created.json()["data"]
            assert event["priority"] == "medium"
            assert event["template"] == {"id": template_id, "name": "Weekday"}
            assert event["location"]["name"] == "Main Field"
            assert event["creator"]["id"] == coach.id
            assert [d["event_date"] for d in event["dates"]] == ["2024-03-05", "2024-03-06"]
            assert all(d["status"] == "scheduled" for d in event["dates"])

            updated = await h.put(
                f"/api/v1/schedule-events/{event['id']}",
                coach,
                json={"priority": "high", "event_dates": [{"event_date": "2024-03-06", "status": "cancelled"}]},
            )
            assert updated.status_code == 200
            data = updated.json()["data"]
            assert data["priority"] == "high"
            assert data["title"] == "Team practice"
            assert [(d["event_date"], d["status"]) for d in data["dates"]] == [("2024-03-06", "cancelled")]

            deleted = await h.delete(f"/api/v1/schedule-events/{event['id']}", coach)
            assert deleted.json()["message"] == "Schedule event deleted successfully"
            assert (await h.get(f"/api/v1/schedule-events/{event['id']}", coach)).status_code == 404

            # nothing references the location any more
            freed = await h.delete(f"/api/v1/locations/{field['id']}", coach)
            assert freed.status_code == 200

    asyncio.run(_run())


def test_schedule_event_list_filters(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team, permissions=SCHEDULE_GRANTS)
            weekday = await _template(h, coach, "Weekday")
            weekend = await _template(h, coach, "Weekend")

            async def event(title, template_id, event_type, *days):
                response = await h.post(
                    "/api/v1/schedule-events",
                    coach,
                    json={
                        "title": title,
                        "schedule_template_id": template_id,
                        "event_type": event_type,
                        "event_dates": [{"event_date": day} for day in days],
                    },
                )
                return response.json()["data"]["id"]

            lift = await event("Lift", weekday, "conditioning", "2024-03-04", "2024-04-01")
            scrimmage = await event("Scrimmage", weekend, "scrimmage", "2024-03-09")

            typed = await h.get("/api/v1/schedule-events", coach, params={"event_type": "scrimmage"})
            assert [e["id"] for e in typed.json()["data"]] == [scrimmage]

            by_template = await h.get("/api/v1/schedule-events", coach, params={"schedule_template_id": weekday})
            assert [e["id"] for e in by_template.json()["data"]] == [lift]

            window = await h.get(
                "/api/v1/schedule-events", coach, params={"start_date": "2024-03-25", "end_date": "2024-04-05"}
            )
            assert [e["id"] for e in window.json()["data"]] == [lift]
            assert len(window.json()["data"][0]["dates"]) == 2

    asyncio.run(_run())


def test_schedule_event_references_must_belong_to_the_team(harness):
    async def _run():
        async with harness() as h:
            home = await h.make_team("Bulldogs")
            away = await h.make_team("Tigers")
            home_coach = await h.make_user(home, email="coach@bulldogs.edu", permissions=SCHEDULE_GRANTS)
            away_coach = await h.make_user(away, email="coach@tigers.edu", permissions=SCHEDULE_GRANTS)
            own_template = await _template(h, home_coach)
            foreign_template = await _template(h, away_coach)
            foreign_field = await _location(h, away_coach, "Tiger Field")

            template = await h.post(
                "/api/v1/schedule-events",
                home_coach,
                json={
                    "title": "Practice",
                    "schedule_template_id": foreign_template,
                    "event_dates": [{"event_date": "2024-03-05"}],
                },
            )
            assert template.status_code == 404
            assert template.json()["message"] == "Schedule template not found or does not belong to your team"

            location = await h.post(
                "/api/v1/schedule-events",
                home_coach,
                json={
                    "title": "Practice",
                    "schedule_template_id": own_template,
                    "event_dates": [{"event_date": "2024-03-05", "location_id_override": foreign_field["id"]}],
                },
            )
            assert location.status_code == 404
            assert location.json()["message"] == "Location not found or does not belong to your team"

    asyncio.run(_run())


def test_schedule_event_payload_is_validated(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team, permissions=SCHEDULE_GRANTS)
            template_id = await _template(h, coach)

            no_dates = await h.post(
                "/api/v1/schedule-events",
                coach,
                json={"title": "Practice", "schedule_template_id": template_id, "event_dates": []},
            )
            assert no_dates.status_code == 400
            assert no_dates.json()["errors"][0]["path"] == "event_dates"

            bad_time = await h.post(
                "/api/v1/schedule-events",
                coach,
                json={
                    "title": "Practice",
                    "schedule_template_id": template_id,
                    "start_time": "25:00",
                    "event_dates": [{"event_date": "2024-03-05"}],
                },
            )
            assert bad_time.json()["errors"][0]["path"] == "start_time"

            repeated = await h.post(
                "/api/v1/schedule-events",
                coach,
                json={
                    "title": "Practice",
                    "schedule_template_id": template_id,
                    "event_dates": [{"event_date": "2024-03-05"}, {"event_date": "2024-03-05"}],
                },
            )
            assert repeated.status_code == 400
            assert repeated.json()["errors"][0]["message"] == "Duplicate event date 2024-03-05"

    asyncio.run(_run())
