import asyncio

import pytest

from dugout.auth_token import Principal
from dugout.errors import AuthorizationError
from dugout.models.user_permission import PermissionType
from dugout.permissions import check_permission, has_permission


def _principal(granted=(), expired=()):
    return Principal(
        id=7,
        team_id=1,
        role="assistant_coach",
        email="a@bulldogs.edu",
        permissions=frozenset(granted),
        expired_permissions=frozenset(expired),
    )


def test_grants_are_not_hierarchical():
    user = _principal(granted=[PermissionType.depth_chart_edit])
    assert has_permission(user, PermissionType.depth_chart_edit)
    assert not has_permission(user, PermissionType.depth_chart_view)


def test_missing_permission_names_the_permission():
    with pytest.raises(AuthorizationError) as excinfo:
        check_permission(_principal(), PermissionType.schedule_edit)

    assert excinfo.value.status_code == 403
    assert excinfo.value.message == "Access denied. Required permission: schedule_edit"


def test_expired_grant_reports_expiry():
    user = _principal(expired=[PermissionType.reports_view])
    with pytest.raises(AuthorizationError) as excinfo:
        check_permission(user, PermissionType.reports_view)

    assert excinfo.value.message == "Permission has expired"


def test_head_coach_role_does_not_bypass_grants(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team, role="head_coach")

            response = await h.get("/api/v1/depth-charts", coach)
            assert response.status_code == 403
            assert response.json() == {
                "success": False,
                "message": "Access denied. Required permission: depth_chart_view",
            }

    asyncio.run(_run())


def test_expired_grant_is_rejected_over_http(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            coach = await h.make_user(team, expired=[PermissionType.depth_chart_view])

            response = await h.get("/api/v1/depth-charts", coach)
            assert response.status_code == 403
            assert response.json()["message"] == "Permission has expired"

    asyncio.run(_run())


def test_permission_management_lifecycle(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            admin = await h.make_user(team, email="admin@bulldogs.edu", permissions=[PermissionType.user_management])
            assistant = await h.make_user(team, email="asst@bulldogs.edu", role="assistant_coach")

            created = await h.post(
                "/api/v1/teams/permissions",
                admin,
                json={"user_id": assistant.id, "permission_type": "depth_chart_view"},
            )
            assert created.status_code == 201
            assert created.json()["message"] == "Permission added successfully"
            permission_id = created.json()["data"]["id"]

            duplicate = await h.post(
                "/api/v1/teams/permissions",
                admin,
                json={"user_id": assistant.id, "permission_type": "depth_chart_view"},
            )
            assert duplicate.status_code == 400
            assert duplicate.json()["message"] == "Permission already exists for this user"

            allowed = await h.get("/api/v1/depth-charts", assistant)
            assert allowed.status_code == 200

            revoked = await h.delete(f"/api/v1/teams/permissions/{permission_id}", admin)
            assert revoked.json()["message"] == "Permission removed successfully"

            denied = await h.get("/api/v1/depth-charts", assistant)
            assert denied.status_code == 403

    asyncio.run(_run())


def test_cannot_grant_to_user_in_another_team(harness):
    async def _run():
        async with harness() as h:
            home = await h.make_team("Bulldogs")
            away = await h.make_team("Tigers")
            admin = await h.make_user(home, email="admin@bulldogs.edu", permissions=[PermissionType.user_management])
            outsider = await h.make_user(away, email="coach@tigers.edu")

            response = await h.post(
                "/api/v1/teams/permissions",
                admin,
                json={"user_id": outsider.id, "permission_type": "reports_view"},
            )
            assert response.status_code == 404
            assert response.json()["message"] == "User not found in team"

    asyncio.run(_run())


def test_branding_update_is_role_gated(harness):
    async def _run():
        async with harness() as h:
            team = await h.make_team()
            assistant = await h.make_user(team, email="asst@bulldogs.edu", role="assistant_coach")
            head = await h.make_user(team, email="head@bulldogs.edu", role="head_coach")

            denied = await h.put("/api/v1/teams/branding", assistant, json={"primary_color": "#112233"})
            assert denied.status_code == 403
            assert denied.json()["message"] == "Only super admins and head coaches can update team branding"

            updated = await h.put("/api/v1/teams/branding", head, json={"primary_color": "#112233"})
            assert updated.status_code == 200

            branding = await h.get("/api/v1/teams/branding", assistant)
            assert branding.json()["data"]["primary_color"] == "#112233"

    asyncio.run(_run())
