from dugout.models.team import Team
from dugout.models.user import User
from dugout.models.user_permission import PermissionType, UserPermission
from dugout.models.token_blacklist import TokenBlacklist
from dugout.models.player import Player
from dugout.models.prospect import Prospect
from dugout.models.depth_chart import DepthChart, DepthChartPlayer, DepthChartPosition
from dugout.models.schedule_template import ScheduleTemplate
from dugout.models.scout import Scout
from dugout.models.coach import Coach
from dugout.models.high_school_coach import HighSchoolCoach
from dugout.models.vendor import Vendor
from dugout.models.location import Location
from dugout.models.schedule import Schedule, ScheduleActivity, ScheduleSection
from dugout.models.schedule_event import ScheduleEvent, ScheduleEventDate
from dugout.models.game import Game
from dugout.models.scouting_report import ScoutingReport
from dugout.models.report import Report

__all__ = [
    "Team",
    "User",
    "PermissionType",
    "UserPermission",
    "TokenBlacklist",
    "Player",
    "Prospect",
    "DepthChart",
    "DepthChartPosition",
    "DepthChartPlayer",
    "ScheduleTemplate",
    "Scout",
    "Coach",
    "HighSchoolCoach",
    "Vendor",
    "Location",
    "Schedule",
    "ScheduleSection",
    "ScheduleActivity",
    "ScheduleEvent",
    "ScheduleEventDate",
    "Game",
    "ScoutingReport",
    "Report",
]
