# dugout/schemas.py
# ------------------------------------------------------------
# Pydantic v2 schemas, organized by domain
# ------------------------------------------------------------
from datetime import date, datetime, timezone
from decimal import Decimal
import re
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from dugout.models.user_permission import PermissionType


_CONTROL_CHAR_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")
_SCRIPT_TAG_RE = re.compile(r"<\s*/?\s*script", re.IGNORECASE)

HEX_COLOR = r"^#[0-9A-Fa-f]{6}$"

PlayerPosition = Literal["P", "C", "1B", "2B", "3B", "SS", "LF", "CF", "RF", "OF", "DH"]
ProspectPosition = Literal["P", "C", "1B", "2B", "3B", "SS", "LF", "CF", "RF", "OF", "DH", "UTL"]
Division = Literal["D1", "D2", "D3", "NAIA", "JUCO"]
Grade = Literal["A+", "A", "A-", "B+", "B", "B-", "C+", "C", "C-", "D+", "D", "D-", "F"]


def _sanitize_single_line_text(value, *, allow_empty: bool = False):
    if not isinstance(value, str):
        # let the field's own type check report it
        return value
    cleaned = _CONTROL_CHAR_RE.sub("", value).strip()
    if not allow_empty and not cleaned:
        raise ValueError("Value cannot be empty")
    if any(ch in {"\n", "\r"} for ch in cleaned):
        raise ValueError("Value must be a single line of text")
    if "<" in cleaned or ">" in cleaned:
        raise ValueError("HTML tags are not allowed in this field")
    return cleaned


def _sanitize_multiline_text(value, *, allow_empty: bool = True):
    if not isinstance(value, str):
        return value
    cleaned = _CONTROL_CHAR_RE.sub("", value).strip()
    if not allow_empty and not cleaned:
        raise ValueError("Value cannot be empty")
    if _SCRIPT_TAG_RE.search(cleaned):
        raise ValueError("Script tags are not allowed")
    return cleaned


def _reject_null(value):
    if value is None:
        raise ValueError("Value cannot be null")
    return value


def _naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class _ReadModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class UserSummary(_ReadModel):
    id: int
    first_name: str
    last_name: str


# ============================================================
# Auth / users
# ============================================================

class UserRegister(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)
    role: Literal["head_coach", "assistant_coach"] = "assistant_coach"
    phone: Optional[str] = Field(default=None, min_length=10, max_length=15)

    @field_validator("first_name", "last_name", "phone", mode="before")
    @classmethod
    def _clean_names(cls, value):
        return _sanitize_single_line_text(value)


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)


class TeamSummary(_ReadModel):
    id: int
    name: str
    program_name: Optional[str] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None


class UserProfile(_ReadModel):
    id: int
    email: str
    first_name: str
    last_name: str
    role: str
    team_id: Optional[int] = None
    phone: Optional[str] = None
    is_active: bool
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None
    team: Optional[TeamSummary] = None


class TeamMember(_ReadModel):
    id: int
    email: str
    first_name: str
    last_name: str
    role: str
    is_active: bool
    last_login: Optional[datetime] = None


# ============================================================
# Teams
# ============================================================

class TeamDirectoryEntry(_ReadModel):
    id: int
    name: str
    program_name: Optional[str] = None
    conference: Optional[str] = None
    division: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None


class TeamRead(TeamDirectoryEntry):
    school_logo_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TeamCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    program_name: Optional[str] = Field(default=None, max_length=100)
    conference: Optional[str] = Field(default=None, max_length=100)
    division: Optional[Division] = None
    city: Optional[str] = Field(default=None, max_length=50)
    state: Optional[str] = Field(default=None, min_length=2, max_length=2)
    primary_color: Optional[str] = Field(default=None, pattern=HEX_COLOR)
    secondary_color: Optional[str] = Field(default=None, pattern=HEX_COLOR)

    @field_validator("name", "program_name", "conference", "city", "state", mode="before")
    @classmethod
    def _clean_text(cls, value):
        return _sanitize_single_line_text(value)


class TeamUpdate(TeamCreate):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)

    @field_validator("name", mode="after")
    @classmethod
    def _name_not_null(cls, value):
        return _reject_null(value)


class TeamBrandingUpdate(BaseModel):
    primary_color: Optional[str] = Field(default=None, pattern=HEX_COLOR)
    secondary_color: Optional[str] = Field(default=None, pattern=HEX_COLOR)


class TeamBranding(_ReadModel):
    id: int
    name: str
    program_name: Optional[str] = None
    school_logo_url: Optional[str] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None


# ============================================================
# Permissions
# ============================================================

class PermissionCreate(BaseModel):
    user_id: int = Field(ge=1)
    permission_type: PermissionType
    is_granted: bool = True
    expires_at: Optional[datetime] = None
    notes: Optional[str] = Field(default=None, max_length=500)

    @field_validator("expires_at", mode="after")
    @classmethod
    def _expires_naive(cls, value):
        return _naive_utc(value)

    @field_validator("notes", mode="before")
    @classmethod
    def _clean_notes(cls, value):
        return _sanitize_multiline_text(value)


class PermissionUpdate(BaseModel):
    is_granted: Optional[bool] = None
    expires_at: Optional[datetime] = None
    notes: Optional[str] = Field(default=None, max_length=500)

    @field_validator("is_granted", mode="after")
    @classmethod
    def _granted_not_null(cls, value):
        return _reject_null(value)

    @field_validator("expires_at", mode="after")
    @classmethod
    def _expires_naive(cls, value):
        return _naive_utc(value)

    @field_validator("notes", mode="before")
    @classmethod
    def _clean_notes(cls, value):
        return _sanitize_multiline_text(value)


class PermissionRead(_ReadModel):
    id: int
    user_id: int
    team_id: int
    permission_type: PermissionType
    is_granted: bool
    expires_at: Optional[datetime] = None
    granted_by: Optional[int] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    user: Optional[UserSummary] = None


# ============================================================
# Players
# ============================================================

_PLAYER_REQUIRED = ("first_name", "last_name", "school_type", "position")


class PlayerBase(BaseModel):
    height: Optional[str] = Field(default=None, min_length=1, max_length=10)
    weight: Optional[int] = Field(default=None, ge=100, le=300)
    birth_date: Optional[date] = None
    graduation_year: Optional[int] = Field(default=None, ge=2020, le=2030)
    school: Optional[str] = Field(default=None, min_length=1, max_length=100)
    city: Optional[str] = Field(default=None, min_length=1, max_length=100)
    state: Optional[str] = Field(default=None, min_length=2, max_length=2)
    phone: Optional[str] = Field(default=None, min_length=10, max_length=15)
    email: Optional[EmailStr] = None
    batting_avg: Optional[float] = Field(default=None, ge=0, le=1)
    home_runs: Optional[int] = Field(default=None, ge=0)
    rbi: Optional[int] = Field(default=None, ge=0)
    stolen_bases: Optional[int] = Field(default=None, ge=0)
    era: Optional[float] = Field(default=None, ge=0)
    wins: Optional[int] = Field(default=None, ge=0)
    losses: Optional[int] = Field(default=None, ge=0)
    strikeouts: Optional[int] = Field(default=None, ge=0)
    innings_pitched: Optional[float] = Field(default=None, ge=0)
    has_medical_issues: Optional[bool] = None
    injury_details: Optional[str] = None
    has_comparison: Optional[bool] = None
    comparison_player: Optional[str] = Field(default=None, min_length=1, max_length=100)

    @field_validator("height", "school", "city", "state", "phone", "comparison_player", mode="before")
    @classmethod
    def _clean_single(cls, value):
        return _sanitize_single_line_text(value)

    @field_validator("injury_details", mode="before")
    @classmethod
    def _clean_multi(cls, value):
        return _sanitize_multiline_text(value)


class PlayerCreate(PlayerBase):
    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)
    school_type: Literal["HS", "COLL"]
    position: PlayerPosition

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def _clean_names(cls, value):
        return _sanitize_single_line_text(value)


class PlayerUpdate(PlayerBase):
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    school_type: Optional[Literal["HS", "COLL"]] = None
    position: Optional[PlayerPosition] = None
    status: Optional[Literal["active", "inactive", "graduated", "transferred"]] = None

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def _clean_names(cls, value):
        return _sanitize_single_line_text(value)

    @field_validator(*_PLAYER_REQUIRED, "status", "has_medical_issues", "has_comparison", mode="after")
    @classmethod
    def _not_null(cls, value):
        return _reject_null(value)


class PlayerRead(_ReadModel):
    id: int
    team_id: int
    first_name: str
    last_name: str
    school_type: str
    position: str
    height: Optional[str] = None
    weight: Optional[int] = None
    birth_date: Optional[date] = None
    graduation_year: Optional[int] = None
    school: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    batting_avg: Optional[float] = None
    home_runs: Optional[int] = None
    rbi: Optional[int] = None
    stolen_bases: Optional[int] = None
    era: Optional[float] = None
    wins: Optional[int] = None
    losses: Optional[int] = None
    strikeouts: Optional[int] = None
    innings_pitched: Optional[float] = None
    has_medical_issues: bool
    injury_details: Optional[str] = None
    has_comparison: bool
    comparison_player: Optional[str] = None
    status: str
    created_by: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    creator: Optional[UserSummary] = None


class PlayerCard(_ReadModel):
    """Subset shown when picking players for a depth chart."""

    id: int
    first_name: str
    last_name: str
    position: str
    school_type: str
    graduation_year: Optional[int] = None
    height: Optional[str] = None
    weight: Optional[int] = None
    batting_avg: Optional[float] = None
    home_runs: Optional[int] = None
    rbi: Optional[int] = None
    stolen_bases: Optional[int] = None
    era: Optional[float] = None
    wins: Optional[int] = None
    losses: Optional[int] = None
    strikeouts: Optional[int] = None
    has_medical_issues: bool
    has_comparison: bool
    status: str


# ============================================================
# Prospects
# ============================================================

ProspectStatus = Literal[
    "identified", "evaluating", "contacted", "visiting", "offered", "committed", "signed", "passed"
]


class ProspectBase(BaseModel):
    secondary_position: Optional[ProspectPosition] = None
    school_type: Optional[Literal["HS", "JUCO", "D1", "D2", "D3", "NAIA", "Independent"]] = None
    school_name: Optional[str] = Field(default=None, max_length=200)
    city: Optional[str] = Field(default=None, max_length=100)
    state: Optional[str] = Field(default=None, min_length=2, max_length=2)
    graduation_year: Optional[int] = Field(default=None, ge=2020, le=2035)
    class_year: Optional[Literal["FR", "SO", "JR", "SR", "GR"]] = None
    bats: Optional[Literal["L", "R", "S"]] = None
    throws: Optional[Literal["L", "R"]] = None
    height: Optional[str] = Field(default=None, max_length=10)
    weight: Optional[int] = Field(default=None, ge=100, le=350)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=20)
    gpa: Optional[float] = Field(default=None, ge=0, le=4.0)
    sat_score: Optional[int] = Field(default=None, ge=400, le=1600)
    act_score: Optional[int] = Field(default=None, ge=1, le=36)
    fastball_velocity: Optional[int] = Field(default=None, ge=40, le=110)
    exit_velocity: Optional[int] = Field(default=None, ge=40, le=130)
    status: Optional[ProspectStatus] = None
    academic_eligibility: Optional[Literal["eligible", "pending", "ineligible", "unknown"]] = None
    notes: Optional[str] = None

    @field_validator("email", mode="before")
    @classmethod
    def _blank_email(cls, value):
        # an empty string means "no e-mail"
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("school_name", "city", "state", "height", "phone", mode="before")
    @classmethod
    def _clean_single(cls, value):
        return _sanitize_single_line_text(value)

    @field_validator("notes", mode="before")
    @classmethod
    def _clean_multi(cls, value):
        return _sanitize_multiline_text(value)


class ProspectCreate(ProspectBase):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    primary_position: ProspectPosition

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def _clean_names(cls, value):
        return _sanitize_single_line_text(value)


class ProspectUpdate(ProspectBase):
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    primary_position: Optional[ProspectPosition] = None

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def _clean_names(cls, value):
        return _sanitize_single_line_text(value)

    @field_validator("first_name", "last_name", "primary_position", "status", "academic_eligibility", mode="after")
    @classmethod
    def _not_null(cls, value):
        return _reject_null(value)


class ProspectRead(_ReadModel):
    id: int
    team_id: int
    first_name: str
    last_name: str
    primary_position: str
    secondary_position: Optional[str] = None
    school_type: Optional[str] = None
    school_name: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    graduation_year: Optional[int] = None
    class_year: Optional[str] = None
    bats: Optional[str] = None
    throws: Optional[str] = None
    height: Optional[str] = None
    weight: Optional[int] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    gpa: Optional[float] = None
    sat_score: Optional[int] = None
    act_score: Optional[int] = None
    fastball_velocity: Optional[int] = None
    exit_velocity: Optional[int] = None
    status: str
    academic_eligibility: str
    notes: Optional[str] = None
    created_by: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    creator: Optional[UserSummary] = None


# ============================================================
# Depth charts
# ============================================================

class PositionCreate(BaseModel):
    position_code: str = Field(min_length=1, max_length=10)
    position_name: str = Field(min_length=1, max_length=50)
    color: Optional[str] = Field(default=None, pattern=HEX_COLOR)
    icon: Optional[str] = Field(default=None, max_length=50)
    sort_order: int = Field(default=0, ge=0)
    max_players: Optional[int] = Field(default=None, ge=1)
    description: Optional[str] = Field(default=None, max_length=500)

    @field_validator("position_code", "position_name", "icon", mode="before")
    @classmethod
    def _clean_single(cls, value):
        return _sanitize_single_line_text(value)

    @field_validator("description", mode="before")
    @classmethod
    def _clean_multi(cls, value):
        return _sanitize_multiline_text(value)


class PositionUpdate(BaseModel):
    position_code: Optional[str] = Field(default=None, min_length=1, max_length=10)
    position_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    color: Optional[str] = Field(default=None, pattern=HEX_COLOR)
    icon: Optional[str] = Field(default=None, max_length=50)
    sort_order: Optional[int] = Field(default=None, ge=0)
    max_players: Optional[int] = Field(default=None, ge=1)
    description: Optional[str] = Field(default=None, max_length=500)

    @field_validator("position_code", "position_name", "icon", mode="before")
    @classmethod
    def _clean_single(cls, value):
        return _sanitize_single_line_text(value)

    @field_validator("description", mode="before")
    @classmethod
    def _clean_multi(cls, value):
        return _sanitize_multiline_text(value)

    @field_validator("position_code", "position_name", "sort_order", mode="after")
    @classmethod
    def _not_null(cls, value):
        return _reject_null(value)


class AssignmentCreate(BaseModel):
    player_id: int = Field(ge=1)
    depth_order: int = Field(default=1, ge=1)
    notes: Optional[str] = Field(default=None, max_length=500)

    @field_validator("notes", mode="before")
    @classmethod
    def _clean_notes(cls, value):
        return _sanitize_multiline_text(value)


class DepthChartCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)
    is_default: bool = False
    effective_date: Optional[date] = None
    notes: Optional[str] = Field(default=None, max_length=1000)
    # [] means "seed the standard baseball positions"
    positions: Optional[List[PositionCreate]] = None

    @field_validator("name", mode="before")
    @classmethod
    def _clean_name(cls, value):
        return _sanitize_single_line_text(value)

    @field_validator("description", "notes", mode="before")
    @classmethod
    def _clean_multi(cls, value):
        return _sanitize_multiline_text(value)


class DepthChartUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)
    is_default: Optional[bool] = None
    effective_date: Optional[date] = None
    notes: Optional[str] = Field(default=None, max_length=1000)

    @field_validator("name", mode="before")
    @classmethod
    def _clean_name(cls, value):
        return _sanitize_single_line_text(value)

    @field_validator("description", "notes", mode="before")
    @classmethod
    def _clean_multi(cls, value):
        return _sanitize_multiline_text(value)

    @field_validator("name", "is_default", mode="after")
    @classmethod
    def _not_null(cls, value):
        return _reject_null(value)


class AssignmentRead(_ReadModel):
    id: int
    depth_chart_id: int
    position_id: int
    player_id: int
    depth_order: int
    notes: Optional[str] = None
    assigned_by: int
    assigned_at: Optional[datetime] = None
    is_active: bool
    player: Optional[PlayerCard] = None
    assigned_by_user: Optional[UserSummary] = None


class PositionRead(_ReadModel):
    id: int
    depth_chart_id: int
    position_code: str
    position_name: str
    color: Optional[str] = None
    icon: Optional[str] = None
    sort_order: int
    max_players: Optional[int] = None
    description: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PositionWithPlayers(PositionRead):
    players: List[AssignmentRead] = []

    @field_validator("players", mode="before")
    @classmethod
    def _active_only(cls, value):
        return [a for a in (value or []) if getattr(a, "is_active", True)]


class DepthChartSummary(_ReadModel):
    id: int
    team_id: int
    name: str
    description: Optional[str] = None
    is_default: bool
    is_active: bool
    version: int
    effective_date: Optional[date] = None
    notes: Optional[str] = None
    created_by: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    creator: Optional[UserSummary] = None


class DepthChartRead(DepthChartSummary):
    positions: List[PositionWithPlayers] = []

    @field_validator("positions", mode="before")
    @classmethod
    def _active_only(cls, value):
        return [p for p in (value or []) if getattr(p, "is_active", True)]


# ============================================================
# Schedule templates
# ============================================================

class ScheduleTemplateCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None
    template_data: Dict[str, Any]
    is_default: bool = False

    @field_validator("name", mode="before")
    @classmethod
    def _clean_name(cls, value):
        return _sanitize_single_line_text(value)

    @field_validator("description", mode="before")
    @classmethod
    def _clean_multi(cls, value):
        return _sanitize_multiline_text(value)


class ScheduleTemplateUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = None
    template_data: Optional[Dict[str, Any]] = None
    is_default: Optional[bool] = None

    @field_validator("name", mode="before")
    @classmethod
    def _clean_name(cls, value):
        return _sanitize_single_line_text(value)

    @field_validator("description", mode="before")
    @classmethod
    def _clean_multi(cls, value):
        return _sanitize_multiline_text(value)

    @field_validator("name", "template_data", "is_default", mode="after")
    @classmethod
    def _not_null(cls, value):
        return _reject_null(value)


class ScheduleTemplateDuplicate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def _clean_name(cls, value):
        return _sanitize_single_line_text(value)

    @field_validator("description", mode="before")
    @classmethod
    def _clean_multi(cls, value):
        return _sanitize_multiline_text(value)


class ScheduleTemplateRead(_ReadModel):
    id: int
    team_id: int
    name: str
    description: Optional[str] = None
    template_data: Dict[str, Any]
    is_default: bool
    is_active: bool
    created_by: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    creator: Optional[UserSummary] = None


# ============================================================
# Scouts
# ============================================================

ScoutPosition = Literal["Area Scout", "Cross Checker", "National Cross Checker", "Scouting Director"]


class ScoutBase(BaseModel):
    phone: Optional[str] = Field(default=None, max_length=20)
    email: Optional[EmailStr] = None
    notes: Optional[str] = None
    last_contact_date: Optional[date] = None
    next_contact_date: Optional[date] = None
    contact_notes: Optional[str] = None
    coverage_area: Optional[str] = Field(default=None, max_length=500)
    specialization: Optional[str] = Field(default=None, max_length=200)

    @field_validator("phone", "coverage_area", "specialization", mode="before")
    @classmethod
    def _clean_single(cls, value):
        return _sanitize_single_line_text(value, allow_empty=True)

    @field_validator("notes", "contact_notes", mode="before")
    @classmethod
    def _clean_multi(cls, value):
        return _sanitize_multiline_text(value)


class ScoutCreate(ScoutBase):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    organization_name: str = Field(min_length=1, max_length=200)
    position: ScoutPosition

    @field_validator("first_name", "last_name", "organization_name", mode="before")
    @classmethod
    def _clean_names(cls, value):
        return _sanitize_single_line_text(value)


class ScoutUpdate(ScoutBase):
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    organization_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    position: Optional[ScoutPosition] = None
    status: Optional[Literal["active", "inactive"]] = None

    @field_validator("first_name", "last_name", "organization_name", mode="before")
    @classmethod
    def _clean_names(cls, value):
        return _sanitize_single_line_text(value)

    @field_validator("first_name", "last_name", "organization_name", "position", "status", mode="after")
    @classmethod
    def _not_null(cls, value):
        return _reject_null(value)


class ScoutRead(_ReadModel):
    id: int
    team_id: int
    first_name: str
    last_name: str
    organization_name: str
    position: str
    phone: Optional[str] = None
    email: Optional[str] = None
    notes: Optional[str] = None
    last_contact_date: Optional[date] = None
    next_contact_date: Optional[date] = None
    contact_notes: Optional[str] = None
    status: str
    coverage_area: Optional[str] = None
    specialization: Optional[str] = None
    created_by: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    creator: Optional[UserSummary] = None


# ============================================================
# Games
# ============================================================

class GameBase(BaseModel):
    team_score: Optional[int] = Field(default=None, ge=0)
    opponent_score: Optional[int] = Field(default=None, ge=0)
    result: Optional[Literal["W", "L", "T"]] = None
    location: Optional[str] = Field(default=None, max_length=200)
    season: Optional[str] = Field(default=None, max_length=20)
    notes: Optional[str] = None

    @field_validator("location", "season", mode="before")
    @classmethod
    def _clean_single(cls, value):
        return _sanitize_single_line_text(value, allow_empty=True)

    @field_validator("notes", mode="before")
    @classmethod
    def _clean_multi(cls, value):
        return _sanitize_multiline_text(value)


class GameCreate(GameBase):
    opponent: str = Field(min_length=1, max_length=100)
    game_date: date
    home_away: Literal["home", "away"]

    @field_validator("opponent", mode="before")
    @classmethod
    def _clean_opponent(cls, value):
        return _sanitize_single_line_text(value)


class GameUpdate(GameBase):
    opponent: Optional[str] = Field(default=None, min_length=1, max_length=100)
    game_date: Optional[date] = None
    home_away: Optional[Literal["home", "away"]] = None

    @field_validator("opponent", mode="before")
    @classmethod
    def _clean_opponent(cls, value):
        return _sanitize_single_line_text(value)

    @field_validator("opponent", "game_date", "home_away", mode="after")
    @classmethod
    def _not_null(cls, value):
        return _reject_null(value)


class GameRead(_ReadModel):
    id: int
    team_id: int
    opponent: str
    game_date: date
    home_away: str
    team_score: Optional[int] = None
    opponent_score: Optional[int] = None
    result: Optional[str] = None
    location: Optional[str] = None
    season: Optional[str] = None
    notes: Optional[str] = None
    created_by: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    creator: Optional[UserSummary] = None


# ============================================================
# Scouting reports
# ============================================================

class ScoutingReportBase(BaseModel):
    game_date: Optional[date] = None
    opponent: Optional[str] = Field(default=None, min_length=1, max_length=100)
    event_type: Optional[Literal["game", "showcase", "practice", "workout", "video"]] = None
    overall_grade: Optional[Grade] = None
    hitting_grade: Optional[Grade] = None
    pitching_grade: Optional[Grade] = None
    fielding_grade: Optional[Grade] = None
    speed_grade: Optional[Grade] = None
    intangibles_grade: Optional[Grade] = None
    projection: Optional[Literal["MLB", "AAA", "AA", "A+", "A", "A-", "College", "High School"]] = None
    hitting_notes: Optional[str] = None
    pitching_notes: Optional[str] = None
    fielding_notes: Optional[str] = None
    overall_notes: Optional[str] = None

    @field_validator("opponent", mode="before")
    @classmethod
    def _clean_single(cls, value):
        return _sanitize_single_line_text(value)

    @field_validator("hitting_notes", "pitching_notes", "fielding_notes", "overall_notes", mode="before")
    @classmethod
    def _clean_multi(cls, value):
        return _sanitize_multiline_text(value)


class ScoutingReportCreate(ScoutingReportBase):
    player_id: int = Field(ge=1)
    report_date: date


class ScoutingReportUpdate(ScoutingReportBase):
    player_id: Optional[int] = Field(default=None, ge=1)
    report_date: Optional[date] = None

    @field_validator("player_id", "report_date", mode="after")
    @classmethod
    def _not_null(cls, value):
        return _reject_null(value)


class PlayerName(_ReadModel):
    id: int
    first_name: str
    last_name: str
    position: str


class ScoutingReportRead(_ReadModel):
    id: int
    player_id: int
    report_date: date
    game_date: Optional[date] = None
    opponent: Optional[str] = None
    event_type: Optional[str] = None
    overall_grade: Optional[str] = None
    hitting_grade: Optional[str] = None
    pitching_grade: Optional[str] = None
    fielding_grade: Optional[str] = None
    speed_grade: Optional[str] = None
    intangibles_grade: Optional[str] = None
    projection: Optional[str] = None
    hitting_notes: Optional[str] = None
    pitching_notes: Optional[str] = None
    fielding_notes: Optional[str] = None
    overall_notes: Optional[str] = None
    created_by: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    player: Optional[PlayerName] = None
    creator: Optional[UserSummary] = None


# ============================================================
# Custom reports
# ============================================================

ReportType = Literal["player-performance", "team-statistics", "scouting-analysis", "recruitment-pipeline", "custom"]
ReportStatus = Literal["draft", "published", "archived"]


class ReportCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)
    type: ReportType
    status: ReportStatus = "draft"
    data_sources: List[Any] = []
    sections: List[Any] = []
    filters: Dict[str, Any] = {}
    schedule: Optional[Dict[str, Any]] = None

    @field_validator("title", mode="before")
    @classmethod
    def _clean_title(cls, value):
        return _sanitize_single_line_text(value)

    @field_validator("description", mode="before")
    @classmethod
    def _clean_multi(cls, value):
        return _sanitize_multiline_text(value)


class ReportUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)
    type: Optional[ReportType] = None
    status: Optional[ReportStatus] = None
    data_sources: Optional[List[Any]] = None
    sections: Optional[List[Any]] = None
    filters: Optional[Dict[str, Any]] = None
    schedule: Optional[Dict[str, Any]] = None

    @field_validator("title", mode="before")
    @classmethod
    def _clean_title(cls, value):
        return _sanitize_single_line_text(value)

    @field_validator("description", mode="before")
    @classmethod
    def _clean_multi(cls, value):
        return _sanitize_multiline_text(value)

    @field_validator("title", "type", "status", mode="after")
    @classmethod
    def _not_null(cls, value):
        return _reject_null(value)


class ReportRead(_ReadModel):
    id: int
    team_id: int
    title: str
    description: Optional[str] = None
    type: str
    status: str
    data_sources: Optional[List[Any]] = None
    sections: Optional[List[Any]] = None
    filters: Optional[Dict[str, Any]] = None
    schedule: Optional[Dict[str, Any]] = None
    last_generated: Optional[datetime] = None
    generation_count: int
    created_by: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    creator: Optional[UserSummary] = None


# ============================================================
# Locations
# ============================================================

LocationType = Literal[
    "field", "gym", "facility", "stadium", "practice_field", "batting_cage", "weight_room", "classroom", "other"
]


class LocationBase(BaseModel):
    address: Optional[str] = Field(default=None, max_length=500)
    city: Optional[str] = Field(default=None, max_length=100)
    state: Optional[str] = Field(default=None, max_length=50)
    zip_code: Optional[str] = Field(default=None, max_length=20)
    capacity: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = Field(default=None, max_length=1000)
    contact_info: Optional[Dict[str, Any]] = None
    amenities: Optional[List[str]] = None

    @field_validator("address", "city", "state", "zip_code", mode="before")
    @classmethod
    def _clean_single(cls, value):
        return _sanitize_single_line_text(value, allow_empty=True)

    @field_validator("notes", mode="before")
    @classmethod
    def _clean_multi(cls, value):
        return _sanitize_multiline_text(value)


class LocationCreate(LocationBase):
    name: str = Field(min_length=1, max_length=200)
    location_type: LocationType = "field"
    is_active: bool = True
    is_home_venue: bool = False

    @field_validator("name", mode="before")
    @classmethod
    def _clean_name(cls, value):
        return _sanitize_single_line_text(value)


class LocationUpdate(LocationBase):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    location_type: Optional[LocationType] = None
    is_active: Optional[bool] = None
    is_home_venue: Optional[bool] = None

    @field_validator("name", mode="before")
    @classmethod
    def _clean_name(cls, value):
        return _sanitize_single_line_text(value)

    @field_validator("name", "location_type", "is_active", "is_home_venue", mode="after")
    @classmethod
    def _not_null(cls, value):
        return _reject_null(value)


class LocationSummary(_ReadModel):
    id: int
    name: str
    location_type: str
    address: Optional[str] = None


class LocationRead(LocationSummary):
    team_id: int
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    capacity: Optional[int] = None
    notes: Optional[str] = None
    contact_info: Optional[Dict[str, Any]] = None
    amenities: Optional[List[str]] = None
    is_active: bool
    is_home_venue: bool
    created_by: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    creator: Optional[UserSummary] = None


# ============================================================
# Schedules
# ============================================================

# "date" is also a field name on the schedule models below
CalendarDate = date

SectionType = Literal[
    "general",
    "position_players",
    "pitchers",
    "grinder_performance",
    "grinder_hitting",
    "grinder_defensive",
    "bullpen",
    "live_bp",
]


class ActivityCreate(BaseModel):
    time: str = Field(min_length=1, max_length=20)
    activity: str = Field(min_length=1, max_length=200)
    location: Optional[str] = Field(default=None, max_length=100)
    staff: Optional[str] = Field(default=None, max_length=100)
    group: Optional[str] = Field(default=None, max_length=100)
    notes: Optional[str] = None

    @field_validator("time", "activity", mode="before")
    @classmethod
    def _clean_required(cls, value):
        return _sanitize_single_line_text(value)

    @field_validator("location", "staff", "group", mode="before")
    @classmethod
    def _clean_single(cls, value):
        return _sanitize_single_line_text(value, allow_empty=True)

    @field_validator("notes", mode="before")
    @classmethod
    def _clean_multi(cls, value):
        return _sanitize_multiline_text(value)


class SectionCreate(BaseModel):
    type: SectionType
    title: str = Field(min_length=1, max_length=100)
    activities: List[ActivityCreate] = Field(default_factory=list)

    @field_validator("title", mode="before")
    @classmethod
    def _clean_title(cls, value):
        return _sanitize_single_line_text(value)


class ScheduleCreate(BaseModel):
    team_name: str = Field(min_length=1, max_length=100)
    program_name: str = Field(min_length=1, max_length=100)
    date: CalendarDate
    motto: Optional[str] = Field(default=None, max_length=200)
    sections: List[SectionCreate] = Field(default_factory=list)

    @field_validator("team_name", "program_name", mode="before")
    @classmethod
    def _clean_names(cls, value):
        return _sanitize_single_line_text(value)

    @field_validator("motto", mode="before")
    @classmethod
    def _clean_motto(cls, value):
        return _sanitize_single_line_text(value, allow_empty=True)


class ScheduleUpdate(BaseModel):
    team_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    program_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    date: Optional[CalendarDate] = None
    motto: Optional[str] = Field(default=None, max_length=200)
    # when present, replaces every section and activity
    sections: Optional[List[SectionCreate]] = None

    @field_validator("team_name", "program_name", mode="before")
    @classmethod
    def _clean_names(cls, value):
        return _sanitize_single_line_text(value)

    @field_validator("motto", mode="before")
    @classmethod
    def _clean_motto(cls, value):
        return _sanitize_single_line_text(value, allow_empty=True)

    @field_validator("team_name", "program_name", "date", "sections", mode="after")
    @classmethod
    def _not_null(cls, value):
        return _reject_null(value)


class ActivityRead(_ReadModel):
    id: int
    section_id: int
    time: str
    activity: str
    location: Optional[str] = None
    staff: Optional[str] = None
    group: Optional[str] = None
    notes: Optional[str] = None
    sort_order: int


class SectionRead(_ReadModel):
    id: int
    schedule_id: int
    type: str
    title: str
    sort_order: int
    activities: List[ActivityRead] = []


class ScheduleRead(_ReadModel):
    id: int
    team_id: int
    team_name: str
    program_name: str
    date: CalendarDate
    motto: Optional[str] = None
    is_active: bool
    created_by: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    creator: Optional[UserSummary] = None
    sections: List[SectionRead] = []


# ============================================================
# Schedule events
# ============================================================

TIME_OF_DAY = r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$"

EventType = Literal[
    "practice", "game", "scrimmage", "tournament", "meeting", "training", "conditioning", "team_building", "other"
]
EventPriority = Literal["low", "medium", "high", "critical"]
EventDateStatus = Literal["scheduled", "confirmed", "cancelled", "postponed", "completed"]


class EventDateCreate(BaseModel):
    event_date: date
    start_time_override: Optional[str] = Field(default=None, pattern=TIME_OF_DAY)
    end_time_override: Optional[str] = Field(default=None, pattern=TIME_OF_DAY)
    location_id_override: Optional[int] = Field(default=None, ge=1)
    notes: Optional[str] = Field(default=None, max_length=500)
    status: EventDateStatus = "scheduled"
    cancellation_reason: Optional[str] = Field(default=None, max_length=200)
    weather_conditions: Optional[str] = Field(default=None, max_length=100)
    attendance_count: Optional[int] = Field(default=None, ge=0)

    @field_validator("cancellation_reason", "weather_conditions", mode="before")
    @classmethod
    def _clean_single(cls, value):
        return _sanitize_single_line_text(value, allow_empty=True)

    @field_validator("notes", mode="before")
    @classmethod
    def _clean_multi(cls, value):
        return _sanitize_multiline_text(value)


def _unique_event_dates(value):
    if value is None:
        return value
    seen = set()
    for entry in value:
        if entry.event_date in seen:
            raise ValueError(f"Duplicate event date {entry.event_date.isoformat()}")
        seen.add(entry.event_date)
    return value


class ScheduleEventBase(BaseModel):
    description: Optional[str] = Field(default=None, max_length=1000)
    location_id: Optional[int] = Field(default=None, ge=1)
    start_time: Optional[str] = Field(default=None, pattern=TIME_OF_DAY)
    end_time: Optional[str] = Field(default=None, pattern=TIME_OF_DAY)
    duration_minutes: Optional[int] = Field(default=None, ge=1, le=1440)
    recurring_pattern: Optional[Dict[str, Any]] = None
    required_equipment: Optional[List[str]] = None
    max_participants: Optional[int] = Field(default=None, ge=1)
    target_groups: Optional[List[str]] = None
    preparation_notes: Optional[str] = Field(default=None, max_length=1000)

    @field_validator("description", "preparation_notes", mode="before")
    @classmethod
    def _clean_multi(cls, value):
        return _sanitize_multiline_text(value)


class ScheduleEventCreate(ScheduleEventBase):
    title: str = Field(min_length=1, max_length=200)
    event_type: EventType = "practice"
    schedule_template_id: int = Field(ge=1)
    priority: EventPriority = "medium"
    event_dates: List[EventDateCreate] = Field(min_length=1)

    @field_validator("title", mode="before")
    @classmethod
    def _clean_title(cls, value):
        return _sanitize_single_line_text(value)

    @field_validator("event_dates", mode="after")
    @classmethod
    def _unique_dates(cls, value):
        return _unique_event_dates(value)


class ScheduleEventUpdate(ScheduleEventBase):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    event_type: Optional[EventType] = None
    schedule_template_id: Optional[int] = Field(default=None, ge=1)
    priority: Optional[EventPriority] = None
    # when present, replaces every occurrence
    event_dates: Optional[List[EventDateCreate]] = Field(default=None, min_length=1)

    @field_validator("title", mode="before")
    @classmethod
    def _clean_title(cls, value):
        return _sanitize_single_line_text(value)

    @field_validator("title", "event_type", "schedule_template_id", "priority", "event_dates", mode="after")
    @classmethod
    def _not_null(cls, value):
        return _reject_null(value)

    @field_validator("event_dates", mode="after")
    @classmethod
    def _unique_dates(cls, value):
        return _unique_event_dates(value)


class TemplateSummary(_ReadModel):
    id: int
    name: str


class EventDateRead(_ReadModel):
    id: int
    event_date: date
    start_time_override: Optional[str] = None
    end_time_override: Optional[str] = None
    location_id_override: Optional[int] = None
    override_location: Optional[LocationSummary] = None
    notes: Optional[str] = None
    status: str
    cancellation_reason: Optional[str] = None
    weather_conditions: Optional[str] = None
    attendance_count: Optional[int] = None


class ScheduleEventRead(_ReadModel):
    id: int
    team_id: int
    title: str
    description: Optional[str] = None
    event_type: str
    schedule_template_id: int
    template: Optional[TemplateSummary] = None
    location_id: Optional[int] = None
    location: Optional[LocationSummary] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    duration_minutes: Optional[int] = None
    recurring_pattern: Optional[Dict[str, Any]] = None
    required_equipment: Optional[List[str]] = None
    max_participants: Optional[int] = None
    target_groups: Optional[List[str]] = None
    preparation_notes: Optional[str] = None
    priority: str
    dates: List[EventDateRead] = []
    created_by: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    creator: Optional[UserSummary] = None


# ============================================================
# Coaches / high-school coaches
# ============================================================

CoachPosition = Literal["Head Coach", "Recruiting Coordinator", "Pitching Coach", "Volunteer"]
HighSchoolCoachPosition = Literal[
    "Head Coach", "Assistant Coach", "JV Coach", "Freshman Coach", "Pitching Coach", "Hitting Coach"
]
SchoolClassification = Literal["1A", "2A", "3A", "4A", "5A", "6A", "Private"]
RelationshipType = Literal[
    "Recruiting Contact", "Former Player", "Coaching Connection", "Tournament Contact", "Camp Contact", "Other"
]


class ContactBase(BaseModel):
    """Contact-tracking fields shared by coaches and high-school coaches."""

    phone: Optional[str] = Field(default=None, max_length=20)
    email: Optional[EmailStr] = None
    notes: Optional[str] = None
    last_contact_date: Optional[date] = None
    next_contact_date: Optional[date] = None
    contact_notes: Optional[str] = None

    @field_validator("phone", mode="before")
    @classmethod
    def _clean_phone(cls, value):
        return _sanitize_single_line_text(value, allow_empty=True)

    @field_validator("notes", "contact_notes", mode="before")
    @classmethod
    def _clean_multi(cls, value):
        return _sanitize_multiline_text(value)


class CoachCreate(ContactBase):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    school_name: str = Field(min_length=1, max_length=200)
    position: CoachPosition

    @field_validator("first_name", "last_name", "school_name", mode="before")
    @classmethod
    def _clean_names(cls, value):
        return _sanitize_single_line_text(value)


class CoachUpdate(ContactBase):
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    school_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    position: Optional[CoachPosition] = None
    status: Optional[Literal["active", "inactive"]] = None

    @field_validator("first_name", "last_name", "school_name", mode="before")
    @classmethod
    def _clean_names(cls, value):
        return _sanitize_single_line_text(value)

    @field_validator("first_name", "last_name", "school_name", "position", "status", mode="after")
    @classmethod
    def _not_null(cls, value):
        return _reject_null(value)


class CoachRead(_ReadModel):
    id: int
    team_id: int
    first_name: str
    last_name: str
    school_name: str
    position: str
    phone: Optional[str] = None
    email: Optional[str] = None
    notes: Optional[str] = None
    last_contact_date: Optional[date] = None
    next_contact_date: Optional[date] = None
    contact_notes: Optional[str] = None
    status: str
    created_by: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    creator: Optional[UserSummary] = None


class HighSchoolCoachBase(ContactBase):
    school_district: Optional[str] = Field(default=None, max_length=200)
    city: Optional[str] = Field(default=None, max_length=100)
    state: Optional[str] = Field(default=None, max_length=50)
    region: Optional[str] = Field(default=None, max_length=100)
    years_coaching: Optional[int] = Field(default=None, ge=0, le=50)
    conference: Optional[str] = Field(default=None, max_length=100)
    school_classification: Optional[SchoolClassification] = None

    @field_validator("school_district", "city", "state", "region", "conference", mode="before")
    @classmethod
    def _clean_single(cls, value):
        return _sanitize_single_line_text(value, allow_empty=True)


class HighSchoolCoachCreate(HighSchoolCoachBase):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    school_name: str = Field(min_length=1, max_length=200)
    position: HighSchoolCoachPosition
    relationship_type: RelationshipType = "Recruiting Contact"
    players_sent_count: int = Field(default=0, ge=0)

    @field_validator("first_name", "last_name", "school_name", mode="before")
    @classmethod
    def _clean_names(cls, value):
        return _sanitize_single_line_text(value)


class HighSchoolCoachUpdate(HighSchoolCoachBase):
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    school_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    position: Optional[HighSchoolCoachPosition] = None
    relationship_type: Optional[RelationshipType] = None
    players_sent_count: Optional[int] = Field(default=None, ge=0)
    status: Optional[Literal["active", "inactive"]] = None

    @field_validator("first_name", "last_name", "school_name", mode="before")
    @classmethod
    def _clean_names(cls, value):
        return _sanitize_single_line_text(value)

    @field_validator(
        "first_name",
        "last_name",
        "school_name",
        "position",
        "relationship_type",
        "players_sent_count",
        "status",
        mode="after",
    )
    @classmethod
    def _not_null(cls, value):
        return _reject_null(value)


class HighSchoolCoachRead(CoachRead):
    school_district: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    region: Optional[str] = None
    years_coaching: Optional[int] = None
    conference: Optional[str] = None
    school_classification: Optional[str] = None
    relationship_type: str
    players_sent_count: int


# ============================================================
# Vendors
# ============================================================

VendorType = Literal[
    "Equipment", "Apparel", "Technology", "Food Service", "Transportation", "Medical", "Facilities", "Other"
]
VendorStatus = Literal["active", "inactive", "pending", "expired"]
WEBSITE_URL = r"^https?://\S+$"


class VendorBase(ContactBase):
    contact_person: Optional[str] = Field(default=None, max_length=100)
    address: Optional[str] = None
    city: Optional[str] = Field(default=None, max_length=100)
    state: Optional[str] = Field(default=None, max_length=50)
    zip_code: Optional[str] = Field(default=None, max_length=10)
    website: Optional[str] = Field(default=None, max_length=255, pattern=WEBSITE_URL)
    services_provided: Optional[str] = None
    contract_start_date: Optional[date] = None
    contract_end_date: Optional[date] = None
    contract_value: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    payment_terms: Optional[str] = Field(default=None, max_length=100)

    @field_validator("contact_person", "city", "state", "zip_code", "website", "payment_terms", mode="before")
    @classmethod
    def _clean_single(cls, value):
        return _sanitize_single_line_text(value, allow_empty=True)

    @field_validator("address", "services_provided", mode="before")
    @classmethod
    def _clean_long(cls, value):
        return _sanitize_multiline_text(value)


class VendorCreate(VendorBase):
    company_name: str = Field(min_length=1, max_length=200)
    vendor_type: VendorType
    status: VendorStatus = "active"

    @field_validator("company_name", mode="before")
    @classmethod
    def _clean_company(cls, value):
        return _sanitize_single_line_text(value)


class VendorUpdate(VendorBase):
    company_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    vendor_type: Optional[VendorType] = None
    status: Optional[VendorStatus] = None

    @field_validator("company_name", mode="before")
    @classmethod
    def _clean_company(cls, value):
        return _sanitize_single_line_text(value)

    @field_validator("company_name", "vendor_type", "status", mode="after")
    @classmethod
    def _not_null(cls, value):
        return _reject_null(value)


class VendorRead(_ReadModel):
    id: int
    team_id: int
    company_name: str
    contact_person: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    website: Optional[str] = None
    vendor_type: str
    services_provided: Optional[str] = None
    contract_start_date: Optional[date] = None
    contract_end_date: Optional[date] = None
    contract_value: Optional[Decimal] = None
    payment_terms: Optional[str] = None
    notes: Optional[str] = None
    last_contact_date: Optional[date] = None
    next_contact_date: Optional[date] = None
    contact_notes: Optional[str] = None
    status: str
    created_by: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    creator: Optional[UserSummary] = None
