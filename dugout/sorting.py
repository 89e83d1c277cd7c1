"""Paging and ``orderBy``/``sortDirection`` handling for list endpoints."""

from dataclasses import dataclass
from math import ceil
from typing import Annotated, Dict, List, Optional, Sequence

from fastapi import Query
from pydantic import AfterValidator

from dugout.errors import ValidationFailed

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 20

ALLOWED_SORT_COLUMNS: Dict[str, Sequence[str]] = {
    "players": (
        "first_name",
        "last_name",
        "position",
        "school_type",
        "graduation_year",
        "created_at",
        "status",
        "batting_avg",
        "era",
    ),
    "games": (
        "game_date",
        "opponent",
        "home_away",
        "result",
        "team_score",
        "opponent_score",
        "season",
        "created_at",
    ),
    "vendors": (
        "company_name",
        "contact_person",
        "vendor_type",
        "contract_value",
        "contract_start_date",
        "contract_end_date",
        "last_contact_date",
        "next_contact_date",
        "status",
        "created_at",
    ),
}

DEFAULT_SORT: Dict[str, tuple] = {
    "players": ("created_at", "DESC"),
    "games": ("game_date", "DESC"),
    "vendors": ("created_at", "DESC"),
}


@dataclass(frozen=True)
class Page:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def meta(self, total: int) -> dict:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": total,
            "pages": ceil(total / self.limit) if total else 0,
        }


def pagination(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
) -> Page:
    return Page(page=page, limit=limit)


@dataclass(frozen=True)
class Sort:
    column: str
    direction: str

    @property
    def descending(self) -> bool:
        return self.direction == "DESC"

    def apply(self, stmt, model):
        col = getattr(model, self.column)
        order = col.desc() if self.descending else col.asc()
        # id keeps the order total when the sort column has ties
        return stmt.order_by(order, model.id.desc() if self.descending else model.id.asc())


def _order_by_checker(entity: str):
    allowed = ALLOWED_SORT_COLUMNS[entity]

    def check(value: Optional[str]) -> Optional[str]:
        if value and value not in allowed:
            raise ValueError(f"Invalid orderBy column '{value}'. Allowed columns: {', '.join(allowed)}")
        return value

    return check


def _check_direction(value: Optional[str]) -> Optional[str]:
    if not value:
        return value
    if value.upper() not in ("ASC", "DESC"):
        raise ValueError(f"Invalid sortDirection '{value}'. Must be 'ASC' or 'DESC'")
    return value.upper()


def validate_sort(entity: str, order_by: Optional[str], sort_direction: Optional[str]) -> Sort:
    """Resolve a ``Sort`` for ``entity``, collecting one error per bad parameter."""

    default_column, default_direction = DEFAULT_SORT[entity]
    errors: List[Dict[str, str]] = []
    checks = (
        ("orderBy", _order_by_checker(entity), order_by),
        ("sortDirection", _check_direction, sort_direction),
    )
    resolved = {}
    for path, check, value in checks:
        try:
            resolved[path] = check(value)
        except ValueError as exc:
            errors.append({"path": path, "message": str(exc)})

    if errors:
        raise ValidationFailed(errors)
    return Sort(
        column=resolved["orderBy"] or default_column,
        direction=resolved["sortDirection"] or default_direction,
    )


def sort_params(entity: str):
    """Dependency factory yielding a validated ``Sort`` for ``entity``.

    The whitelist checks run as parameter validators, so a bad ``orderBy`` is
    reported together with every other bad query parameter of the request.
    """

    default_column, default_direction = DEFAULT_SORT[entity]

    def dependency(
        orderBy: Annotated[Optional[str], Query(), AfterValidator(_order_by_checker(entity))] = None,
        sortDirection: Annotated[Optional[str], Query(), AfterValidator(_check_direction)] = None,
    ) -> Sort:
        return Sort(column=orderBy or default_column, direction=sortDirection or default_direction)

    return dependency
