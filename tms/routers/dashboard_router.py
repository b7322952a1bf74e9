# /tms/routers/dashboard_router.py

# --- Core FastAPI Imports ---
from typing import Callable, List, Optional, Union

import structlog
from fastapi import APIRouter, Depends, Header, HTTPException, Query, status

# --- Service and Model Imports ---
from ..config import MAX_ACTIVITY_LIMIT, get_settings
from ..models.caller_model import ADMIN_ROLES, BEDRIFT_ROLES, CallerContext, UserRole
from ..models.dashboard_model import (
    Achievement,
    ActivityItem,
    AdminDashboardStats,
    BedriftDashboardStats,
    ElevDashboardStats,
    SikkerhetskontrollProgress,
    UpcomingEvent,
)
from ..services.dashboard_helpers.scope import AdminScope, BedriftScope, DashboardScope, ElevScope
from ..services.dashboard_service import DashboardService, ElevNotFoundError, get_dashboard_service
from ..utils.clock import SystemClock

logger = structlog.get_logger(__name__)

router = APIRouter()

LIMIT_QUERY = Query(
    default=get_settings().default_activity_limit,
    ge=1,
    le=MAX_ACTIVITY_LIMIT,
    description="Maximum number of items to return.",
)


# --- Caller Resolution ---

def get_current_caller(
    x_user_role: Optional[str] = Header(default=None),
    x_user_id: Optional[int] = Header(default=None),
    x_bedrift_id: Optional[int] = Header(default=None),
    x_elev_id: Optional[int] = Header(default=None),
) -> CallerContext:
    """
    FastAPI dependency that provides the authenticated caller.

    Token verification happens in the gateway in front of this API, which
    forwards the verified identity as X-User-* headers.
    """
    if not x_user_role:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    try:
        role = UserRole(x_user_role.upper())
    except ValueError:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Unauthorized")
    return CallerContext(role=role, user_id=x_user_id, bedrift_id=x_bedrift_id, elev_id=x_elev_id)


def require_roles(*roles: UserRole) -> Callable[..., CallerContext]:
    allowed = frozenset(roles)

    def dependency(caller: CallerContext = Depends(get_current_caller)) -> CallerContext:
        if caller.role not in allowed:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Unauthorized")
        return caller

    return dependency


def _require_bedrift_id(caller: CallerContext) -> int:
    if not caller.bedrift_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="BedriftId is required")
    return caller.bedrift_id


def _require_elev_id(caller: CallerContext) -> int:
    if not caller.elev_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="ElevId is required")
    return caller.elev_id


def _scope_for(caller: CallerContext) -> DashboardScope:
    """Selects the dashboard a caller sees when they do not name one."""
    if caller.is_admin:
        return AdminScope()
    if caller.role in BEDRIFT_ROLES and caller.bedrift_id:
        return BedriftScope(caller.bedrift_id)
    if caller.role == UserRole.ELEV and caller.elev_id:
        return ElevScope(caller.elev_id)
    raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Unauthorized")


async def _run(caller: CallerContext, failure_detail: str, call):
    """
    Awaits one service call, translating a missing student into 404 and any
    unexpected error into a logged, generic 500.
    """
    try:
        return await call
    except ElevNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Elev not found")
    except Exception:
        logger.exception(
            "dashboard_request_failed",
            role=caller.role.value,
            bedrift_id=caller.bedrift_id,
            elev_id=caller.elev_id,
            detail=failure_detail,
        )
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=failure_detail)


_admin = require_roles(*ADMIN_ROLES)
_bedrift = require_roles(*BEDRIFT_ROLES)
_elev = require_roles(UserRole.ELEV)


# --- Admin Dashboard Endpoints (/api/dashboard/admin) ---

@router.get("/admin/stats", response_model=AdminDashboardStats, summary="Get Admin Dashboard Statistics")
async def get_admin_stats(
    caller: CallerContext = Depends(_admin),
    service: DashboardService = Depends(get_dashboard_service),
):
    return await _run(caller, "Failed to fetch admin dashboard statistics", service.get_admin_dashboard_stats())


@router.get("/admin/activities", response_model=List[ActivityItem], summary="Get System-wide Recent Activity")
async def get_admin_activities(
    limit: int = LIMIT_QUERY,
    caller: CallerContext = Depends(_admin),
    service: DashboardService = Depends(get_dashboard_service),
):
    return await _run(caller, "Failed to fetch admin activities", service.get_admin_recent_activity(limit))


# --- Company Dashboard Endpoints (/api/dashboard/bedrift) ---

@router.get("/bedrift/stats", response_model=BedriftDashboardStats, summary="Get Company Dashboard Statistics")
async def get_bedrift_stats(
    caller: CallerContext = Depends(_bedrift),
    service: DashboardService = Depends(get_dashboard_service),
):
    bedrift_id = _require_bedrift_id(caller)
    return await _run(
        caller, "Failed to fetch company dashboard statistics", service.get_bedrift_dashboard_stats(bedrift_id)
    )


@router.get("/bedrift/activities", response_model=List[ActivityItem], summary="Get Company Recent Activity")
async def get_bedrift_activities(
    limit: int = LIMIT_QUERY,
    caller: CallerContext = Depends(_bedrift),
    service: DashboardService = Depends(get_dashboard_service),
):
    bedrift_id = _require_bedrift_id(caller)
    return await _run(
        caller, "Failed to fetch company activities", service.get_bedrift_recent_activity(bedrift_id, limit)
    )


@router.get("/bedrift/upcoming-events", response_model=List[UpcomingEvent], summary="Get Company Upcoming Events")
async def get_bedrift_upcoming_events(
    limit: int = LIMIT_QUERY,
    caller: CallerContext = Depends(_bedrift),
    service: DashboardService = Depends(get_dashboard_service),
):
    bedrift_id = _require_bedrift_id(caller)
    return await _run(
        caller, "Failed to fetch upcoming events", service.get_bedrift_upcoming_events(bedrift_id, limit)
    )


# --- Student Dashboard Endpoints (/api/dashboard/elev) ---

@router.get("/elev/stats", response_model=ElevDashboardStats, summary="Get Student Dashboard Statistics")
async def get_elev_stats(
    caller: CallerContext = Depends(_elev),
    service: DashboardService = Depends(get_dashboard_service),
):
    elev_id = _require_elev_id(caller)
    return await _run(
        caller, "Failed to fetch student dashboard statistics", service.get_elev_dashboard_stats(elev_id)
    )


@router.get("/elev/activities", response_model=List[ActivityItem], summary="Get Student Recent Activity")
async def get_elev_activities(
    limit: int = LIMIT_QUERY,
    caller: CallerContext = Depends(_elev),
    service: DashboardService = Depends(get_dashboard_service),
):
    elev_id = _require_elev_id(caller)
    return await _run(caller, "Failed to fetch student activities", service.get_elev_recent_activity(elev_id, limit))


@router.get("/elev/upcoming-lessons", response_model=List[UpcomingEvent], summary="Get Student Upcoming Lessons")
async def get_elev_upcoming_lessons(
    limit: int = LIMIT_QUERY,
    caller: CallerContext = Depends(_elev),
    service: DashboardService = Depends(get_dashboard_service),
):
    elev_id = _require_elev_id(caller)
    return await _run(caller, "Failed to fetch upcoming lessons", service.get_elev_upcoming_lessons(elev_id, limit))


@router.get("/elev/achievements", response_model=List[Achievement], summary="Get Student Recent Achievements")
async def get_elev_achievements(
    limit: int = Query(default=5, ge=1, le=MAX_ACTIVITY_LIMIT),
    caller: CallerContext = Depends(_elev),
    service: DashboardService = Depends(get_dashboard_service),
):
    elev_id = _require_elev_id(caller)
    return await _run(
        caller, "Failed to fetch student achievements", service.get_elev_recent_achievements(elev_id, limit)
    )


@router.get(
    "/elev/sikkerhetskontroll-progress",
    response_model=List[SikkerhetskontrollProgress],
    summary="Get Student Safety-Control Progress per Category",
)
async def get_elev_sikkerhetskontroll_progress(
    caller: CallerContext = Depends(_elev),
    service: DashboardService = Depends(get_dashboard_service),
):
    elev_id = _require_elev_id(caller)
    return await _run(
        caller, "Failed to fetch safety control progress", service.get_elev_sikkerhetskontroll_progress(elev_id)
    )


# --- Role-dispatched Endpoints (/api/dashboard) ---

@router.get(
    "/stats",
    response_model=Union[AdminDashboardStats, BedriftDashboardStats, ElevDashboardStats],
    summary="Get the Caller's Dashboard Statistics",
)
async def get_stats(
    caller: CallerContext = Depends(get_current_caller),
    service: DashboardService = Depends(get_dashboard_service),
):
    scope = _scope_for(caller)
    return await _run(caller, "Failed to fetch dashboard statistics", service.get_dashboard_stats(scope))


@router.get("/activities", response_model=List[ActivityItem], summary="Get the Caller's Recent Activity")
async def get_activities(
    limit: int = LIMIT_QUERY,
    caller: CallerContext = Depends(get_current_caller),
    service: DashboardService = Depends(get_dashboard_service),
):
    scope = _scope_for(caller)
    return await _run(caller, "Failed to fetch dashboard activities", service.get_recent_activity(scope, limit))


# --- Health Check (/api/dashboard/health) ---

@router.get("/health", summary="Dashboard API Health Check")
async def get_dashboard_health():
    """Unauthenticated liveness probe for the dashboard routes."""
    return {
        "status": "healthy",
        "timestamp": SystemClock().now().isoformat(),
        "service": "dashboard-api",
    }
