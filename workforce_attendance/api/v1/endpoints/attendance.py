"""
Attendance Endpoints - Check-in/check-out, daily summaries, listing and overrides
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional
from datetime import date

from workforce_attendance.db.session import get_db
from workforce_attendance.services.attendance_service import AttendanceService
from workforce_attendance.services.override_service import AttendanceOverrideService
from workforce_attendance.services.visibility import resolve_listing_user_filter
from workforce_attendance.schemas import (
    AttendanceEventPayload,
    AttendanceOverrideRequest,
    AttendanceRecord,
    CheckEventResponse,
    DataResponse,
    PaginationResponse
)
from workforce_attendance.api.deps import require_auth, require_min_role_level
from workforce_attendance.core.config import settings
from atams.encryption import encrypt_response_data
from atams.exceptions import BadRequestException

router = APIRouter()
attendance_service = AttendanceService()
override_service = AttendanceOverrideService()


def _parse_date(value: Optional[str], field: str) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise BadRequestException(f"Invalid {field} format. Use YYYY-MM-DD")


@router.post(
    "/check-in",
    response_model=DataResponse[CheckEventResponse],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_min_role_level(1))]
)
async def check_in(
    payload: Optional[AttendanceEventPayload] = None,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Record a check-in for the current user

    **Authentication:**
    - Requires valid user authentication (role level >= 1)

    **Body (all optional):**
    - latitude/longitude: must be sent together
    - accuracy: meters, requires coordinates
    - location_id, task_id, device_type (MOBILE or DESKTOP)

    **Response:**
    - The appended event and the refreshed daily summary

    **Errors:**
    - 422: Invalid payload (e.g. latitude without longitude)
    """
    result = attendance_service.check_in(db, current_user["user_id"], payload)

    return DataResponse(
        success=True,
        message="Checked in successfully",
        data=result
    )


@router.post(
    "/check-out",
    response_model=DataResponse[CheckEventResponse],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(1))]
)
async def check_out(
    payload: Optional[AttendanceEventPayload] = None,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Record a check-out for the current user

    A check-out without an open check-in is stored but does not form a session.
    """
    result = attendance_service.check_out(db, current_user["user_id"], payload)

    return DataResponse(
        success=True,
        message="Checked out successfully",
        data=result
    )


@router.get(
    "/daily-summary",
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(1))]
)
async def get_daily_summary(
    date: Optional[str] = Query(None, description="Date in YYYY-MM-DD format (default: today)"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Get current user's daily summary

    **Response:**
    - Totals including the running time of an open session
    - status: PRESENT, PARTIAL, ABSENT or NEEDS_VERIFICATION
    """
    target_date = _parse_date(date, "date")

    summary = attendance_service.get_daily_summary(db, current_user["user_id"], target_date)

    response = DataResponse(
        success=True,
        message="Daily summary retrieved successfully",
        data=summary
    )

    return encrypt_response_data(response, settings)


@router.get(
    "/me",
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(1))]
)
async def get_my_attendance(
    date: Optional[str] = Query(None, description="Date in YYYY-MM-DD format (default: today)"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """Get compact attendance view of the current user for a day"""
    target_date = _parse_date(date, "date")

    me = attendance_service.get_me(db, current_user["user_id"], target_date)

    response = DataResponse(
        success=True,
        message="Attendance retrieved successfully",
        data=me
    )

    return encrypt_response_data(response, settings)


@router.get(
    "/today",
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(1))]
)
async def get_my_attendance_today(
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Get current user's attendance for today

    **Response:**
    - attendance: formatted summary, or null if nothing was recorded today
    """
    today_view = attendance_service.get_today(db, current_user["user_id"])

    response = DataResponse(
        success=True,
        message="Today's attendance retrieved successfully",
        data=today_view
    )

    return encrypt_response_data(response, settings)


@router.get(
    "/events/me",
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(1))]
)
async def get_my_events(
    date: Optional[str] = Query(None, description="Date in YYYY-MM-DD format (default: today)"),
    limit: int = Query(50, ge=1, le=100, description="Maximum records to return"),
    offset: int = Query(0, ge=0, description="Number of records to skip"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Get current user's raw attendance events, newest first

    **Query Parameters:**
    - date: YYYY-MM-DD format (optional, default today)
    - limit: Max records (1-100, default 50)
    - offset: Skip records (default 0)
    """
    target_date = _parse_date(date, "date")

    events, total = attendance_service.get_user_events(
        db, current_user["user_id"], target_date, offset, limit
    )

    response = PaginationResponse(
        success=True,
        message="Events retrieved successfully",
        data=events,
        total=total,
        page=offset // limit + 1,
        size=limit,
        pages=(total + limit - 1) // limit
    )

    return encrypt_response_data(response, settings)


@router.get(
    "/",
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(1))]
)
async def list_attendance(
    user_id: Optional[int] = Query(None, description="Filter by user ID (privileged callers only)"),
    date_from: Optional[str] = Query(None, alias="from", description="Start date (YYYY-MM-DD)"),
    date_to: Optional[str] = Query(None, alias="to", description="End date (YYYY-MM-DD)"),
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(20, ge=1, le=100, description="Records per page"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    List stored daily summaries

    **Visibility:**
    - Role level >= ATTENDANCE_VIEW_ALL_ROLE_LEVEL: any user_id, or everyone
    - Others: always their own summaries

    **Query Parameters:**
    - from/to: YYYY-MM-DD (default: trailing 30 days up to today)
    - page, limit: pagination (limit max 100)
    """
    parsed_from, parsed_to = attendance_service.resolve_date_range(
        _parse_date(date_from, "from"),
        _parse_date(date_to, "to")
    )
    scoped_user_id = resolve_listing_user_filter(current_user, user_id)
    skip = (page - 1) * limit

    summaries, total = attendance_service.list_summaries(
        db, scoped_user_id, parsed_from, parsed_to, skip, limit
    )

    response = PaginationResponse(
        success=True,
        message="Attendance retrieved successfully",
        data=summaries,
        total=total,
        page=page,
        size=limit,
        pages=(total + limit - 1) // limit
    )

    return encrypt_response_data(response, settings)


@router.post(
    "/{attendance_id}/override",
    response_model=DataResponse[AttendanceRecord],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(settings.ATTENDANCE_ADMIN_ROLE_LEVEL))]
)
async def override_attendance(
    attendance_id: int,
    request: AttendanceOverrideRequest,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Override a legacy attendance record (Admin only)

    **Authentication:**
    - Requires role level >= 50 (Admin or above)

    **Body:**
    - check_in_at / check_out_at: optional new times
    - reason: required, non-empty

    **Errors:**
    - 404: Attendance record not found
    """
    record = override_service.override(db, attendance_id, current_user["user_id"], request)

    return DataResponse(
        success=True,
        message="Attendance overridden successfully",
        data=record
    )
