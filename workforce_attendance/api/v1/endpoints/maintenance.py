"""
Maintenance Endpoints - Rebuild of the derived daily summary cache
"""
from typing import Optional
from datetime import date
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from workforce_attendance.db.session import get_db
from workforce_attendance.services.summary_aggregator import SummaryAggregator
from workforce_attendance.schemas import DataResponse, RebuildResult
from workforce_attendance.api.deps import require_min_role_level
from workforce_attendance.core.config import settings
from atams.exceptions import BadRequestException

router = APIRouter()
summary_aggregator = SummaryAggregator()


@router.post(
    "/rebuild-summaries",
    response_model=DataResponse[RebuildResult],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(settings.ATTENDANCE_ADMIN_ROLE_LEVEL))]
)
async def rebuild_summaries(
    date_from: date = Query(..., description="First day to rebuild (YYYY-MM-DD)"),
    date_to: date = Query(..., description="Last day to rebuild (YYYY-MM-DD)"),
    user_id: Optional[int] = Query(None, description="Restrict to one user"),
    db: Session = Depends(get_db)
):
    """
    Recompute daily summaries from the event log

    **Authorization:**
    - Requires role level >= 50 (Admin or above)

    **Parameters:**
    - date_from/date_to: inclusive day range
    - user_id: optional, default all users with events in the range

    **Use case:**
    - Heal summaries left stale by a failed recompute
    - Repopulate the cache after it was truncated
    """
    if date_from > date_to:
        raise BadRequestException("date_from must be on or before date_to")

    rebuilt_count = summary_aggregator.rebuild(db, date_from, date_to, user_id)

    result = RebuildResult(
        rebuilt_count=rebuilt_count,
        date_from=date_from,
        date_to=date_to,
        message=f"Successfully rebuilt {rebuilt_count} daily summaries"
    )

    return DataResponse(
        success=True,
        message="Summary rebuild completed",
        data=result
    )
