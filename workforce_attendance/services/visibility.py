"""
Listing visibility - which users' summaries a caller may see
"""
from typing import Optional

from workforce_attendance.core.config import settings


def can_view_all(current_user: dict) -> bool:
    return current_user.get("role_level", 0) >= settings.ATTENDANCE_VIEW_ALL_ROLE_LEVEL


def resolve_listing_user_filter(current_user: dict, requested_user_id: Optional[int]) -> Optional[int]:
    """
    User filter to apply to a summary listing

    Privileged callers get what they asked for (None means everyone),
    everyone else is pinned to their own id whatever they requested.
    """
    if can_view_all(current_user):
        return requested_user_id
    return current_user["user_id"]
