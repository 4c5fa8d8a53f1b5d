from fastapi import APIRouter
from workforce_attendance.api.v1.endpoints import attendance, maintenance

api_router = APIRouter()

# Register routes
api_router.include_router(attendance.router, prefix="/attendance", tags=["Attendance"])
api_router.include_router(maintenance.router, prefix="/maintenance", tags=["Maintenance"])
