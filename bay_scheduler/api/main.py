from fastapi import APIRouter

from bay_scheduler.api.routes import bay_scheduling, health

api_router = APIRouter()
api_router.include_router(health.router, tags=["health"])

# Bay scheduling, utilization and hours flow
api_router.include_router(bay_scheduling.router, tags=["bay-scheduling"])
