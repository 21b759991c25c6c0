from fastapi import FastAPI
from timeclock.fastapi.api.v1.endpoints import time_entry, analytics, user

def setup_routers(app: FastAPI):
    # Identity and profile routes
    app.include_router(user.router, prefix="/api/auth", tags=["authentication"])
    app.include_router(user.user_router, prefix="/api/users", tags=["users"])

    # Time tracking routes
    app.include_router(time_entry.router, prefix="/api/time-entries", tags=["time-tracking"])

    # Statistics routes
    app.include_router(analytics.router, prefix="/api/analytics", tags=["analytics"])
