from fastapi import APIRouter
from leave_portal.routers import leave_requests

# Centralized API router hub
# Routers are aggregated here, and main.py only imports this single hub.
api_router = APIRouter()

api_router.include_router(leave_requests.router, tags=["Leave Requests"])
