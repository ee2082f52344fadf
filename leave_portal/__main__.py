import uvicorn

from leave_portal.core.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "leave_portal.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
