"""
Provision the leave_management database and the leave_requests table
without starting the server.

Run: python scripts/init_db.py
"""
import asyncio

from leave_portal.core.config import settings
from leave_portal.core.logging import setup_logging
from leave_portal.database import Database

async def init_db():
    database = Database(settings.database_url)
    try:
        await database.init()
        print(f"Database ready at {database.url.render_as_string(hide_password=True)}")
    finally:
        await database.dispose()

if __name__ == "__main__":
    setup_logging(settings.log_level)
    asyncio.run(init_db())
