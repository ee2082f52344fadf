"""
Seed the configured database with a few demo leave requests.

Run: python scripts/seed_leave_requests.py
"""
import asyncio

from leave_portal.core.config import settings
from leave_portal.core.exceptions import AppException
from leave_portal.database import Database
from leave_portal.services.leave_service import LeaveRequestService

DEMO_REQUESTS = [
    {
        "name": "Priya Raman",
        "employee_id": "ATS0001",
        "leave_type": "vacational",
        "start_date": "2024-01-10",
        "end_date": "2024-01-15",
        "comments": "Family trip planned for the long weekend",
    },
    {
        "name": "Daniel Okafor",
        "employee_id": "ATS0002",
        "leave_type": "sick",
        "start_date": "2024-01-08",
        "end_date": "2024-01-09",
        "comments": "Doctor advised two days of rest",
    },
    {
        "name": "Meera Iyer",
        "employee_id": "ATS0003",
        "leave_type": "Maternity",
        "start_date": "2024-02-01",
        "end_date": "2024-07-31",
        "comments": "Maternity leave as discussed with the team lead",
    },
]

async def seed():
    database = Database(settings.database_url)
    await database.init()
    try:
        async with database.session_factory() as session:
            service = LeaveRequestService(session)
            for candidate in DEMO_REQUESTS:
                # Re-running the seed hits the overlap check; skip those
                try:
                    record = await service.submit(candidate)
                except AppException as e:
                    print(f"Skipped {candidate['employee_id']}: {e.message}")
                    continue
                print(f"Created leave request {record.id} -> {record.employee_id}")
    finally:
        await database.dispose()

if __name__ == "__main__":
    asyncio.run(seed())
