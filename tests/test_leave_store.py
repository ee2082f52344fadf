import asyncio
import pytest
from datetime import date

from leave_portal.core.exceptions import StorageError
from leave_portal.database import Database
from leave_portal.services.leave_store import LeaveRequestStore

def _run_with_store(settings, scenario):
    """Provision the schema the way the app does, then run `scenario(store)` in one session."""
    async def _main():
        database = Database(settings.database_url)
        await database.init()
        try:
            async with database.session_factory() as session:
                return await scenario(LeaveRequestStore(session))
        finally:
            await database.dispose()
    return asyncio.run(_main())

async def _create(store, employee_id="ATS0001"):
    return await store.create(
        name="Priya Raman",
        employee_id=employee_id,
        leave_type="casual",
        start_date=date(2024, 1, 10),
        end_date=date(2024, 1, 15),
        comments="Family trip planned months ago",
    )

def test_create_assigns_id_and_pending_status(settings):
    async def scenario(store):
        record = await _create(store)
        assert record.id is not None
        assert record.status == "pending"
        assert record.created_at is not None
    _run_with_store(settings, scenario)

@pytest.mark.parametrize("employee_id", ["ats0012", "ATS0abc", "ATS12", "ATS00123"])
def test_schema_rejects_malformed_employee_id(settings, employee_id):
    """The table enforces the employee id pattern even when the validator is bypassed."""
    async def scenario(store):
        with pytest.raises(StorageError):
            await _create(store, employee_id=employee_id)
        # Rolled back, and the session is still usable
        assert await store.list() == []
        record = await _create(store, employee_id="ATS0012")
        assert [r.id for r in await store.list()] == [record.id]
    _run_with_store(settings, scenario)

def test_schema_rejects_unknown_status(settings):
    async def scenario(store):
        record = await _create(store)
        with pytest.raises(StorageError):
            await store.update_status(record.id, "cancelled")
        assert (await store.get_by_id(record.id)).status == "pending"
        updated = await store.update_status(record.id, "approved")
        assert updated.status == "approved"
    _run_with_store(settings, scenario)

def test_oversized_id_is_storage_error(settings):
    async def scenario(store):
        with pytest.raises(StorageError):
            await store.get_by_id(2 ** 70)
        with pytest.raises(StorageError):
            await store.delete_many({2 ** 70})
        # Still usable afterwards
        record = await _create(store)
        assert (await store.get_by_id(record.id)).id == record.id
    _run_with_store(settings, scenario)
