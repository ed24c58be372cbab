from typing import Any, List

from sqlalchemy.future import select

from app.models.hospital import Hospital
from app.services.base_store import RecordStore
from app.services.record_validator import validate_hospital
from app.utils.logging_config import get_logger, log_audit_event

logger = get_logger(__name__)


class HospitalService(RecordStore):
    async def create_hospital(self, payload: Any) -> Hospital:
        record = validate_hospital(payload).raise_for_errors()
        hospital = Hospital(**record.to_document())

        async def write() -> Hospital:
            self.db.add(hospital)
            await self.db.commit()
            await self.db.refresh(hospital)
            return hospital

        hospital = await self._guard("insert hospital", write())
        logger.info(f"Hospital registered: {hospital.id}")
        log_audit_event(action="create", resource_type="hospital", resource_id=str(hospital.id))
        return hospital

    async def list_hospitals(self) -> List[Hospital]:
        async def read() -> List[Hospital]:
            result = await self.db.execute(
                select(Hospital).order_by(Hospital.created_at, Hospital.id)
            )
            return list(result.scalars().all())

        return await self._guard("list hospitals", read())
