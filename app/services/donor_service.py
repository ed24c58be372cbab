from typing import Any, List, Union
from uuid import UUID

from sqlalchemy.future import select

from app.models.donor import Donor
from app.services.base_store import RecordStore
from app.services.record_validator import validate_donor
from app.utils.exceptions import NotFoundError
from app.utils.logging_config import get_logger, log_audit_event

logger = get_logger(__name__)


def parse_record_id(record_id: Union[UUID, str], kind: str) -> UUID:
    """Identifiers that are not UUIDs cannot exist in the store."""
    if isinstance(record_id, UUID):
        return record_id
    try:
        return UUID(str(record_id))
    except ValueError:
        raise NotFoundError(f"{kind} not found")


class DonorService(RecordStore):
    async def create_donor(self, payload: Any) -> Donor:
        # Authoritative check; runs even when the client already validated
        record = validate_donor(payload).raise_for_errors()
        donor = Donor(**record.to_document())

        async def write() -> Donor:
            self.db.add(donor)
            await self.db.commit()
            await self.db.refresh(donor)
            return donor

        donor = await self._guard("insert donor", write())
        logger.info(f"Donor registered: {donor.id}")
        log_audit_event(
            action="create",
            resource_type="donor",
            resource_id=str(donor.id),
            new_values={"bloodGroup": donor.blood_group},
        )
        return donor

    async def list_donors(self) -> List[Donor]:
        async def read() -> List[Donor]:
            result = await self.db.execute(
                select(Donor).order_by(Donor.created_at, Donor.id)
            )
            return list(result.scalars().all())

        return await self._guard("list donors", read())

    async def get_donor(self, donor_id: Union[UUID, str]) -> Donor:
        key = parse_record_id(donor_id, "Donor")

        async def read():
            result = await self.db.execute(select(Donor).where(Donor.id == key))
            return result.scalar_one_or_none()

        donor = await self._guard("get donor", read())
        if donor is None:
            raise NotFoundError("Donor not found")
        return donor

    async def delete_donor(self, donor_id: Union[UUID, str]) -> UUID:
        donor = await self.get_donor(donor_id)
        deleted_id = donor.id

        async def remove() -> None:
            await self.db.delete(donor)
            await self.db.commit()

        await self._guard("delete donor", remove())
        logger.info(f"Donor deleted: {deleted_id}")
        log_audit_event(action="delete", resource_type="donor", resource_id=str(deleted_id))
        return deleted_id
