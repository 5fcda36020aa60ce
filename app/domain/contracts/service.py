"""Contract service - Business logic for contract operations"""

import logging
import math
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Optional, Union

from fastapi import HTTPException

from ...security_utils import sanitize_html
from ...shared.validators import validate_signature
from ...storage import ContractStorage
from ..generation.boilerplate import parse_amount
from ..identity.schemas import VendorIdentity
from .repository import ContractRepository
from .schemas import Contract, ContractCreate, ContractStatus, ContractUpdate, SignatureRequest

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_timestamp(value: datetime) -> str:
    """ISO-8601 UTC timestamp with millisecond precision (2026-10-19T12:00:00.000Z)"""
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ContractService:
    """Service layer for contract business logic"""

    def __init__(self, storage: ContractStorage, clock: Callable[[], datetime] = utc_now):
        self.repo = ContractRepository(storage)
        self.clock = clock

    def get_contracts(self, vendor: VendorIdentity) -> list[Contract]:
        """Get all contracts for a vendor"""
        return self.repo.get_contracts(vendor.id)

    def get_contract(self, contract_id: str, vendor: VendorIdentity) -> Contract:
        """Get a specific contract"""
        contract = self.repo.get_contract_by_id(vendor.id, contract_id)
        if not contract:
            raise HTTPException(status_code=404, detail="Contract not found")
        return contract

    def create_contract(self, data: ContractCreate, vendor: VendorIdentity) -> Contract:
        """Create a new draft contract"""
        if not data.clientName:
            raise HTTPException(status_code=400, detail="Client name is required")
        content = self._clean_content(data.content)

        now = self.clock()
        timestamp = to_timestamp(now)
        contract = Contract(
            id=self._new_contract_id(vendor.id, now),
            vendorId=vendor.id,
            clientName=data.clientName,
            eventDate=data.eventDate,
            eventVenue=data.eventVenue,
            servicePackage=data.servicePackage,
            amount=self._resolve_amount(data.amount),
            content=content,
            status=ContractStatus.DRAFT,
            createdAt=timestamp,
            updatedAt=timestamp,
        )

        logger.info(f"📝 Creating contract {contract.id} for vendor {vendor.id}")
        return self.repo.create_contract(contract)

    def update_contract(
        self, contract_id: str, data: ContractUpdate, vendor: VendorIdentity
    ) -> Contract:
        """Merge the provided fields into a contract"""
        contract = self.get_contract(contract_id, vendor)

        updates = {}
        if data.clientName is not None:
            if not data.clientName:
                raise HTTPException(status_code=400, detail="Client name is required")
            updates["clientName"] = data.clientName
        if data.eventDate is not None:
            updates["eventDate"] = data.eventDate
        if data.eventVenue is not None:
            updates["eventVenue"] = data.eventVenue
        if data.servicePackage is not None:
            updates["servicePackage"] = data.servicePackage
        if data.amount is not None:
            updates["amount"] = self._resolve_amount(data.amount)
        if data.content is not None:
            updates["content"] = self._clean_content(data.content)

        updates["updatedAt"] = to_timestamp(self.clock())
        updated = contract.model_copy(update=updates)
        self.repo.replace_contract(updated)

        logger.info(f"✏️ Updated contract {contract_id} ({', '.join(sorted(updates))})")
        return updated

    def sign_contract(
        self, contract_id: str, signature_request: SignatureRequest, vendor: VendorIdentity
    ) -> Contract:
        """Attach a signature and move the contract from draft to signed"""
        contract = self.get_contract(contract_id, vendor)

        if contract.status == ContractStatus.SIGNED:
            raise HTTPException(status_code=409, detail="Contract is already signed")

        try:
            signature = validate_signature(signature_request.signature, signature_request.mode)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

        signed = contract.model_copy(
            update={
                "status": ContractStatus.SIGNED,
                "signature": signature,
                "updatedAt": to_timestamp(self.clock()),
            }
        )
        self.repo.replace_contract(signed)

        kind = "drawn" if signature.startswith("data:image") else "typed"
        logger.info(f"✅ Contract {contract_id} signed ({kind} signature)")
        return signed

    def _new_contract_id(self, vendor_id: str, now: datetime) -> str:
        """Milliseconds since epoch, bumped past any ID already in the collection"""
        existing = self.repo.contract_ids(vendor_id)
        candidate = int(now.timestamp() * 1000)
        while str(candidate) in existing:
            candidate += 1
        return str(candidate)

    @staticmethod
    def _clean_content(value: Optional[str]) -> str:
        """Sanitized content; markup that cleans down to nothing counts as missing"""
        content = sanitize_html(value or "")
        if not content.strip():
            raise HTTPException(status_code=400, detail="Contract content is required")
        return content

    @staticmethod
    def _resolve_amount(value: Optional[Union[float, str]]) -> float:
        """Lenient amount parse; non-numeric input counts as zero"""
        amount = parse_amount(value)
        if amount is None:
            return 0.0
        if amount < 0 or not math.isfinite(amount):
            raise HTTPException(status_code=400, detail="Amount must be a non-negative number")
        return amount
