"""Contract router - FastAPI endpoints for contract operations"""

import logging

from fastapi import APIRouter, Depends

from ...auth import get_current_vendor
from ...storage import ContractStorage, get_contract_storage
from ..identity.schemas import VendorIdentity
from .schemas import Contract, ContractCreate, ContractUpdate, SignatureRequest
from .service import ContractService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/contracts", tags=["Contracts"])


def get_contract_service(
    storage: ContractStorage = Depends(get_contract_storage),
) -> ContractService:
    """Dependency injection for ContractService"""
    return ContractService(storage)


@router.get("", response_model=list[Contract])
async def get_contracts(
    vendor: VendorIdentity = Depends(get_current_vendor),
    service: ContractService = Depends(get_contract_service),
):
    """Get all contracts for the current vendor"""
    return service.get_contracts(vendor)


@router.post("", response_model=Contract, status_code=201)
async def create_contract(
    data: ContractCreate,
    vendor: VendorIdentity = Depends(get_current_vendor),
    service: ContractService = Depends(get_contract_service),
):
    """Create a new draft contract"""
    return service.create_contract(data, vendor)


@router.get("/{contract_id}", response_model=Contract)
async def get_contract(
    contract_id: str,
    vendor: VendorIdentity = Depends(get_current_vendor),
    service: ContractService = Depends(get_contract_service),
):
    """Get a specific contract"""
    return service.get_contract(contract_id, vendor)


@router.put("/{contract_id}", response_model=Contract)
async def update_contract(
    contract_id: str,
    data: ContractUpdate,
    vendor: VendorIdentity = Depends(get_current_vendor),
    service: ContractService = Depends(get_contract_service),
):
    """Update a contract's fields"""
    return service.update_contract(contract_id, data, vendor)


@router.post("/{contract_id}/sign", response_model=Contract)
async def sign_contract(
    contract_id: str,
    signature_request: SignatureRequest,
    vendor: VendorIdentity = Depends(get_current_vendor),
    service: ContractService = Depends(get_contract_service),
):
    """Sign a draft contract"""
    return service.sign_contract(contract_id, signature_request, vendor)
