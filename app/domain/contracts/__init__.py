"""Contracts domain - draft, edit and sign vendor contracts"""

from .repository import ContractRepository
from .schemas import Contract, ContractCreate, ContractStatus, ContractUpdate, SignatureRequest
from .service import ContractService

__all__ = [
    "Contract",
    "ContractCreate",
    "ContractRepository",
    "ContractService",
    "ContractStatus",
    "ContractUpdate",
    "SignatureRequest",
]
