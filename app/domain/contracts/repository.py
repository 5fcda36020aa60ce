"""Contract repository - per-vendor collection reads and writes"""

from typing import Optional

from ...storage import ContractStorage
from .schemas import Contract


class ContractRepository:
    """
    Repository over the per-vendor contract collection.

    Every mutation reads the whole collection, applies the change and writes
    the whole collection back.
    """

    def __init__(self, storage: ContractStorage):
        self.storage = storage

    def get_contracts(self, vendor_id: str) -> list[Contract]:
        """Get all contracts for a vendor in creation order"""
        return [Contract(**record) for record in self.storage.get_collection(vendor_id)]

    def get_contract_by_id(self, vendor_id: str, contract_id: str) -> Optional[Contract]:
        """Get a specific contract by ID"""
        for contract in self.get_contracts(vendor_id):
            if contract.id == contract_id:
                return contract
        return None

    def save_contracts(self, vendor_id: str, contracts: list[Contract]) -> None:
        """Overwrite the vendor's collection"""
        self.storage.set_collection(
            vendor_id, [contract.model_dump(mode="json") for contract in contracts]
        )

    def create_contract(self, contract: Contract) -> Contract:
        """Append a new contract"""
        contracts = self.get_contracts(contract.vendorId)
        contracts.append(contract)
        self.save_contracts(contract.vendorId, contracts)
        return contract

    def replace_contract(self, contract: Contract) -> Optional[Contract]:
        """Replace the stored record with the same ID; None when no such record exists"""
        contracts = self.get_contracts(contract.vendorId)
        for index, existing in enumerate(contracts):
            if existing.id == contract.id:
                contracts[index] = contract
                self.save_contracts(contract.vendorId, contracts)
                return contract
        return None

    def contract_ids(self, vendor_id: str) -> set[str]:
        return {contract.id for contract in self.get_contracts(vendor_id)}
