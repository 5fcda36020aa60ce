"""Caller-side client for the contracts API"""

from .api_client import ContractsApiClient
from .draft import ContractDraft

__all__ = ["ContractDraft", "ContractsApiClient"]
