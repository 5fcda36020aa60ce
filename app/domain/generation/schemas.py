"""Generation domain schemas - Pydantic models for contract text generation"""

from typing import Optional, Union

from pydantic import BaseModel


class GenerationRequest(BaseModel):
    """Contract metadata sent by the caller to generate a contract body"""

    vendorType: Optional[str] = None
    clientName: Optional[str] = None
    eventDate: Optional[str] = None
    eventVenue: Optional[str] = ""
    servicePackage: Optional[str] = ""
    # Number, numeric string, empty or absent; non-numeric values resolve to zero
    amount: Optional[Union[float, str]] = None

    def missing_required_fields(self) -> list[str]:
        """Names of required fields that are absent or empty"""
        return [
            field
            for field in ("vendorType", "clientName", "eventDate")
            if not getattr(self, field)
        ]
