"""Contract domain schemas - Pydantic models for validation"""

from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field


class ContractStatus(str, Enum):
    DRAFT = "draft"
    SIGNED = "signed"


class Contract(BaseModel):
    """A stored vendor-to-client service agreement"""

    id: str
    vendorId: str
    clientName: str
    eventDate: str = ""
    eventVenue: str = ""
    servicePackage: str = ""
    amount: float = Field(default=0, ge=0)
    content: str
    status: ContractStatus = ContractStatus.DRAFT
    # Image data URL for drawn signatures, plain text for typed ones
    signature: Optional[str] = None
    createdAt: str
    updatedAt: str


class ContractCreate(BaseModel):
    """Schema for creating a new contract"""

    clientName: str = ""
    eventDate: str = ""
    eventVenue: str = ""
    servicePackage: str = ""
    amount: Optional[Union[float, str]] = None
    content: str = ""


class ContractUpdate(BaseModel):
    """Schema for updating an existing contract"""

    clientName: Optional[str] = None
    eventDate: Optional[str] = None
    eventVenue: Optional[str] = None
    servicePackage: Optional[str] = None
    amount: Optional[Union[float, str]] = None
    content: Optional[str] = None


class SignatureRequest(BaseModel):
    """Schema for signature submission"""

    signature: str = ""
    # "draw" expects an image data URL, "type" a typed name; inferred when omitted
    mode: Optional[Literal["draw", "type"]] = None
