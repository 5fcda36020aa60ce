"""Identity domain schemas - Vendor identity and login payloads"""

from enum import Enum

from pydantic import BaseModel


class VendorType(str, Enum):
    """Vendor categories; the category selects boilerplate phrasing"""

    PHOTOGRAPHER = "photographer"
    CATERER = "caterer"
    FLORIST = "florist"


class VendorIdentity(BaseModel):
    """Authenticated vendor carried in the session"""

    id: str
    email: str
    name: str
    vendorType: VendorType


class LoginRequest(BaseModel):
    """Schema for credential submission"""

    email: str
    password: str


class LoginResponse(BaseModel):
    """Schema for a successful login"""

    access_token: str
    token_type: str = "bearer"
    vendor: VendorIdentity
