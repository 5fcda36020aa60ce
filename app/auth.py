import logging

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError

from .domain.identity.schemas import VendorIdentity
from .security_utils import create_jwt_token, verify_jwt_token

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def create_session_token(vendor: VendorIdentity) -> str:
    """Issue a signed session token carrying the vendor identity claims"""
    return create_jwt_token(
        {
            "sub": vendor.id,
            "email": vendor.email,
            "name": vendor.name,
            "vendorType": vendor.vendorType.value,
        }
    )


def vendor_from_token(token: str) -> VendorIdentity:
    """
    Decode a session token into a vendor identity.
    Raises 401 for invalid, expired or incomplete tokens.
    """
    payload = verify_jwt_token(token)
    if not payload:
        raise HTTPException(status_code=401, detail="Invalid or expired session")

    try:
        return VendorIdentity(
            id=payload.get("sub"),
            email=payload.get("email"),
            name=payload.get("name"),
            vendorType=payload.get("vendorType"),
        )
    except ValidationError as e:
        logger.warning(f"⚠️ Session token missing vendor claims: {e}")
        raise HTTPException(status_code=401, detail="Invalid session") from e


async def get_current_vendor(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> VendorIdentity:
    """Resolve the authenticated vendor from the bearer token"""
    if credentials is None:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    vendor = vendor_from_token(credentials.credentials)
    logger.debug(f"✅ Vendor authenticated: {vendor.email}")
    return vendor
