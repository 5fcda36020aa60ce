"""Identity router - login and session endpoints"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from ...auth import create_session_token, get_current_vendor
from .provider import IdentityProvider, get_identity_provider
from .schemas import LoginRequest, LoginResponse, VendorIdentity

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    provider: IdentityProvider = Depends(get_identity_provider),
):
    """Verify credentials and issue a session token"""
    vendor = provider.verify_credentials(data.email, data.password)
    if vendor is None:
        logger.warning("⚠️ Failed login attempt")
        raise HTTPException(status_code=401, detail="Invalid email or password")

    logger.info(f"🔐 Vendor {vendor.id} signed in ({vendor.vendorType.value})")
    return LoginResponse(access_token=create_session_token(vendor), vendor=vendor)


@router.get("/session", response_model=VendorIdentity)
async def get_session(vendor: VendorIdentity = Depends(get_current_vendor)):
    """Return the identity carried by the current session"""
    return vendor
