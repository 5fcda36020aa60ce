"""Identity providers - credential verification"""

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from ...security_utils import verify_password_bcrypt
from .schemas import VendorIdentity, VendorType

logger = logging.getLogger(__name__)


class IdentityProvider(Protocol):
    """Verifies credentials and returns the matching vendor identity"""

    def verify_credentials(self, email: str, password: str) -> Optional[VendorIdentity]: ...


@dataclass(frozen=True)
class VendorAccount:
    """A vendor account with its bcrypt password hash"""

    id: str
    email: str
    password_hash: str
    name: str
    vendor_type: VendorType

    def to_identity(self) -> VendorIdentity:
        return VendorIdentity(
            id=self.id, email=self.email, name=self.name, vendorType=self.vendor_type
        )


# bcrypt hash of "password123"
_TEST_PASSWORD_HASH = "$2b$10$zvApG4Lh28U2yPUZlx5Ife/ye260VaLqIlxIFOH.nmRjtoYBDiSTK"  # noqa: S105

TEST_VENDOR_ACCOUNTS = (
    VendorAccount(
        id="1",
        email="photographer@test.com",
        password_hash=_TEST_PASSWORD_HASH,
        name="Sarah Johnson",
        vendor_type=VendorType.PHOTOGRAPHER,
    ),
    VendorAccount(
        id="2",
        email="caterer@test.com",
        password_hash=_TEST_PASSWORD_HASH,
        name="Mike Chen",
        vendor_type=VendorType.CATERER,
    ),
    VendorAccount(
        id="3",
        email="florist@test.com",
        password_hash=_TEST_PASSWORD_HASH,
        name="Emily Rose",
        vendor_type=VendorType.FLORIST,
    ),
)


class StaticIdentityProvider:
    """Identity provider backed by a fixed list of accounts"""

    def __init__(self, accounts: tuple[VendorAccount, ...] = TEST_VENDOR_ACCOUNTS):
        self._accounts = {account.email: account for account in accounts}

    def verify_credentials(self, email: str, password: str) -> Optional[VendorIdentity]:
        if not email or not password:
            return None

        account = self._accounts.get(email)
        if account is None:
            logger.debug("Login attempt for unknown email")
            return None

        if not verify_password_bcrypt(password, account.password_hash):
            logger.debug(f"Password mismatch for vendor {account.id}")
            return None

        return account.to_identity()


_identity_provider: IdentityProvider = StaticIdentityProvider()


def get_identity_provider() -> IdentityProvider:
    """Dependency returning the configured identity provider"""
    return _identity_provider
