"""Identity domain - credential verification and vendor sessions

The router lives in .router and is mounted by app.main; it is not re-exported
here because app.auth depends on the schemas of this package.
"""

from .provider import IdentityProvider, StaticIdentityProvider, get_identity_provider
from .schemas import VendorIdentity, VendorType

__all__ = [
    "IdentityProvider",
    "StaticIdentityProvider",
    "VendorIdentity",
    "VendorType",
    "get_identity_provider",
]
