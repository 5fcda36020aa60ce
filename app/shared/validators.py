"""Shared validation utilities"""

import base64
import binascii
import re
from typing import Optional

# Signature pads export PNG by default; other raster formats are accepted too
SIGNATURE_DATA_URL_PATTERN = re.compile(
    r"^data:image/(png|jpeg|jpg|webp|gif|svg\+xml);base64,([A-Za-z0-9+/]+={0,2})$"
)


def is_image_data_url(value: str) -> bool:
    return value.startswith("data:image")


def validate_signature_image(signature: str) -> str:
    """
    Validate a drawn signature exported as an image data URL.

    Args:
        signature: data URL string (data:image/png;base64,...)

    Returns:
        The signature unchanged

    Raises:
        ValueError: If the data URL is malformed or carries no image data
    """
    match = SIGNATURE_DATA_URL_PATTERN.match(signature.strip())
    if not match:
        raise ValueError("Signature image must be a base64 image data URL")

    try:
        payload = base64.b64decode(match.group(2), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError("Signature image data is not valid base64") from e

    if not payload:
        raise ValueError("Signature image is empty")

    return signature.strip()


def validate_typed_signature(signature: str) -> str:
    """
    Validate a typed signature.

    Returns:
        The stripped signature text

    Raises:
        ValueError: If the signature is blank
    """
    signature = signature.strip()
    if not signature:
        raise ValueError("Signature is required")
    return signature


def validate_signature(signature: Optional[str], mode: Optional[str] = None) -> str:
    """
    Validate a signature payload, drawn (image data URL) or typed (text).
    The mode is inferred from the payload when not given.

    Raises:
        ValueError: If the signature is empty or malformed for its mode
    """
    if not signature or not signature.strip():
        raise ValueError("Signature is required")

    if mode is None:
        mode = "draw" if is_image_data_url(signature) else "type"

    if mode == "draw":
        return validate_signature_image(signature)
    return validate_typed_signature(signature)
