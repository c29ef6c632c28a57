"""
Portfolio Backend — Client Identity
=====================================

What:  Derives the pseudo-identity used to de-duplicate visitor locations.
How:   client identity = network address + "|" + device fingerprint.

This is a best-effort identity, not an authentication mechanism:
    - Clients behind the same NAT share an address; the fingerprint
      separates most of them but browsers with identical headers collide.
    - A browser update or a new network changes the identity, so the same
      person can show up as several clients.
Both errors only cost an extra or a skipped visit row.

Fingerprint:
    SHA-256 over the User-Agent and Accept* headers, the same request
    attributes browser fingerprinting middleware hashes by default. Nothing
    is stored client-side.
"""

import hashlib
import logging
from typing import Optional

from starlette.requests import Request

from app.config import settings
from app.exceptions import AddressExtractionError, FingerprintError

logger = logging.getLogger(__name__)

IDENTITY_SEPARATOR = "|"

FINGERPRINT_HEADERS = (
    "user-agent",
    "accept",
    "accept-language",
    "accept-encoding",
)


def extract_network_address(request: Request, trust_forwarded_for: Optional[bool] = None) -> str:
    """
    Return the client IP address for a request.

    With trust_forwarded_for (default: settings.trust_forwarded_for) the first
    X-Forwarded-For hop wins; otherwise the socket peer address is used.

    Raises:
        AddressExtractionError: no address could be determined
    """
    if trust_forwarded_for is None:
        trust_forwarded_for = settings.trust_forwarded_for

    address = ""
    if trust_forwarded_for:
        forwarded = request.headers.get("x-forwarded-for", "")
        address = forwarded.split(",")[0].strip()

    if not address and request.client is not None:
        address = (request.client.host or "").strip()

    if not address:
        raise AddressExtractionError(context={"path": request.url.path})
    return address


def generate_fingerprint(request: Request) -> str:
    """
    Hash the fingerprinting headers of a request into a hex digest.

    Raises:
        FingerprintError: the headers could not be read or hashed
    """
    try:
        digest = hashlib.sha256()
        for name in FINGERPRINT_HEADERS:
            digest.update(name.encode("ascii"))
            digest.update(b"=")
            digest.update(request.headers.get(name, "").encode("utf-8"))
            digest.update(b"\n")
        return digest.hexdigest()
    except Exception as e:
        logger.error("Fingerprint generation failed: %s", str(e), exc_info=True)
        raise FingerprintError(context={"error_type": type(e).__name__})


def derive_client_identity(network_address: str, fingerprint: str) -> str:
    """Combine address and fingerprint into the deduplication key."""
    if not network_address:
        raise AddressExtractionError()
    return f"{network_address}{IDENTITY_SEPARATOR}{fingerprint}"
