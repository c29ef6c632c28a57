"""
Portfolio Backend — Admin Password Check
==========================================

What:  Compares a submitted password against the configured ADMIN_PASSWORD.
Why:   Gates the admin views in the frontend; the API only answers yes/no.

The submitted password has already been through SanitizeBodyMiddleware,
which escapes &, < and > like any other body string. Both sides are
compared in that cleaned form so such characters still match.
"""

import hmac
import logging
from typing import Optional

from app.config import settings
from app.middleware.sanitize import clean_text

logger = logging.getLogger(__name__)


def verify_password(candidate: str, expected: Optional[str] = None) -> bool:
    """
    Constant-time comparison of candidate against the admin password.

    An unset admin password never matches, not even an empty candidate.
    clean_text is idempotent, so a candidate that was already cleaned in
    transit compares equal to its raw form.
    """
    if expected is None:
        expected = settings.admin_password
    if not expected:
        logger.warning("Authentication attempted but ADMIN_PASSWORD is not configured")
        return False

    matched = hmac.compare_digest(
        clean_text(candidate).encode("utf-8"),
        clean_text(expected).encode("utf-8"),
    )
    if not matched:
        logger.info("Authentication failed: wrong password")
    return matched
