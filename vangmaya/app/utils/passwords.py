"""Admin password checks for privileged endpoints."""

from __future__ import annotations

import hmac


def verify_admin_password(candidate: str, secret: str) -> bool:
    """Compare a submitted admin password with the configured secret.

    An empty secret never matches, so an unconfigured deployment cannot be
    unlocked with an empty password.
    """

    if not secret:
        return False
    return hmac.compare_digest(candidate.encode("utf-8"), secret.encode("utf-8"))


__all__ = ["verify_admin_password"]
