"""Admin password check and user password hashing.

The admin check is a placeholder gate, not an access-control boundary: one
shared secret is compared on the server and the browser keeps its own
"signed in" flag with a four hour expiry. Real access control would need a
server-issued, server-validated session token.
"""

import logging
import secrets
from passlib.context import CryptContext

# Configure logging
logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    """
    Hash a password for storage.

    Args:
        password: Plain text password

    Returns:
        str: Hashed password
    """
    logger.debug("Hashing password")
    return pwd_context.hash(password)


def verify_admin_password(submitted: str, admin_password: str) -> bool:
    """Compare a submitted password with the shared admin secret in constant time."""
    return secrets.compare_digest(submitted.encode("utf-8"), admin_password.encode("utf-8"))
