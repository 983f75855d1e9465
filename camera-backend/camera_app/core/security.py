# Standard library imports
import base64
import hashlib
import logging
from typing import Optional

# External package imports
from cryptography.fernet import Fernet, InvalidToken

# Local application imports
from .config import get_settings

logger = logging.getLogger(__name__)


def _get_fernet() -> Fernet:
    """
    Build a Fernet cipher from the configured camera secret key.

    The secret is stretched with SHA-256 so any configured string yields a
    valid 32-byte urlsafe key.
    """
    settings = get_settings()
    digest = hashlib.sha256(settings.camera_secret_key.encode("utf-8")).digest()
    return Fernet(base64.urlsafe_b64encode(digest))


def encrypt_secret(plain_secret: Optional[str]) -> Optional[str]:
    """
    Encrypt a camera credential for storage

    Args:
        plain_secret: The plain text secret

    Returns:
        Encrypted token string, or None when there is nothing to store
    """
    if not plain_secret:
        return None
    token = _get_fernet().encrypt(plain_secret.encode("utf-8"))
    return token.decode("utf-8")


def decrypt_secret(encrypted_secret: Optional[str]) -> Optional[str]:
    """
    Decrypt a stored camera credential

    Args:
        encrypted_secret: Token produced by encrypt_secret

    Returns:
        Plain text secret, or None if missing or not decryptable
    """
    if not encrypted_secret:
        return None
    try:
        return _get_fernet().decrypt(encrypted_secret.encode("utf-8")).decode("utf-8")
    except InvalidToken:
        logger.warning("Stored camera credential could not be decrypted with the current key")
        return None


def has_elevated_rights(permissions: Optional[frozenset], roles: Optional[frozenset] = None) -> bool:
    """
    Check whether a caller may permanently delete cameras.

    Args:
        permissions: Permission names granted to the caller
        roles: Role names held by the caller

    Returns:
        True if the caller holds an administrative role or the explicit
        permanent-delete permission
    """
    settings = get_settings()
    if permissions and settings.camera_permanent_delete_permission in permissions:
        return True
    if roles and settings.camera_admin_roles.intersection(roles):
        return True
    return False
