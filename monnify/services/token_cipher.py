"""Symmetric encryption for bearer tokens cached on disk."""

from __future__ import annotations

import base64
import logging
from typing import Optional

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

logger = logging.getLogger(__name__)

_HKDF_INFO = b"monnify-token-cache"


class TokenCipher:
    """Seal and open cached tokens with a Fernet key derived from a secret."""

    def __init__(self, *, secret: str, namespace: str = "") -> None:
        if not secret:
            raise ValueError("Token encryption secret must be provided.")
        hkdf = HKDF(
            algorithm=hashes.SHA256(),
            length=32,
            salt=namespace.encode("utf-8") or None,
            info=_HKDF_INFO,
        )
        key = base64.urlsafe_b64encode(hkdf.derive(secret.encode("utf-8")))
        self._fernet = Fernet(key)

    def seal(self, token: str) -> str:
        return self._fernet.encrypt(token.encode("utf-8")).decode("ascii")

    def open(self, sealed: str) -> Optional[str]:
        """Return the plaintext token, or ``None`` when it was sealed with another key."""
        try:
            return self._fernet.decrypt(sealed.encode("ascii")).decode("utf-8")
        except (InvalidToken, UnicodeError):
            logger.warning("Discarding cached token that could not be decrypted")
            return None


__all__ = ["TokenCipher"]
