"""
Authentification du back-office.

Un seul compte administrateur protege par un mot de passe configure.
Une connexion reussie delivre un jeton opaque, conserve en memoire avec
une date d'expiration : un redemarrage du serveur deconnecte tout le monde.
"""

import hmac
import secrets
import threading
import time
from typing import Optional

from loguru import logger


class TokenStore:
    """
    Jetons d'acces administrateur en memoire.

    Les jetons expires sont purges paresseusement, a chaque emission et
    a chaque verification qui tombe sur un jeton perime.
    """

    def __init__(self, admin_password: str, ttl_seconds: int = 24 * 60 * 60) -> None:
        self._admin_password = admin_password
        self._ttl = ttl_seconds
        self._tokens: dict[str, float] = {}
        # Les routes synchrones appellent le store depuis le threadpool
        self._lock = threading.Lock()

    def check_password(self, password: str) -> bool:
        """Compare le mot de passe en temps constant."""
        return hmac.compare_digest(
            password.encode("utf-8"), self._admin_password.encode("utf-8")
        )

    def login(self, password: str) -> Optional[str]:
        """Retourne un nouveau jeton si le mot de passe est correct, sinon None."""
        if not self.check_password(password):
            logger.warning("Tentative de connexion admin refusee")
            return None
        logger.info("Connexion admin")
        return self.issue()

    def issue(self) -> str:
        """Cree un jeton valable `ttl_seconds`."""
        token = secrets.token_urlsafe(32)
        with self._lock:
            self._purge()
            self._tokens[token] = time.monotonic() + self._ttl
        return token

    def verify(self, token: Optional[str]) -> bool:
        """Vrai si le jeton existe et n'a pas expire."""
        if not token:
            return False
        with self._lock:
            expires_at = self._tokens.get(token)
            if expires_at is None:
                return False
            if expires_at <= time.monotonic():
                del self._tokens[token]
                return False
            return True

    def revoke(self, token: Optional[str]) -> bool:
        """Invalide un jeton. Retourne False s'il etait inconnu."""
        if not token:
            return False
        with self._lock:
            return self._tokens.pop(token, None) is not None

    def _purge(self) -> None:
        # Appele verrou tenu
        now = time.monotonic()
        for token in [t for t, exp in self._tokens.items() if exp <= now]:
            del self._tokens[token]

    def __len__(self) -> int:
        with self._lock:
            return len(self._tokens)
