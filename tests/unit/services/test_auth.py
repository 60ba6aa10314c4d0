"""Tests unitaires pour TokenStore (jetons du back-office)."""

from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

from memopyk.services.auth import TokenStore


class TestTokenStore:
    """Tests pour l'emission, la verification et la revocation des jetons."""

    def test_login_with_correct_password_issues_token(self) -> None:
        store = TokenStore(admin_password="secret")
        token = store.login("secret")
        assert token
        assert store.verify(token)

    def test_login_with_wrong_password_is_refused(self) -> None:
        store = TokenStore(admin_password="secret")
        assert store.login("wrong") is None
        assert len(store) == 0

    def test_tokens_are_unique(self) -> None:
        store = TokenStore(admin_password="secret")
        assert store.issue() != store.issue()

    def test_unknown_or_missing_token_is_rejected(self) -> None:
        store = TokenStore(admin_password="secret")
        assert not store.verify("forged")
        assert not store.verify(None)
        assert not store.verify("")

    def test_revoked_token_is_rejected(self) -> None:
        store = TokenStore(admin_password="secret")
        token = store.issue()
        assert store.revoke(token)
        assert not store.verify(token)
        assert not store.revoke(token)

    def test_expired_token_is_rejected_and_purged(self) -> None:
        """Un jeton expire est refuse et retire du store."""
        store = TokenStore(admin_password="secret", ttl_seconds=60)
        with patch("memopyk.services.auth.time.monotonic", return_value=1000.0):
            token = store.issue()
        with patch("memopyk.services.auth.time.monotonic", return_value=1061.0):
            assert not store.verify(token)
        assert len(store) == 0

    def test_concurrent_issue_verify_and_revoke(self) -> None:
        """Emissions, verifications et revocations depuis plusieurs threads."""
        store = TokenStore(admin_password="secret", ttl_seconds=0)

        def churn(_: int) -> None:
            for _ in range(200):
                token = store.issue()
                store.verify(token)
                store.revoke(token)

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(churn, range(8)))

        assert len(store) == 0
