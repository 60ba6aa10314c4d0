"""
Tests unitaires pour le mecanisme de relance des appels au stockage.

Ces tests verifient:
- TransientStorageError capture le statut et le header Retry-After
- with_retry relance sur TransientStorageError uniquement
- request_with_retry relance 429 et retourne les autres statuts tels quels
"""

import httpx
import pytest
import respx

from memopyk.adapters.api.retry import (
    TransientStorageError,
    _parse_retry_after,
    request_with_retry,
    with_retry,
)

URL = "https://storage.test/storage/v1/bucket"


class TestTransientStorageError:
    def test_stores_status_and_retry_after(self) -> None:
        error = TransientStorageError(429, retry_after=60)
        assert error.status_code == 429
        assert error.retry_after == 60
        assert "60" in str(error)

    def test_parse_retry_after(self) -> None:
        assert _parse_retry_after("30") == 30
        assert _parse_retry_after(None) is None
        assert _parse_retry_after("Wed, 21 Oct 2026 07:28:00 GMT") is None


class TestWithRetryDecorator:
    @pytest.mark.asyncio
    async def test_retries_transient_errors(self) -> None:
        """with_retry relance quand TransientStorageError est levee."""
        call_count = 0

        @with_retry(max_attempts=3, max_wait=1)
        async def flaky() -> str:
            nonlocal call_count
            call_count += 1
            if call_count < 2:
                raise TransientStorageError(429)
            return "success"

        assert await flaky() == "success"
        assert call_count == 2

    @pytest.mark.asyncio
    async def test_does_not_retry_other_exceptions(self) -> None:
        call_count = 0

        @with_retry(max_attempts=3, max_wait=1)
        async def broken() -> str:
            nonlocal call_count
            call_count += 1
            raise ValueError("not transient")

        with pytest.raises(ValueError):
            await broken()
        assert call_count == 1


class TestRequestWithRetry:
    @pytest.mark.asyncio
    async def test_retries_then_succeeds(self, respx_mock: respx.Router) -> None:
        route = respx_mock.get(URL).mock(
            side_effect=[
                httpx.Response(429, headers={"Retry-After": "1"}),
                httpx.Response(200, json=[]),
            ]
        )

        async with httpx.AsyncClient() as client:
            response = await request_with_retry(client, "GET", URL, max_attempts=3, max_wait=1)

        assert response.status_code == 200
        assert route.call_count == 2

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self, respx_mock: respx.Router) -> None:
        route = respx_mock.get(URL).mock(return_value=httpx.Response(429))

        async with httpx.AsyncClient() as client:
            with pytest.raises(TransientStorageError) as exc_info:
                await request_with_retry(client, "GET", URL, max_attempts=2, max_wait=1)

        assert exc_info.value.status_code == 429
        assert route.call_count == 2

    @pytest.mark.asyncio
    async def test_other_errors_are_returned_as_is(self, respx_mock: respx.Router) -> None:
        """Un 500 n'est ni relance ni leve."""
        route = respx_mock.get(URL).mock(return_value=httpx.Response(500))

        async with httpx.AsyncClient() as client:
            response = await request_with_retry(client, "GET", URL)

        assert response.status_code == 500
        assert route.call_count == 1

    @pytest.mark.asyncio
    async def test_service_unavailable_is_not_retried(self, respx_mock: respx.Router) -> None:
        """Seul le 429 est relance : un 503 est retourne a l'appelant."""
        route = respx_mock.get(URL).mock(return_value=httpx.Response(503))

        async with httpx.AsyncClient() as client:
            response = await request_with_retry(client, "GET", URL, max_attempts=3, max_wait=1)

        assert response.status_code == 503
        assert route.call_count == 1
