"""Transport client factory."""

from functools import lru_cache

from httpx import AsyncClient, Timeout


class HTTPClientFactory:
    """Factory for the AsyncClient used as request transport."""

    @staticmethod
    def create() -> AsyncClient:
        """Create a new AsyncClient.

        Requests never time out and redirects are handed back to the caller
        as plain responses.

        Returns:
            Configured AsyncClient instance.
        """
        return AsyncClient(timeout=Timeout(None), follow_redirects=False)


@lru_cache(maxsize=1)
def get_async_client() -> AsyncClient:
    """Get the shared AsyncClient.

    Note:
        Call client.aclose() at shutdown if necessary.
    """
    return HTTPClientFactory.create()
