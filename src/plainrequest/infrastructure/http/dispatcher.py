"""Request dispatcher bound to an optional origin/port context."""

from __future__ import annotations

import json
import logging
import posixpath
import re
from functools import lru_cache
from typing import Any, AsyncIterator, Awaitable, Dict, Mapping, Optional, Union

from httpx import AsyncClient, Headers, Response, URL
from pydantic import BaseModel

from ...domain.errors import ConfigurationError, RequestError
from ...domain.models import ContextOptions, RequestOptions, Result
from ...utils.parsing import try_parse
from .client import get_async_client

logger = logging.getLogger(__name__)

VERBS = (
    "get", "head", "post", "put", "delete",
    "connect", "options", "trace", "path",
)

OptionsInput = Union[RequestOptions, Mapping[str, Any], None]


def normalize_path(path: str) -> str:
    """Collapse repeated slashes and resolve ``.``/``..`` segments.

    The result is always absolute and never climbs above ``/``; a trailing
    slash is preserved.
    """
    collapsed = re.sub(r"/{2,}", "/", "/" + path)
    normalized = posixpath.normpath(collapsed)
    if collapsed.endswith("/") and normalized != "/":
        normalized += "/"
    return normalized


def join_origin(origin: str, path: Optional[str]) -> URL:
    """Build the URL for ``path`` relative to ``origin``.

    Args:
        origin: Scheme and host, optionally with a base path.
        path: Request path, optionally with a query string.

    Returns:
        Fully qualified URL.
    """
    base = URL(origin)
    raw_path, separator, query = (path or "").partition("?")
    target = normalize_path(f"{base.path}/{raw_path}")
    if separator:
        target = f"{target}?{query}"
    return base.join(target)


def resolve_url(options: RequestOptions, context: Optional[ContextOptions]) -> URL:
    """Resolve the request URL without touching the network.

    Raises:
        ConfigurationError: If no URL can be built from the options and context.
    """
    if options.url:
        url = URL(options.url)
    elif context is None:
        raise ConfigurationError("The request URL is mandatory.")
    elif not context.origin:
        raise ConfigurationError("The context's origin is mandatory.")
    else:
        url = join_origin(context.origin, options.path)

    if not url.scheme or not url.host:
        raise ConfigurationError(f"The request URL must be absolute: {url}")
    return url


def resolve_port(
    url: URL,
    request_port: Optional[int] = None,
    context_port: Optional[int] = None,
) -> int:
    """Pick the port: call option, then context default, then URL, then scheme default."""
    is_secure = url.scheme == "https"
    return request_port or context_port or url.port or (443 if is_secure else 80)


def encode_body(body: Any) -> Optional[Union[str, bytes]]:
    """Serialize structured bodies to JSON; text and bytes pass through verbatim."""
    if body is None:
        return None
    if isinstance(body, (str, bytes)):
        return body
    if isinstance(body, bytearray):
        return bytes(body)
    if isinstance(body, BaseModel):
        return body.model_dump_json()
    return json.dumps(body)


class ResponseStream:
    """Live response handed to the caller in streaming mode.

    The caller owns the underlying connection and must drain or close it,
    either explicitly with :meth:`aclose` or with ``async with``.
    """

    def __init__(self, response: Response) -> None:
        self.response = response

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def headers(self) -> Headers:
        return self.response.headers

    @property
    def readable(self) -> bool:
        """Whether the body can still be read."""
        return not (self.response.is_closed or self.response.is_stream_consumed)

    def aiter_bytes(self, chunk_size: Optional[int] = None) -> AsyncIterator[bytes]:
        return self.response.aiter_bytes(chunk_size)

    def aiter_text(self, chunk_size: Optional[int] = None) -> AsyncIterator[str]:
        return self.response.aiter_text(chunk_size)

    def aiter_lines(self) -> AsyncIterator[str]:
        return self.response.aiter_lines()

    async def aread(self) -> bytes:
        return await self.response.aread()

    async def aclose(self) -> None:
        await self.response.aclose()

    async def __aenter__(self) -> "ResponseStream":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"<ResponseStream [{self.status_code}] readable={self.readable}>"


class Shorthand:
    """Dispatcher entry point with some request options preset."""

    def __init__(self, target: "Dispatcher", name: str, **preset: Any) -> None:
        self._target = target
        self.preset = preset
        self.__name__ = name

    def __call__(
        self, request_options: OptionsInput = None, **fields: Any
    ) -> Awaitable[Union[Result, ResponseStream]]:
        return self._target(request_options, **{**fields, **self.preset})

    def __repr__(self) -> str:
        return f"<{self.__name__}>"


class Dispatcher:
    """Callable that performs one HTTP/HTTPS exchange per call.

    Usage:
        ```python
        request = create_context(origin="http://localhost", port=3000)
        result = await request.get(path="/health")
        stream = await request.stream.get(path="/logs")
        ```

    Every verb in ``VERBS`` is exposed as an attribute, and ``stream`` mirrors
    the same verbs in streaming mode. The ``path`` verb is unrelated to the
    ``path`` request option.
    """

    def __init__(
        self,
        context: Optional[ContextOptions] = None,
        http_client: Optional[AsyncClient] = None,
    ) -> None:
        """Initialize dispatcher.

        Args:
            context: Bound origin/port defaults. None requires a full URL per call.
            http_client: Transport. Defaults to the shared client.
        """
        self.context = context
        self._http_client = http_client
        self.__name__ = "request"

        self.stream = Shorthand(self, "request.stream", is_stream=True)
        self.verbs: Dict[str, Shorthand] = {}
        for verb in VERBS:
            self.verbs[verb] = Shorthand(self, f"request {verb.upper()}", method=verb)
            setattr(self, verb, self.verbs[verb])
            setattr(
                self.stream,
                verb,
                Shorthand(self, f"request.stream {verb.upper()}", method=verb, is_stream=True),
            )

    @property
    def http_client(self) -> AsyncClient:
        if self._http_client is not None:
            return self._http_client
        return get_async_client()

    def __call__(
        self, request_options: OptionsInput = None, **fields: Any
    ) -> Awaitable[Union[Result, ResponseStream]]:
        """Resolve the target and start the exchange.

        URL resolution happens immediately, so configuration problems raise
        here rather than when the returned awaitable is awaited.

        Args:
            request_options: RequestOptions instance or mapping of its fields.
            **fields: Individual options; they override ``request_options``.

        Returns:
            Awaitable settling to a Result, or a ResponseStream in streaming mode.

        Raises:
            ConfigurationError: If no URL can be resolved.
        """
        options = self._merge_options(request_options, fields)
        context = self.context
        url = resolve_url(options, context)
        port = resolve_port(url, options.port, context.port if context is not None else None)
        scheme = "https" if url.scheme == "https" else "http"
        return self._send(url.copy_with(scheme=scheme, port=port), options)

    @staticmethod
    def _merge_options(
        request_options: OptionsInput, fields: Mapping[str, Any]
    ) -> RequestOptions:
        base: Dict[str, Any] = dict(request_options) if request_options is not None else {}
        return RequestOptions(**{**base, **fields})

    async def _send(self, url: URL, options: RequestOptions) -> Union[Result, ResponseStream]:
        client = self.http_client
        method = (options.method or "get").upper()
        request = client.build_request(method, url, content=encode_body(options.body))
        logger.debug("Dispatching %s %s (stream=%s)", method, url, options.is_stream)

        response = await client.send(request, stream=options.is_stream)
        if options.is_stream:
            return ResponseStream(response)

        body = try_parse(response.text)
        if response.status_code > 400:
            logger.warning("%s %s failed with status %d", method, url, response.status_code)
            raise RequestError(
                f"Request failed with status code {response.status_code}.",
                status_code=response.status_code,
                body=body,
            )
        return Result(status_code=response.status_code, body=body)

    def __repr__(self) -> str:
        return f"<Dispatcher context={self.context!r}>"


def create_context(
    context_options: Union[ContextOptions, Mapping[str, Any], None] = None,
    *,
    origin: Optional[str] = None,
    port: Optional[int] = None,
    http_client: Optional[AsyncClient] = None,
) -> Dispatcher:
    """Create a dispatcher bound to an optional origin and default port.

    Args:
        context_options: ContextOptions instance or mapping of its fields.
        origin: Origin joined with each call's ``path``.
        port: Default port, overridden by a call's own ``port``.
        http_client: Optional transport to use instead of the shared client.

    Returns:
        Configured Dispatcher. Without any context every call needs a ``url``.
    """
    if isinstance(context_options, Mapping):
        context_options = ContextOptions(**context_options)
    if origin is not None or port is not None:
        base = dict(context_options) if context_options is not None else {}
        overrides = {k: v for k, v in (("origin", origin), ("port", port)) if v is not None}
        context_options = ContextOptions(**{**base, **overrides})
    return Dispatcher(context_options, http_client=http_client)


@lru_cache(maxsize=1)
def get_default_request() -> Dispatcher:
    """Get the shared context-free dispatcher."""
    return create_context()
