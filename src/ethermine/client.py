"""
Ethermine Pool API Client for Python

Provides an async client for the Ethermine pool API.
"""

import asyncio
import logging
from typing import Any, Callable, Dict, Mapping, Optional, Set, Union

import httpx

from .errors import EncodingError, EthermineError
from .methods import DEFAULT_METHODS, MethodTable, Params, build_route
from .models import ClientConfig, Route
from .response import normalize_response
from .signing import NonceGenerator, sign_request
from .transport import Transport

logger = logging.getLogger(__name__)

Callback = Callable[[Optional[BaseException], Any], None]


def _notify(callback: Callback) -> Callable[["asyncio.Future[Any]"], None]:
    """Adapt a node-style ``callback(error, result)`` to a future done-callback."""

    def _on_done(future: "asyncio.Future[Any]") -> None:
        if future.cancelled():
            callback(asyncio.CancelledError(), None)
            return
        error = future.exception()
        if error is not None:
            callback(error, None)
        else:
            callback(None, future.result())

    return _on_done


class EthermineClient:
    """
    Ethermine pool API client.

    Every call returns an :class:`asyncio.Future`; a completion callback, when
    given, is attached to that same future and receives ``(error, None)`` or
    ``(None, result)`` exactly once.

    Example:
        >>> async with EthermineClient("0xWALLET") as client:
        ...     stats = await client.pool_stats()
        ...     history = await client.call("miner/:miner/history")
    """

    def __init__(
        self,
        wallet: str,
        options: Union[str, Mapping[str, Any], None] = None,
        *,
        url: Optional[str] = None,
        version: Optional[Union[int, str]] = None,
        timeout: Optional[int] = None,
        otp: Optional[str] = None,
        secret: Optional[str] = None,
        methods: Optional[MethodTable] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        # A bare string for ``options`` is the one-time password.
        if isinstance(options, str):
            options = {"otp": options}

        values: Dict[str, Any] = dict(options or {})
        overrides = {
            "url": url,
            "version": version,
            "timeout": timeout,
            "otp": otp,
            "secret": secret,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})

        self.config = ClientConfig(wallet=wallet, **values)
        self.methods = methods or DEFAULT_METHODS
        self._nonce = NonceGenerator()
        # The event loop only keeps weak references to tasks.
        self._pending: Set["asyncio.Task[Any]"] = set()
        self._transport = Transport(
            timeout=self.config.timeout_seconds,
            user_agent=self.config.user_agent,
            client=http_client,
        )

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        methods: Optional[MethodTable] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> "EthermineClient":
        return cls(
            config.wallet,
            config.model_dump(exclude={"wallet"}),
            methods=methods,
            http_client=http_client,
        )

    @classmethod
    def from_env(cls, prefix: str = "ETHERMINE_", **overrides: Any) -> "EthermineClient":
        """Create a client from ``ETHERMINE_*`` environment variables."""
        return cls.from_config(ClientConfig.from_env(prefix, **overrides))

    async def __aenter__(self) -> "EthermineClient":
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._transport.close()

    # ==================== Dispatch ====================

    def route(self, method: str, params: Params = None) -> Route:
        """Resolve ``method`` and build its path without sending anything."""
        category = self.methods.resolve(method)
        return build_route(method, category, params, self.config)

    def call(
        self,
        method: str,
        params: Union[Params, Callback] = None,
        callback: Optional[Callback] = None,
    ) -> "asyncio.Future[Any]":
        """
        Make an API request.

        Must be called from a running event loop. Unknown methods and missing
        path identifiers settle the returned future straight away, before any
        network activity.
        """
        if callback is None and callable(params):
            callback, params = params, None

        loop = asyncio.get_running_loop()
        try:
            route = self.route(method, params)
        except EthermineError as exc:
            logger.debug("Rejected %s: %s", method, exc)
            future: "asyncio.Future[Any]" = loop.create_future()
            future.set_exception(exc)
        else:
            task = asyncio.ensure_future(self._dispatch(route))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)
            future = task

        if callback is not None:
            future.add_done_callback(_notify(callback))
        return future

    async def _dispatch(self, route: Route) -> Any:
        url = self.config.url + route.path
        if route.signed:
            payload = await self._private_request(route, url)
        else:
            payload = await self._transport.request(url, route.params, "GET")
        return normalize_response(payload)

    async def _private_request(self, route: Route, url: str) -> Any:
        params = dict(route.params)
        if not params.get("nonce"):
            params["nonce"] = self._nonce()
        if self.config.otp is not None:
            params["otp"] = self.config.otp

        try:
            params["nonce"] = int(params["nonce"])
        except (TypeError, ValueError) as exc:
            raise EncodingError(f"Invalid nonce: {params['nonce']!r}") from exc

        signed = sign_request(
            route.path, params, self.config.signing_secret, params["nonce"]
        )
        headers = {
            "API-Key": self.config.wallet,
            "API-Sign": signed.signature,
        }
        return await self._transport.request(
            url, verb="POST", headers=headers, encoded=signed.encoded_body
        )

    # ==================== Pool ====================

    async def pool_stats(self) -> Any:
        return await self.call("poolStats")

    async def credits(self) -> Any:
        return await self.call("credits")

    async def blocks_history(self) -> Any:
        return await self.call("blocks/history")

    async def network_stats(self) -> Any:
        return await self.call("networkStats")

    async def servers_history(self) -> Any:
        return await self.call("servers/history")

    # ==================== Miner ====================

    async def miner_blocks(self, miner: Optional[str] = None) -> Any:
        return await self.call("miner/:miner/blocks", miner)

    async def miner_history(self, miner: Optional[str] = None) -> Any:
        return await self.call("miner/:miner/history", miner)

    async def miner_payouts(self, miner: Optional[str] = None) -> Any:
        return await self.call("miner/:miner/payouts", miner)

    async def miner_rounds(self, miner: Optional[str] = None) -> Any:
        return await self.call("miner/:miner/rounds", miner)

    async def miner_settings(self, miner: Optional[str] = None) -> Any:
        return await self.call("miner/:miner/settings", miner)

    async def miner_current_stats(self, miner: Optional[str] = None) -> Any:
        """Current hashrate and balance summary for ``miner`` (defaults to the wallet)."""
        return await self.call("miner/:miner/currentStats", miner)

    # ==================== Workers ====================

    async def miner_workers(self, miner: Optional[str] = None) -> Any:
        return await self.call("miner/:miner/workers", miner)

    async def workers_monitor(self, miner: Optional[str] = None) -> Any:
        return await self.call("miner/:miner/workers/monitor", miner)

    async def worker_history(self, worker: str, miner: Optional[str] = None) -> Any:
        return await self.call(
            "miner/:miner/worker/:worker/history",
            {"miner": miner, "worker": worker},
        )

    async def worker_current_stats(self, worker: str, miner: Optional[str] = None) -> Any:
        return await self.call(
            "miner/:miner/worker/:worker/currentStats",
            {"miner": miner, "worker": worker},
        )
