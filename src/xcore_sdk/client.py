"""High-level client composing HTTP, the sync loop, and API groups."""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Any

from xcore_sdk.api.auth import AuthAPI
from xcore_sdk.errors import XCoreHTTPError, XCoreNetworkError
from xcore_sdk.http import DEFAULT_PREFIX, HTTPClient
from xcore_sdk.models.requests import ReqLogin
from xcore_sdk.models.responses import RespLogin
from xcore_sdk.store import InMemoryStore, Storer
from xcore_sdk.syncer import DefaultSyncer, Syncer

log = logging.getLogger(__name__)

DEFAULT_SYNC_TIMEOUT_MS = 30000

# Failures handed to Syncer.on_failed_sync. ValueError covers undecodable
# or malformed response bodies.
_SYNC_FAILURES = (XCoreHTTPError, XCoreNetworkError, ValueError)


class Client:
    """Top-level SDK client.

    Usage::

        async with Client("https://hs.example.org", "@bot:example.org", token) as client:
            client.syncer.on_event_type("m.room.message", on_message)
            await client.sync()  # blocks until a fatal error or stop_sync()

    By default an :class:`InMemoryStore` is used, so filter IDs and sync
    positions are forgotten on restart. Pass a persistent ``store`` in
    production.
    """

    def __init__(
        self,
        homeserver_url: str,
        user_id: str = "",
        access_token: str | None = None,
        *,
        syncer: Syncer | None = None,
        store: Storer | None = None,
        prefix: str = DEFAULT_PREFIX,
        app_service_user_id: str | None = None,
        timeout: float = 30.0,
        sync_timeout_ms: int = DEFAULT_SYNC_TIMEOUT_MS,
    ) -> None:
        self.http = HTTPClient(
            homeserver_url,
            access_token,
            user_id=user_id,
            prefix=prefix,
            app_service_user_id=app_service_user_id,
            timeout=timeout,
        )
        self.store: Storer = store if store is not None else InMemoryStore()
        self.syncer: Syncer = syncer if syncer is not None else DefaultSyncer(user_id, self.store)
        self.sync_timeout_ms = sync_timeout_ms
        self.auth = AuthAPI(self.http)

        # Identifies the current sync loop. Only one may be live at a time.
        self._syncing_lock = threading.Lock()
        self._syncing_id = 0

        # Lazily populated API groups
        self._rooms: Any = None
        self._profile: Any = None
        self._server: Any = None
        self._sync_api: Any = None

    # --- Credentials ---

    @property
    def user_id(self) -> str:
        return self.http.user_id

    @property
    def access_token(self) -> str | None:
        return self.http.token

    def set_credentials(self, user_id: str, access_token: str) -> None:
        self.http.user_id = user_id
        self.http.token = access_token

    def clear_credentials(self) -> None:
        self.http.user_id = ""
        self.http.token = None

    async def login(self, req: ReqLogin) -> RespLogin:
        """Login and store the credentials for subsequent requests."""
        result = await self.auth.login(req)
        self.set_credentials(result.user_id, result.access_token)
        return result

    # --- API group properties ---

    @property
    def rooms(self) -> Any:
        if self._rooms is None:
            from xcore_sdk.api.rooms import RoomsAPI
            self._rooms = RoomsAPI(self.http)
        return self._rooms

    @property
    def profile(self) -> Any:
        if self._profile is None:
            from xcore_sdk.api.profile import ProfileAPI
            self._profile = ProfileAPI(self.http)
        return self._profile

    @property
    def server(self) -> Any:
        if self._server is None:
            from xcore_sdk.api.server import ServerAPI
            self._server = ServerAPI(self.http)
        return self._server

    @property
    def sync_api(self) -> Any:
        if self._sync_api is None:
            from xcore_sdk.api.sync import SyncAPI
            self._sync_api = SyncAPI(self.http)
        return self._sync_api

    # --- Sync loop ---

    async def sync(self) -> None:
        """Long-poll the homeserver and feed each response to the syncer.

        Runs until a fatal error, which is raised:

        - creating the filter fails,
        - ``syncer.on_failed_sync`` raises in response to a failed request,
        - ``syncer.process_response`` raises.

        Returns ``None`` once :meth:`stop_sync` is called, or once another
        call to :meth:`sync` supersedes this one, the next time a request
        completes. The superseded response is discarded unprocessed. Call
        ``sync()`` again to resume from the stored position.
        """
        syncing_id = self._increment_syncing_id()
        user_id = self.user_id
        next_batch = self.store.load_next_batch(user_id)
        filter_id = self.store.load_filter_id(user_id)
        if not filter_id:
            filter_json = self.syncer.get_filter_json(user_id)
            res_filter = await self.sync_api.create_filter(filter_json)
            filter_id = res_filter.filter_id
            self.store.save_filter_id(user_id, filter_id)

        log.info("Sync %d started for %s since=%r", syncing_id, user_id, next_batch)
        while True:
            try:
                res_sync = await self.sync_api.sync_request(
                    self.sync_timeout_ms, next_batch, filter_id
                )
            except _SYNC_FAILURES as exc:
                delay = self.syncer.on_failed_sync(None, exc)
                log.warning("Sync request failed (%s), retrying in %.1fs", exc, delay)
                await asyncio.sleep(delay)
                continue

            # Stopped, or another sync() has started. Drop this response.
            if self._get_syncing_id() != syncing_id:
                log.info("Sync %d for %s stopped", syncing_id, user_id)
                return

            # Stored before processing so a batch that keeps failing is not
            # replayed forever after a restart.
            self.store.save_next_batch(user_id, res_sync.next_batch)
            await self.syncer.process_response(res_sync, next_batch)

            next_batch = res_sync.next_batch

    def stop_sync(self) -> None:
        """Stop the running sync loop, if any, once its current request returns.

        Does not wait for the loop to exit. Safe to call repeatedly and from
        any thread.
        """
        self._increment_syncing_id()

    def _increment_syncing_id(self) -> int:
        with self._syncing_lock:
            self._syncing_id += 1
            return self._syncing_id

    def _get_syncing_id(self) -> int:
        with self._syncing_lock:
            return self._syncing_id

    # --- Context manager ---

    async def close(self) -> None:
        self.stop_sync()
        await self.http.close()

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()
