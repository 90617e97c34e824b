"""Registration, login and logout."""

from __future__ import annotations

from typing import TYPE_CHECKING

from xcore_sdk.errors import XCoreHTTPError
from xcore_sdk.models.requests import ReqLogin, ReqRegister
from xcore_sdk.models.responses import RespLogin, RespRegister, RespUserInteractive

if TYPE_CHECKING:
    from xcore_sdk.http import HTTPClient

DUMMY_LOGIN = "m.login.dummy"


class AuthAPI:
    def __init__(self, http: HTTPClient) -> None:
        self._http = http

    async def _register(
        self, url: str, req: ReqRegister
    ) -> tuple[RespRegister | None, RespUserInteractive | None]:
        try:
            r = await self._http.post(url, json=req.to_json())
        except XCoreHTTPError as exc:
            if exc.status != 401:
                raise
            # The body should be a user-interactive auth response.
            return None, RespUserInteractive.model_validate_json(exc.contents)
        return RespRegister.model_validate(r.json()), None

    async def register(
        self, req: ReqRegister
    ) -> tuple[RespRegister | None, RespUserInteractive | None]:
        """Register with kind=user.

        Returns ``(response, None)`` on success, or ``(None, uia)`` when the
        server asks for user-interactive authentication.
        """
        return await self._register(self._http.build_url("register"), req)

    async def register_guest(
        self, req: ReqRegister
    ) -> tuple[RespRegister | None, RespUserInteractive | None]:
        url = self._http.build_url_with_query(["register"], {"kind": "guest"})
        return await self._register(url, req)

    async def register_dummy(self, req: ReqRegister) -> RespRegister:
        """Register using ``m.login.dummy`` auth.

        Only ``username`` and ``password`` need to be set. Most development
        homeservers allow this. Does not set credentials on the client.
        """
        res, uia = await self.register(req)
        if uia is not None and uia.has_single_stage_flow(DUMMY_LOGIN):
            req = req.model_copy(update={"auth": {"type": DUMMY_LOGIN, "session": uia.session}})
            res, _ = await self.register(req)
        if res is None:
            raise RuntimeError(f"registration failed: does this server support {DUMMY_LOGIN}?")
        return res

    async def login(self, req: ReqLogin) -> RespLogin:
        """Log in. Does not set credentials on the client; see ``Client.login``."""
        r = await self._http.post(self._http.build_url("login"), json=req.to_json())
        return RespLogin.model_validate(r.json())

    async def logout(self) -> None:
        await self._http.post(self._http.build_url("logout"))

    async def logout_all(self) -> None:
        """Log out every device of the current user."""
        await self._http.post(self._http.build_url("logout", "all"))
