"""Tests for wren.server.gate — the authorization decision rule."""

import pytest

from wren.http.headers import Headers
from wren.http.request import Request
from wren.http.writer import ResponseWriter
from wren.routing.route import Binding
from wren.server.gate import authorize
from wren.status import OK, Created, Forbidden, NotFound, Status, Unauthorized


async def _send(message: dict) -> None:
    pass


def _request() -> Request:
    return Request(method="GET", path="/", headers=Headers())


def _binding(public: bool = False) -> Binding:
    return Binding(handler=lambda request, writer: None, public=public)


class TestAuthorize:
    @pytest.mark.asyncio
    async def test_no_authorizer_forbids_private(self) -> None:
        result = await authorize(_binding(), None, _request(), ResponseWriter(_send))
        assert result is Forbidden

    @pytest.mark.asyncio
    async def test_public_skips_authorizer(self) -> None:
        calls: list[Request] = []

        def deny(request, writer):
            calls.append(request)
            return Forbidden

        result = await authorize(_binding(public=True), deny, _request(), ResponseWriter(_send))
        assert result is None
        assert calls == []

    @pytest.mark.asyncio
    async def test_public_without_authorizer(self) -> None:
        result = await authorize(_binding(public=True), None, _request(), ResponseWriter(_send))
        assert result is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("allowed", [None, OK, Created, Status(299, "Edge")])
    async def test_none_or_2xx_proceeds(self, allowed: Status | None) -> None:
        result = await authorize(
            _binding(), lambda request, writer: allowed, _request(), ResponseWriter(_send)
        )
        assert result is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "denied",
        [Unauthorized, Forbidden, NotFound, Status(302, "Found"), Status(199, "Odd")],
    )
    async def test_non_2xx_returned_unchanged(self, denied: Status) -> None:
        result = await authorize(
            _binding(), lambda request, writer: denied, _request(), ResponseWriter(_send)
        )
        assert result is denied

    @pytest.mark.asyncio
    async def test_async_authorizer(self) -> None:
        async def deny(request, writer):
            return Unauthorized.with_errors("token expired")

        result = await authorize(_binding(), deny, _request(), ResponseWriter(_send))
        assert result is not None
        assert result.code == 401
        assert result.errors == ("token expired",)

    @pytest.mark.asyncio
    async def test_authorizer_errors_propagate(self) -> None:
        def broken(request, writer):
            raise LookupError("session store down")

        with pytest.raises(LookupError):
            await authorize(_binding(), broken, _request(), ResponseWriter(_send))
