import asyncio
import json

import pytest

from sui_models import Balance


class FakeResponse:
    def __init__(self, status=200, body=None, text=None, error=None):
        self.status = status
        self._text = text if text is not None else json.dumps(body if body is not None else {})
        self._error = error

    async def text(self):
        return self._text

    async def __aenter__(self):
        if self._error is not None:
            raise self._error
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """stand-in for aiohttp.ClientSession keyed on url"""

    def __init__(self, routes=None):
        self.routes = routes or {}
        self.calls = []

    def _respond(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        route = self.routes.get(url)
        if route is None:
            return FakeResponse(status=404, text="not found")
        if callable(route):
            return route(**kwargs)
        return route

    def get(self, url, **kwargs):
        return self._respond("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._respond("POST", url, **kwargs)

    def urls(self):
        return [url for _, url, _ in self.calls]


class FakeSuiClient:
    """records every call with loop timestamps so overlap can be checked"""

    def __init__(self, balances=None, obj=None, delay=0.0, error=None, log=None, name=""):
        self.balances = balances if balances is not None else []
        self.obj = obj if obj is not None else {}
        self.delay = delay
        self.error = error
        self.log = log if log is not None else []
        self.name = name

    async def _record(self, call, value):
        loop = asyncio.get_running_loop()
        started = loop.time()
        self.log.append(("start", call, self.name, started))
        if self.delay:
            await asyncio.sleep(self.delay)
        self.log.append(("end", call, self.name, loop.time()))
        if self.error is not None:
            raise self.error
        return value

    async def get_all_balances(self, owner):
        return await self._record("balances", self.balances)

    async def get_object(self, object_id, **options):
        self.last_object_options = options
        return await self._record("object", self.obj)


def balance(coin_type="0x2::sui::SUI", total="1000"):
    return {"coinType": coin_type, "coinObjectCount": 1, "totalBalance": total, "lockedBalance": {}}


@pytest.fixture
def parsed_balance():
    return Balance(coin_type="0x2::sui::SUI", total_balance="1000")
