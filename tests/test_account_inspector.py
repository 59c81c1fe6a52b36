import asyncio

import pytest

from account_inspector import AccountInspector, render_account_info
from conftest import FakeSuiClient, balance
from kaizen_errors import NameNotFoundError
from network_detector import NetworkDetector
from sui_models import AccountInfo, Enrichment, EnrichmentStatus

ADDRESS = "0x" + "ef" * 32


class StubResolver:
    def __init__(self, log, reverse=None, names=None, delay=0.0):
        self.log = log
        self.reverse = reverse or Enrichment.unavailable("no name registered")
        self.names = names or {}
        self.delay = delay
        self.reverse_calls = []

    async def resolve_on_all_networks(self, name):
        if name not in self.names:
            raise NameNotFoundError(f'SuiNS name "{name}" not found on any network')
        return self.names[name]

    async def reverse_lookup(self, address, network):
        loop = asyncio.get_running_loop()
        self.reverse_calls.append((address, network))
        self.log.append(("start", "reverse", network, loop.time()))
        await asyncio.sleep(self.delay)
        self.log.append(("end", "reverse", network, loop.time()))
        return self.reverse


def build(log, resolver=None, obj=None, delay=0.05):
    clients = {
        "mainnet": FakeSuiClient(name="mainnet"),
        "testnet": FakeSuiClient(balances=[balance()], obj=obj or {"data": {"objectId": ADDRESS}},
                                 delay=delay, log=log, name="testnet"),
    }
    detector = NetworkDetector(lambda network: clients.get(network, FakeSuiClient(name=network)))
    resolver = resolver or StubResolver(log, delay=delay)
    return AccountInspector(resolver, detector), resolver


def test_three_fetches_overlap():
    log = []
    inspector, resolver = build(log)

    info = asyncio.run(inspector.inspect(ADDRESS))

    # detection's own balance probe is not part of the concurrent batch
    batch = log[2:]
    starts = [t for kind, *_, t in batch if kind == "start"]
    ends = [t for kind, *_, t in batch if kind == "end"]
    assert {call for kind, call, *_ in batch} == {"object", "balances", "reverse"}
    assert len(starts) == 3
    assert max(starts) <= min(ends)
    assert info.network == "testnet"
    assert resolver.reverse_calls == [(ADDRESS, "testnet")]


def test_reverse_lookup_name_is_reported():
    log = []
    resolver = StubResolver(log, reverse=Enrichment.available("bob.sui"))
    inspector, _ = build(log, resolver=resolver, delay=0)

    info = asyncio.run(inspector.inspect(ADDRESS))

    assert info.suins_name == "bob.sui"
    assert info.reverse_lookup.is_available


def test_name_input_is_resolved_and_reverse_lookup_skipped():
    log = []
    resolver = StubResolver(log, names={"bob.sui": ADDRESS})
    inspector, _ = build(log, resolver=resolver, delay=0)

    info = asyncio.run(inspector.inspect("bob.sui"))

    assert info.address == ADDRESS
    assert info.suins_name == "bob.sui"
    assert info.reverse_lookup.status is EnrichmentStatus.NOT_ATTEMPTED
    assert resolver.reverse_calls == []


def test_unknown_name_propagates():
    inspector, _ = build([], delay=0)

    with pytest.raises(NameNotFoundError):
        asyncio.run(inspector.inspect("ghost.sui"))


def test_explicit_network_skips_detection():
    log = []
    local = FakeSuiClient(balances=[], obj={"data": None}, log=log, name="localnet")
    detector = NetworkDetector(lambda network: local if network == "localnet" else pytest.fail(network))
    inspector = AccountInspector(StubResolver(log), detector)

    info = asyncio.run(inspector.inspect(ADDRESS, network="localnet"))

    assert info.network == "localnet"
    assert info.balances == []


def test_render_account_info(parsed_balance):
    info = AccountInfo(
        network="testnet",
        address=ADDRESS,
        suins_name="bob.sui",
        reverse_lookup=Enrichment.not_attempted(),
        balances=[parsed_balance],
        account_object={"data": {"objectId": ADDRESS}},
    )

    text = render_account_info(info)

    assert "Network: testnet" in text
    assert "SuiNS Name: bob.sui" in text
    assert "0x2::sui::SUI: 1000" in text
    assert '"objectId"' in text


def test_render_account_info_without_coins_or_name():
    info = AccountInfo("devnet", ADDRESS, None, Enrichment.unavailable("x"), [], {})

    text = render_account_info(info)

    assert "No coins found" in text
    assert "SuiNS Name" not in text


class FailingObjectClient(FakeSuiClient):
    async def get_object(self, object_id, **options):
        await self._record("object", None)
        raise RuntimeError("object fetch failed")


def test_failed_fetch_waits_for_the_others_to_settle():
    log = []
    client = FailingObjectClient(balances=[balance()], log=log, name="testnet")
    detector = NetworkDetector(lambda network: client)
    resolver = StubResolver(log, delay=0.05)
    inspector = AccountInspector(resolver, detector)

    with pytest.raises(RuntimeError, match="object fetch failed"):
        asyncio.run(inspector.inspect(ADDRESS, network="testnet"))

    ends = {call for kind, call, *_ in log if kind == "end"}
    assert ends == {"object", "balances", "reverse"}
