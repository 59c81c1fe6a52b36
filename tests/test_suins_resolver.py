import asyncio

import aiohttp
import pytest

from conftest import FakeResponse, FakeSession
from kaizen_errors import NameNotFoundError, NameResolutionError
from sui_models import EnrichmentStatus
from sui_networks import NETWORKS
from suins_resolver import SuiNsResolver, is_suins_name

ADDRESS = "0x" + "cd" * 32


def resolve_url(network):
    return f"{NETWORKS[network].suins_endpoint}/resolve"


def reverse_url(network):
    return f"{NETWORKS[network].suins_endpoint}/reverse-lookup"


def test_is_suins_name():
    assert is_suins_name("alice.sui")
    assert not is_suins_name(ADDRESS)


def test_resolve_sends_name_as_query_param():
    session = FakeSession({resolve_url("testnet"): FakeResponse(body={"address": ADDRESS})})

    assert asyncio.run(SuiNsResolver(session).resolve("alice.sui", "testnet")) == ADDRESS
    assert session.calls[0][2]["params"] == {"name": "alice.sui"}


def test_resolve_without_address_is_an_error():
    session = FakeSession({resolve_url("mainnet"): FakeResponse(body={})})

    with pytest.raises(NameResolutionError, match="No address returned"):
        asyncio.run(SuiNsResolver(session).resolve("alice.sui", "mainnet"))


@pytest.mark.parametrize("home", list(NETWORKS))
def test_resolution_returns_same_address_whichever_network_answers(home):
    session = FakeSession({resolve_url(home): FakeResponse(body={"address": ADDRESS})})

    assert asyncio.run(SuiNsResolver(session).resolve_on_all_networks("alice.sui")) == ADDRESS

    expected = [resolve_url(n) for n in list(NETWORKS)[:list(NETWORKS).index(home) + 1]]
    assert session.urls() == expected


def test_per_network_errors_do_not_abort_the_scan():
    session = FakeSession({
        resolve_url("mainnet"): FakeResponse(error=aiohttp.ClientConnectionError("refused")),
        resolve_url("testnet"): FakeResponse(status=500, text="boom"),
        resolve_url("devnet"): FakeResponse(body={"address": ADDRESS}),
    })

    assert asyncio.run(SuiNsResolver(session).resolve_on_all_networks("alice.sui")) == ADDRESS


def test_unresolvable_name_fails_after_every_network():
    session = FakeSession()

    with pytest.raises(NameNotFoundError, match='SuiNS name "ghost.sui" not found on any network'):
        asyncio.run(SuiNsResolver(session).resolve_on_all_networks("ghost.sui"))

    assert session.urls() == [resolve_url(n) for n in NETWORKS]


def test_reverse_lookup_found():
    session = FakeSession({reverse_url("mainnet"): FakeResponse(body={"name": "alice.sui"})})

    result = asyncio.run(SuiNsResolver(session).reverse_lookup(ADDRESS, "mainnet"))

    assert result.is_available
    assert result.value == "alice.sui"
    assert session.calls[0][2]["params"] == {"address": ADDRESS}


@pytest.mark.parametrize("response", [
    FakeResponse(body={}),
    FakeResponse(status=502, text="bad gateway"),
    FakeResponse(text="<html>"),
    FakeResponse(error=aiohttp.ClientConnectionError("refused")),
])
def test_reverse_lookup_degrades_to_unavailable(response):
    session = FakeSession({reverse_url("mainnet"): response})

    result = asyncio.run(SuiNsResolver(session).reverse_lookup(ADDRESS, "mainnet"))

    assert result.status is EnrichmentStatus.UNAVAILABLE
    assert result.value_or() is None
