"""SuiNS name resolution across the network table, plus reverse lookups."""

import logging
from typing import Mapping, Optional

import aiohttp
import ujson

from kaizen_errors import NameNotFoundError, NameResolutionError
from probing import first_match
from sui_models import Enrichment
from sui_networks import NETWORKS, NetworkConfig

logger = logging.getLogger(__name__)

SUINS_SUFFIX = ".sui"


def is_suins_name(identifier: str) -> bool:
    return SUINS_SUFFIX in identifier


class SuiNsResolver:
    def __init__(self, session: aiohttp.ClientSession, networks: Mapping[str, NetworkConfig] = NETWORKS):
        self.session = session
        self.networks = networks

    async def _get_json(self, url: str, params: dict) -> dict:
        async with self.session.get(url, params=params) as response:
            text = await response.text()
            if response.status != 200:
                raise NameResolutionError(f"HTTP {response.status} from {url}")
        try:
            data = ujson.loads(text)
        except ValueError as e:
            raise NameResolutionError(f"malformed response from {url}: {e}")
        return data if isinstance(data, dict) else {}

    async def resolve(self, name: str, network: str) -> str:
        """resolve a name against one network's SuiNS endpoint"""
        endpoint = self.networks[network].suins_endpoint
        try:
            data = await self._get_json(f"{endpoint}/resolve", {"name": name})
        except (aiohttp.ClientError, NameResolutionError) as e:
            raise NameResolutionError(f"Failed to resolve name: {e}") from e

        address = data.get("address")
        if not address:
            raise NameResolutionError("Failed to resolve name: No address returned")
        return address

    async def resolve_on_all_networks(self, name: str) -> str:
        """try every configured network in table order, first address wins"""
        match = await first_match(
            self.networks,
            lambda network: self.resolve(name, network),
            label=f"SuiNS resolution of {name}",
        )
        if match is None:
            raise NameNotFoundError(f'SuiNS name "{name}" not found on any network')

        network, address = match
        logger.info(f"Resolved {name} to {address} via {network}")
        return address

    async def reverse_lookup(self, address: str, network: str) -> Enrichment:
        """best-effort address -> name lookup, never raises"""
        endpoint = self.networks[network].suins_endpoint
        try:
            data = await self._get_json(f"{endpoint}/reverse-lookup", {"address": address})
        except Exception as e:
            logger.debug(f"Reverse lookup failed: {e}")
            return Enrichment.unavailable(str(e))

        name: Optional[str] = data.get("name")
        if not name:
            return Enrichment.unavailable("no name registered")
        return Enrichment.available(name)
