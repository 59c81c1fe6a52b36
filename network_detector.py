"""Find which Sui network an address lives on by probing balances."""

import logging
from typing import Callable, Iterable, List, Optional

from kaizen_errors import NetworkNotFoundError
from probing import first_match
from sui_models import Balance, NetworkMatch
from sui_networks import DETECTION_ORDER
from sui_rpc import SuiClient

logger = logging.getLogger(__name__)


class NetworkDetector:
    """
    Probes candidate networks in priority order (mainnet, testnet, devnet).

    A network matches when the balance query succeeds and returns at least one
    entry. An address holding nothing on its home network is therefore not
    detected there; callers can target a network explicitly instead.
    """

    def __init__(self, client_factory: Callable[[str], SuiClient], order: Iterable[str] = DETECTION_ORDER):
        self.client_factory = client_factory
        self.order = tuple(order)

    async def _probe(self, network: str, address: str) -> Optional[NetworkMatch]:
        client = self.client_factory(network)
        balances: List[Balance] = [Balance.from_rpc(b) for b in await client.get_all_balances(address)]
        if not balances:
            return None
        return NetworkMatch(network=network, client=client, balances=balances)

    async def detect(self, address: str) -> NetworkMatch:
        match = await first_match(
            self.order,
            lambda network: self._probe(network, address),
            label=f"network check for {address[:10]}",
        )
        if match is None:
            raise NetworkNotFoundError("Address not found on any supported network")

        network, found = match
        logger.info(f"Found account on {network} network")
        return found

    def bind(self, network: str) -> NetworkMatch:
        """skip detection and use an explicitly requested network"""
        return NetworkMatch(network=network, client=self.client_factory(network))
