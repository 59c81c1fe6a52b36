"""
Static registry of the Sui networks kaizen knows about.

Each network id maps to its fullnode RPC url, its SuiNS api endpoint and a
short chain id. Localnet is only used when explicitly targeted.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple


@dataclass(frozen=True)
class NetworkConfig:
    url: str
    suins_endpoint: str
    chain_id: str


NETWORKS: Mapping[str, NetworkConfig] = MappingProxyType({
    "mainnet": NetworkConfig(
        url="https://fullnode.mainnet.sui.io:443",
        suins_endpoint="https://api.suins.io/mainnet",
        chain_id="0x1",
    ),
    "testnet": NetworkConfig(
        url="https://fullnode.testnet.sui.io:443",
        suins_endpoint="https://api.suins.io/testnet",
        chain_id="0x2",
    ),
    "devnet": NetworkConfig(
        url="https://fullnode.devnet.sui.io:443",
        suins_endpoint="https://api.suins.io/devnet",
        chain_id="0x3",
    ),
    "localnet": NetworkConfig(
        url="http://127.0.0.1:9000",
        suins_endpoint="http://localhost:3000/api",
        chain_id="0x4",
    ),
})

# priority order for auto-detection, localnet deliberately absent
DETECTION_ORDER: Tuple[str, ...] = ("mainnet", "testnet", "devnet")

# networks a meme collection can be launched on
LAUNCH_NETWORKS: Tuple[str, ...] = DETECTION_ORDER

NFT_NETWORK = "mainnet"

MARKETPLACE_STATS_URL = "https://api.suimarketplace.com/nfts/{object_id}/stats"
WALRUS_UPLOAD_URL = "https://api.walrus.gg/upload"
EXPLORER_TX_URL = "https://suiexplorer.com/txblock/{digest}?network={network}"


def get_network(network: str) -> NetworkConfig:
    """look up a network, raising KeyError with the known ids"""
    try:
        return NETWORKS[network]
    except KeyError:
        raise KeyError(f"Unknown network '{network}', expected one of: {', '.join(NETWORKS)}") from None


def explorer_tx_url(digest: str, network: str) -> str:
    return EXPLORER_TX_URL.format(digest=digest, network=network)
