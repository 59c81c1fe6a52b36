#!/usr/bin/env python3
"""
kaizen - a Sui blockchain CLI that auto-detects networks

Usage:
    kaizen getAccountInfo <address | name.sui> [--network NETWORK]
    kaizen getNftDetails <nftObjectId>
    kaizen launchMeme

Examples:
    kaizen getAccountInfo example.sui
    kaizen getAccountInfo 0x02a212de6a9dfa3a69e22387acfbafbb1a9e591bd9d636e7895dcfc8de05f331
    kaizen getAccountInfo 0x... --network localnet
"""

import argparse
import asyncio
import logging
import sys

import aiohttp
from dotenv import load_dotenv

from account_inspector import AccountInspector, render_account_info
from kaizen_errors import KaizenError
from meme_launcher import LaunchSettings, MemeLauncher, render_launch_result
from network_detector import NetworkDetector
from nft_inspector import MarketplaceStats, NftInspector, render_nft_metadata
from sui_networks import NETWORKS, NFT_NETWORK, get_network
from sui_rpc import SuiClient
from suins_resolver import SuiNsResolver

__version__ = "1.0.0"

# Load environment variables from .env file
load_dotenv()

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    datefmt='%H:%M:%S'
)
logger = logging.getLogger(__name__)


async def get_account_info(identifier: str, network: str = None):
    async with aiohttp.ClientSession() as session:
        detector = NetworkDetector(lambda net: SuiClient(get_network(net).url, session=session))
        inspector = AccountInspector(SuiNsResolver(session), detector)
        info = await inspector.inspect(identifier, network=network)
    print(render_account_info(info))


async def get_nft_details(object_id: str):
    async with aiohttp.ClientSession() as session:
        client = SuiClient(get_network(NFT_NETWORK).url, session=session)
        metadata = await NftInspector(client, MarketplaceStats(session)).inspect(object_id)
    print(render_nft_metadata(metadata))


async def launch_meme():
    # credentials are checked before the session or the form exist
    settings = LaunchSettings.from_env()
    settings.require()

    async with aiohttp.ClientSession() as session:
        launcher = MemeLauncher.from_settings(settings, session)
        result = await launcher.launch()
    print(render_launch_result(result))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kaizen",
        description="A smart Sui blockchain CLI that auto-detects networks",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug output, including per-network probes")

    # lets -v also follow the command, without resetting a top-level -v
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-v", "--verbose", action="store_true", default=argparse.SUPPRESS,
                        help="Show debug output, including per-network probes")

    commands = parser.add_subparsers(dest="command")

    account = commands.add_parser("getAccountInfo", parents=[common],
                                  help="Get account information (auto-detects network)")
    account.add_argument("identifier", help="Sui address or SuiNS name")
    account.add_argument("--network", choices=list(NETWORKS),
                         help="Skip auto-detection and query this network (the only way to reach localnet)")

    nft = commands.add_parser("getNftDetails", parents=[common], help="Get detailed metadata for a Sui NFT")
    nft.add_argument("nftObjectId", help="Object id of the NFT (queried on mainnet)")

    commands.add_parser("launchMeme", parents=[common],
                        help="Interactively create, build and publish a meme NFT collection")

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "getAccountInfo":
        job = get_account_info(args.identifier, args.network)
    elif args.command == "getNftDetails":
        job = get_nft_details(args.nftObjectId)
    else:
        job = launch_meme()

    try:
        asyncio.run(job)
    except asyncio.TimeoutError:
        logger.error("Error: request timed out")
        return 1
    except (KaizenError, aiohttp.ClientError, OSError) as e:
        logger.error(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        logger.error("Interrupted by user")
        return 1
    return 0


def main_entry():
    sys.exit(main())


if __name__ == "__main__":
    main_entry()
