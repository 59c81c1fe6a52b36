"""
Account inspection: name or address in, network + balances + object out.
"""

import asyncio
import json
import logging
from typing import Optional

from network_detector import NetworkDetector
from sui_models import AccountInfo, Balance, Enrichment
from suins_resolver import SuiNsResolver, is_suins_name

logger = logging.getLogger(__name__)


class AccountInspector:
    def __init__(self, resolver: SuiNsResolver, detector: NetworkDetector):
        self.resolver = resolver
        self.detector = detector

    async def inspect(self, identifier: str, network: Optional[str] = None) -> AccountInfo:
        address = identifier
        is_name = is_suins_name(identifier)

        if is_name:
            logger.info(f"Resolving SuiNS name: {identifier}")
            address = await self.resolver.resolve_on_all_networks(identifier)

        if network:
            match = self.detector.bind(network)
            logger.info(f"Using {network} network")
        else:
            logger.info(f"Detecting network for {address}")
            match = await self.detector.detect(address)

        client = match.client

        async def skip_reverse_lookup() -> Enrichment:
            return Enrichment.not_attempted()

        # all three requests go out together, none depends on another
        results = await asyncio.gather(
            client.get_object(address, show_content=True, show_display=True, show_owner=True),
            client.get_all_balances(address),
            skip_reverse_lookup() if is_name else self.resolver.reverse_lookup(address, match.network),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        account_object, raw_balances, reverse = results

        logger.info(f"Account information retrieved for {address}")
        return AccountInfo(
            network=match.network,
            address=address,
            suins_name=identifier if is_name else reverse.value_or(),
            reverse_lookup=reverse,
            balances=[Balance.from_rpc(b) for b in raw_balances],
            account_object=account_object,
        )


def render_account_info(info: AccountInfo) -> str:
    lines = [
        "",
        f"Network: {info.network}",
        f"Address: {info.address}",
    ]
    if info.suins_name:
        lines.append(f"SuiNS Name: {info.suins_name}")

    lines += ["", "Balances:"]
    if not info.balances:
        lines.append("No coins found")
    for balance in info.balances:
        lines.append(f"{balance.coin_type}: {balance.total_balance}")

    lines += ["", "Account Object:", json.dumps(info.account_object, indent=2)]
    return "\n".join(lines)
