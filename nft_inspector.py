"""Fetch and format display/content metadata for a single NFT object."""

import json
import logging
from typing import Any, Dict

import aiohttp
import ujson

from kaizen_errors import ObjectNotFoundError
from sui_models import Enrichment, NftMetadata
from sui_networks import MARKETPLACE_STATS_URL
from sui_rpc import SuiClient

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "Not available"
DISPLAY_FIELDS = {
    "name": "name",
    "description": "description",
    "image_url": "image_url",
    "creator": "creator",
    "tag": "tag",
}


def stringify_field(value: Any) -> str:
    """coerce a Move content field to text, nested structures as compact JSON"""
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


class MarketplaceStats:
    def __init__(self, session: aiohttp.ClientSession, url_template: str = MARKETPLACE_STATS_URL):
        self.session = session
        self.url_template = url_template

    async def floor_price(self, object_id: str) -> Enrichment:
        url = self.url_template.format(object_id=object_id)
        try:
            async with self.session.get(url) as response:
                text = await response.text()
                if response.status != 200:
                    return Enrichment.unavailable(f"HTTP {response.status}")
            data = ujson.loads(text)
        except Exception as e:
            logger.info(f"Could not fetch floor price data: {e}")
            return Enrichment.unavailable(str(e))

        price = data.get("allTimeFloorPrice") if isinstance(data, dict) else None
        if price is None:
            return Enrichment.unavailable("no floor price reported")
        return Enrichment.available(str(price))


class NftInspector:
    def __init__(self, client: SuiClient, stats: MarketplaceStats):
        self.client = client
        self.stats = stats

    async def inspect(self, object_id: str) -> NftMetadata:
        logger.info(f"Fetching details for NFT: {object_id}...")
        response = await self.client.get_object(object_id, show_content=True, show_display=True, show_type=True)

        data = response.get("data")
        if not data:
            raise ObjectNotFoundError("NFT not found or data unavailable")

        metadata = NftMetadata(object_id=object_id, type=data.get("type"))

        display: Dict[str, Any] = (data.get("display") or {}).get("data") or {}
        for attr, key in DISPLAY_FIELDS.items():
            if display.get(key) is not None:
                setattr(metadata, attr, display[key])

        content = data.get("content") or {}
        if isinstance(content.get("fields"), dict):
            metadata.attributes = {
                key: stringify_field(value)
                for key, value in content["fields"].items()
                if not key.startswith("_")
            }

        floor = await self.stats.floor_price(object_id)
        if floor.is_available:
            metadata.floor_price = floor.value

        return metadata


def render_nft_metadata(metadata: NftMetadata) -> str:
    rule = "----------------------------------"
    lines = [
        "",
        "NFT Details:",
        rule,
        f"Name: {metadata.name or NOT_AVAILABLE}",
        f"Type: {metadata.type or NOT_AVAILABLE}",
        f"Creator: {metadata.creator or NOT_AVAILABLE}",
        f"Tag: {metadata.tag or NOT_AVAILABLE}",
        f"All Time Floor Price: {metadata.floor_price or NOT_AVAILABLE}",
    ]
    if metadata.description:
        lines += ["", f"Description: {metadata.description}"]
    if metadata.image_url:
        lines += ["", f"Image URL: {metadata.image_url}"]
    if metadata.attributes:
        lines += ["", "Attributes:"]
        lines += [f"  {key}: {value}" for key, value in metadata.attributes.items()]
    lines += [rule, ""]
    return "\n".join(lines)
