"""Upload meme images to Walrus storage."""

import asyncio
import logging
import os

import aiofiles
import aiohttp
import ujson

from kaizen_errors import UploadError
from sui_networks import WALRUS_UPLOAD_URL

logger = logging.getLogger(__name__)


class WalrusUploader:
    def __init__(self, session: aiohttp.ClientSession, api_key: str, upload_url: str = WALRUS_UPLOAD_URL):
        self.session = session
        self.api_key = api_key
        self.upload_url = upload_url

    async def upload(self, file_path: str) -> str:
        """post the raw file bytes and return the public url Walrus hands back"""
        try:
            async with aiofiles.open(file_path, "rb") as f:
                data = await f.read()
        except OSError as e:
            raise UploadError(f"Could not read image {file_path}: {e}") from e

        logger.info(f"Uploading {os.path.basename(file_path)} ({len(data) / 1024:.1f} KB) to Walrus...")
        headers = {
            "Content-Type": "application/octet-stream",
            "Authorization": f"Bearer {self.api_key}",
        }

        try:
            async with self.session.post(self.upload_url, data=data, headers=headers) as response:
                text = await response.text()
                if response.status not in (200, 201):
                    raise UploadError(f"Walrus upload failed with HTTP {response.status}: {text[:200]}")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise UploadError(f"Walrus upload failed: {str(e) or 'timed out'}") from e

        try:
            result = ujson.loads(text)
        except ValueError as e:
            raise UploadError(f"Walrus returned a malformed response: {e}") from e

        url = result.get("url") if isinstance(result, dict) else None
        if not url:
            raise UploadError("Walrus response did not include a url")

        logger.info(f"Image available at {url}")
        return url
