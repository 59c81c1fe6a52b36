"""
Meme NFT launch workflow.

collect input -> project dir -> Walrus upload -> Move sources -> build ->
publish -> report. Every step is fatal on failure and nothing after a failed
step runs.
"""

import base64
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

import aiohttp

from kaizen_errors import DeployError, InvalidConfigError, MissingCredentialError
from meme_config import MemeConfig, collect_meme_config
from move_codegen import write_project
from move_toolchain import MoveToolchain
from sui_models import LaunchResult, PublishResult
from sui_networks import WALRUS_UPLOAD_URL, explorer_tx_url, get_network
from sui_rpc import SuiClient
from sui_signer import Ed25519Signer
from walrus_upload import WalrusUploader

logger = logging.getLogger(__name__)

DEFAULT_GAS_BUDGET = 100_000_000
UNKNOWN_PACKAGE = "Unknown"


@dataclass(frozen=True)
class LaunchSettings:
    walrus_api_key: Optional[str]
    sui_private_key: Optional[str]
    walrus_upload_url: str = WALRUS_UPLOAD_URL
    sui_binary: str = "sui"
    gas_budget: int = DEFAULT_GAS_BUDGET

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = os.environ) -> "LaunchSettings":
        raw_budget = environ.get("SUI_GAS_BUDGET") or str(DEFAULT_GAS_BUDGET)
        try:
            gas_budget = int(raw_budget)
        except ValueError:
            raise InvalidConfigError(f"SUI_GAS_BUDGET must be an integer, got '{raw_budget}'") from None

        return cls(
            walrus_api_key=environ.get("WALRUS_API_KEY") or None,
            sui_private_key=environ.get("SUI_PRIVATE_KEY") or None,
            walrus_upload_url=environ.get("WALRUS_UPLOAD_URL") or WALRUS_UPLOAD_URL,
            sui_binary=environ.get("SUI_BINARY") or "sui",
            gas_budget=gas_budget,
        )

    def require(self) -> None:
        """fail before any network activity if a credential is missing"""
        missing = []
        if not self.walrus_api_key:
            missing.append("WALRUS_API_KEY")
        if not self.sui_private_key:
            missing.append("SUI_PRIVATE_KEY")
        if missing:
            raise MissingCredentialError(missing)
        if self.gas_budget <= 0:
            raise InvalidConfigError("SUI_GAS_BUDGET must be positive")


def find_published_package(object_changes: List[Dict[str, Any]]) -> Optional[str]:
    for change in object_changes or []:
        if change.get("type") == "published" and change.get("packageId"):
            return change["packageId"]
    return None


class PackagePublisher:
    def __init__(self, client: SuiClient, signer: Ed25519Signer, gas_budget: int = DEFAULT_GAS_BUDGET):
        self.client = client
        self.signer = signer
        self.gas_budget = gas_budget

    async def publish(self, bytecode: Dict[str, Any]) -> PublishResult:
        logger.info(f"Publishing package from {self.signer.address}...")
        tx = await self.client.unsafe_publish(
            sender=self.signer.address,
            modules=bytecode["modules"],
            dependencies=bytecode["dependencies"],
            gas_budget=self.gas_budget,
        )
        tx_bytes = tx["txBytes"]

        signature = self.signer.sign_transaction(base64.b64decode(tx_bytes))
        result = await self.client.execute_transaction_block(tx_bytes, [signature])

        status = ((result.get("effects") or {}).get("status") or {})
        if status and status.get("status") != "success":
            error = status.get("error", "unknown error")
            raise DeployError(f"Publish transaction {result.get('digest')} failed: {error}")

        changes = result.get("objectChanges") or []
        return PublishResult(
            digest=result.get("digest", ""),
            package_id=find_published_package(changes),
            object_changes=changes,
        )


class MemeLauncher:
    def __init__(
        self,
        settings: LaunchSettings,
        uploader: WalrusUploader,
        toolchain: MoveToolchain,
        publisher_factory: Callable[[str], PackagePublisher],
        prompt: Callable[[], Awaitable[MemeConfig]] = collect_meme_config,
        output_root: Optional[Path] = None,
    ):
        settings.require()
        self.settings = settings
        self.uploader = uploader
        self.toolchain = toolchain
        self.publisher_factory = publisher_factory
        self.prompt = prompt
        self.output_root = Path(output_root) if output_root else Path.cwd()

    @classmethod
    def from_settings(cls, settings: LaunchSettings, session: aiohttp.ClientSession, **kwargs) -> "MemeLauncher":
        """wire the real collaborators, checking credentials first"""
        settings.require()
        signer = Ed25519Signer.from_base64(settings.sui_private_key)

        def publisher_for(network: str) -> PackagePublisher:
            client = SuiClient(get_network(network).url, session=session)
            return PackagePublisher(client, signer, settings.gas_budget)

        return cls(
            settings,
            uploader=WalrusUploader(session, settings.walrus_api_key, settings.walrus_upload_url),
            toolchain=MoveToolchain(settings.sui_binary),
            publisher_factory=publisher_for,
            **kwargs,
        )

    def project_dir_for(self, config: MemeConfig) -> Path:
        return self.output_root / f"meme-{config.symbol.lower()}"

    async def launch(self) -> LaunchResult:
        config = await self.prompt()

        project_dir = self.project_dir_for(config)
        project_dir.mkdir(parents=True, exist_ok=True)
        logger.info("Initializing Sui NFT project...")

        image_url = await self.uploader.upload(config.image_path)

        write_project(project_dir, config, image_url)

        self.toolchain.build(project_dir)
        bytecode = self.toolchain.dump_bytecode(project_dir)

        logger.info(f"Deploying to Sui {config.network}...")
        published = await self.publisher_factory(config.network).publish(bytecode)

        return LaunchResult(
            project_dir=project_dir,
            package_id=published.package_id or UNKNOWN_PACKAGE,
            digest=published.digest,
            explorer_url=explorer_tx_url(published.digest, config.network),
        )


def render_launch_result(result: LaunchResult) -> str:
    return "\n".join([
        "",
        "Meme NFT launched successfully!",
        f"Package ID: {result.package_id}",
        f"Explorer: {result.explorer_url}",
        f"Project directory: {result.project_dir}",
    ])
