"""
Render the Move package for a meme collection.

User-supplied text only ever lands inside Move byte-string literals, and every
byte that could end or alter such a literal is escaped first.
"""

import logging
import re
from pathlib import Path
from string import Template
from typing import Tuple

from kaizen_errors import CodegenError
from meme_config import MemeConfig

logger = logging.getLogger(__name__)

MODULE_NAME = "meme_nft"
SOURCE_FILE = f"{MODULE_NAME}.move"
MANIFEST_FILE = "Move.toml"

_IDENTIFIER = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")

MANIFEST_TEMPLATE = Template("""\
[package]
name = "$package"
edition = "2024.beta"
version = "0.1.0"

[dependencies]
Sui = { git = "https://github.com/MystenLabs/sui.git", subdir = "crates/sui-framework/packages/sui-framework", rev = "framework/$network" }

[addresses]
$package = "0x0"
""")

SOURCE_TEMPLATE = Template("""\
module $package::$module {
    use std::string::String;
    use sui::display;
    use sui::package;
    use sui::url::{Self, Url};

    const MAX_SUPPLY: u64 = $total_supply;
    const ROYALTY_BPS: u64 = $royalty_bps;

    const ESupplyExhausted: u64 = 0;

    public struct $witness has drop {}

    public struct MemeNft has key, store {
        id: UID,
        name: String,
        description: String,
        image_url: Url,
    }

    public struct MintCap has key, store {
        id: UID,
        minted: u64,
    }

    fun init(otw: $witness, ctx: &mut TxContext) {
        let publisher = package::claim(otw, ctx);

        let keys = vector[
            b"name".to_string(),
            b"description".to_string(),
            b"image_url".to_string(),
            b"creator".to_string(),
            b"royalty".to_string(),
            b"symbol".to_string(),
        ];
        let values = vector[
            b"$name".to_string(),
            b"$description".to_string(),
            b"$image_url".to_string(),
            b"Meme Creator".to_string(),
            b"$royalty_bps".to_string(),
            b"$symbol".to_string(),
        ];

        let mut display = display::new_with_fields<MemeNft>(&publisher, keys, values, ctx);
        display.update_version();

        transfer::public_transfer(publisher, ctx.sender());
        transfer::public_transfer(display, ctx.sender());
        transfer::public_transfer(MintCap { id: object::new(ctx), minted: 0 }, ctx.sender());
    }

    public fun royalty_bps(): u64 { ROYALTY_BPS }

    public fun max_supply(): u64 { MAX_SUPPLY }

    public entry fun mint(
        cap: &mut MintCap,
        name: String,
        description: String,
        image_url: vector<u8>,
        recipient: address,
        ctx: &mut TxContext
    ) {
        assert!(cap.minted < MAX_SUPPLY, ESupplyExhausted);
        cap.minted = cap.minted + 1;

        let nft = MemeNft {
            id: object::new(ctx),
            name,
            description,
            image_url: url::new_unsafe_from_bytes(image_url),
        };
        transfer::public_transfer(nft, recipient);
    }
}
""")


def escape_byte_string(text: str) -> str:
    """escape text for use between the quotes of a Move b"..." literal"""
    out = []
    for byte in text.encode("utf-8"):
        char = chr(byte)
        if char in ('"', "\\"):
            out.append("\\" + char)
        elif 0x20 <= byte < 0x7F:
            out.append(char)
        else:
            out.append(f"\\x{byte:02x}")
    return "".join(out)


def display_text(value: str, field: str) -> str:
    # Display treats {...} as a field template
    if "{" in value or "}" in value:
        raise CodegenError(f"{field} may not contain '{{' or '}}'")
    return escape_byte_string(value)


def package_name(symbol: str) -> str:
    if not _IDENTIFIER.fullmatch(symbol):
        raise CodegenError(f"Symbol '{symbol}' is not a valid Move identifier")
    return f"meme_{symbol.lower()}"


def render_manifest(config: MemeConfig) -> str:
    return MANIFEST_TEMPLATE.substitute(package=package_name(config.symbol), network=config.network)


def render_source(config: MemeConfig, image_url: str) -> str:
    if not 0 <= config.royalty_bps <= 100:
        raise CodegenError(f"Royalty {config.royalty_bps} out of range")

    return SOURCE_TEMPLATE.substitute(
        package=package_name(config.symbol),
        module=MODULE_NAME,
        witness=MODULE_NAME.upper(),
        name=display_text(config.name, "name"),
        description=display_text(config.description, "description"),
        image_url=display_text(image_url, "image url"),
        symbol=config.symbol,
        royalty_bps=int(config.royalty_bps),
        total_supply=int(config.total_supply),
    )


def write_project(project_dir: Path, config: MemeConfig, image_url: str) -> Tuple[Path, Path]:
    """write Move.toml and sources/meme_nft.move, returning both paths"""
    manifest = render_manifest(config)
    source = render_source(config, image_url)

    sources_dir = project_dir / "sources"
    sources_dir.mkdir(parents=True, exist_ok=True)

    manifest_path = project_dir / MANIFEST_FILE
    source_path = sources_dir / SOURCE_FILE
    manifest_path.write_text(manifest)
    source_path.write_text(source)

    logger.info(f"Generated {manifest_path} and {source_path}")
    return manifest_path, source_path
