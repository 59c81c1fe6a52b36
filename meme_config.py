"""
Validated input for the meme NFT launch.

Each field type is declared once and reused twice: inside MemeConfig for the
whole-record check, and on its own to validate answers while the user is
still typing them into the form.
"""

import logging
import os
import re
from typing import Annotated, Any, Callable, Dict, Literal, Union

import aiofiles.os
import questionary
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic_core import PydanticCustomError

from kaizen_errors import InvalidConfigError, LaunchAbortedError
from sui_networks import LAUNCH_NETWORKS

logger = logging.getLogger(__name__)

SYMBOL_PATTERN = re.compile(r"^[A-Z]{3,5}$")
DEFAULT_DESCRIPTION = "A meme NFT collection"
DEFAULT_NETWORK = "testnet"
DEFAULT_TOTAL_SUPPLY = 1000
DEFAULT_ROYALTY_BPS = 5


def _display_safe(value: str) -> str:
    if "{" in value or "}" in value:
        raise PydanticCustomError("braces", "Braces are not allowed")
    return value


def _non_empty(value: str) -> str:
    value = value.strip()
    if not value:
        raise PydanticCustomError("empty_name", "Name cannot be empty")
    return value


def _ticker(value: str) -> str:
    if not SYMBOL_PATTERN.fullmatch(value):
        raise PydanticCustomError("bad_symbol", "Must be 3-5 uppercase letters")
    return value


def _existing_file(value: str) -> str:
    if not os.path.isfile(os.path.expanduser(value)):
        raise PydanticCustomError("file_not_found", "File not found")
    return os.path.expanduser(value)


CollectionName = Annotated[str, AfterValidator(_non_empty), AfterValidator(_display_safe)]
Description = Annotated[str, AfterValidator(_display_safe)]
Symbol = Annotated[str, AfterValidator(_ticker)]
ImagePath = Annotated[str, AfterValidator(_existing_file)]
TotalSupply = Annotated[int, Field(ge=1, le=10_000)]
RoyaltyBps = Annotated[int, Field(ge=0, le=100)]
LaunchNetwork = Literal["mainnet", "testnet", "devnet"]


class MemeConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: CollectionName
    symbol: Symbol
    description: Description = DEFAULT_DESCRIPTION
    image_path: ImagePath
    network: LaunchNetwork = DEFAULT_NETWORK
    total_supply: TotalSupply
    royalty_bps: RoyaltyBps = DEFAULT_ROYALTY_BPS


_FIELD_ADAPTERS: Dict[str, TypeAdapter] = {
    "name": TypeAdapter(CollectionName),
    "symbol": TypeAdapter(Symbol),
    "description": TypeAdapter(Description),
    "image_path": TypeAdapter(ImagePath),
    "network": TypeAdapter(LaunchNetwork),
    "total_supply": TypeAdapter(TotalSupply),
    "royalty_bps": TypeAdapter(RoyaltyBps),
}


def check_field(field: str, value: Any) -> Union[bool, str]:
    """validate one answer, returning True or the first error message"""
    try:
        _FIELD_ADAPTERS[field].validate_python(value)
    except ValidationError as e:
        return e.errors()[0]["msg"]
    return True


def _validator(field: str) -> Callable[[str], Union[bool, str]]:
    return lambda text: check_field(field, text.strip() if isinstance(text, str) else text)


def build_meme_config(answers: Dict[str, Any]) -> MemeConfig:
    """re-validate the complete record before anything else happens"""
    if not answers:
        raise LaunchAbortedError("Launch cancelled")

    cleaned = {k: v.strip() if isinstance(v, str) else v for k, v in answers.items()}
    try:
        config = MemeConfig.model_validate(cleaned)
    except ValidationError as e:
        problems = "; ".join(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors())
        raise InvalidConfigError(f"Invalid launch configuration: {problems}") from e

    logger.info(f"Launch configuration accepted: {config.symbol} on {config.network}")
    return config


async def validate_meme_config(answers: Dict[str, Any]) -> MemeConfig:
    """whole-record gate, with the image existence re-checked off the event loop"""
    image_path = (answers or {}).get("image_path")
    if isinstance(image_path, str) and image_path.strip():
        if not await aiofiles.os.path.isfile(os.path.expanduser(image_path.strip())):
            raise InvalidConfigError("Invalid launch configuration: image_path: File not found")
    return build_meme_config(answers)


async def collect_meme_config() -> MemeConfig:
    """interactive form, one validated question per field"""
    answers = await questionary.form(
        name=questionary.text("Collection name:", validate=_validator("name")),
        symbol=questionary.text("Ticker symbol (3-5 chars):", validate=_validator("symbol")),
        description=questionary.text(
            "Description:", default=DEFAULT_DESCRIPTION, validate=_validator("description")
        ),
        image_path=questionary.path("Path to meme image:", validate=_validator("image_path")),
        network=questionary.select("Network:", choices=list(LAUNCH_NETWORKS), default=DEFAULT_NETWORK),
        total_supply=questionary.text(
            "Total supply:", default=str(DEFAULT_TOTAL_SUPPLY), validate=_validator("total_supply")
        ),
        royalty_bps=questionary.text(
            "Royalty % (0-100):", default=str(DEFAULT_ROYALTY_BPS), validate=_validator("royalty_bps")
        ),
    ).ask_async()

    return await validate_meme_config(answers)
