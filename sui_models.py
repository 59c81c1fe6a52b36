from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional


class EnrichmentStatus(Enum):
    NOT_ATTEMPTED = "not_attempted"
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class Enrichment:
    """
    Outcome of a best-effort lookup (reverse SuiNS name, marketplace stats).

    Lookups that fail never raise; they come back as UNAVAILABLE with the
    reason, which keeps "not available" distinct from "never asked".
    """
    status: EnrichmentStatus
    value: Optional[str] = None
    reason: Optional[str] = None

    @classmethod
    def available(cls, value: str) -> "Enrichment":
        return cls(EnrichmentStatus.AVAILABLE, value=value)

    @classmethod
    def unavailable(cls, reason: str) -> "Enrichment":
        return cls(EnrichmentStatus.UNAVAILABLE, reason=reason)

    @classmethod
    def not_attempted(cls) -> "Enrichment":
        return cls(EnrichmentStatus.NOT_ATTEMPTED)

    @property
    def is_available(self) -> bool:
        return self.status is EnrichmentStatus.AVAILABLE

    def value_or(self, default: Optional[str] = None) -> Optional[str]:
        return self.value if self.is_available else default


@dataclass(frozen=True)
class Balance:
    coin_type: str
    total_balance: str

    @classmethod
    def from_rpc(cls, data: Dict[str, Any]) -> "Balance":
        return cls(coin_type=data["coinType"], total_balance=str(data["totalBalance"]))


@dataclass
class NetworkMatch:
    """network an address was found on, with the client bound to it"""
    network: str
    client: Any
    balances: List[Balance] = field(default_factory=list)


@dataclass
class AccountInfo:
    network: str
    address: str
    suins_name: Optional[str]
    reverse_lookup: Enrichment
    balances: List[Balance]
    account_object: Dict[str, Any]


@dataclass
class NftMetadata:
    object_id: str
    type: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    creator: Optional[str] = None
    tag: Optional[str] = None
    floor_price: Optional[str] = None
    attributes: Optional[Dict[str, str]] = None


@dataclass(frozen=True)
class PublishResult:
    digest: str
    package_id: Optional[str]
    object_changes: List[Dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class LaunchResult:
    project_dir: Path
    package_id: str
    digest: str
    explorer_url: str
