from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class VerdictSource(str, Enum):
    """Where a verdict came from."""

    REMOTE = "remote"
    HEURISTIC = "heuristic"


@dataclass(frozen=True)
class VendorStats:
    """Vendor counters reported by the URL reputation service."""

    malicious: int = 0
    suspicious: int = 0
    undetected: int = 0
    harmless: int = 0
    total: int = 0


@dataclass(frozen=True)
class UrlVerdict:
    """Safety verdict for a URL."""

    is_safe: bool
    result: str
    source: VerdictSource = VerdictSource.HEURISTIC
    stats: Optional[VendorStats] = None


@dataclass(frozen=True)
class PhoneVerdict:
    """Safety verdict for a phone number."""

    phone_number: str
    is_safe: bool
    country: Optional[str]
    carrier: Optional[str]
    line_type: Optional[str]
    risk_score: Optional[int]
    details: Dict[str, Any] = field(default_factory=dict)
    source: VerdictSource = VerdictSource.HEURISTIC


@dataclass(frozen=True)
class UrlCheck:
    """Stored URL check."""

    id: int
    url: str
    is_safe: bool
    result: str
    checked_at: datetime


@dataclass(frozen=True)
class PhoneCheck:
    """Stored phone check."""

    id: int
    phone_number: str
    is_safe: bool
    country: Optional[str]
    carrier: Optional[str]
    line_type: Optional[str]
    risk_score: Optional[int]
    details: Optional[Dict[str, Any]]
    checked_at: datetime
