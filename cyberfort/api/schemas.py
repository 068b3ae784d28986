from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from cyberfort.domain.models import VerdictSource


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
    )


class UrlCheckRequest(CamelModel):
    url: Optional[str] = None


class PhoneCheckRequest(CamelModel):
    phone_number: Optional[str] = None


class VendorStatsOut(CamelModel):
    malicious: int
    suspicious: int
    undetected: int
    harmless: int
    total: int


class UrlCheckOut(CamelModel):
    id: int
    url: str
    is_safe: bool
    result: str
    checked_at: datetime


class PhoneCheckOut(CamelModel):
    id: int
    phone_number: str
    is_safe: bool
    country: Optional[str] = None
    carrier: Optional[str] = None
    line_type: Optional[str] = None
    risk_score: Optional[int] = None
    details: Optional[Dict[str, Any]] = None
    checked_at: datetime


class UrlCheckResponse(CamelModel):
    url: str
    is_safe: bool
    result: str
    source: VerdictSource
    stats: Optional[VendorStatsOut] = None
    history: List[UrlCheckOut]


class PhoneCheckResponse(CamelModel):
    phone_number: str
    country: Optional[str] = None
    carrier: Optional[str] = None
    line_type: Optional[str] = None
    risk_score: Optional[int] = None
    details: Dict[str, Any]
    is_safe: bool
    source: VerdictSource
    history: List[PhoneCheckOut]


class HealthResponse(CamelModel):
    status: str
    remote_url: bool
    remote_phone: bool
