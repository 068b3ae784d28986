import logging
import random
from typing import Any, Dict, Optional

from .constants import (
    INVALID_NUMBER_RISK,
    MAX_RISK_SCORE,
    SAFE_RESULT,
    UNSAFE_RISK_THRESHOLD,
    VOIP_RISK,
)
from .domain.checkers import PhoneValidationService, UrlReputationService
from .domain.models import PhoneVerdict, UrlVerdict, VendorStats, VerdictSource
from .exceptions import UpstreamUnavailable
from .heuristics import estimate_phone, scan_url
from .metrics import FALLBACKS_TOTAL
from .phone_utils import normalize_phone_number
from .validators import validate_phone_number, validate_url

logger = logging.getLogger(__name__)


def url_verdict_from_stats(stats: VendorStats) -> UrlVerdict:
    """Turn VirusTotal vendor counters into a verdict."""
    is_safe = stats.malicious == 0 and stats.suspicious == 0
    result = (
        SAFE_RESULT
        if is_safe
        else f"Detected as malicious by {stats.malicious} and suspicious by "
        f"{stats.suspicious} security vendors"
    )
    return UrlVerdict(
        is_safe=is_safe, result=result, source=VerdictSource.REMOTE, stats=stats
    )


def phone_verdict_from_lookup(phone_number: str, data: Dict[str, Any]) -> PhoneVerdict:
    """Turn an AbstractAPI validation payload into a verdict."""
    valid = bool(data.get("valid"))
    line_type = data.get("type") or "Unknown"

    risk_score = 0
    if not valid:
        risk_score += INVALID_NUMBER_RISK
    if str(line_type).lower() == "voip":
        risk_score += VOIP_RISK
    risk_score = min(risk_score, MAX_RISK_SCORE)

    country = data.get("country")
    if not isinstance(country, dict):
        country = {}
    fmt = data.get("format")
    if not isinstance(fmt, dict):
        fmt = {}
    return PhoneVerdict(
        phone_number=phone_number,
        is_safe=risk_score < UNSAFE_RISK_THRESHOLD,
        country=country.get("name") or "Unknown",
        carrier=data.get("carrier") or "Unknown",
        line_type=line_type,
        risk_score=risk_score,
        details={
            "valid": valid,
            "formatted": fmt.get("international") or phone_number,
            "location": data.get("location") or "",
            "spamReports": 0,
        },
        source=VerdictSource.REMOTE,
    )


class VerdictEngine:
    """Produce safety verdicts, preferring remote services over heuristics.

    Either service may be ``None``; the local heuristic is then used
    directly. A failing remote call is never retried and falls back to the
    heuristic immediately.
    """

    def __init__(
        self,
        url_service: Optional[UrlReputationService] = None,
        phone_service: Optional[PhoneValidationService] = None,
        *,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.url_service = url_service
        self.phone_service = phone_service
        self.rng = rng or random.Random()

    def evaluate_url(self, url: str) -> UrlVerdict:
        url = validate_url(url)
        if self.url_service is not None:
            try:
                return url_verdict_from_stats(self.url_service.analyze(url))
            except UpstreamUnavailable as exc:
                logger.warning("URL reputation lookup failed, using heuristics: %s", exc)
                FALLBACKS_TOTAL.labels(kind="url").inc()
        return scan_url(url)

    def evaluate_phone(self, raw: str) -> PhoneVerdict:
        raw = validate_phone_number(raw)
        phone_number = normalize_phone_number(raw)
        if self.phone_service is not None:
            try:
                data = self.phone_service.lookup(phone_number)
                return phone_verdict_from_lookup(phone_number, data)
            except UpstreamUnavailable as exc:
                logger.warning("Phone validation failed, using heuristics: %s", exc)
                FALLBACKS_TOTAL.labels(kind="phone").inc()
        return estimate_phone(phone_number, self.rng)
