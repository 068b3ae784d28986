import logging
from typing import Any, Dict

import requests

from ..domain.checkers import UrlReputationService
from ..domain.models import VendorStats
from ..exceptions import UpstreamUnavailable
from ..metrics import REMOTE_DURATION

logger = logging.getLogger(__name__)


class VirusTotalClient(UrlReputationService):
    """URL reputation lookups through the VirusTotal v3 API."""

    BASE_URL = "https://www.virustotal.com/api/v3"

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str | None = None,
        timeout: float = 15.0,
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        return {"accept": "application/json", "x-apikey": self.api_key}

    def _request(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            with REMOTE_DURATION.labels(service="virustotal").time():
                resp = self._session.request(
                    method, url, headers=self._headers(), timeout=self.timeout, **kwargs
                )
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as exc:
            raise UpstreamUnavailable(f"VirusTotal request failed: {exc}") from exc
        except ValueError as exc:
            raise UpstreamUnavailable("VirusTotal returned invalid JSON") from exc

    def submit(self, url: str) -> str:
        """Submit ``url`` for analysis and return the analysis id."""
        payload = self._request("POST", "/urls", data={"url": url})
        try:
            return payload["data"]["id"]
        except (KeyError, TypeError) as exc:
            raise UpstreamUnavailable("VirusTotal response has no analysis id") from exc

    def fetch_stats(self, analysis_id: str) -> VendorStats:
        """Return the vendor counters of a finished analysis.

        A queued or in-progress analysis has no verdict yet and all of its
        counters are zero, so it is reported as unavailable.
        """
        payload = self._request("GET", f"/analyses/{analysis_id}")
        try:
            attributes = payload["data"]["attributes"]
            stats = attributes["stats"]
            status = attributes.get("status")
        except (KeyError, TypeError, AttributeError) as exc:
            raise UpstreamUnavailable("VirusTotal response has no stats") from exc
        if not isinstance(stats, dict):
            raise UpstreamUnavailable("VirusTotal stats are malformed")
        if status != "completed":
            raise UpstreamUnavailable(f"VirusTotal analysis not finished: {status}")
        try:
            counts = {
                key: int(stats.get(key) or 0)
                for key in ("malicious", "suspicious", "undetected", "harmless")
            }
            total = stats.get("total")
            if total is None:
                total = sum(int(v or 0) for v in stats.values() if isinstance(v, (int, float)))
            total = int(total)
        except (TypeError, ValueError) as exc:
            raise UpstreamUnavailable("VirusTotal stats are malformed") from exc
        if total == 0:
            raise UpstreamUnavailable("VirusTotal analysis has no vendor results")
        return VendorStats(total=total, **counts)

    def analyze(self, url: str) -> VendorStats:
        logger.info("Submitting URL to VirusTotal: %s", url)
        analysis_id = self.submit(url)
        logger.debug("Got analysis id %s", analysis_id)
        stats = self.fetch_stats(analysis_id)
        logger.info("VirusTotal stats for %s: %s", url, stats)
        return stats
