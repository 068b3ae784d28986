import logging
from typing import Any, Dict

import requests

from ..domain.checkers import PhoneValidationService
from ..exceptions import UpstreamUnavailable
from ..metrics import REMOTE_DURATION

logger = logging.getLogger(__name__)


class AbstractApiClient(PhoneValidationService):
    """Phone validation through the AbstractAPI phone validation endpoint."""

    BASE_URL = "https://phonevalidation.abstractapi.com/v1/"

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str | None = None,
        timeout: float = 15.0,
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url or self.BASE_URL
        self.timeout = timeout
        self._session = session or requests.Session()

    def lookup(self, phone: str) -> Dict[str, Any]:
        logger.info("Validating number via AbstractAPI: %s", phone)
        try:
            with REMOTE_DURATION.labels(service="abstractapi").time():
                resp = self._session.get(
                    self.base_url,
                    params={"api_key": self.api_key, "phone": phone},
                    timeout=self.timeout,
                )
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as exc:
            raise UpstreamUnavailable(f"AbstractAPI request failed: {exc}") from exc
        except ValueError as exc:
            raise UpstreamUnavailable("AbstractAPI returned invalid JSON") from exc
        if not data or not isinstance(data, dict):
            raise UpstreamUnavailable("Invalid response from AbstractAPI")
        return data
