from abc import ABC, abstractmethod
from typing import Any, Dict

from .models import VendorStats


class UrlReputationService(ABC):
    """Abstract interface for remote URL reputation lookups."""

    @abstractmethod
    def analyze(self, url: str) -> VendorStats:
        """Submit ``url`` and return the vendor counters of its analysis."""


class PhoneValidationService(ABC):
    """Abstract interface for remote phone validation lookups."""

    @abstractmethod
    def lookup(self, phone: str) -> Dict[str, Any]:
        """Return the raw validation payload for an E.164 number."""
