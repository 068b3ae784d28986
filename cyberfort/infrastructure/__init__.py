from .abstractapi import AbstractApiClient
from .virustotal import VirusTotalClient

__all__ = [
    "AbstractApiClient",
    "VirusTotalClient",
]
