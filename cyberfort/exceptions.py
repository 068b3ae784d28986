class CyberfortError(Exception):
    """Base exception for all safety checker errors."""


class InvalidInput(CyberfortError):
    """Raised when a URL or phone number is malformed."""


class UpstreamUnavailable(CyberfortError):
    """Raised when a remote reputation service cannot be used."""


class StorageFailure(CyberfortError):
    """Raised when the history store fails to read or write."""


class ConfigurationError(CyberfortError):
    """Raised when the application is misconfigured."""
