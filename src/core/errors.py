"""Error taxonomy for freight rate operations."""


class FreightRatesError(Exception):
    """Base class for errors the rates service turns into notifications."""


class AuthError(FreightRatesError):
    """No authenticated user is available."""


class StoreError(FreightRatesError):
    """A backend operation failed; the message is the backend's own."""


class ValidationError(FreightRatesError):
    """A form value is missing or invalid; raised before any backend call."""
