class AdboardError(Exception):
    """Base error for the ad material dashboard."""


class FetchError(AdboardError):
    """Raised when a material load does not complete."""
