class PhilipsTVError(Exception):
    """Base class for errors raised while talking to the TV."""


class TransportError(PhilipsTVError):
    """Network failure, timeout or HTTP error status."""


class ParseError(PhilipsTVError):
    """Response body looked like JSON but could not be decoded."""


class ConfigError(PhilipsTVError):
    """Unsupported wake target string."""
