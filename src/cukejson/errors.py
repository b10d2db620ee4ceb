"""cukejson errors."""


class CukejsonError(Exception):
    """Base exception for cukejson errors."""


class MessageDecodeError(CukejsonError):
    """Raised when the message stream cannot be decoded."""


class MissingReferenceError(CukejsonError):
    """Raised in strict mode when a record references an unknown identifier."""


class ConfigError(CukejsonError):
    """Raised when the configuration file cannot be loaded."""
