"""Custom exceptions for the payloadmask package."""


class PayloadMaskError(Exception):
    """Base exception for payloadmask errors."""
    pass


class ConfigError(PayloadMaskError):
    """Raised when a configuration file cannot be used."""
    def __init__(self, message: str, path: str = None):
        super().__init__(message)
        self.message = message
        self.path = path


class PayloadDecodeError(PayloadMaskError):
    """Raised when an input payload is not valid JSON."""
    def __init__(self, message: str, line: int = None, column: int = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column


class RuleError(PayloadMaskError):
    """Raised when a redaction JSONPath expression is invalid."""
    def __init__(self, rule: str, message: str):
        super().__init__(f"Invalid rule '{rule}': {message}")
        self.rule = rule
        self.message = message
