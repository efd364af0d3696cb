"""Exceptions raised by the content bridge."""


class ContentBridgeError(Exception):
    """Base exception for all content bridge errors."""


class UnsupportedFieldTypeError(ContentBridgeError):
    """Raised when a field type has no mapping between native and normalized values."""

    def __init__(self, field_type: str) -> None:
        self.field_type = field_type
        super().__init__(f"Field of type '{field_type}' is not supported.")


class UnsupportedOperationError(ContentBridgeError):
    """Raised when an update operation kind other than set/unset is requested."""

    def __init__(self, op_type: str) -> None:
        self.op_type = op_type
        super().__init__(f"'{op_type}' operation is not supported.")


class UnsupportedUploadError(ContentBridgeError):
    """Raised when an asset upload cannot be carried out from the given source."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Asset upload not supported: {reason}")


class MissingConfigurationError(ContentBridgeError):
    """Raised when a required configuration parameter is absent."""

    def __init__(self, parameter: str) -> None:
        self.parameter = parameter
        super().__init__(f"Content source requires '{parameter}'.")
