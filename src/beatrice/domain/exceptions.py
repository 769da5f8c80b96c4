"""Domain exceptions."""


class ContextSchemaError(Exception):
    """Raised when a cached conversation context cannot be decoded.

    Covers payloads that are not valid JSON objects, carry an unknown
    schema version, or have malformed fields.
    """

    def __init__(self, message: str, version: object = None) -> None:
        """Initialize.

        Args:
            message: Error description.
            version: Schema version found in the payload, if any.
        """
        self.version = version
        super().__init__(message)
