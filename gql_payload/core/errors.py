class PayloadError(Exception):
    """Base exception for gql-payload errors."""


class SerializationError(PayloadError):
    """An argument or field value cannot be rendered as a literal."""


class MalformedReplacementError(PayloadError):
    """An enum argument's quoted form was not found in the serialized arguments."""

    def __init__(self, argument: str, quoted: str):
        self.argument = argument
        self.quoted = quoted
        super().__init__(
            f"Enum argument {argument!r}: {quoted} not found in serialized arguments"
        )


class SchemaError(PayloadError):
    """Operation descriptors could not be read or parsed."""
