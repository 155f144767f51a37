"""Errors raised while encoding or decoding XDR data."""


class XdrError(Exception):
    """Base class for every XDR encoding or decoding failure."""


class XdrIoError(XdrError):
    """Reading or writing the underlying stream failed or ran short."""

    def __init__(self, cause):
        super().__init__(f"I/O error: {cause}")
        self.cause = cause


class InvalidEnumValue(XdrError, ValueError):
    """A value was found that is not valid for an enum, union or bool."""

    def __init__(self, value):
        super().__init__(f"Invalid enum value: {value}")
        self.value = value


class InvalidLength(XdrError, ValueError):
    """An object had a length that its type does not allow."""

    def __init__(self, length):
        super().__init__(f"Invalid length: {length}")
        self.length = length


class ObjectTooLarge(XdrError, ValueError):
    """An object is too large to be described by a 32-bit length."""

    def __init__(self, size):
        super().__init__(f"Object too large: {size} bytes")
        self.size = size