"""Exceptions raised while reading or writing NBT data."""


class NBTError(Exception):
    """Base class for every codec failure"""


class DecodeError(NBTError):
    pass


class EncodeError(NBTError):
    pass


class UnexpectedEndOfStream(DecodeError, EOFError):
    def __init__(self, wanted=None, got=None):
        if wanted is None:
            msg = "Unexpected end of stream"
        else:
            msg = f"Unexpected end of stream (wanted {wanted} bytes, got {got})"
        super().__init__(msg)
        self.wanted = wanted
        self.got = got


class InvalidEncoding(DecodeError, UnicodeError):
    pass


class UnknownTagType(DecodeError, ValueError):
    def __init__(self, tag_id):
        super().__init__(f"Unknown tag type: {tag_id}")
        self.tag_id = tag_id


class InvalidLength(DecodeError, ValueError):
    def __init__(self, length, what="length"):
        super().__init__(f"Invalid {what}: {length}")
        self.length = length


class MaxDepthExceeded(DecodeError):
    def __init__(self, max_depth):
        super().__init__(f"Nesting deeper than {max_depth} levels")
        self.max_depth = max_depth


class DecompressionError(DecodeError):
    pass


class InconsistentListType(EncodeError):
    pass
