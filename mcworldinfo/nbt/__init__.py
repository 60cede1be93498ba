"""Reader and writer for the NBT (Named Binary Tag) format used by level.dat"""
from mcworldinfo.nbt.tags import Tag, TagKind
from mcworldinfo.nbt.decoder import decode, load, DEFAULT_MAX_DEPTH
from mcworldinfo.nbt.encoder import encode, save
from mcworldinfo.nbt.errors import (
    NBTError,
    DecodeError,
    EncodeError,
    UnexpectedEndOfStream,
    InvalidEncoding,
    UnknownTagType,
    InvalidLength,
    MaxDepthExceeded,
    DecompressionError,
    InconsistentListType,
)

__all__ = [
    "Tag", "TagKind", "decode", "load", "encode", "save", "DEFAULT_MAX_DEPTH",
    "NBTError", "DecodeError", "EncodeError", "UnexpectedEndOfStream",
    "InvalidEncoding", "UnknownTagType", "InvalidLength", "MaxDepthExceeded",
    "DecompressionError", "InconsistentListType",
]
