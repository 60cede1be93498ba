"""
NBT decoder.

Recursive descent over the stream: every value is preceded by its one-byte
type id and (outside lists) its name; lists declare their element type once.
Each nesting level costs one read_payload() frame.
"""

import logging
from typing import BinaryIO, Optional, Union

from .errors import InvalidLength, MaxDepthExceeded, UnknownTagType
from .stream import NBTReader, open_stream
from .tags import Tag, TagKind

log = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 512


def _kind(tag_id: int) -> TagKind:
    try:
        return TagKind(tag_id)
    except ValueError:
        raise UnknownTagType(tag_id) from None


class TagDecoder:
    def __init__(self, reader: NBTReader, max_depth: int = DEFAULT_MAX_DEPTH):
        self.reader = reader
        self.max_depth = max_depth

    def read_named(self) -> Tag:
        """Read type id, name and payload of one top-level tag."""
        kind = _kind(self.reader.read_ubyte())
        if kind == TagKind.END:
            return Tag(TagKind.END)
        name = self.reader.read_string()
        return self.read_payload(kind, 0, name)

    def read_payload(self, kind: TagKind, depth: int, name: Optional[str] = None) -> Tag:
        r = self.reader
        if kind == TagKind.END:
            return Tag(TagKind.END, name=name)
        elif kind == TagKind.BYTE:
            return Tag(kind, r.read_byte(), name)
        elif kind == TagKind.SHORT:
            return Tag(kind, r.read_short(), name)
        elif kind == TagKind.INT:
            return Tag(kind, r.read_int(), name)
        elif kind == TagKind.LONG:
            return Tag(kind, r.read_long(), name)
        elif kind == TagKind.FLOAT:
            return Tag(kind, r.read_float(), name)
        elif kind == TagKind.DOUBLE:
            return Tag(kind, r.read_double(), name)
        elif kind == TagKind.BYTE_ARRAY:
            return Tag(kind, r.read_array("b", 1, r.read_count("byte array length")), name)
        elif kind == TagKind.STRING:
            return Tag(kind, r.read_string(), name)
        elif kind == TagKind.INT_ARRAY:
            return Tag(kind, r.read_array("i", 4, r.read_count("int array length")), name)
        elif kind == TagKind.LONG_ARRAY:
            return Tag(kind, r.read_array("q", 8, r.read_count("long array length")), name)

        depth += 1
        if depth > self.max_depth:
            raise MaxDepthExceeded(self.max_depth)

        if kind == TagKind.LIST:
            element_kind = _kind(r.read_ubyte())
            count = r.read_count("list length")
            if element_kind == TagKind.END and count > 0:
                raise InvalidLength(count, "length for a list of END")
            items = []
            for _ in range(count):
                items.append(self.read_payload(element_kind, depth))
            return Tag(TagKind.LIST, items, name, element_kind)

        elif kind == TagKind.COMPOUND:
            entries = {}
            while True:
                child_kind = _kind(r.read_ubyte())
                if child_kind == TagKind.END:
                    break
                child_name = r.read_string()
                if child_name in entries:
                    log.debug(f"[NBT] Duplicate key {child_name!r} in compound, keeping last")
                    del entries[child_name]
                entries[child_name] = self.read_payload(child_kind, depth, child_name)
            return Tag(TagKind.COMPOUND, entries, name)

        raise UnknownTagType(kind)


def decode(data: Union[bytes, bytearray, BinaryIO], compression: Optional[str] = "auto",
           max_depth: int = DEFAULT_MAX_DEPTH) -> Tag:
    """
    Decode one named tag from ``data``.

    Args:
        data: raw bytes or a binary file object
        compression: "auto" (sniff gzip/zlib magic), "gzip", "zlib" or None
        max_depth: deepest List/Compound nesting accepted

    Returns:
        The root Tag (a named Compound for level.dat files)
    """
    stream = open_stream(data, compression)
    try:
        return TagDecoder(NBTReader(stream), max_depth).read_named()
    finally:
        if stream is not data:
            stream.close()


def load(path, compression: Optional[str] = "auto", max_depth: int = DEFAULT_MAX_DEPTH) -> Tag:
    """Decode the tag file at ``path``."""
    with open(path, "rb") as f:
        return decode(f, compression, max_depth)
