"""NBT encoder, the mirror image of decoder.py."""

import gzip
import zlib
from typing import Optional

from .errors import EncodeError, InconsistentListType
from .stream import NBTWriter
from .tags import Tag, TagKind


ARRAY_CODES = {
    TagKind.BYTE_ARRAY: "b",
    TagKind.INT_ARRAY: "i",
    TagKind.LONG_ARRAY: "q",
}


class TagEncoder:
    def __init__(self, writer: NBTWriter):
        self.writer = writer

    def write_named(self, tag: Tag) -> None:
        self.writer.write_ubyte(tag.kind)
        if tag.kind == TagKind.END:
            return
        self.writer.write_string(tag.name or "")
        self.write_payload(tag)

    def write_payload(self, tag: Tag) -> None:
        w = self.writer
        kind = tag.kind
        if kind == TagKind.END:
            return
        elif kind == TagKind.BYTE:
            w.write_byte(tag.value)
        elif kind == TagKind.SHORT:
            w.write_short(tag.value)
        elif kind == TagKind.INT:
            w.write_int(tag.value)
        elif kind == TagKind.LONG:
            w.write_long(tag.value)
        elif kind == TagKind.FLOAT:
            w.write_float(tag.value)
        elif kind == TagKind.DOUBLE:
            w.write_double(tag.value)
        elif kind == TagKind.STRING:
            w.write_string(tag.value)
        elif kind in ARRAY_CODES:
            w.write_array(ARRAY_CODES[kind], tag.value)
        elif kind == TagKind.LIST:
            element_kind = tag.element_kind
            if element_kind == TagKind.END and tag.value:
                raise InconsistentListType("A non-empty list cannot hold END elements")
            for item in tag.value:
                if item.kind != element_kind:
                    raise InconsistentListType(
                        f"List of {element_kind.name} contains a {item.kind.name} element"
                    )
            w.write_ubyte(element_kind)
            w.write_int(len(tag.value))
            for item in tag.value:
                self.write_payload(item)
        elif kind == TagKind.COMPOUND:
            for key, child in tag.value.items():
                if child.kind == TagKind.END:
                    raise EncodeError(f"Compound entry {key!r} is an END tag")
                w.write_ubyte(child.kind)
                w.write_string(key)
                self.write_payload(child)
            w.write_ubyte(TagKind.END)
        else:
            raise EncodeError(f"Cannot encode tag kind {kind!r}")


def encode(tag: Tag, compression: Optional[str] = None) -> bytes:
    """
    Serialize ``tag`` (with its name) to bytes.

    The whole tree is validated while writing into a scratch buffer, so a
    failure never leaves partial output behind.
    """
    writer = NBTWriter()
    TagEncoder(writer).write_named(tag)
    data = writer.get_bytes()
    if compression == "gzip":
        return gzip.compress(data)
    if compression == "zlib":
        return zlib.compress(data)
    if compression is not None:
        raise ValueError(f"Unknown compression: {compression!r}")
    return data


def save(tag: Tag, path, compression: Optional[str] = "gzip") -> None:
    """Write ``tag`` to ``path``, gzip-compressed unless told otherwise."""
    data = encode(tag, compression)
    with open(path, "wb") as f:
        f.write(data)
