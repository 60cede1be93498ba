"""
Tag model for the NBT (Named Binary Tag) format.

A single Tag class covers every kind; ``kind`` selects how ``value`` is
interpreted:

    END                  None
    BYTE/SHORT/INT/LONG  int
    FLOAT/DOUBLE         float
    BYTE_ARRAY           list of int (signed bytes)
    STRING               str
    LIST                 list of unnamed Tag, all of kind ``element_kind``
    COMPOUND             dict of name -> Tag, in insertion order
    INT_ARRAY            list of int
    LONG_ARRAY           list of int
"""

import struct
from enum import IntEnum
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from .errors import InconsistentListType


class TagKind(IntEnum):
    END = 0
    BYTE = 1
    SHORT = 2
    INT = 3
    LONG = 4
    FLOAT = 5
    DOUBLE = 6
    BYTE_ARRAY = 7
    STRING = 8
    LIST = 9
    COMPOUND = 10
    INT_ARRAY = 11
    LONG_ARRAY = 12


SCALAR_KINDS = frozenset({
    TagKind.BYTE, TagKind.SHORT, TagKind.INT, TagKind.LONG,
    TagKind.FLOAT, TagKind.DOUBLE,
})

ARRAY_KINDS = {
    TagKind.BYTE_ARRAY: TagKind.BYTE,
    TagKind.INT_ARRAY: TagKind.INT,
    TagKind.LONG_ARRAY: TagKind.LONG,
}


def _to_float32(value) -> float:
    """Round ``value`` to the nearest 32-bit float, as it will be stored."""
    try:
        return struct.unpack(">f", struct.pack(">f", value))[0]
    except (OverflowError, struct.error) as e:
        raise ValueError(f"{value!r} is not representable as a 32-bit float: {e}") from e


class Tag:
    __slots__ = ("kind", "value", "name", "element_kind")

    def __init__(self, kind: TagKind, value: Any = None, name: Optional[str] = None,
                 element_kind: Optional[TagKind] = None):
        self.kind = TagKind(kind)
        self.name = name
        self.element_kind = None

        if self.kind == TagKind.LIST:
            self.element_kind = TagKind(element_kind) if element_kind is not None else TagKind.END
            value = list(value or [])
        elif self.kind == TagKind.COMPOUND:
            value = dict(value or {})
        elif self.kind in ARRAY_KINDS:
            value = list(value or [])
        elif self.kind == TagKind.FLOAT:
            value = _to_float32(value)
        elif self.kind == TagKind.END:
            value = None

        self.value = value

    def renamed(self, name: Optional[str]) -> "Tag":
        """Shallow copy of this tag under another name."""
        return Tag(self.kind, self.value, name, self.element_kind)

    @classmethod
    def compound(cls, entries: Union[Dict[str, "Tag"], Iterable[Tuple[str, "Tag"]], None] = None,
                 name: Optional[str] = None) -> "Tag":
        """Build a Compound, naming each child after its key."""
        items = entries.items() if isinstance(entries, dict) else (entries or [])
        value = {}
        for key, child in items:
            value[key] = child.renamed(key)
        return cls(TagKind.COMPOUND, value, name=name)

    @classmethod
    def list_of(cls, kind: TagKind, items: Iterable["Tag"] = (), name: Optional[str] = None) -> "Tag":
        """Build a List of ``kind`` elements, refusing mixed element kinds."""
        elements = []
        for item in items:
            if item.kind != kind:
                raise InconsistentListType(
                    f"List of {TagKind(kind).name} cannot hold a {item.kind.name} element"
                )
            elements.append(item.renamed(None))
        return cls(TagKind.LIST, elements, name=name, element_kind=kind)

    # Container capabilities (Compound and List only)

    def _container(self):
        if self.kind not in (TagKind.COMPOUND, TagKind.LIST):
            raise TypeError(f"{self.kind.name} tag is not a container")
        return self.value

    def __len__(self) -> int:
        return len(self._container())

    def __bool__(self) -> bool:
        return True

    def __iter__(self) -> Iterator["Tag"]:
        container = self._container()
        if self.kind == TagKind.COMPOUND:
            return iter(container.values())
        return iter(container)

    def __contains__(self, key) -> bool:
        if self.kind != TagKind.COMPOUND:
            raise TypeError(f"{self.kind.name} tag has no keys")
        return key in self.value

    def __getitem__(self, key):
        return self._container()[key]

    def get(self, key: str, default: Optional["Tag"] = None) -> Optional["Tag"]:
        if self.kind != TagKind.COMPOUND:
            raise TypeError(f"{self.kind.name} tag has no keys")
        return self.value.get(key, default)

    def require(self, key: str, kind: TagKind) -> "Tag":
        """Return child ``key``; KeyError if absent, TypeError if not of ``kind``."""
        child = self.get(key)
        if child is None:
            raise KeyError(key)
        if child.kind != kind:
            raise TypeError(f"'{key}' is {child.kind.name}, expected {TagKind(kind).name}")
        return child

    def keys(self) -> List[str]:
        if self.kind != TagKind.COMPOUND:
            raise TypeError(f"{self.kind.name} tag has no keys")
        return list(self.value)

    def to_python(self) -> Any:
        if self.kind == TagKind.COMPOUND:
            return {k: v.to_python() for k, v in self.value.items()}
        if self.kind == TagKind.LIST:
            return [v.to_python() for v in self.value]
        if self.kind in ARRAY_KINDS:
            return list(self.value)
        return self.value

    def __eq__(self, other) -> bool:
        if not isinstance(other, Tag):
            return NotImplemented
        if (self.kind, self.name, self.element_kind) != (other.kind, other.name, other.element_kind):
            return False
        if self.kind == TagKind.COMPOUND:
            return list(self.value.items()) == list(other.value.items())
        return self.value == other.value

    __hash__ = None

    def __repr__(self) -> str:
        name = f" {self.name!r}" if self.name is not None else ""
        if self.kind == TagKind.LIST:
            return f"<Tag LIST{name} of {self.element_kind.name} x{len(self.value)}>"
        if self.kind == TagKind.COMPOUND:
            return f"<Tag COMPOUND{name} keys={list(self.value)}>"
        return f"<Tag {self.kind.name}{name} {self.value!r}>"
