"""
World metadata extracted from a decoded level.dat.

The save type is decided by the loader signatures in the root compound:
an "fml" or "FML" entry means Forge, a "Bukkit.Version" key inside Data
means Bukkit, and a root holding nothing but Data is plain Vanilla.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

from mcworldinfo.nbt import Tag, TagKind

log = logging.getLogger(__name__)

# Entries of the legacy FML ModList that are part of the game, not mods
IGNORED_FML_MODS = ("minecraft", "mcp", "FML", "forge")


class InvalidWorldData(Exception):
    """The tag tree is not a readable world (missing or mistyped field)."""


class SaveType(Enum):
    VANILLA = "Vanilla"
    BUKKIT = "Bukkit"
    FORGE = "Forge"
    UNKNOWN = "Unknown"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class WorldVersion:
    id: int
    name: str
    snapshot: bool

    @classmethod
    def from_tag(cls, version: Tag) -> "WorldVersion":
        return cls(
            id=version.require("Id", TagKind.INT).value,
            name=version.require("Name", TagKind.STRING).value,
            snapshot=version.require("Snapshot", TagKind.BYTE).value != 0,
        )

    def __str__(self):
        return ("Snapshot " if self.snapshot else "") + f"{self.name} (Id: {self.id})"


def _first_string(entry: Tag, keys: Tuple[str, ...]) -> str:
    for key in keys:
        if key in entry:
            return entry.require(key, TagKind.STRING).value
    raise KeyError(keys[0])


@dataclass(frozen=True)
class Mod:
    id: str
    version: str

    ID_KEYS = ("ModId", "Id")
    VERSION_KEYS = ("ModVersion", "Version")

    @classmethod
    def read_id(cls, entry: Tag) -> str:
        return _first_string(entry, cls.ID_KEYS)

    @classmethod
    def from_tag(cls, entry: Tag) -> "Mod":
        return cls(id=cls.read_id(entry), version=_first_string(entry, cls.VERSION_KEYS))


@dataclass(frozen=True)
class World:
    save_type: SaveType
    version: WorldVersion
    name: str
    mods: Tuple[Mod, ...] = field(default_factory=tuple)


def _compounds(list_tag: Tag) -> List[Tag]:
    if list_tag.element_kind != TagKind.COMPOUND and len(list_tag):
        raise TypeError(f"Mod list holds {list_tag.element_kind.name}, expected COMPOUND")
    return list(list_tag)


def _read_world(root: Tag) -> World:
    data = root.require("Data", TagKind.COMPOUND)
    version = WorldVersion.from_tag(data.require("Version", TagKind.COMPOUND))
    name = data.require("LevelName", TagKind.STRING).value

    save_type = SaveType.VANILLA
    mods = []

    # Loader signatures override Vanilla, even on a root holding only Data
    if "fml" in root:
        save_type = SaveType.FORGE
        fml = root.require("fml", TagKind.COMPOUND)
        for entry in _compounds(fml.require("LoadingModList", TagKind.LIST)):
            mods.append(Mod.from_tag(entry))
    elif "FML" in root:
        save_type = SaveType.FORGE
        fml = root.require("FML", TagKind.COMPOUND)
        for entry in _compounds(fml.require("ModList", TagKind.LIST)):
            if Mod.read_id(entry).strip() in IGNORED_FML_MODS:
                continue
            mods.append(Mod.from_tag(entry))
    elif "Bukkit.Version" in data:
        save_type = SaveType.BUKKIT
    elif len(root) != 1:
        save_type = SaveType.UNKNOWN

    return World(save_type=save_type, version=version, name=name, mods=tuple(mods))


def extract_world(root: Tag) -> World:
    """
    Build a World from the root compound of a level.dat.

    Raises:
        InvalidWorldData: when any field the classifier needs is missing or
            has the wrong type. No partial World is ever returned.
    """
    try:
        return _read_world(root)
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidWorldData(f"Not a valid world: {e}") from e
