"""Shared builders for level.dat trees."""

import os

import pytest

from mcworldinfo.nbt import Tag, TagKind, save


def string(value):
    return Tag(TagKind.STRING, value)


def version_tag(id=3465, name="1.20.1", snapshot=0):
    return Tag.compound({
        "Id": Tag(TagKind.INT, id),
        "Name": string(name),
        "Snapshot": Tag(TagKind.BYTE, snapshot),
    })


def data_tag(level_name="New World", version=None, **extra):
    entries = {
        "LevelName": string(level_name),
        "Version": version if version is not None else version_tag(),
        "DataVersion": Tag(TagKind.INT, 3465),
    }
    entries.update(extra)
    return Tag.compound(entries)


def mod_entry(mod_id, mod_version=None, id_key="ModId", version_key="ModVersion"):
    entries = {id_key: string(mod_id)}
    if mod_version is not None:
        entries[version_key] = string(mod_version)
    return Tag.compound(entries)


def level_root(data=None, **extra):
    entries = {"Data": data if data is not None else data_tag()}
    entries.update(extra)
    return Tag.compound(entries, name="")


@pytest.fixture
def write_world(tmp_path):
    """Write ``root`` as <tmp>/<folder>/level.dat and return the folder path."""
    def _write(folder, root, extra_files=None):
        world_dir = tmp_path / folder
        world_dir.mkdir(parents=True, exist_ok=True)
        save(root, world_dir / "level.dat")
        for name, content in (extra_files or {}).items():
            path = world_dir / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        return str(world_dir)
    return _write


@pytest.fixture
def saves_dir(tmp_path):
    return str(tmp_path)
