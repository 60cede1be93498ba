"""Cross-check the codec against files produced and consumed by nbtlib."""

import nbtlib
from nbtlib.tag import Byte, Compound, Int, List, String

from conftest import level_root, mod_entry
from mcworldinfo.nbt import Tag, TagKind, load, save
from mcworldinfo.world import Mod, SaveType, extract_world


def test_reads_level_dat_written_by_nbtlib(tmp_path):
    path = tmp_path / "level.dat"
    nbt_file = nbtlib.File({
        "Data": Compound({
            "LevelName": String("Made elsewhere"),
            "Version": Compound({
                "Id": Int(3465),
                "Name": String("1.20.1"),
                "Snapshot": Byte(0),
            }),
        }),
        "fml": Compound({
            "LoadingModList": List[Compound]([
                Compound({"ModId": String("jei"), "ModVersion": String("15.2.0")}),
            ]),
        }),
    }, gzipped=True)
    nbt_file.save(str(path), gzipped=True)

    root = load(path)
    assert root.kind == TagKind.COMPOUND
    world = extract_world(root)
    assert world.name == "Made elsewhere"
    assert world.save_type == SaveType.FORGE
    assert world.mods == (Mod("jei", "15.2.0"),)


def test_nbtlib_reads_our_output(tmp_path):
    path = tmp_path / "level.dat"
    fml = Tag.compound({"LoadingModList": Tag.list_of(TagKind.COMPOUND, [mod_entry("jei", "15.2.0")])})
    root = level_root(fml=fml)
    root["Data"].value["Heights"] = Tag(TagKind.LONG_ARRAY, [1, -1], name="Heights")
    save(root, path)

    nbt_file = nbtlib.load(str(path))
    assert nbt_file["Data"]["LevelName"] == "New World"
    assert nbt_file["Data"]["Version"]["Id"] == 3465
    assert list(nbt_file["Data"]["Heights"]) == [1, -1]
    assert nbt_file["fml"]["LoadingModList"][0]["ModId"] == "jei"
