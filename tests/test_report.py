import os

import pytest

from conftest import data_tag, level_root, mod_entry, string
from mcworldinfo.nbt import Tag, TagKind
from mcworldinfo.report import WorldReport, format_world, inspect_world, scan, write_report
from mcworldinfo.utils.config import DEFAULTS
from mcworldinfo.utils.fs import dir_size, find_files, format_file_size
from mcworldinfo.world import Mod, SaveType, World, WorldVersion


@pytest.mark.parametrize("size,expected", [
    (0, "0 B"),
    (1023, "1023 B"),
    (1024, "1.00 KB"),
    (1536, "1.50 KB"),
    (1024 ** 2, "1.00 MB"),
    (5 * 1024 ** 3, "5.00 GB"),
    (1024 ** 6, "1.00 EB"),
])
def test_format_file_size(size, expected):
    assert format_file_size(size) == expected


def test_find_files_recurses_and_matches_exact_name(tmp_path):
    (tmp_path / "a" / "deep").mkdir(parents=True)
    (tmp_path / "b").mkdir()
    (tmp_path / "a" / "deep" / "level.dat").write_bytes(b"")
    (tmp_path / "b" / "level.dat_old").write_bytes(b"")
    (tmp_path / "level.dat").write_bytes(b"")
    found = find_files(str(tmp_path))
    assert found == [str(tmp_path / "level.dat"), str(tmp_path / "a" / "deep" / "level.dat")]


def test_find_files_missing_root(tmp_path):
    assert find_files(str(tmp_path / "nope")) == []


def test_dir_size_sums_nested_files(tmp_path):
    (tmp_path / "region").mkdir()
    (tmp_path / "a.bin").write_bytes(b"x" * 10)
    (tmp_path / "region" / "r.0.0.mca").write_bytes(b"x" * 4096)
    assert dir_size(str(tmp_path)) == 4106


def forge_world():
    return World(
        save_type=SaveType.FORGE,
        version=WorldVersion(3465, "1.20.1", False),
        name="Modded",
        mods=(Mod("examplemod", "1.0"),),
    )


def test_format_forge_world():
    text = format_world(WorldReport("/saves/Modded", forge_world(), 2048))
    assert text.splitlines() == [
        "/saves/Modded (Modded), Size: 2.00 KB:",
        "    Version:".ljust(40) + "1.20.1 (Id: 3465)",
        "    Type:".ljust(40) + "Forge",
        "    Mods (1):",
        "        Mod ID 'examplemod'".ljust(40) + "1.0",
    ]
    assert text.endswith("\n")


def test_format_vanilla_world_has_no_mod_section():
    world = World(SaveType.VANILLA, WorldVersion(1, "1.0", True), "Plain")
    text = format_world(WorldReport("/w", world, 10), width=20)
    assert "Mods" not in text
    assert "    Version:".ljust(20) + "Snapshot 1.0 (Id: 1)" in text
    assert "    Type:".ljust(20) + "Vanilla" in text


def test_format_invalid_world():
    assert format_world(WorldReport("/saves/broken", error="bad")) == "Invalid world /saves/broken"


def test_inspect_world_reads_file_and_size(write_world):
    folder = write_world("World", level_root(), {"region/r.0.0.mca": b"\0" * 100})
    report = inspect_world(os.path.join(folder, "level.dat"))
    assert report.valid
    assert report.folder == folder
    assert report.world.save_type == SaveType.VANILLA
    assert report.size == 100 + os.path.getsize(os.path.join(folder, "level.dat"))


def test_inspect_world_reports_corrupt_file(tmp_path):
    path = tmp_path / "level.dat"
    path.write_bytes(b"\x1f\x8b garbage")
    report = inspect_world(str(path))
    assert not report.valid
    assert report.error


def test_inspect_world_reports_non_world(write_world):
    folder = write_world("Other", Tag.compound({"Schematic": Tag.compound({})}, name=""))
    report = inspect_world(os.path.join(folder, "level.dat"))
    assert not report.valid
    assert "Not a valid world" in report.error


@pytest.mark.parametrize("workers", [1, 4])
def test_scan_keeps_discovery_order_and_skips_bad_worlds(saves_dir, write_world, workers):
    write_world("a_vanilla", level_root())
    broken = os.path.join(saves_dir, "b_broken")
    os.makedirs(broken)
    with open(os.path.join(broken, "level.dat"), "wb") as f:
        f.write(b"\x0a\x00")
    fml = Tag.compound({"LoadingModList": Tag.list_of(TagKind.COMPOUND, [mod_entry("jei", "15.2")])})
    write_world("c_forge", level_root(data_tag("Forge World"), fml=fml))
    write_world("d_bukkit", level_root(data_tag(**{"Bukkit.Version": string("1")})))

    cfg = dict(DEFAULTS, workers=workers)
    reports = scan(saves_dir, cfg)
    assert [os.path.basename(r.folder) for r in reports] == ["a_vanilla", "b_broken", "c_forge", "d_bukkit"]
    assert [r.world.save_type if r.valid else None for r in reports] == [
        SaveType.VANILLA, None, SaveType.FORGE, SaveType.BUKKIT,
    ]


def test_write_report_prints_every_block(saves_dir, write_world, capsys):
    write_world("World", level_root())
    os.makedirs(os.path.join(saves_dir, "Junk"))
    with open(os.path.join(saves_dir, "Junk", "level.dat"), "wb") as f:
        f.write(b"not nbt")

    valid = write_report(scan(saves_dir, dict(DEFAULTS)))
    out = capsys.readouterr().out
    assert valid == 1
    assert f"Invalid world {os.path.join(saves_dir, 'Junk')}" in out
    assert f"{os.path.join(saves_dir, 'World')} (New World), Size: " in out
    assert "    Type:".ljust(40) + "Vanilla" in out
