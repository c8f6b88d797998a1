"""Tests for scenetrace.report - CSV and dump output."""

import json
from pathlib import Path

from scenetrace.project import ScriptInfo
from scenetrace.report import (
    render_dump,
    render_unused_csv,
    unused_scripts,
    unused_to_json,
    write_scene_dump,
    write_unused_csv,
)
from scenetrace.scene import SceneNode

SCRIPTS = [
    ScriptInfo("AAAA", "Assets/Scripts/Deep/Z.cs"),
    ScriptInfo("bbbb", "Assets/B.cs"),
    ScriptInfo("cccc", "Assets/Scripts/A.cs"),
    ScriptInfo("dddd", "Assets/A.cs"),
]


class TestUnusedScripts:
    """Tests for unused_scripts()."""

    def test_shallow_paths_first_then_alphabetical(self):
        rows = unused_scripts(SCRIPTS, frozenset())

        assert [r.relative_path for r in rows] == [
            "Assets/A.cs",
            "Assets/B.cs",
            "Assets/Scripts/A.cs",
            "Assets/Scripts/Deep/Z.cs",
        ]

    def test_used_guids_compare_case_insensitively(self):
        rows = unused_scripts(SCRIPTS, frozenset({"aaaa", "bbbb"}))

        assert [r.guid for r in rows] == ["dddd", "cccc"]

    def test_everything_used(self):
        used = frozenset(s.guid.lower() for s in SCRIPTS)

        assert unused_scripts(SCRIPTS, used) == []


class TestCsv:
    def test_header_and_rows(self):
        text = render_unused_csv([ScriptInfo("AbC", "Assets/A.cs")])

        assert text == "Relative Path,GUID\nAssets/A.cs,AbC\n"

    def test_header_only_when_empty(self):
        assert render_unused_csv([]) == "Relative Path,GUID\n"

    def test_path_with_comma_is_quoted(self):
        text = render_unused_csv([ScriptInfo("g", "Assets/a,b.cs")])

        assert text.splitlines()[1] == '"Assets/a,b.cs",g'

    def test_write_creates_output_dir(self, tmp_path):
        out = tmp_path / "out" / "reports"

        path = write_unused_csv(out, [ScriptInfo("g", "A.cs")], "Unused.csv")

        assert path == out / "Unused.csv"
        assert path.read_text(encoding="utf-8") == "Relative Path,GUID\nA.cs,g\n"

    def test_json(self):
        data = json.loads(unused_to_json([ScriptInfo("g", "A.cs")]))

        assert data == [{"path": "A.cs", "guid": "g"}]


class TestDump:
    """Tests for render_dump() and write_scene_dump()."""

    FOREST = [
        SceneNode("Player", children=[SceneNode("Weapon", children=[SceneNode("Barrel")])]),
        SceneNode("Enemy"),
    ]

    def test_indent_per_depth(self):
        assert render_dump(self.FOREST) == "Player\n--Weapon\n----Barrel\nEnemy\n"

    def test_custom_indent(self):
        assert render_dump(self.FOREST, indent="  ") == "Player\n  Weapon\n    Barrel\nEnemy\n"

    def test_empty_forest(self):
        assert render_dump([]) == ""

    def test_write_uses_scene_file_name(self, tmp_path):
        path = write_scene_dump(tmp_path, Path("Assets/Scenes/Main.unity"), self.FOREST)

        assert path == tmp_path / "Main.unity.dump"
        assert path.read_text(encoding="utf-8").startswith("Player\n--Weapon\n")
