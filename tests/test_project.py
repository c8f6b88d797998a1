"""Tests for scenetrace.project - script and scene discovery."""

from scenetrace.project import (
    ScanSettings,
    ScriptInfo,
    find_scenes,
    find_scripts,
    iter_declaration_units,
    iter_project_files,
    read_guid_from_meta,
)
from tests.unity_fixtures import GUID_ENEMY, GUID_HEALTH, GUID_HELPER, GUID_PLAYER, GUID_UNUSED


class TestReadGuidFromMeta:
    def test_guid_line(self, tmp_path):
        meta = tmp_path / "A.cs.meta"
        meta.write_text("fileFormatVersion: 2\nguid: ABCdef0123456789abcdef0123456789\n")

        assert read_guid_from_meta(meta) == "ABCdef0123456789abcdef0123456789"

    def test_missing_file(self, tmp_path):
        assert read_guid_from_meta(tmp_path / "none.meta") is None

    def test_no_guid_line(self, tmp_path):
        meta = tmp_path / "A.cs.meta"
        meta.write_text("fileFormatVersion: 2\n")

        assert read_guid_from_meta(meta) is None

    def test_empty_guid(self, tmp_path):
        meta = tmp_path / "A.cs.meta"
        meta.write_text("guid:\n")

        assert read_guid_from_meta(meta) is None


class TestFindScripts:
    """Tests for find_scripts() over the sample project."""

    def test_scripts_with_guid_sorted_by_path(self, unity_project):
        scripts = find_scripts(unity_project)

        assert scripts == [
            ScriptInfo(GUID_HEALTH, "Assets/Health.cs"),
            ScriptInfo(GUID_ENEMY, "Assets/Scripts/Enemies/Enemy.cs"),
            ScriptInfo(GUID_HELPER, "Assets/Scripts/MathHelper.cs"),
            ScriptInfo(GUID_PLAYER, "Assets/Scripts/Player.cs"),
            ScriptInfo(GUID_UNUSED, "Assets/Scripts/Unused.cs"),
        ]

    def test_ignored_directories_are_skipped(self, unity_project):
        paths = [s.relative_path for s in find_scripts(unity_project)]

        assert not any(p.startswith("Library/") for p in paths)

    def test_custom_ignore(self, unity_project):
        settings = ScanSettings(ignore=frozenset({"Scripts"}))

        paths = [s.relative_path for s in find_scripts(unity_project, settings)]

        assert "Assets/Health.cs" in paths
        assert "Library/Cache/Ignored.cs" in paths
        assert not any("/Scripts/" in p for p in paths)

    def test_depth(self):
        assert ScriptInfo("x", "A.cs").depth == 0
        assert ScriptInfo("x", "Assets/Scripts/A.cs").depth == 2


class TestFindScenes:
    def test_scenes(self, unity_project):
        assert find_scenes(unity_project) == [unity_project / "Assets" / "Scenes" / "Main.unity"]

    def test_suffixes_are_configurable(self, tmp_path):
        (tmp_path / "a.unity").write_text("")
        (tmp_path / "b.prefab").write_text("")

        found = find_scenes(tmp_path, ScanSettings(scene_suffixes=(".unity", ".prefab")))

        assert [p.name for p in found] == ["a.unity", "b.prefab"]


class TestIterProjectFiles:
    def test_deterministic_order(self, tmp_path):
        for rel in ["b/z.cs", "a/y.cs", "x.cs"]:
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("")

        found = [p.relative_to(tmp_path).as_posix() for p in iter_project_files(tmp_path, (".cs",))]

        assert found == ["x.cs", "a/y.cs", "b/z.cs"]


class TestIterDeclarationUnits:
    def test_yields_source_text(self, unity_project):
        scripts = [ScriptInfo(GUID_PLAYER, "Assets/Scripts/Player.cs")]

        ((script, source),) = list(iter_declaration_units(unity_project, scripts))

        assert script.guid == GUID_PLAYER
        assert "class Player : MonoBehaviour" in source

    def test_byte_order_mark_is_removed(self, tmp_path):
        (tmp_path / "Bom.cs").write_bytes(b"\xef\xbb\xbfclass Bom {}")

        ((_, source),) = list(iter_declaration_units(tmp_path, [ScriptInfo("x", "Bom.cs")]))

        assert source == "class Bom {}"

    def test_unreadable_script_is_reported(self, tmp_path):
        errors = []

        units = list(iter_declaration_units(tmp_path, [ScriptInfo("x", "Gone.cs")], errors))

        assert units == []
        assert len(errors) == 1
        assert "Gone.cs" in errors[0]
