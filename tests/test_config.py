"""
Tests for scenetrace.config module.
"""

import pytest
import tomlkit

from scenetrace.config import (
    DEFAULT_CONFIG,
    find_config_file,
    get_config,
    load_config,
    merge_configs,
    parse_toml,
)
from scenetrace.declarations import DeclarationSettings
from scenetrace.project import ScanSettings
from scenetrace.scene import SceneSchema


class TestConfigLoader:
    """Tests for configuration loading."""

    def test_load_config_merges_with_defaults(self, tmp_path):
        """A partial file keeps every default it does not mention."""
        config_file = tmp_path / ".scenetrace.toml"
        config_file.write_text('[declarations]\nbase_type = "NetworkBehaviour"\n')

        config = load_config(config_file)

        assert config["declarations"]["base_type"] == "NetworkBehaviour"
        assert config["declarations"]["serialize_attribute"] == "SerializeField"
        assert config["output"] == DEFAULT_CONFIG["output"]

    def test_load_config_returns_plain_containers(self, tmp_path):
        config_file = tmp_path / ".scenetrace.toml"
        config_file.write_text('[scan]\nignore = ["Library", "Build"]\n')

        config = load_config(config_file)

        assert type(config["scan"]) is dict
        assert type(config["scan"]["ignore"]) is list

    def test_invalid_toml_raises(self, tmp_path):
        config_file = tmp_path / ".scenetrace.toml"
        config_file.write_text("[scan\n")

        with pytest.raises(tomlkit.exceptions.ParseError):
            load_config(config_file)

    def test_find_config_file_not_found(self, tmp_path):
        assert find_config_file(tmp_path) is None

    def test_find_config_in_parent(self, tmp_path):
        """Searching from a subdirectory finds the project's file."""
        (tmp_path / ".scenetrace.toml").write_text("")
        nested = tmp_path / "Assets" / "Scenes"
        nested.mkdir(parents=True)

        config_path = find_config_file(nested)

        assert config_path is not None
        assert config_path.parent == tmp_path.resolve()

    def test_get_config_without_file_uses_defaults(self, tmp_path):
        config = get_config(start_dir=tmp_path)

        assert config == DEFAULT_CONFIG

    def test_get_config_does_not_share_defaults(self, tmp_path):
        config = get_config(start_dir=tmp_path)
        config["scan"]["ignore"].append("Extra")

        assert "Extra" not in DEFAULT_CONFIG["scan"]["ignore"]

    def test_get_config_explicit_path(self, tmp_path):
        custom = tmp_path / "custom.toml"
        custom.write_text('[output]\ncsv_name = "Report.csv"\n')

        config = get_config(config_path=custom)

        assert config["output"]["csv_name"] == "Report.csv"


class TestConfigMerge:
    """Tests for configuration merging."""

    def test_merge_configs_override(self):
        defaults = {"output": {"indent": "--", "dump_suffix": ".dump"}}

        merged = merge_configs(defaults, {"output": {"indent": "  "}})

        assert merged["output"] == {"indent": "  ", "dump_suffix": ".dump"}

    def test_lists_are_replaced_not_concatenated(self):
        defaults = {"scan": {"ignore": ["Library", "Temp"]}}

        merged = merge_configs(defaults, {"scan": {"ignore": ["Build"]}})

        assert merged["scan"]["ignore"] == ["Build"]

    def test_new_sections_are_added(self):
        merged = merge_configs({"a": {"x": 1}}, {"b": {"y": 2}})

        assert merged == {"a": {"x": 1}, "b": {"y": 2}}

    def test_inputs_are_not_modified(self):
        defaults = {"scene": {"fields": {"name": "m_Name"}}}
        user = {"scene": {"fields": {"name": "label"}}}

        merge_configs(defaults, user)

        assert defaults["scene"]["fields"]["name"] == "m_Name"


class TestParseToml:
    def test_nested_tables(self):
        content = """
[scene.kinds]
transform = [4, 224, 999]

[scene.fields]
name = "m_DisplayName"
"""
        data = parse_toml(content)

        assert data["scene"]["kinds"]["transform"] == [4, 224, 999]
        assert data["scene"]["fields"]["name"] == "m_DisplayName"


class TestSettingsFromConfig:
    """Config sections feed the typed settings objects."""

    def test_defaults_round_trip(self):
        assert SceneSchema.from_config(DEFAULT_CONFIG) == SceneSchema()
        assert ScanSettings.from_config(DEFAULT_CONFIG) == ScanSettings()
        assert DeclarationSettings.from_config(DEFAULT_CONFIG) == DeclarationSettings()

    def test_scene_schema_overrides(self):
        config = merge_configs(
            DEFAULT_CONFIG,
            {"scene": {"kinds": {"transform": 4}, "fields": {"name": "label"}}},
        )

        schema = SceneSchema.from_config(config)

        assert schema.transform_kinds == frozenset({4})
        assert schema.name_field == "label"
        assert schema.script_field == "m_Script"

    def test_scan_settings_single_suffix(self):
        settings = ScanSettings.from_config({"scan": {"scene_suffixes": ".scene"}})

        assert settings.scene_suffixes == (".scene",)
        assert settings.script_suffix == ".cs"
