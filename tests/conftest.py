"""Shared pytest fixtures for scenetrace tests."""

import pytest

from tests.unity_fixtures import (
    ENEMY_SOURCE,
    GUID_ENEMY,
    GUID_HEALTH,
    GUID_HELPER,
    GUID_PLAYER,
    GUID_UNUSED,
    HEALTH_SOURCE,
    HELPER_SOURCE,
    PLAYER_SOURCE,
    UNUSED_SOURCE,
    game_object,
    mono_behaviour,
    scene,
    scene_roots,
    transform,
    write_scene,
    write_script,
)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep developer SCENETRACE_* variables out of tests."""
    import os

    for name in list(os.environ):
        if name.startswith("SCENETRACE_"):
            monkeypatch.delenv(name)


@pytest.fixture
def main_scene_text():
    """Scene with Player (+Weapon child) and Enemy roots."""
    return scene(
        game_object(100, "Player", [101, 102]),
        transform(101, 100, children=[201]),
        mono_behaviour(
            102,
            100,
            GUID_PLAYER,
            {
                "speed": "5",
                "target": "{fileID: 302}",
                "legacyTarget": "{fileID: 302}",
            },
        ),
        game_object(200, "Weapon", [201]),
        transform(201, 200, father=101),
        game_object(300, "Enemy", [301, 302]),
        transform(301, 300),
        mono_behaviour(302, 300, GUID_ENEMY, {"damage": "3"}),
        scene_roots(9, [101, 301]),
    )


@pytest.fixture
def unity_project(tmp_path, main_scene_text):
    """Small Unity project tree with used and unused scripts."""
    root = tmp_path / "MyGame"
    write_script(root, "Assets/Scripts/Player.cs", PLAYER_SOURCE, GUID_PLAYER)
    write_script(root, "Assets/Scripts/Enemies/Enemy.cs", ENEMY_SOURCE, GUID_ENEMY)
    write_script(root, "Assets/Health.cs", HEALTH_SOURCE, GUID_HEALTH)
    write_script(root, "Assets/Scripts/Unused.cs", UNUSED_SOURCE, GUID_UNUSED)
    write_script(root, "Assets/Scripts/MathHelper.cs", HELPER_SOURCE, GUID_HELPER)
    write_script(root, "Assets/Scripts/NoMeta.cs", UNUSED_SOURCE, None)
    # Generated folders are never scanned
    write_script(root, "Library/Cache/Ignored.cs", UNUSED_SOURCE, "33333333333333333333333333333333")
    write_scene(root, "Assets/Scenes/Main.unity", main_scene_text)
    return root
