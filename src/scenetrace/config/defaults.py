"""
scenetrace.config.defaults - Default configuration values.

Every key here can be overridden from .scenetrace.toml or from a
SCENETRACE_<SECTION>_<KEY> environment variable.
"""

from typing import Any, Dict

DEFAULT_CONFIG: Dict[str, Any] = {
    "scan": {
        "script_suffix": ".cs",
        "meta_suffix": ".meta",
        "scene_suffixes": [".unity"],
        # Directory names never descended into
        "ignore": ["Library", "Temp", "Logs", "obj", ".git"],
    },
    "declarations": {
        "base_type": "MonoBehaviour",
        "serialize_attribute": "SerializeField",
    },
    "scene": {
        "kinds": {
            "game_object": 1,
            "transform": [4, 224],
            "mono_behaviour": 114,
            "scene_roots": 1660057539,
        },
        "fields": {
            "script": "m_Script",
            "name": "m_Name",
            "owner": "m_GameObject",
            "children": "m_Children",
            "roots": "m_Roots",
        },
    },
    "output": {
        "csv_name": "UnusedScripts.csv",
        "dump_suffix": ".dump",
        "indent": "--",
    },
}
