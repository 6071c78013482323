"""Memory layout, builder settings, config storage and source-tree tools for N64 homebrew ROMs."""

__version__ = "0.1.0"

__all__ = [
    "config_store",
    "memory_map",
    "preferences",
    "project_tree",
    "settings",
]