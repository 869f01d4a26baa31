"""Config module: load game entries from config.toml."""

from realmctl.config.loader import GameConfig, list_entries, load_config

__all__ = ["GameConfig", "list_entries", "load_config"]
