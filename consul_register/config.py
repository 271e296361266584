"""User configuration stored in ~/.consul-register/config.ini."""

import configparser
from pathlib import Path
from typing import Dict, Optional, Tuple

CONFIG_DIR_NAME = ".consul-register"
CONFIG_FILE_NAME = "config.ini"


def _split_key(key: str) -> Tuple[str, str]:
    section, _, option = key.partition(".")
    if not section or not option:
        raise ValueError(f"Config key must look like 'section.option', got {key!r}")
    return section, option


class ConfigManager:
    """Read and write dotted ``section.option`` keys in an INI file."""

    def __init__(self):
        self.config_dir = Path.home() / CONFIG_DIR_NAME
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self._parser = configparser.ConfigParser()
        self._parser.read(self.get_config_path())

    def get_config_path(self) -> Path:
        return self.config_dir / CONFIG_FILE_NAME

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        section, option = _split_key(key)
        return self._parser.get(section, option, fallback=default)

    def set(self, key: str, value: str) -> None:
        section, option = _split_key(key)
        if not self._parser.has_section(section):
            self._parser.add_section(section)
        self._parser.set(section, option, value)
        self._save()

    def unset(self, key: str) -> bool:
        """Remove a key. Returns False if it was not set."""
        section, option = _split_key(key)
        if not self._parser.has_option(section, option):
            return False
        self._parser.remove_option(section, option)
        if not self._parser.options(section):
            self._parser.remove_section(section)
        self._save()
        return True

    def all(self) -> Dict[str, str]:
        return {
            f"{section}.{option}": value
            for section in self._parser.sections()
            for option, value in self._parser.items(section)
        }

    def _save(self) -> None:
        with open(self.get_config_path(), "w") as f:
            self._parser.write(f)

    @property
    def server(self) -> Optional[str]:
        return self.get("consul.server")

    @property
    def token(self) -> Optional[str]:
        return self.get("consul.token")
