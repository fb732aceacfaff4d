"""Load user defaults from ~/.adokeys/config.yml."""

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

import yaml

from adokeys.ssh_config import DEFAULT_ALIAS, DEFAULT_HOST_NAME, DEFAULT_USER

CONFIG_FILE_NAME = 'config.yml'


def default_config_dir() -> Path:
    return Path.home() / '.adokeys'


@dataclass
class KeygenSettings:
    """Defaults for the generate command. CLI options take precedence."""
    name: str = 'id_rsa_ado'
    output_dir: Optional[str] = None     # None means ~/.ssh
    comment: str = 'AzureDevOps'
    key_size: int = 4096
    clipboard: bool = True
    ssh_config: bool = True
    host_alias: str = DEFAULT_ALIAS
    host_name: str = DEFAULT_HOST_NAME
    user: str = DEFAULT_USER

    @property
    def output_path(self) -> Path:
        """Resolved output directory."""
        if self.output_dir:
            return Path(self.output_dir).expanduser()
        return Path.home() / '.ssh'

    @classmethod
    def load(cls, config_dir: Path) -> 'KeygenSettings':
        """Load config.yml from config_dir. Returns defaults if not present."""
        config_file = config_dir / CONFIG_FILE_NAME
        if not config_file.exists():
            return cls()

        with open(config_file, encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"{config_file} must contain a mapping")

        known = set(cls.__dataclass_fields__)
        unknown = set(data.keys()) - known
        if unknown:
            raise ValueError(f"Unknown {CONFIG_FILE_NAME} field(s): {', '.join(sorted(unknown))}")

        return cls(**data)


def create_default_settings(config_dir: Path) -> Path:
    """Write a config.yml with default values unless one already exists.

    Args:
        config_dir: Directory to create config.yml in

    Returns:
        Path to the config file
    """
    config_dir.mkdir(parents=True, exist_ok=True)
    config_file = config_dir / CONFIG_FILE_NAME

    if not config_file.exists():
        with open(config_file, 'w', encoding='utf-8') as f:
            yaml.safe_dump(asdict(KeygenSettings()), f, sort_keys=False)

    return config_file
