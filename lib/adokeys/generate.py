"""Key generation workflow: generate, write files, update config, copy."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from adokeys.activity_log import ActivityLog
from adokeys.clipboard import copy_to_clipboard
from adokeys.keys import DEFAULT_KEY_SIZE, KeyMaterial, generate_key_pair
from adokeys.reporter import Reporter
from adokeys.ssh_config import (
    DEFAULT_ALIAS, DEFAULT_HOST_NAME, DEFAULT_USER, build_host_block, update_config_file,
)


@dataclass
class KeyGenerationOptions:
    """Inputs for one generate_keys() run."""
    name: str = 'id_rsa_ado'
    output_dir: Path = field(default_factory=lambda: Path.home() / '.ssh')
    comment: str = 'AzureDevOps'
    passphrase: Optional[str] = None
    copy_to_clipboard: bool = True
    generate_config: bool = True
    key_size: int = DEFAULT_KEY_SIZE
    host_alias: str = DEFAULT_ALIAS
    host_name: str = DEFAULT_HOST_NAME
    user: str = DEFAULT_USER

    @property
    def private_key_path(self) -> Path:
        return self.output_dir / self.name

    @property
    def public_key_path(self) -> Path:
        return self.output_dir / f'{self.name}.pub'

    @property
    def encrypted_key_path(self) -> Optional[Path]:
        """Only set when a passphrase was given."""
        if not self.passphrase:
            return None
        return self.output_dir / f'{self.name}.pkcs8.enc.pem'

    @property
    def config_path(self) -> Path:
        return self.output_dir / 'config'


@dataclass
class KeyGenerationResult:
    """Files written by generate_keys()."""
    key_material: KeyMaterial
    private_key_path: Path
    public_key_path: Path
    encrypted_key_path: Optional[Path] = None
    config_path: Optional[Path] = None
    config_updated: bool = False
    copied_to_clipboard: bool = False


def _write_private(path: Path, content: str) -> None:
    """Write a private key file readable only by the owner where supported."""
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    # O_CREAT mode is ignored for an existing file
    os.chmod(path, 0o600)
    with os.fdopen(fd, 'w', encoding='utf-8', newline='') as f:
        f.write(content)


def update_ssh_config(options: KeyGenerationOptions, reporter: Reporter,
                      activity_log: Optional[ActivityLog] = None) -> bool:
    """Merge the host block for options' key into <output_dir>/config.

    Returns:
        True if the config file was written, False on I/O failure (warned)
    """
    block = build_host_block(
        options.private_key_path,
        alias=options.host_alias,
        host_name=options.host_name,
        user=options.user,
    )
    try:
        update_config_file(options.config_path, options.host_alias, block)
    except OSError as e:
        reporter.warn(f"Could not update SSH config file: {e}")
        if activity_log:
            activity_log.log_event(f'SSH config update failed: {e}', level='WARN')
        return False

    if activity_log:
        activity_log.log_event(f'SSH config updated: {options.config_path} ({options.host_alias})')
    return True


def generate_keys(options: KeyGenerationOptions, reporter: Reporter,
                  activity_log: Optional[ActivityLog] = None) -> KeyGenerationResult:
    """Generate a key pair and write all requested artifacts.

    Args:
        options: What to generate and where
        reporter: Receives progress, warnings and confirmations
        activity_log: Optional event log

    Returns:
        KeyGenerationResult describing written files

    Raises:
        RuntimeError: If key generation fails (nothing is written)
        OSError: If a key file cannot be written
    """
    options.output_dir.mkdir(parents=True, exist_ok=True)

    reporter.status(f"Creating {options.key_size}-bit RSA key...")
    if activity_log:
        activity_log.log_event(f'Generating {options.key_size}-bit RSA key: {options.name}')
    key_material = generate_key_pair(
        options.name, options.comment, options.passphrase, options.key_size
    )

    reporter.status("Exporting private key (PKCS#1)...")
    _write_private(options.private_key_path, key_material.private_key_pem)

    encrypted_path = options.encrypted_key_path
    if encrypted_path and key_material.encrypted_private_key_pem:
        reporter.status("Exporting encrypted private key (PKCS#8)...")
        _write_private(encrypted_path, key_material.encrypted_private_key_pem)

    reporter.status("Generating OpenSSH public key...")
    options.public_key_path.write_text(key_material.public_key_openssh + '\n', encoding='utf-8')

    if activity_log:
        activity_log.log_event(f'Key files written to {options.output_dir}')

    config_updated = False
    if options.generate_config:
        reporter.status("Updating SSH config file...")
        config_updated = update_ssh_config(options, reporter, activity_log)

    copied = False
    if options.copy_to_clipboard:
        reporter.status("Copying public key to clipboard...")
        copied = copy_to_clipboard(key_material.public_key_openssh)
        if not copied:
            reporter.warn("Could not copy to clipboard")
            if activity_log:
                activity_log.log_event('Clipboard copy failed', level='WARN')

    return KeyGenerationResult(
        key_material=key_material,
        private_key_path=options.private_key_path,
        public_key_path=options.public_key_path,
        encrypted_key_path=encrypted_path,
        config_path=options.config_path if config_updated else None,
        config_updated=config_updated,
        copied_to_clipboard=copied,
    )


def offer_clipboard_copy(reporter: Reporter, result: KeyGenerationResult) -> bool:
    """Ask whether to copy the public key now; copy on yes.

    Returns:
        True if the key ended up on the clipboard
    """
    if result.copied_to_clipboard:
        return True
    if not reporter.confirm("Would you like to copy the public key to clipboard now?"):
        return False

    if copy_to_clipboard(result.key_material.public_key_openssh):
        reporter.success("📋 Public key copied to clipboard!")
        return True

    reporter.error("Error copying to clipboard")
    return False
