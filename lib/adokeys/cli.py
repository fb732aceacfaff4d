#!/usr/bin/env python3
"""adokeys CLI - RSA SSH keys for Azure DevOps."""

import sys
from pathlib import Path
from typing import Optional

import click
import yaml

from adokeys.activity_log import ActivityLog
from adokeys.generate import (
    KeyGenerationOptions, generate_keys, offer_clipboard_copy, update_ssh_config,
)
from adokeys.reporter import ClickReporter, show_results
from adokeys.settings import KeygenSettings, create_default_settings, default_config_dir


def _load_settings() -> KeygenSettings:
    """Load user settings, exiting with an error if the file is invalid."""
    try:
        return KeygenSettings.load(default_config_dir())
    except (ValueError, TypeError, yaml.YAMLError) as e:
        click.secho(f"❌ Invalid settings: {e}", fg='red', err=True)
        sys.exit(1)


def _build_options(settings: KeygenSettings, name: Optional[str], out: Optional[str],
                   alias: Optional[str]) -> KeyGenerationOptions:
    return KeyGenerationOptions(
        name=name or settings.name,
        output_dir=Path(out).expanduser() if out else settings.output_path,
        comment=settings.comment,
        key_size=settings.key_size,
        copy_to_clipboard=settings.clipboard,
        generate_config=settings.ssh_config,
        host_alias=alias or settings.host_alias,
        host_name=settings.host_name,
        user=settings.user,
    )


@click.group()
@click.version_option(package_name='adokeys')
def main():
    """Generate RSA SSH keys for Azure DevOps (OpenSSH public key + PEM private key)."""
    pass


@main.command()
def init():
    """Create ~/.adokeys/config.yml with default settings."""
    config_file = create_default_settings(default_config_dir())
    click.echo(f"✓ Settings file at {config_file}")
    click.echo("  Edit this file to change the defaults used by 'adokeys generate'")


@main.command()
@click.option('--name', '-n', help='Base filename (no extension)  [default: id_rsa_ado]')
@click.option('--out', '-o', type=click.Path(file_okay=False),
              help='Output directory  [default: ~/.ssh]')
@click.option('--comment', '-c', help='OpenSSH public key comment  [default: AzureDevOps]')
@click.option('--passphrase', '-p', default='',
              help='If provided, also export encrypted PKCS#8 with this passphrase')
@click.option('--clipboard/--no-clipboard', default=None,
              help='Copy the public key to clipboard')
@click.option('--config/--no-config', 'ssh_config', default=None,
              help='Add a Host entry for Azure DevOps to <out>/config')
@click.option('--key-size', '-b', type=click.Choice(['2048', '3072', '4096']),
              help='RSA key size in bits  [default: 4096]')
@click.option('--alias', help='Host alias for the SSH config entry  [default: dev.azure.com]')
@click.option('--force', '-f', is_flag=True, help='Overwrite existing key files')
def generate(name, out, comment, passphrase, clipboard, ssh_config, key_size, alias, force):
    """Generate an RSA key pair and configure SSH for Azure DevOps."""
    settings = _load_settings()
    options = _build_options(settings, name, out, alias)
    if comment is not None:
        options.comment = comment
    if passphrase:
        options.passphrase = passphrase
    if clipboard is not None:
        options.copy_to_clipboard = clipboard
    if ssh_config is not None:
        options.generate_config = ssh_config
    if key_size:
        options.key_size = int(key_size)

    if '\n' in options.comment or '\r' in options.comment:
        click.secho("❌ Error: comment must be a single line", fg='red', err=True)
        sys.exit(1)

    key_paths = (options.private_key_path, options.public_key_path, options.encrypted_key_path)
    existing = [p for p in key_paths if p and p.exists()]
    if existing and not force:
        click.secho(f"❌ Error: Key already exists: {existing[0]}", fg='red', err=True)
        click.echo("Use --force to overwrite")
        sys.exit(1)

    activity_log = ActivityLog.in_dir(default_config_dir())
    reporter = ClickReporter()

    click.secho("🔑 Generating RSA key pair for Azure DevOps...", fg='yellow', bold=True)
    try:
        result = generate_keys(options, reporter, activity_log)
    except (RuntimeError, OSError) as e:
        activity_log.log_event(f'Error: {e}', level='ERROR')
        reporter.error(f"Error: {e}")
        sys.exit(1)

    activity_log.log_event(f'Key pair generated: {result.private_key_path}')
    show_results(reporter, result, options)

    if not options.copy_to_clipboard:
        offer_clipboard_copy(reporter, result)

    click.echo("\n✅ Happy coding!")


@main.command('update-config')
@click.option('--name', '-n', help='Base filename of an existing key  [default: id_rsa_ado]')
@click.option('--out', '-o', type=click.Path(file_okay=False),
              help='Directory holding the key and config  [default: ~/.ssh]')
@click.option('--alias', help='Host alias for the SSH config entry  [default: dev.azure.com]')
def update_config(name, out, alias):
    """Add or refresh the Azure DevOps Host entry for an existing key."""
    settings = _load_settings()
    options = _build_options(settings, name, out, alias)

    if not options.private_key_path.exists():
        click.secho(f"❌ Error: Key not found: {options.private_key_path}", fg='red', err=True)
        sys.exit(1)

    activity_log = ActivityLog.in_dir(default_config_dir())
    reporter = ClickReporter()
    if not update_ssh_config(options, reporter, activity_log):
        sys.exit(1)

    reporter.success(f"SSH config updated: {options.config_path} ({options.host_alias})")
