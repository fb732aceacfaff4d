"""OpenSSH client config management.

Only the narrow 'Host <alias>' block shape is understood: a block starts at
a Host line and runs until the next Host line or end of file.
"""

from pathlib import Path
from typing import Optional

DEFAULT_ALIAS = 'dev.azure.com'
DEFAULT_HOST_NAME = 'ssh.dev.azure.com'
DEFAULT_USER = 'git'


def _host_alias(line: str) -> Optional[str]:
    """Return the first pattern of a Host line, or None for any other line."""
    tokens = line.strip().split()
    if len(tokens) >= 2 and tokens[0] == 'Host':
        return tokens[1]
    return None


def merge_host_block(existing_text: str, alias: str, block_text: str) -> str:
    """Insert or replace the Host block for alias.

    The first block for alias is replaced in place; any later duplicates are
    dropped. All other lines keep their content and order. When no block
    exists, the new one is appended.

    Args:
        existing_text: Current config file content (may be empty)
        alias: Host alias, matched case-sensitively
        block_text: Replacement block, starting with its Host line

    Returns:
        Updated config text. Applying the same merge again is a no-op.
    """
    block_lines = block_text.rstrip().splitlines(keepends=True)
    while block_lines and not block_lines[0].strip():
        block_lines.pop(0)
    block = ''.join(block_lines) + '\n'

    output = []
    inside_target = False
    found = False

    for line in existing_text.splitlines(keepends=True):
        line_alias = _host_alias(line)

        if line_alias == alias:
            if not found:
                output.append(block)
                found = True
            inside_target = True
            continue

        if inside_target and line_alias is not None:
            inside_target = False

        if not inside_target:
            output.append(line)

    if found:
        return ''.join(output)

    content = existing_text
    if content and not content.endswith(('\n', '\r')):
        content += '\n'
    return content + block


def build_host_block(identity_file, alias: str = DEFAULT_ALIAS,
                     host_name: str = DEFAULT_HOST_NAME,
                     user: str = DEFAULT_USER) -> str:
    """Render the Host block pointing an alias at a private key.

    Args:
        identity_file: Path to the private key
        alias: Host alias used by git remotes (e.g. git@dev.azure.com:...)
        host_name: Real SSH endpoint
        user: SSH login user

    Returns:
        Block text ending with a newline
    """
    # ssh accepts forward slashes on every platform
    identity_path = str(identity_file).replace('\\', '/')
    return (
        f"Host {alias}\n"
        f"  # Azure DevOps SSH configuration (generated by adokeys)\n"
        f"  HostName {host_name}\n"
        f"  User {user}\n"
        f"  IdentityFile {identity_path}\n"
        f"  IdentitiesOnly yes\n"
    )


def update_config_file(config_path: Path, alias: str, block_text: str) -> None:
    """Merge a Host block into an SSH config file on disk.

    A missing file is treated as empty. I/O errors propagate.

    Args:
        config_path: Path to the SSH config file
        alias: Host alias of the block
        block_text: Block to insert or replace
    """
    existing = ''
    if config_path.exists():
        with open(config_path, encoding='utf-8', newline='') as f:
            existing = f.read()

    updated = merge_host_block(existing, alias, block_text)

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, 'w', encoding='utf-8', newline='') as f:
        f.write(updated)
