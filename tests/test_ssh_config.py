from pathlib import Path, PureWindowsPath

import pytest

from adokeys.ssh_config import build_host_block, merge_host_block, update_config_file

ALIAS = 'dev.azure.com'

BLOCK = (
    "Host dev.azure.com\n"
    "  HostName ssh.dev.azure.com\n"
    "  User git\n"
    "  IdentityFile ~/.ssh/id_rsa_ado\n"
    "  IdentitiesOnly yes\n"
)

ALPHA = (
    "# personal\n"
    "Host alpha\n"
    "  HostName alpha.example.com\n"
    "\n"
)

OLD_AZURE = (
    "Host dev.azure.com\n"
    "  HostName ssh.dev.azure.com\n"
    "  IdentityFile ~/.ssh/old_key\n"
)


def test_merge_into_empty_text_is_exactly_the_block():
    """Should not add a leading blank line"""
    assert merge_host_block('', ALIAS, BLOCK) == BLOCK


def test_merge_is_idempotent():
    """Merging the same block twice equals merging once"""
    for text in ['', ALPHA, ALPHA + OLD_AZURE, OLD_AZURE + ALPHA, "Host alpha"]:
        once = merge_host_block(text, ALIAS, BLOCK)
        assert merge_host_block(once, ALIAS, BLOCK) == once


def test_merge_replaces_only_target_block():
    """The alpha block and its surroundings stay untouched"""
    result = merge_host_block(ALPHA + OLD_AZURE, ALIAS, BLOCK)

    assert result == ALPHA + BLOCK
    assert 'old_key' not in result


def test_merge_keeps_following_blocks():
    """The next Host line ends the replaced block and is kept"""
    result = merge_host_block(OLD_AZURE + "Host alpha\n  User bob\n", ALIAS, BLOCK)

    assert result == BLOCK + "Host alpha\n  User bob\n"


def test_merge_appends_when_alias_missing():
    result = merge_host_block(ALPHA, ALIAS, BLOCK)
    assert result == ALPHA + BLOCK


def test_merge_adds_newline_before_append_when_missing():
    """Prior content without trailing newline gets exactly one separator"""
    result = merge_host_block("Host alpha\n  User bob", ALIAS, BLOCK)
    assert result == "Host alpha\n  User bob\n" + BLOCK


def test_merge_trims_trailing_blank_lines_of_block():
    result = merge_host_block(OLD_AZURE, ALIAS, BLOCK + "\n\n  \n")
    assert result == BLOCK


def test_merge_removes_duplicate_target_blocks():
    """Only one block for the alias remains"""
    text = OLD_AZURE + "Host alpha\n  User bob\n" + OLD_AZURE
    result = merge_host_block(text, ALIAS, BLOCK)

    assert result.count('Host dev.azure.com') == 1
    assert result == BLOCK + "Host alpha\n  User bob\n"


def test_merge_drops_lines_up_to_next_host():
    """Comments between the old block and the next Host belong to the old block"""
    result = merge_host_block(OLD_AZURE + ALPHA, ALIAS, BLOCK)
    assert result == BLOCK + ALPHA.replace("# personal\n", "")


def test_merge_matches_alias_token_exactly():
    """An alias that merely starts with the target is a different host"""
    other = "Host dev.azure.com.mirror\n  User git\n"
    result = merge_host_block(other, ALIAS, BLOCK)

    assert result == other + BLOCK


def test_merge_is_case_sensitive():
    upper = "Host DEV.AZURE.COM\n  User git\n"
    assert merge_host_block(upper, ALIAS, BLOCK) == upper + BLOCK


def test_merge_recognises_indented_host_lines():
    text = "  Host dev.azure.com\n    User old\nHost alpha\n"
    assert merge_host_block(text, ALIAS, BLOCK) == BLOCK + "Host alpha\n"


def test_merge_handles_crlf_line_endings():
    """Windows line endings are kept for untouched lines"""
    text = "Host alpha\r\n  User bob\r\nHost dev.azure.com\r\n  User old\r\n"
    result = merge_host_block(text, ALIAS, BLOCK)

    assert result == "Host alpha\r\n  User bob\r\n" + BLOCK
    assert merge_host_block(result, ALIAS, BLOCK) == result


def test_merge_never_fails_on_odd_input():
    for text in ["\n\n\n", "Host", "Host \n", "\r", "garbage\x00text"]:
        result = merge_host_block(text, ALIAS, BLOCK)
        assert result.endswith(BLOCK)


def test_build_host_block_contains_directives():
    block = build_host_block(Path('/home/me/.ssh/id_rsa_ado'))
    lines = [line.strip() for line in block.splitlines()]

    assert lines[0] == 'Host dev.azure.com'
    assert 'HostName ssh.dev.azure.com' in lines
    assert 'User git' in lines
    assert 'IdentityFile /home/me/.ssh/id_rsa_ado' in lines
    assert 'IdentitiesOnly yes' in lines


def test_build_host_block_uses_forward_slashes():
    block = build_host_block(PureWindowsPath(r'C:\Users\me\.ssh\id_rsa_ado'))
    assert 'IdentityFile C:/Users/me/.ssh/id_rsa_ado' in block
    assert '\\' not in block


def test_build_host_block_custom_alias():
    block = build_host_block('/k', alias='ado-work', host_name='ssh.example.com', user='svc')

    assert block.startswith('Host ado-work\n')
    assert '  HostName ssh.example.com\n' in block
    assert '  User svc\n' in block


def test_update_config_file_creates_missing_file(tmp_path):
    config_path = tmp_path / 'ssh' / 'config'

    update_config_file(config_path, ALIAS, BLOCK)

    assert config_path.read_text() == BLOCK


def test_update_config_file_preserves_other_entries(tmp_path):
    config_path = tmp_path / 'config'
    config_path.write_text(ALPHA + OLD_AZURE)

    update_config_file(config_path, ALIAS, BLOCK)
    update_config_file(config_path, ALIAS, BLOCK)

    assert config_path.read_text() == ALPHA + BLOCK


def test_update_config_file_propagates_io_errors(tmp_path):
    """A directory in place of the config file is an I/O error"""
    config_path = tmp_path / 'config'
    config_path.mkdir()

    with pytest.raises(OSError):
        update_config_file(config_path, ALIAS, BLOCK)


def test_merge_drops_leading_blank_lines_of_block():
    """A block starting with blank lines does not grow on re-merge"""
    block = "\n  \nHost dev.azure.com\n  User git\n"

    once = merge_host_block("Host a\n", ALIAS, block)

    assert once == "Host a\nHost dev.azure.com\n  User git\n"
    assert merge_host_block(once, ALIAS, block) == once
