"""OpenSSH public key encoding (RFC 4253 wire format)."""

import base64
import struct

KEY_TYPE = 'ssh-rsa'


def normalize_mpint(value: bytes) -> bytes:
    """Strip leading zero bytes, keeping at least one byte."""
    i = 0
    while i < len(value) - 1 and value[i] == 0:
        i += 1
    return value[i:]


def ssh_string(data: bytes) -> bytes:
    """Encode bytes as an SSH string: uint32 length + raw bytes."""
    return struct.pack('>I', len(data)) + data


def ssh_mpint(value: bytes) -> bytes:
    """Encode a non-negative big-endian integer as an SSH mpint.

    A 0x00 byte is prepended when the high bit is set so the value
    reads as positive in two's complement.
    """
    value = normalize_mpint(value)
    if value and value[0] & 0x80:
        value = b'\x00' + value
    return struct.pack('>I', len(value)) + value


def public_key_blob(modulus: bytes, exponent: bytes) -> bytes:
    """Build the ssh-rsa public key blob.

    Field order is key type, exponent, modulus.
    """
    return (
        ssh_string(KEY_TYPE.encode('ascii'))
        + ssh_mpint(exponent)
        + ssh_mpint(modulus)
    )


def encode_public_key(modulus: bytes, exponent: bytes, comment: str = '') -> str:
    """Format an RSA public key as an OpenSSH authorized_keys line.

    Args:
        modulus: RSA modulus n, big-endian unsigned
        exponent: RSA public exponent e, big-endian unsigned
        comment: Free-text comment appended after the key (may be empty)

    Returns:
        'ssh-rsa <base64> <comment>' with trailing whitespace removed

    Raises:
        ValueError: If comment spans more than one line
    """
    if '\n' in comment or '\r' in comment:
        raise ValueError("Public key comment must not contain line breaks")

    payload = base64.b64encode(public_key_blob(modulus, exponent)).decode('ascii')
    return f'{KEY_TYPE} {payload} {comment}'.rstrip()
