"""RSA key pair generation and assembly of the text artifacts."""

from dataclasses import dataclass
from typing import Optional

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from adokeys.openssh import encode_public_key
from adokeys.pem import ENCRYPTED_PRIVATE_KEY, RSA_PRIVATE_KEY, pem_encode

PUBLIC_EXPONENT = 65537
DEFAULT_KEY_SIZE = 4096


@dataclass(frozen=True)
class RawKeyMaterial:
    """Binary output of RSA key generation."""
    private_der: bytes                    # PKCS#1
    encrypted_der: Optional[bytes]        # PKCS#8, only when a passphrase was given
    modulus: bytes                        # big-endian unsigned
    exponent: bytes                       # big-endian unsigned


@dataclass(frozen=True)
class KeyMaterial:
    """Text artifacts for one generated key pair."""
    private_key_pem: str
    public_key_openssh: str
    key_name: str
    comment: str
    encrypted_private_key_pem: Optional[str] = None


def _int_to_bytes(value: int) -> bytes:
    return value.to_bytes(max(1, (value.bit_length() + 7) // 8), 'big')


def generate_raw_key_material(key_size: int = DEFAULT_KEY_SIZE,
                              passphrase: Optional[str] = None) -> RawKeyMaterial:
    """Generate an RSA key and export it as DER plus public numbers.

    Args:
        key_size: Modulus size in bits
        passphrase: If non-empty, also export an encrypted PKCS#8 key

    Returns:
        RawKeyMaterial for assemble_key_material()

    Raises:
        RuntimeError: If the key cannot be generated (e.g. unsupported size)
    """
    try:
        key = rsa.generate_private_key(
            public_exponent=PUBLIC_EXPONENT,
            key_size=key_size,
        )
    except (ValueError, TypeError) as e:
        raise RuntimeError(f"RSA key generation failed: {e}") from e

    private_der = key.private_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    )

    encrypted_der = None
    if passphrase:
        encrypted_der = key.private_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.BestAvailableEncryption(
                passphrase.encode('utf-8')
            ),
        )

    numbers = key.public_key().public_numbers()
    return RawKeyMaterial(
        private_der=private_der,
        encrypted_der=encrypted_der,
        modulus=_int_to_bytes(numbers.n),
        exponent=_int_to_bytes(numbers.e),
    )


def assemble_key_material(private_der: bytes, encrypted_der: Optional[bytes],
                          modulus: bytes, exponent: bytes,
                          key_name: str, comment: str) -> KeyMaterial:
    """Encode raw key material as PEM and OpenSSH text.

    The encrypted PEM is produced only when encrypted_der is given.
    """
    encrypted_pem = None
    if encrypted_der is not None:
        encrypted_pem = pem_encode(ENCRYPTED_PRIVATE_KEY, encrypted_der)

    return KeyMaterial(
        private_key_pem=pem_encode(RSA_PRIVATE_KEY, private_der),
        public_key_openssh=encode_public_key(modulus, exponent, comment),
        key_name=key_name,
        comment=comment,
        encrypted_private_key_pem=encrypted_pem,
    )


def generate_key_pair(key_name: str, comment: str, passphrase: Optional[str] = None,
                      key_size: int = DEFAULT_KEY_SIZE) -> KeyMaterial:
    """Generate a new RSA key pair and return its text artifacts.

    Example:
        >>> material = generate_key_pair('id_rsa_ado', 'AzureDevOps')
        >>> material.public_key_openssh.startswith('ssh-rsa ')
        True
    """
    raw = generate_raw_key_material(key_size, passphrase)
    return assemble_key_material(
        raw.private_der,
        raw.encrypted_der,
        raw.modulus,
        raw.exponent,
        key_name,
        comment,
    )
