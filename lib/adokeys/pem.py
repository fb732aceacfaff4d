"""PEM text encoding for DER key material."""

import base64

RSA_PRIVATE_KEY = 'RSA PRIVATE KEY'
ENCRYPTED_PRIVATE_KEY = 'ENCRYPTED PRIVATE KEY'

# PEM body line length
LINE_LENGTH = 64


def pem_encode(label: str, der: bytes) -> str:
    """Wrap DER bytes in a labeled PEM block.

    Args:
        label: Block label, e.g. 'RSA PRIVATE KEY' (used verbatim)
        der: DER-encoded bytes

    Returns:
        PEM text, every line terminated with a newline

    Example:
        >>> pem_encode('X', b'\\x01\\x02')
        '-----BEGIN X-----\\nAQI=\\n-----END X-----\\n'
    """
    encoded = base64.b64encode(der).decode('ascii')
    lines = [f'-----BEGIN {label}-----']
    lines.extend(
        encoded[i:i + LINE_LENGTH] for i in range(0, len(encoded), LINE_LENGTH)
    )
    lines.append(f'-----END {label}-----')
    return '\n'.join(lines) + '\n'
