# Encoding and display helpers

from .encoding import bytes_to_hex, hex_to_bytes, proof_to_hex, proof_from_hex

__all__ = [
    'bytes_to_hex',
    'hex_to_bytes',
    'proof_to_hex',
    'proof_from_hex',
]
