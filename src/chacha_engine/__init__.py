"""
ChaCha20 Engine - pure Python ChaCha20 stream cipher with library cross-checks
and a small benchmarking harness.
"""

from chacha_engine.chacha.custom_chacha20 import (
    ChaCha20Engine,
    build_state,
    chacha20_block,
    chacha20_decrypt,
    chacha20_encrypt,
    chacha20_encrypt_into,
    chacha20_keystream,
    quarter_round,
    quarter_round_words,
)
from chacha_engine.chacha.implementation import ChaCha20Implementation, CryptographyChaCha20Implementation
from chacha_engine.core.registry import register_all_implementations, list_implementations, get_implementation

__version__ = "0.1.0"

# encryption and decryption are the same xor operation
encrypt = chacha20_encrypt
decrypt = chacha20_decrypt

__all__ = [
    'encrypt',
    'decrypt',
    'ChaCha20Engine',
    'build_state',
    'chacha20_block',
    'chacha20_decrypt',
    'chacha20_encrypt',
    'chacha20_encrypt_into',
    'chacha20_keystream',
    'quarter_round',
    'quarter_round_words',
    'ChaCha20Implementation',
    'CryptographyChaCha20Implementation',
    'register_all_implementations',
    'list_implementations',
    'get_implementation',
]
