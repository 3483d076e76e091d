from .base import ChaCha20ImplementationBase, MAX_INPUT_SIZE
from .custom_chacha20 import (
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
from .implementation import (
    ChaCha20Implementation,
    CryptographyChaCha20Implementation,
    create_custom_chacha20_implementation,
    create_stdlib_chacha20_implementation,
    register_all_chacha20_variants,
    CHACHA_IMPLEMENTATIONS,
    register_chacha_variant
)

register_all_chacha20_variants()
