import struct
import logging

from Crypto.Cipher import ChaCha20 as CryptoChaCha20
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms

from .base import ChaCha20ImplementationBase, MAX_INPUT_SIZE
from .custom_chacha20 import BLOCK_SIZE, ChaCha20Engine
from .key_utils import (
    bytes_from_words,
    validate_counter,
    validate_key,
    validate_nonce,
)

logger = logging.getLogger("ChaChaEngine")

# dictionary to track implementations
CHACHA_IMPLEMENTATIONS = {}


def register_chacha_variant(name):
    # register a chacha20 implementation variant
    def decorator(impl_class):
        CHACHA_IMPLEMENTATIONS[name] = impl_class
        return impl_class
    return decorator


def _library_arguments(data, key, nonce, counter):
    # validate word inputs and convert them to the byte layout libraries expect
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"ChaCha20 input must be bytes-like, got {type(data).__name__}")
    key_bytes = bytes_from_words(validate_key(key))
    nonce_bytes = bytes_from_words(validate_nonce(nonce))
    counter = validate_counter(counter)

    # libraries refuse to wrap the 32-bit block counter
    blocks = (len(data) + BLOCK_SIZE - 1) // BLOCK_SIZE
    if counter + blocks > 1 << 32:
        raise ValueError("Message would wrap the 32-bit block counter")

    return key_bytes, nonce_bytes, counter


@register_chacha_variant("chacha20")
class ChaCha20Implementation(ChaCha20ImplementationBase):
    # chacha20 implementation with both library and custom options

    def __init__(self, key_size="256", **kwargs):
        super().__init__(key_size=key_size, **kwargs)
        self.is_custom = kwargs.get("is_custom", False)
        if self.is_custom:
            self.description = f"Custom ChaCha20 Implementation ({key_size}-bit key)"
            self.impl = ChaCha20Engine()
        else:
            self.description = f"PyCryptodome ChaCha20 Implementation ({key_size}-bit key)"

    def encrypt(self, data, key, nonce, counter=0):
        if self.is_custom:
            return self.impl.encrypt(data, key, nonce, counter)
        return self._lib_process(data, key, nonce, counter)

    def decrypt(self, ciphertext, key, nonce, counter=0):
        if self.is_custom:
            return self.impl.decrypt(ciphertext, key, nonce, counter)
        return self._lib_process(ciphertext, key, nonce, counter)

    def _lib_process(self, data, key, nonce, counter):
        # encrypt or decrypt using pycryptodome, the two are identical
        key_bytes, nonce_bytes, counter = _library_arguments(data, key, nonce, counter)

        cipher = CryptoChaCha20.new(key=key_bytes, nonce=nonce_bytes)
        cipher.seek(counter * BLOCK_SIZE)

        if len(data) <= MAX_INPUT_SIZE:
            return cipher.encrypt(bytes(data))

        # process in chunks, the cipher object keeps its keystream position
        result = bytearray()
        for i in range(0, len(data), MAX_INPUT_SIZE):
            result.extend(cipher.encrypt(bytes(data[i:i + MAX_INPUT_SIZE])))
        return bytes(result)


@register_chacha_variant("chacha20_cryptography")
class CryptographyChaCha20Implementation(ChaCha20ImplementationBase):
    # chacha20 backed by the cryptography package (OpenSSL)

    def __init__(self, key_size="256", **kwargs):
        super().__init__(key_size=key_size, **kwargs)
        self.description = f"cryptography ChaCha20 Implementation ({key_size}-bit key)"

    def _process(self, data, key, nonce, counter):
        key_bytes, nonce_bytes, counter = _library_arguments(data, key, nonce, counter)

        # 16-byte iv: little-endian counter followed by the 96-bit nonce
        iv = struct.pack("<I", counter) + nonce_bytes
        encryptor = Cipher(algorithms.ChaCha20(key_bytes, iv), mode=None).encryptor()
        return encryptor.update(bytes(data)) + encryptor.finalize()

    def encrypt(self, data, key, nonce, counter=0):
        return self._process(data, key, nonce, counter)

    def decrypt(self, ciphertext, key, nonce, counter=0):
        return self._process(ciphertext, key, nonce, counter)


def create_custom_chacha20_implementation(key_size="256"):
    return ChaCha20Implementation(key_size=key_size, is_custom=True)


def create_stdlib_chacha20_implementation(key_size="256"):
    return ChaCha20Implementation(key_size=key_size, is_custom=False)


def register_all_chacha20_variants():
    # register the custom and library variants under explicit names
    CHACHA_IMPLEMENTATIONS["chacha20_std"] = lambda **kwargs: create_stdlib_chacha20_implementation(
        key_size=kwargs.get("key_size", "256")
    )

    CHACHA_IMPLEMENTATIONS["chacha20_custom"] = lambda **kwargs: create_custom_chacha20_implementation(
        key_size=kwargs.get("key_size", "256")
    )

    logger.debug(f"ChaCha20 variants: {', '.join(CHACHA_IMPLEMENTATIONS.keys())}")
    return CHACHA_IMPLEMENTATIONS
