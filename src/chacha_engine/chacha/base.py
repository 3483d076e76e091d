import os

from .key_utils import KEY_WORDS, NONCE_WORDS, words_from_bytes

# max input size handled in a single library call
MAX_INPUT_SIZE = 16 * 1024 * 1024  # 16MB


class ChaCha20ImplementationBase:
    # base class for chacha20 variants

    def __init__(self, key_size="256", **kwargs):
        self.key_size = int(key_size)
        if self.key_size != 256:
            raise ValueError(f"ChaCha20 only supports 256-bit keys, got {self.key_size}")
        self.name = "ChaCha20"
        self.description = f"ChaCha20 with {key_size}-bit key"
        self.is_custom = False
        self.key = None
        self.nonce = None

    def generate_key(self):
        # random key words for benchmarking, callers must bring their own keys otherwise
        self.key = words_from_bytes(os.urandom(KEY_WORDS * 4))
        return self.key

    def generate_nonce(self):
        # random nonce words for benchmarking
        self.nonce = words_from_bytes(os.urandom(NONCE_WORDS * 4))
        return self.nonce

    def encrypt(self, data, key, nonce, counter=0):
        # encrypt data using the specified key, nonce and starting counter
        raise NotImplementedError("Subclasses must implement this method")

    def decrypt(self, ciphertext, key, nonce, counter=0):
        # decrypt data using the specified key, nonce and starting counter
        raise NotImplementedError("Subclasses must implement this method")
