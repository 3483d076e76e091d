"""
Pure Python ChaCha20 stream cipher (RFC 8439 layout: 32-bit counter, 96-bit nonce).

Keys and nonces are taken as 32-bit words, 8 and 3 of them respectively.
This module only transforms bytes. It does not authenticate, it does not
generate keys or nonces, and it is not constant time.

Never encrypt two different messages with the same (key, nonce, counter)
triple: the keystream would be reused and XOR of the two ciphertexts leaks
the XOR of the plaintexts.
"""

import struct
from typing import List, Sequence, Tuple

from .key_utils import (
    STATE_WORDS,
    WORD_MASK,
    validate_counter,
    validate_key,
    validate_nonce,
)

# chacha20 block function constants
CHACHA_CONSTANTS = [0x61707865, 0x3320646e, 0x79622d32, 0x6b206574]  # "expand 32-byte k"

BLOCK_SIZE = 64
COUNTER_INDEX = 12
DOUBLE_ROUNDS = 10

COLUMN_ROUNDS = ((0, 4, 8, 12), (1, 5, 9, 13), (2, 6, 10, 14), (3, 7, 11, 15))
DIAGONAL_ROUNDS = ((0, 5, 10, 15), (1, 6, 11, 12), (2, 7, 8, 13), (3, 4, 9, 14))


def rotate_left(value: int, shift: int) -> int:
    # rotate a 32-bit integer left by shift bits
    if not 0 < shift < 32:
        raise ValueError(f"Rotation must be between 1 and 31 bits, got {shift}")
    return ((value << shift) | (value >> (32 - shift))) & WORD_MASK


def quarter_round_words(a: int, b: int, c: int, d: int) -> Tuple[int, int, int, int]:
    # quarter round on four loose words, returns the updated words
    # a += b; d ^= a; d <<<= 16;
    a = (a + b) & WORD_MASK
    d = rotate_left(d ^ a, 16)

    # c += d; b ^= c; b <<<= 12;
    c = (c + d) & WORD_MASK
    b = rotate_left(b ^ c, 12)

    # a += b; d ^= a; d <<<= 8;
    a = (a + b) & WORD_MASK
    d = rotate_left(d ^ a, 8)

    # c += d; b ^= c; b <<<= 7;
    c = (c + d) & WORD_MASK
    b = rotate_left(b ^ c, 7)

    return a, b, c, d


def quarter_round(state: List[int], a: int, b: int, c: int, d: int) -> None:
    # perform a quarter round in place on 4 state elements
    state[a], state[b], state[c], state[d] = quarter_round_words(state[a], state[b], state[c], state[d])


def build_state(key: Sequence[int], nonce: Sequence[int], counter: int) -> List[int]:
    # constants | key | counter | nonce
    return CHACHA_CONSTANTS + validate_key(key) + [validate_counter(counter)] + validate_nonce(nonce)


def chacha20_block(state: Sequence[int]) -> bytes:
    """
    Expand a 16-word state into one 64-byte keystream block.

    Runs 10 double rounds (columns then diagonals), adds the input state back
    in and serialises the words little-endian. ``state`` is left untouched.
    """
    if len(state) != STATE_WORDS:
        raise ValueError(f"ChaCha20 state must be {STATE_WORDS} words, got {len(state)}")

    working_state = list(state)

    for _ in range(DOUBLE_ROUNDS):
        for a, b, c, d in COLUMN_ROUNDS:
            quarter_round(working_state, a, b, c, d)
        for a, b, c, d in DIAGONAL_ROUNDS:
            quarter_round(working_state, a, b, c, d)

    # feed-forward
    output = [(working_state[i] + state[i]) & WORD_MASK for i in range(STATE_WORDS)]
    return struct.pack("<16I", *output)


def _as_bytes(data) -> bytes:
    if isinstance(data, str):
        raise TypeError("ChaCha20 operates on bytes, encode text first")
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"ChaCha20 input must be bytes-like, got {type(data).__name__}")
    return bytes(data)


def _keystream_xor(data: bytes, state: List[int]) -> bytes:
    out = bytearray(len(data))
    for i in range(0, len(data), BLOCK_SIZE):
        block = chacha20_block(state)
        chunk = data[i:i + BLOCK_SIZE]
        out[i:i + len(chunk)] = bytes(x ^ y for x, y in zip(chunk, block))
        # counter wraps modulo 2^32
        state[COUNTER_INDEX] = (state[COUNTER_INDEX] + 1) & WORD_MASK
    return bytes(out)


def chacha20_encrypt(data: bytes, key: Sequence[int], nonce: Sequence[int], counter: int = 0) -> bytes:
    # xor data with the keystream starting at block `counter`
    data = _as_bytes(data)
    state = build_state(key, nonce, counter)
    return _keystream_xor(data, state)


def chacha20_decrypt(data: bytes, key: Sequence[int], nonce: Sequence[int], counter: int = 0) -> bytes:
    # decryption is the same operation as encryption
    return chacha20_encrypt(data, key, nonce, counter)


def chacha20_encrypt_into(data: bytes, output, key: Sequence[int], nonce: Sequence[int], counter: int = 0) -> None:
    # same as chacha20_encrypt but writes into a caller-owned buffer
    data = _as_bytes(data)
    view = memoryview(output)
    if view.readonly:
        raise TypeError("Output buffer must be writable")
    # compare and write in bytes, whatever the item size of the buffer
    view = view.cast("B")
    if len(view) != len(data):
        raise ValueError(f"Output buffer length {len(view)} does not match input length {len(data)}")
    view[:] = chacha20_encrypt(data, key, nonce, counter)


def chacha20_keystream(key: Sequence[int], nonce: Sequence[int], counter: int, length: int) -> bytes:
    # raw keystream bytes, i.e. the encryption of `length` zero bytes
    if length < 0:
        raise ValueError(f"Keystream length must be non-negative, got {length}")
    return chacha20_encrypt(bytes(length), key, nonce, counter)


class ChaCha20Engine:
    # stateless facade over the module functions
    name = "ChaCha20"
    rounds = 2 * DOUBLE_ROUNDS
    block_size = BLOCK_SIZE

    def encrypt(self, data: bytes, key: Sequence[int], nonce: Sequence[int], counter: int = 0) -> bytes:
        return chacha20_encrypt(data, key, nonce, counter)

    def decrypt(self, data: bytes, key: Sequence[int], nonce: Sequence[int], counter: int = 0) -> bytes:
        return chacha20_decrypt(data, key, nonce, counter)

    def keystream(self, key: Sequence[int], nonce: Sequence[int], counter: int, length: int) -> bytes:
        return chacha20_keystream(key, nonce, counter, length)
