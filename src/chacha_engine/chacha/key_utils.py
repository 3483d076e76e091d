import struct
import binascii
from typing import List, Sequence

# sizes in 32-bit words
KEY_WORDS = 8
NONCE_WORDS = 3
STATE_WORDS = 16

WORD_MASK = 0xFFFFFFFF


def _check_words(words: Sequence[int], expected: int, label: str) -> List[int]:
    # validate a fixed-length sequence of u32 words and return a list copy
    if isinstance(words, (bytes, bytearray, memoryview, str)):
        raise TypeError(f"ChaCha20 {label} must be a sequence of {expected} 32-bit words, not {type(words).__name__}")

    words = list(words)
    if len(words) != expected:
        raise ValueError(f"ChaCha20 {label} must be exactly {expected} words, got {len(words)}")

    for word in words:
        if not isinstance(word, int) or isinstance(word, bool):
            raise TypeError(f"ChaCha20 {label} words must be integers, got {type(word).__name__}")
        if word < 0 or word > WORD_MASK:
            raise ValueError(f"ChaCha20 {label} word out of range: {word:#x}")

    return words


def validate_key(key: Sequence[int]) -> List[int]:
    return _check_words(key, KEY_WORDS, "key")


def validate_nonce(nonce: Sequence[int]) -> List[int]:
    return _check_words(nonce, NONCE_WORDS, "nonce")


def validate_counter(counter: int) -> int:
    if not isinstance(counter, int) or isinstance(counter, bool):
        raise TypeError(f"ChaCha20 counter must be an integer, got {type(counter).__name__}")
    if counter < 0 or counter > WORD_MASK:
        raise ValueError(f"ChaCha20 counter must fit in 32 bits, got {counter}")
    return counter


def words_from_bytes(data: bytes) -> List[int]:
    # convert little-endian bytes to 32-bit words
    if len(data) % 4 != 0:
        raise ValueError(f"Byte length must be a multiple of 4, got {len(data)}")
    return list(struct.unpack(f"<{len(data) // 4}I", data))


def bytes_from_words(words: Sequence[int]) -> bytes:
    # convert 32-bit words to little-endian bytes
    return struct.pack(f"<{len(words)}I", *words)


def key_from_bytes(key: bytes) -> List[int]:
    if len(key) != KEY_WORDS * 4:
        raise ValueError("ChaCha20 key must be 32 bytes")
    return words_from_bytes(key)


def nonce_from_bytes(nonce: bytes) -> List[int]:
    if len(nonce) != NONCE_WORDS * 4:
        raise ValueError("ChaCha20 nonce must be 12 bytes")
    return words_from_bytes(nonce)


def parse_hex(text: str) -> bytes:
    # accept "00 01 02", "00:01:02" or "000102"
    cleaned = "".join(ch for ch in text if ch not in " :\t\n")
    if cleaned.lower().startswith("0x"):
        cleaned = cleaned[2:]
    try:
        return binascii.unhexlify(cleaned)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid hex string: {e}") from e


def key_from_hex(text: str) -> List[int]:
    return key_from_bytes(parse_hex(text))


def nonce_from_hex(text: str) -> List[int]:
    return nonce_from_bytes(parse_hex(text))


def format_hex(data: bytes) -> str:
    """Render bytes as space separated two digit hex, e.g. ``"0a ff 10"``."""
    return " ".join(f"{b:02x}" for b in data)
