import pytest

from chacha_engine.chacha.key_utils import key_from_bytes


@pytest.fixture
def rfc_key():
    # 00 01 02 ... 1f
    return key_from_bytes(bytes(range(32)))


@pytest.fixture
def demo_key():
    return [0x01020304, 0x05060708, 0x090a0b0c, 0x0d0e0f10, 0x11121314, 0x15161718, 0x191a1b1c, 0x1d1e1f20]


@pytest.fixture
def demo_nonce():
    return [0x00000000, 0x4a000000, 0x00000000]
