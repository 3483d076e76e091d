import json

import pytest

from chacha_engine import encrypt
from chacha_engine.chacha.key_utils import bytes_from_words, format_hex
from chacha_engine.python_core import DEMO_KEY, DEMO_MESSAGE, DEMO_NONCE, main

KEY_HEX = bytes(range(32)).hex()
NONCE_HEX = "000000000000004a00000000"


def test_demo_prints_ciphertext_and_plaintext(capsys):
    assert main(["demo"]) == 0
    out = capsys.readouterr().out.splitlines()

    expected = encrypt(DEMO_MESSAGE.encode(), DEMO_KEY, DEMO_NONCE, 0)
    assert "CHACHA20 CypherText" in out
    assert format_hex(expected) in out
    assert out[-2] == "CHACHA20 PlainText"
    assert out[-1] == DEMO_MESSAGE


def test_encrypt_text_prints_hex(capsys, rfc_key):
    assert main(["encrypt", "--key", KEY_HEX, "--nonce", NONCE_HEX, "--counter", "1", "--text", "hello"]) == 0
    out = capsys.readouterr().out.strip()
    assert out == format_hex(encrypt(b"hello", rfc_key, [0, 0x4a000000, 0], 1))


def test_decrypt_hex_to_text(capsys, rfc_key):
    ciphertext = encrypt("grüße".encode("utf-8"), rfc_key, [0, 0x4a000000, 0], 0x10)
    args = ["decrypt", "--key", KEY_HEX, "--nonce", NONCE_HEX, "--counter", "0x10",
            "--hex", ciphertext.hex(), "--text-output"]
    assert main(args) == 0
    assert capsys.readouterr().out.strip() == "grüße"


def test_file_round_trip(tmp_path):
    source = tmp_path / "plain.bin"
    encrypted = tmp_path / "cipher.bin"
    restored = tmp_path / "restored.bin"
    source.write_bytes(bytes(range(256)) * 3)

    common = ["--key", KEY_HEX, "--nonce", NONCE_HEX]
    assert main(["encrypt", *common, "--input", str(source), "--output", str(encrypted)]) == 0
    assert encrypted.read_bytes() != source.read_bytes()
    assert main(["decrypt", *common, "--input", str(encrypted), "--output", str(restored)]) == 0
    assert restored.read_bytes() == source.read_bytes()


def test_bad_key_returns_error(capsys):
    assert main(["encrypt", "--key", "abcd", "--nonce", NONCE_HEX, "--text", "x"]) == 1


def test_missing_input_file_returns_error(tmp_path):
    assert main(["encrypt", "--key", KEY_HEX, "--nonce", NONCE_HEX, "--input", str(tmp_path / "nope")]) == 1


def test_key_is_required():
    with pytest.raises(SystemExit):
        main(["encrypt", "--nonce", NONCE_HEX, "--text", "x"])


def test_counter_must_fit_32_bits():
    with pytest.raises(SystemExit):
        main(["encrypt", "--key", KEY_HEX, "--nonce", NONCE_HEX, "--counter", str(1 << 32), "--text", "x"])


def test_benchmark_command(tmp_path):
    config = {
        "session_info": {"session_dir": str(tmp_path), "session_id": "cli"},
        "test_parameters": {"iterations": 1, "dataset_size": "256B", "use_stdlib": False},
        "encryption_methods": {"chacha20": {"enabled": True}},
    }
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps(config))

    assert main(["--log-level", "WARNING", "benchmark", str(config_path)]) == 0
    assert (tmp_path / "results" / "chacha20_results_cli.json").exists()


def test_benchmark_command_bad_config(tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text("{not json")
    assert main(["benchmark", str(config_path)]) == 1


def test_demo_key_bytes_layout():
    # 0x01020304 is serialised little-endian
    assert bytes_from_words(DEMO_KEY)[:4] == b"\x04\x03\x02\x01"
