#!/usr/bin/env python3
"""
ChaCha20 Engine - command line entry point.

Subcommands:
    demo       encrypt and decrypt a fixed sample message, print hex and text
    encrypt    xor input with the ChaCha20 keystream (hex key/nonce required)
    decrypt    same operation as encrypt
    benchmark  run the benchmark described by a JSON configuration file
"""

import sys
import json
import logging
import argparse

from chacha_engine.chacha.custom_chacha20 import chacha20_decrypt, chacha20_encrypt
from chacha_engine.chacha.key_utils import format_hex, key_from_hex, nonce_from_hex, parse_hex
from chacha_engine.core.registry import register_all_implementations
from chacha_engine.core.benchmark_runner import run_benchmarks

# setup logging
logger = logging.getLogger("ChaChaEngine")

# sample parameters for the demo only, never use these to protect real data
DEMO_MESSAGE = "Implementacion de ChaCha20 en MCXA153"
DEMO_KEY = [0x01020304, 0x05060708, 0x090a0b0c, 0x0d0e0f10, 0x11121314, 0x15161718, 0x191a1b1c, 0x1d1e1f20]
DEMO_NONCE = [0x00000000, 0x4a000000, 0x00000000]
DEMO_COUNTER = 0


def setup_logging(level="INFO"):
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    if not logger.handlers:
        ch = logging.StreamHandler()
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        ch.setFormatter(formatter)
        logger.addHandler(ch)


def run_demo(args):
    print("CHACHA20 example")
    print("(illustrative key and nonce, do not reuse them for real data)")

    message = DEMO_MESSAGE.encode("ascii")
    cipher_text = chacha20_encrypt(message, DEMO_KEY, DEMO_NONCE, DEMO_COUNTER)
    print("CHACHA20 CypherText")
    print(format_hex(cipher_text))

    plain_text = chacha20_decrypt(cipher_text, DEMO_KEY, DEMO_NONCE, DEMO_COUNTER)
    print("CHACHA20 PlainText")
    print(plain_text.decode("ascii"))

    if plain_text != message:
        logger.error("Round trip did not reproduce the original message")
        return 1
    return 0


def _read_input(args):
    if args.text is not None:
        return args.text.encode("utf-8")
    if args.hex is not None:
        return parse_hex(args.hex)
    with open(args.input, "rb") as f:
        return f.read()


def run_transform(args):
    try:
        key = key_from_hex(args.key)
        nonce = nonce_from_hex(args.nonce)
        data = _read_input(args)
        output = chacha20_encrypt(data, key, nonce, args.counter)
    except (ValueError, TypeError) as e:
        logger.error(f"Invalid arguments: {e}")
        return 1
    except OSError as e:
        logger.error(f"Could not read input: {e}")
        return 1

    logger.debug(f"Processed {len(data)} bytes starting at block {args.counter}")

    if args.output:
        try:
            with open(args.output, "wb") as f:
                f.write(output)
        except OSError as e:
            logger.error(f"Could not write output: {e}")
            return 1
        logger.info(f"Wrote {len(output)} bytes to {args.output}")
    elif args.text_output:
        print(output.decode("utf-8", errors="replace"))
    else:
        print(format_hex(output))
    return 0


def run_benchmark(args):
    # load configuration
    try:
        with open(args.config_file, 'r') as f:
            config = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Error loading configuration: {str(e)}")
        return 1

    implementations = register_all_implementations()
    result = run_benchmarks(config, implementations)
    if not result:
        return 1

    failed = [
        name for name, entry in result["encryption_results"].items()
        if not entry["aggregated_metrics"].get("all_correctness_checks_passed", False)
    ]
    if failed:
        logger.error(f"Benchmark correctness checks failed for: {', '.join(failed)}")
        return 1
    return 0


def _counter(text):
    value = int(text, 0)
    if not 0 <= value <= 0xFFFFFFFF:
        raise argparse.ArgumentTypeError("counter must fit in 32 bits")
    return value


def build_parser():
    parser = argparse.ArgumentParser(prog="chacha-engine", description="ChaCha20 stream cipher")
    parser.add_argument("--log-level", default="INFO", help="Logging level (DEBUG, INFO, WARNING, ERROR)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    demo = subparsers.add_parser("demo", help="Encrypt and decrypt a sample message")
    demo.set_defaults(func=run_demo)

    for name in ("encrypt", "decrypt"):
        sub = subparsers.add_parser(name, help=f"{name.capitalize()} data with ChaCha20")
        sub.add_argument("--key", required=True, help="256-bit key as 64 hex characters")
        sub.add_argument("--nonce", required=True, help="96-bit nonce as 24 hex characters")
        sub.add_argument("--counter", type=_counter, default=0, help="Initial block counter (default 0)")
        source = sub.add_mutually_exclusive_group(required=True)
        source.add_argument("--text", help="UTF-8 text input")
        source.add_argument("--hex", help="Hex encoded input")
        source.add_argument("--input", help="Input file path")
        sub.add_argument("--output", help="Write raw output bytes to this file")
        sub.add_argument("--text-output", action="store_true", help="Print output decoded as UTF-8")
        sub.set_defaults(func=run_transform)

    bench = subparsers.add_parser("benchmark", help="Run benchmarks from a JSON config")
    bench.add_argument("config_file", help="Path to the test configuration JSON file")
    bench.set_defaults(func=run_benchmark)

    return parser


def main(argv=None):
    # main entry point
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
