import json
import os

from chacha_engine.core import (
    BenchmarkMetrics,
    calculate_aggregated_metrics,
    parse_size,
    register_all_implementations,
    run_benchmarks,
)
from chacha_engine.core.benchmark_runner import get_enabled_methods
from chacha_engine.chacha import create_custom_chacha20_implementation


def make_config(tmp_path, **params):
    test_parameters = {"iterations": 2, "dataset_size": "1KB", "counter": 1}
    test_parameters.update(params)
    return {
        "session_info": {"session_dir": str(tmp_path), "session_id": "test"},
        "test_parameters": test_parameters,
        "encryption_methods": {"chacha20": {"enabled": True}},
    }


def test_parse_size():
    assert parse_size("64KB") == 64 * 1024
    assert parse_size("2MB") == 2 * 1024 * 1024
    assert parse_size("100B") == 100
    assert parse_size("512") == 512
    assert parse_size(10) == 10
    assert parse_size("lots", default=7) == 7


def test_metrics_measure_round_trip(demo_key, demo_nonce):
    impl = create_custom_chacha20_implementation()
    metrics = BenchmarkMetrics()
    metrics.set_algorithm_metadata(impl, 32)

    data = os.urandom(300)
    ciphertext = metrics.measure_encrypt(impl.encrypt, data, demo_key, demo_nonce, 0)
    metrics.measure_decrypt(impl.decrypt, ciphertext, demo_key, data, demo_nonce, 0)

    result = metrics.to_dict()
    assert result["input_size_bytes"] == 300
    assert result["ciphertext_size_bytes"] == 300
    assert result["decrypted_size_bytes"] == 300
    assert result["correctness_passed"] is True
    assert result["encrypt_time_ns"] > 0
    assert result["num_rounds"] == 20
    assert result["library_version"] == "custom"
    assert result["key_size_bits"] == 256


def test_metrics_flag_wrong_decryption(demo_key, demo_nonce):
    metrics = BenchmarkMetrics()
    metrics.measure_decrypt(lambda data, key: data, b"abc", demo_key, b"xyz")
    assert metrics.correctness_passed is False


def test_aggregated_metrics():
    iterations = [
        {"encrypt_time_ns": 1_000_000_000, "decrypt_time_ns": 2_000_000_000, "key_size_bytes": 32,
         "ciphertext_size_bytes": 1024, "correctness_passed": True, "num_rounds": 20},
        {"encrypt_time_ns": 3_000_000_000, "decrypt_time_ns": 2_000_000_000, "key_size_bytes": 32,
         "ciphertext_size_bytes": 1024, "correctness_passed": False},
    ]
    result = calculate_aggregated_metrics(iterations, 1024)
    assert result["iterations_completed"] == 2
    assert result["avg_encrypt_time_s"] == 2.0
    assert result["avg_encrypt_throughput_bps"] == 512
    assert result["avg_ciphertext_overhead_percent"] == 0
    assert result["all_correctness_checks_passed"] is False
    assert result["correctness_failures"] == 1
    assert result["total_num_keys"] == 2
    assert result["num_rounds"] == 20
    assert calculate_aggregated_metrics([], 10) == {}


def test_enabled_methods_follow_flags(tmp_path):
    implementations = register_all_implementations()

    names = [name for name, _ in get_enabled_methods(make_config(tmp_path), implementations)]
    assert names == ["chacha20", "chacha20_cryptography", "chacha20_custom"]

    custom_only = make_config(tmp_path, use_stdlib=False)
    assert [name for name, _ in get_enabled_methods(custom_only, implementations)] == ["chacha20_custom"]

    disabled = make_config(tmp_path)
    disabled["encryption_methods"]["chacha20"]["enabled"] = False
    assert get_enabled_methods(disabled, implementations) == []


def test_run_benchmarks_writes_results(tmp_path):
    results = run_benchmarks(make_config(tmp_path), register_all_implementations())

    assert set(results["encryption_results"]) == {"chacha20", "chacha20_cryptography", "chacha20_custom"}
    for entry in results["encryption_results"].values():
        assert entry["algorithm"] == "ChaCha20"
        assert len(entry["iterations"]) == 2
        assert entry["aggregated_metrics"]["all_correctness_checks_passed"] is True

    with open(results["results_path"]) as f:
        saved = json.load(f)
    assert saved["dataset"]["size_bytes"] == 1024


def test_run_benchmarks_with_dataset_file(tmp_path):
    dataset = tmp_path / "data.bin"
    dataset.write_bytes(os.urandom(200))
    config = make_config(tmp_path, dataset_path=str(dataset), use_stdlib=False, iterations=1)

    results = run_benchmarks(config, register_all_implementations())
    assert results["dataset"]["size_bytes"] == 200


def test_run_benchmarks_rejects_bad_config(tmp_path):
    implementations = register_all_implementations()
    assert run_benchmarks({"test_parameters": {}}, implementations) is False

    missing = make_config(tmp_path, dataset_path=str(tmp_path / "missing.bin"))
    assert run_benchmarks(missing, implementations) is False

    nothing = make_config(tmp_path)
    nothing["encryption_methods"] = {}
    assert run_benchmarks(nothing, implementations) is False
