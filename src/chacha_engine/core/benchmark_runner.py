import gc
import logging
import traceback
from datetime import datetime

from .metrics import BenchmarkMetrics
from .results import calculate_aggregated_metrics, save_results
from .utils import generate_dataset, load_dataset, parse_size

logger = logging.getLogger("ChaChaEngine")

DEFAULT_DATASET_SIZE = "64KB"


def get_key_size_bytes(key):
    # keys are 8 words of 4 bytes
    try:
        return len(key) * 4
    except TypeError:
        logger.warning(f"Could not determine key size for key of type {type(key).__name__}")
        return 32


def get_enabled_methods(config, implementations):
    # expand the "encryption_methods" section into (implementation name, settings) pairs
    params = config.get("test_parameters", {})
    use_stdlib = params.get("use_stdlib", True)
    use_custom = params.get("use_custom", True)

    enabled_methods = []
    for method_name, settings in config.get("encryption_methods", {}).items():
        if not settings.get("enabled", False):
            continue

        if method_name != "chacha20":
            logger.warning(f"Unsupported encryption method '{method_name}'. Skipping.")
            continue

        if use_stdlib:
            std_settings = dict(settings, is_custom=False)
            enabled_methods.append(("chacha20", std_settings))
            if settings.get("include_cryptography", True):
                enabled_methods.append(("chacha20_cryptography", std_settings))

        if use_custom:
            enabled_methods.append(("chacha20_custom", dict(settings, is_custom=True)))

    return [(name, settings) for name, settings in enabled_methods if _known(name, implementations)]


def _known(name, implementations):
    if name not in implementations:
        logger.warning(f"No implementation found for {name}. Skipping.")
        return False
    return True


def run_iteration(implementation, data, counter, iteration_number):
    # time keygen, encryption and decryption once
    metrics = BenchmarkMetrics()

    key = metrics.measure_keygen(implementation.generate_key)
    metrics.set_algorithm_metadata(implementation, get_key_size_bytes(key))
    nonce = implementation.generate_nonce()

    ciphertext = metrics.measure_encrypt(implementation.encrypt, data, key, nonce, counter)
    metrics.measure_decrypt(implementation.decrypt, ciphertext, key, data, nonce, counter)

    return metrics.to_dict(iteration_number)


def run_benchmarks(config, implementations):
    # get session information
    try:
        session_dir = config["session_info"]["session_dir"]
        session_id = config["session_info"]["session_id"]
        iterations = int(config["test_parameters"]["iterations"])
    except (KeyError, TypeError, ValueError) as e:
        logger.error(f"Invalid benchmark configuration: {e}")
        return False

    logger.info(f"Starting ChaCha20 benchmarks for session {session_id}")

    params = config["test_parameters"]
    counter = params.get("counter", 1)
    dataset_path = params.get("dataset_path")

    if dataset_path:
        data = load_dataset(dataset_path)
        if data is None:
            logger.error("Failed to load dataset. Aborting.")
            return False
    else:
        data = generate_dataset(parse_size(params.get("dataset_size", DEFAULT_DATASET_SIZE)))

    dataset_size_bytes = len(data)
    logger.info(f"Dataset ready: {dataset_size_bytes / (1024*1024):.2f} MB")

    enabled_methods = get_enabled_methods(config, implementations)
    if not enabled_methods:
        logger.error("No encryption methods enabled in configuration. Aborting.")
        return False

    logger.info(f"Enabled methods for benchmarking: {[method for method, _ in enabled_methods]}")

    results = {
        "timestamp": datetime.now().isoformat(),
        "session_id": session_id,
        "language": "python",
        "dataset": {
            "path": dataset_path,
            "size_bytes": dataset_size_bytes,
        },
        "test_configuration": {
            "iterations": iterations,
            "counter": counter,
            "use_stdlib_implementations": params.get("use_stdlib", True),
            "use_custom_implementations": params.get("use_custom", True),
        },
        "encryption_results": {},
    }

    for method_name, settings in enabled_methods:
        implementation = implementations[method_name](**settings)
        logger.info(f"Running benchmark for {implementation.description}")

        iteration_results = []
        for i in range(iterations):
            logger.info(f"Running iteration {i+1}/{iterations} for {implementation.description}")
            try:
                iteration_results.append(run_iteration(implementation, data, counter, i + 1))
            except Exception as e:
                logger.error(f"Error in iteration {i+1} for {method_name}: {str(e)}")
                logger.debug(traceback.format_exc())
            gc.collect()

        results["encryption_results"][method_name] = {
            "algorithm": implementation.name,
            "description": implementation.description,
            "is_custom": getattr(implementation, "is_custom", False),
            "iterations": iteration_results,
            "aggregated_metrics": calculate_aggregated_metrics(iteration_results, dataset_size_bytes),
        }

    results["results_path"] = save_results(results, session_dir, session_id)
    logger.info(f"ChaCha20 benchmarks completed for session {session_id}")
    return results
