import os
import json
import logging

# setup logging
logger = logging.getLogger("ChaChaEngine")


def safe_avg(values):
    # compute average safely handling empty lists and None values
    values = [v for v in values if v is not None]
    return sum(values) / len(values) if values else 0


def calculate_aggregated_metrics(iterations_data, dataset_size_bytes):
    # calculate aggregated metrics from iteration data
    if not iterations_data:
        return {}

    def column(name, default=0):
        return [data.get(name, default) for data in iterations_data]

    result = {
        "iterations_completed": len(iterations_data),
        "all_correctness_checks_passed": all(column("correctness_passed", True)),
        "correctness_failures": len([ok for ok in column("correctness_passed", True) if not ok]),
    }

    for phase in ("keygen", "encrypt", "decrypt"):
        times_ns = column(f"{phase}_time_ns")
        avg_time_ns = safe_avg(times_ns)
        avg_memory = safe_avg([m for m in column(f"{phase}_peak_memory_bytes") if m > 0])

        result[f"avg_{phase}_time_ns"] = avg_time_ns
        result[f"avg_{phase}_time_s"] = avg_time_ns / 1_000_000_000
        result[f"avg_{phase}_cpu_time_ns"] = safe_avg(column(f"{phase}_cpu_time_ns"))
        result[f"avg_{phase}_cpu_percent"] = safe_avg(column(f"{phase}_cpu_percent", 100))
        result[f"avg_{phase}_peak_memory_bytes"] = avg_memory
        result[f"avg_{phase}_peak_memory_mb"] = avg_memory / (1024 * 1024) if avg_memory > 0 else 0
        result[f"total_{phase}_time_ns"] = sum(times_ns)

    # throughput, avoiding division by zero
    for phase in ("encrypt", "decrypt"):
        avg_time_s = result[f"avg_{phase}_time_s"]
        if avg_time_s > 0:
            result[f"avg_{phase}_throughput_bps"] = dataset_size_bytes / avg_time_s
            result[f"avg_throughput_{phase}_mb_per_s"] = (dataset_size_bytes / (1024 * 1024)) / avg_time_s
        else:
            result[f"avg_{phase}_throughput_bps"] = 0
            result[f"avg_throughput_{phase}_mb_per_s"] = 0

    # a stream cipher adds no ciphertext overhead
    avg_ciphertext_size_bytes = safe_avg(column("ciphertext_size_bytes"))
    result["avg_ciphertext_size_bytes"] = avg_ciphertext_size_bytes
    result["avg_ciphertext_overhead_percent"] = 0
    if dataset_size_bytes > 0 and avg_ciphertext_size_bytes > 0:
        result["avg_ciphertext_overhead_percent"] = (
            (avg_ciphertext_size_bytes - dataset_size_bytes) / dataset_size_bytes
        ) * 100

    key_sizes = [k for k in column("key_size_bytes") if k > 0]
    result["avg_key_size_bytes"] = safe_avg(key_sizes)
    result["total_num_keys"] = len(key_sizes)

    # operational metrics are constant across iterations
    first_iter = iterations_data[0]
    result["thread_count"] = first_iter.get("thread_count", 1)
    result["process_priority"] = first_iter.get("process_priority", 0)
    result["is_custom_implementation"] = first_iter.get("is_custom_implementation", False)
    result["library_version"] = first_iter.get("library_version", "PyCryptodome")
    for name in ("block_size_bytes", "nonce_size_bytes", "num_rounds"):
        if first_iter.get(name) is not None:
            result[name] = first_iter[name]

    return result


def save_results(results, session_dir, session_id):
    # save benchmark results to a JSON file
    try:
        results_dir = os.path.join(session_dir, "results")
        os.makedirs(results_dir, exist_ok=True)

        results_path = os.path.join(results_dir, f"chacha20_results_{session_id}.json")
        with open(results_path, 'w') as f:
            json.dump(results, f, indent=4)

        logger.info(f"Results saved to {results_path}")
        return results_path

    except OSError as e:
        logger.error(f"Failed to save results: {str(e)}")
        return None
