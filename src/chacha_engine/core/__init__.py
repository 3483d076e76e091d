import logging

# configure logging
logger = logging.getLogger("ChaChaEngine")
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)

# import components
from .metrics import BenchmarkMetrics
from .utils import load_dataset, generate_dataset, parse_size
from .results import calculate_aggregated_metrics, save_results
from .registry import register_implementation, get_implementation, list_implementations, register_all_implementations
from .benchmark_runner import run_benchmarks

__all__ = [
    'BenchmarkMetrics',
    'load_dataset',
    'generate_dataset',
    'parse_size',
    'calculate_aggregated_metrics',
    'save_results',
    'register_implementation',
    'get_implementation',
    'list_implementations',
    'register_all_implementations',
    'run_benchmarks',
]
