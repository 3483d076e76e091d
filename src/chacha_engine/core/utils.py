"""
Dataset helpers for the benchmark runner.
"""

import os
import gc
import logging

import psutil

# Setup logging
logger = logging.getLogger("ChaChaEngine")


def parse_size(size_text, default=1024 * 1024):
    """
    Parse a human readable size such as ``"64KB"`` or ``"1MB"``.

    Plain integers are taken as bytes. Unknown formats fall back to ``default``.
    """
    if isinstance(size_text, int):
        return size_text

    text = str(size_text).strip().upper()
    try:
        if text.endswith("KB"):
            return int(text[:-2]) * 1024
        if text.endswith("MB"):
            return int(text[:-2]) * 1024 * 1024
        if text.endswith("B"):
            return int(text[:-1])
        return int(text)
    except ValueError:
        logger.warning(f"Could not parse size '{size_text}', using {default} bytes")
        return default


def load_dataset(dataset_path):
    """
    Load a dataset file into memory.

    Args:
        dataset_path: Path to the dataset file

    Returns:
        The file content as bytes, or None if it could not be read
    """
    try:
        file_size = os.path.getsize(dataset_path)
        logger.info(f"Loading dataset ({file_size / (1024*1024):.2f} MB) from {dataset_path}")

        available_mem = psutil.virtual_memory().available
        if file_size > available_mem * 0.6:
            logger.warning(
                f"Dataset size ({file_size / (1024*1024):.2f} MB) is large relative to "
                f"available memory ({available_mem / (1024*1024):.2f} MB). "
                f"Consider using a smaller dataset."
            )

        with open(dataset_path, 'rb') as f:
            data = f.read()

        gc.collect()
        return data
    except OSError as e:
        logger.error(f"Error loading dataset: {str(e)}")
        return None


def generate_dataset(size_bytes):
    # random bytes for runs without a dataset file
    logger.info(f"Generating random dataset of {size_bytes} bytes")
    return os.urandom(size_bytes)
