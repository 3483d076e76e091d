import time
import logging
import psutil

# setup logging
logger = logging.getLogger("ChaChaEngine")

_PSUTIL_ERRORS = (psutil.AccessDenied, AttributeError, OSError)


class _Snapshot:
    # process counters captured before and after a timed call

    def __init__(self, process, with_ctx):
        try:
            self.cpu_times = process.cpu_times()
        except _PSUTIL_ERRORS:
            self.cpu_times = None
        try:
            self.memory = process.memory_info()
        except _PSUTIL_ERRORS:
            self.memory = None
        try:
            self.ctx = process.num_ctx_switches() if with_ctx else None
        except _PSUTIL_ERRORS:
            self.ctx = None


class BenchmarkMetrics:
    PHASES = ("keygen", "encrypt", "decrypt")

    def __init__(self, process=None):
        # initialize with optional psutil process object
        self.process = process or psutil.Process()

        # check if context switches are available
        try:
            self.has_ctx_switches = hasattr(self.process, "num_ctx_switches") and self.process.num_ctx_switches() is not None
        except _PSUTIL_ERRORS:
            self.has_ctx_switches = False
            logger.warning("Context switch counters are not available - context switch metrics will not be collected")

        self.reset()

    def reset(self):
        # reset all metrics
        for phase in self.PHASES:
            setattr(self, f"{phase}_time_ns", 0)
            setattr(self, f"{phase}_cpu_time_ns", 0)
            setattr(self, f"{phase}_cpu_percent", 100)
            setattr(self, f"{phase}_peak_memory_bytes", 0)
            setattr(self, f"{phase}_allocated_memory_bytes", 0)
            setattr(self, f"{phase}_ctx_switches_voluntary", 0)
            setattr(self, f"{phase}_ctx_switches_involuntary", 0)

        self.input_size_bytes = 0
        self.ciphertext_size_bytes = 0
        self.decrypted_size_bytes = 0

        # additional metrics
        self.correctness_passed = True
        self.key_size_bytes = 0
        self.key_size_bits = 0
        self.thread_count = 1
        self.process_priority = 0

        # algorithm-specific metrics
        self.block_size_bytes = None
        self.nonce_size_bytes = None
        self.num_rounds = None
        self.is_custom_implementation = False
        self.library_version = "PyCryptodome"

    def set_algorithm_metadata(self, implementation, key_size_bytes):
        # set algorithm-specific metadata based on the implementation
        self.key_size_bytes = key_size_bytes
        self.key_size_bits = key_size_bytes * 8

        self.is_custom_implementation = getattr(implementation, 'is_custom', False)
        if self.is_custom_implementation:
            self.library_version = "custom"
        elif "cryptography" in getattr(implementation, 'description', ''):
            self.library_version = "cryptography"
        else:
            self.library_version = "PyCryptodome"

        # chacha20: 64-byte keystream blocks, 96-bit nonce, 20 rounds
        self.block_size_bytes = 64
        self.nonce_size_bytes = 12
        self.num_rounds = 20

        try:
            self.thread_count = self.process.num_threads()
        except _PSUTIL_ERRORS:
            self.thread_count = 1

        try:
            # nice value on Unix systems
            self.process_priority = self.process.nice()
        except _PSUTIL_ERRORS:
            self.process_priority = 0

    def _measure(self, phase, func, *args, **kwargs):
        initial = _Snapshot(self.process, self.has_ctx_switches)
        if initial.cpu_times is None:
            logger.warning("CPU time metrics are not available - CPU metrics will not be collected")

        # measure wall time with nanosecond precision
        start_time = time.perf_counter_ns()
        result = func(*args, **kwargs)
        end_time = time.perf_counter_ns()

        final = _Snapshot(self.process, self.has_ctx_switches)
        elapsed_ns = end_time - start_time
        setattr(self, f"{phase}_time_ns", elapsed_ns)

        if initial.cpu_times is not None and final.cpu_times is not None:
            total_cpu_time = (
                (final.cpu_times.user - initial.cpu_times.user)
                + (final.cpu_times.system - initial.cpu_times.system)
            )
            setattr(self, f"{phase}_cpu_time_ns", int(total_cpu_time * 1_000_000_000))

            wall_time_s = elapsed_ns / 1_000_000_000
            if wall_time_s > 0:
                setattr(self, f"{phase}_cpu_percent", (total_cpu_time / wall_time_s) * 100)

        if initial.ctx is not None and final.ctx is not None:
            setattr(self, f"{phase}_ctx_switches_voluntary", max(0, final.ctx.voluntary - initial.ctx.voluntary))
            setattr(self, f"{phase}_ctx_switches_involuntary", max(0, final.ctx.involuntary - initial.ctx.involuntary))

        if final.memory is not None:
            setattr(self, f"{phase}_peak_memory_bytes", final.memory.rss)
            if initial.memory is not None:
                setattr(self, f"{phase}_allocated_memory_bytes", max(0, final.memory.rss - initial.memory.rss))

        return result

    def measure_keygen(self, key_gen_func, *args, **kwargs):
        return self._measure("keygen", key_gen_func, *args, **kwargs)

    def measure_encrypt(self, encrypt_func, plaintext, key, *args, **kwargs):
        self.input_size_bytes = len(plaintext)
        ciphertext = self._measure("encrypt", encrypt_func, plaintext, key, *args, **kwargs)
        self.ciphertext_size_bytes = len(ciphertext)
        return ciphertext

    def measure_decrypt(self, decrypt_func, ciphertext, key, original_plaintext, *args, **kwargs):
        decrypted_text = self._measure("decrypt", decrypt_func, ciphertext, key, *args, **kwargs)
        self.decrypted_size_bytes = len(decrypted_text)
        self.correctness_passed = decrypted_text == original_plaintext
        if not self.correctness_passed:
            logger.error("Decrypted output does not match the original plaintext")
        return decrypted_text

    def to_dict(self, iteration_number=1):
        result = {"iteration": iteration_number}

        for phase in self.PHASES:
            for field in ("time_ns", "cpu_time_ns", "cpu_percent", "peak_memory_bytes",
                          "allocated_memory_bytes", "ctx_switches_voluntary", "ctx_switches_involuntary"):
                name = f"{phase}_{field}"
                result[name] = getattr(self, name)

        result.update({
            "key_size_bytes": self.key_size_bytes,
            "key_size_bits": self.key_size_bits,
            "thread_count": self.thread_count,
            "process_priority": self.process_priority,
            "input_size_bytes": self.input_size_bytes,
            "ciphertext_size_bytes": self.ciphertext_size_bytes,
            "decrypted_size_bytes": self.decrypted_size_bytes,
            "correctness_passed": self.correctness_passed,
            "is_custom_implementation": self.is_custom_implementation,
            "library_version": self.library_version,
        })

        # add algorithm-specific fields if available
        if self.block_size_bytes is not None:
            result["block_size_bytes"] = self.block_size_bytes
        if self.nonce_size_bytes is not None:
            result["nonce_size_bytes"] = self.nonce_size_bytes
        if self.num_rounds is not None:
            result["num_rounds"] = self.num_rounds

        return result
