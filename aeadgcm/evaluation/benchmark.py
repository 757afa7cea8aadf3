"""
Benchmark module for seal/open throughput.

Measures encryption and decryption time per message for every AES-GCM
key size, along with the process memory delta around each run.
"""

import gc
import statistics
import time
from dataclasses import dataclass, asdict
from typing import Dict, List, Optional

import psutil

from ..crypto.selector import CipherVariant
from ..crypto.utils import generate_random_bytes
from ..pipeline.decryptor import unseal
from ..pipeline.encryptor import seal

DEFAULT_MESSAGE_SIZES = [64, 256, 1024, 4096]
DEFAULT_ITERATIONS = 1000
IV_LENGTH = 12


@dataclass
class BenchmarkResult:
    """Container for benchmark results."""
    name: str
    algorithm: str
    operation: str
    message_size: int
    iterations: int
    total_time: float
    avg_time: float
    std_dev: float
    throughput_mbps: float
    memory_usage: Optional[Dict[str, float]] = None

    def to_dict(self) -> dict:
        return asdict(self)


class PerformanceBenchmark:
    """
    Seal/open performance benchmarking across AES-GCM key sizes.
    """

    def __init__(self, variants: Optional[List[CipherVariant]] = None):
        """
        Initialize benchmark suite.

        Args:
            variants: Cipher variants to benchmark (default: all)
        """
        self.variants = list(variants) if variants else list(CipherVariant)
        self.results: List[BenchmarkResult] = []

    def measure_memory_usage(self) -> Dict[str, float]:
        """
        Measure current memory usage.

        Returns:
            Dictionary with memory statistics in MB
        """
        process = psutil.Process()
        memory_info = process.memory_info()

        return {
            'rss': memory_info.rss / 1024 / 1024,  # MB
            'vms': memory_info.vms / 1024 / 1024,  # MB
        }

    def _run(self, operation: str, variant: CipherVariant, size: int,
             iterations: int) -> BenchmarkResult:
        key = generate_random_bytes(variant.key_length)
        iv = generate_random_bytes(IV_LENGTH)
        plaintext = generate_random_bytes(size)
        sealed = seal(key, iv, plaintext)

        gc.collect()
        memory_before = self.measure_memory_usage()

        times = []
        for _ in range(iterations):
            start_time = time.perf_counter()
            if operation == 'seal':
                seal(key, iv, plaintext)
            else:
                unseal(key, iv, sealed.ciphertext, sealed.auth_tag)
            times.append(time.perf_counter() - start_time)

        memory_after = self.measure_memory_usage()

        total_time = sum(times)
        avg_time = total_time / iterations
        throughput = (size / avg_time) / 1024 / 1024 if avg_time > 0 else 0.0

        result = BenchmarkResult(
            name=f"{operation.capitalize()}-{variant}-{size}B",
            algorithm=variant.algorithm_name,
            operation=operation,
            message_size=size,
            iterations=iterations,
            total_time=total_time,
            avg_time=avg_time,
            std_dev=statistics.stdev(times) if iterations > 1 else 0.0,
            throughput_mbps=throughput,
            memory_usage={
                'rss_delta': memory_after['rss'] - memory_before['rss'],
                'vms_delta': memory_after['vms'] - memory_before['vms'],
            },
        )
        self.results.append(result)
        return result

    def benchmark_seal_performance(self, message_sizes: List[int],
                                   iterations: int = DEFAULT_ITERATIONS) -> List[BenchmarkResult]:
        """
        Benchmark encryption across message sizes and key sizes.

        Args:
            message_sizes: List of message sizes to test
            iterations: Number of iterations per size

        Returns:
            List of benchmark results
        """
        return [
            self._run('seal', variant, size, iterations)
            for variant in self.variants
            for size in message_sizes
        ]

    def benchmark_open_performance(self, message_sizes: List[int],
                                   iterations: int = DEFAULT_ITERATIONS) -> List[BenchmarkResult]:
        """
        Benchmark decryption across message sizes and key sizes.

        Args:
            message_sizes: List of message sizes to test
            iterations: Number of iterations per size

        Returns:
            List of benchmark results
        """
        return [
            self._run('open', variant, size, iterations)
            for variant in self.variants
            for size in message_sizes
        ]

    def format_table(self) -> str:
        """Render collected results as a plain-text table."""
        lines = [f"{'Benchmark':<28} {'avg (us)':>10} {'MB/s':>10} {'RSS d(MB)':>10}"]
        for result in self.results:
            rss_delta = (result.memory_usage or {}).get('rss_delta', 0.0)
            lines.append(
                f"{result.name:<28} {result.avg_time * 1e6:>10.2f} "
                f"{result.throughput_mbps:>10.2f} {rss_delta:>10.2f}"
            )
        return "\n".join(lines)


def run_comprehensive_benchmark(message_sizes: Optional[List[int]] = None,
                                iterations: int = DEFAULT_ITERATIONS) -> Dict[str, List[BenchmarkResult]]:
    """
    Run seal and open benchmarks for all key sizes.

    Args:
        message_sizes: Message sizes to test
        iterations: Iterations per size

    Returns:
        Dictionary with 'seal' and 'open' result lists
    """
    sizes = message_sizes or DEFAULT_MESSAGE_SIZES
    benchmark = PerformanceBenchmark()

    return {
        'seal': benchmark.benchmark_seal_performance(sizes, iterations),
        'open': benchmark.benchmark_open_performance(sizes, iterations),
    }
