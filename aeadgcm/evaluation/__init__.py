"""
Evaluation tools for aeadgcm.
"""

from .benchmark import BenchmarkResult, PerformanceBenchmark, run_comprehensive_benchmark

__all__ = [
    'BenchmarkResult',
    'PerformanceBenchmark',
    'run_comprehensive_benchmark',
]
