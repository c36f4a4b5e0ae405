from properties.generators import (
    GeneratorConfig,
    GeneratorMode,
    KeySequenceGenerator,
    EditedSequenceGenerator,
    EdgeCaseGenerator,
    CaseGenerator,
    ReconcileCase,
    generate_random_pairs,
    generate_edited_pairs
)

from properties.benchmark import (
    BenchmarkResult,
    Timer,
    DataGenerator,
    Benchmark,
    ScalingBenchmark,
    run_quick_benchmark,
    run_full_benchmark
)


__all__ = [
    "GeneratorConfig",
    "GeneratorMode",
    "KeySequenceGenerator",
    "EditedSequenceGenerator",
    "EdgeCaseGenerator",
    "CaseGenerator",
    "ReconcileCase",
    "generate_random_pairs",
    "generate_edited_pairs",
    "BenchmarkResult",
    "Timer",
    "DataGenerator",
    "Benchmark",
    "ScalingBenchmark",
    "run_quick_benchmark",
    "run_full_benchmark"
]
