"""
Opt-in timing of the growth phases.

Recording is off until a driver enables it (SimulationConfig.profile), so the
decorated phase functions cost one attribute check when not profiling.
"""

import time
from functools import wraps
from collections import defaultdict
from typing import Dict
import atexit


class Profiler:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return
        self._initialized = True
        self.stats: Dict[str, Dict] = defaultdict(lambda: {'calls': 0, 'total_time': 0.0})
        self.enabled = False
        atexit.register(self.print_stats)

    def enable(self):
        self.enabled = True

    def disable(self):
        self.enabled = False

    def record(self, name: str, elapsed: float):
        if not self.enabled:
            return
        entry = self.stats[name]
        entry['calls'] += 1
        entry['total_time'] += elapsed

    def summary(self) -> Dict[str, Dict[str, float]]:
        """Per-name calls, total seconds and mean milliseconds, slowest first."""
        rows = sorted(self.stats.items(), key=lambda x: x[1]['total_time'], reverse=True)
        return {
            name: {
                'calls': data['calls'],
                'total_time': data['total_time'],
                'avg_ms': data['total_time'] / data['calls'] * 1000 if data['calls'] else 0.0,
            }
            for name, data in rows
        }

    def print_stats(self):
        if not self.stats:
            return

        print("\n" + "=" * 70)
        print("PHASE TIMINGS")
        print("=" * 70)
        print(f"{'Phase':<35} {'Calls':>10} {'Total(s)':>10} {'Avg(ms)':>10}")
        print("-" * 70)
        for name, row in self.summary().items():
            print(f"{name:<35} {row['calls']:>10} {row['total_time']:>10.3f} {row['avg_ms']:>10.3f}")
        print("=" * 70)

    def reset(self):
        self.stats.clear()


profiler = Profiler()


def profile(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        if not profiler.enabled:
            return func(*args, **kwargs)
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            profiler.record(func.__qualname__, time.perf_counter() - start)
    return wrapper


class profile_block:
    def __init__(self, name: str):
        self.name = name
        self.start = None

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, *args):
        profiler.record(self.name, time.perf_counter() - self.start)
