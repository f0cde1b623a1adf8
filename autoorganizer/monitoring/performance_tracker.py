"""
Operation timing and process metrics
"""
import threading
import time
from collections import defaultdict, deque
from typing import Dict, Any

import psutil

from .logger import get_logger


class PerformanceTracker:
    """Keeps rolling durations for scans and applies plus a process snapshot"""

    def __init__(self, history_size: int = 200):
        self.logger = get_logger('performance_tracker')
        self.durations = defaultdict(lambda: deque(maxlen=history_size))
        self.counts = defaultdict(int)
        self.failures = defaultdict(int)
        self.lock = threading.Lock()

    def record_operation(self, operation: str, duration: float, success: bool = True):
        """Record one run of an operation"""
        with self.lock:
            self.durations[operation].append(duration)
            self.counts[operation] += 1
            if not success:
                self.failures[operation] += 1

    def get_operation_stats(self) -> Dict[str, Any]:
        with self.lock:
            stats = {}
            for operation, durations in self.durations.items():
                if not durations:
                    continue
                stats[operation] = {
                    'avg': sum(durations) / len(durations),
                    'min': min(durations),
                    'max': max(durations),
                    'count': self.counts[operation],
                    'failures': self.failures[operation]
                }
            return stats

    def get_system_snapshot(self) -> Dict[str, Any]:
        """Cheap, non-blocking process metrics for the health endpoint"""
        try:
            process = psutil.Process()
            memory = process.memory_info()
            return {
                'cpu_percent': psutil.cpu_percent(interval=None),
                'memory_percent': psutil.virtual_memory().percent,
                'process_rss': memory.rss,
                'process_threads': process.num_threads()
            }
        except psutil.Error as e:
            self.logger.warning("System metrics unavailable", error=str(e))
            return {}

    def get_summary(self) -> Dict[str, Any]:
        return {
            'timestamp': time.time(),
            'operations': self.get_operation_stats(),
            'system': self.get_system_snapshot()
        }


_performance_tracker = None


def get_performance_tracker() -> PerformanceTracker:
    """Fetch or create the shared tracker"""
    global _performance_tracker
    if _performance_tracker is None:
        _performance_tracker = PerformanceTracker()
    return _performance_tracker
