"""
Monitoring and Logging Module
"""
from .logger import StructuredLogger, get_logger, log_performance
from .performance_tracker import PerformanceTracker, get_performance_tracker

__all__ = [
    'StructuredLogger',
    'get_logger',
    'log_performance',
    'PerformanceTracker',
    'get_performance_tracker'
]
