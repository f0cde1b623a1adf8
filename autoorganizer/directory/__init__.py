"""
Directory Management Module
Filesystem queries and destination profiling
"""

from .manager import DirectoryManager
from .profiler import DestinationProfiler, DocumentTokenizer

__all__ = ['DirectoryManager', 'DestinationProfiler', 'DocumentTokenizer']
