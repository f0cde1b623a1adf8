"""
API Blueprints Module
"""

from .scans import scans_bp

__all__ = ['scans_bp']
