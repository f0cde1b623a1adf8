"""
PDF Processing Module
Handles text extraction from leading document pages
"""

from .processor import PDFProcessor

__all__ = ['PDFProcessor']
