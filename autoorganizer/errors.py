"""
Exception types raised by the engine and its services
"""


class DocumentSorterError(Exception):
    """Base exception for engine errors"""
    def __init__(self, message, path=None, error_code=None):
        super().__init__(message)
        self.path = path
        self.error_code = error_code


class ScanError(DocumentSorterError):
    """Scan inputs are unusable (missing or non-directory roots, bad threshold)"""


class ScanCancelledError(DocumentSorterError):
    """Unwinds a scan whose job was cancelled; never leaves the scan service"""
