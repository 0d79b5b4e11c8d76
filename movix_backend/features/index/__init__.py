"""Video index: scan, store and search."""
from .models import MediaRecord, ScanReport, ScanWarning, SeedReport
from .scanner import IndexScanner, scan
from .service import IndexService
from .store import MovieStore

__all__ = [
    "IndexScanner",
    "IndexService",
    "MediaRecord",
    "MovieStore",
    "ScanReport",
    "ScanWarning",
    "SeedReport",
    "scan",
]
