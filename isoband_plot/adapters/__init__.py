from .normalize import normalize_rows

__all__ = ["normalize_rows"]
