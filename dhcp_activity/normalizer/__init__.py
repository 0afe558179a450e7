from .mac import normalize_mac

__all__ = ["normalize_mac"]
