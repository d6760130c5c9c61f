"""Bucket storage for cuckoo hash tables: slots, buckets and a power-of-two container."""

__version__ = "0.1.0"
__all__ = ["bucket_container"]