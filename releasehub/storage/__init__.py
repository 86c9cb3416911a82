"""
Storage adapters for release binaries.

This package provides a unified interface for the two deployment modes
through the StorageAdapter abstract base class.

Adapters:
- S3Adapter: Amazon S3 bucket (boto3)
- LocalAdapter: Local directory (no dependencies)

Usage:
    >>> from releasehub.storage import create_storage_adapter
    >>> adapter = create_storage_adapter(get_settings())
    >>> files = adapter.list_files_with_metadata()

Note:
    S3Adapter is lazily imported so local deployments never load boto3.
"""

from releasehub.storage.base import StorageAdapter, FileInfo
from releasehub.storage.local_adapter import LocalAdapter

_lazy_imports = {
    "S3Adapter": ("releasehub.storage.s3_adapter", "pip install boto3"),
}


def __getattr__(name: str):
    """Lazily import the S3 adapter when accessed."""
    if name in _lazy_imports:
        import importlib
        module_path, install_hint = _lazy_imports[name]
        try:
            module = importlib.import_module(module_path)
        except ModuleNotFoundError as e:
            raise ModuleNotFoundError(
                f"{name} requires additional dependencies. "
                f"Install them with: {install_hint}"
            ) from e
        return getattr(module, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def create_storage_adapter(settings) -> StorageAdapter:
    """
    Build the storage adapter selected by settings.storage_mode.

    Args:
        settings: BinarySettings instance

    Raises:
        ValueError: If the selected mode is not configured
    """
    if settings.storage_mode == "s3":
        from releasehub.storage.s3_adapter import S3Adapter
        return S3Adapter(
            settings.s3_credentials,
            bucket=settings.aws_bucket_name,
            base_url=settings.base_url
        )
    if settings.storage_mode == "local":
        return LocalAdapter(settings.local_binary_dir)
    raise ValueError(f"Unknown storage mode: {settings.storage_mode}")


__all__ = [
    "StorageAdapter",
    "FileInfo",
    "S3Adapter",
    "LocalAdapter",
    "create_storage_adapter",
]
