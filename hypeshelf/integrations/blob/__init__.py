from .client import BlobStoreClient

__all__ = ["BlobStoreClient"]
