"""Remote table-service client used by the content state store."""

from .client import Order, RemoteStoreClient, RemoteStoreConfig, RemoteStoreError, TableHandle

__all__ = ["Order", "RemoteStoreClient", "RemoteStoreConfig", "RemoteStoreError", "TableHandle"]
