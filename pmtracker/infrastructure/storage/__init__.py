from pmtracker.infrastructure.storage.local_blob_store import LocalBlobStore

__all__ = ["LocalBlobStore"]
