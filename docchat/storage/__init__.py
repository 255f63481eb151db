"""Persistence of uploaded documents on local disk."""

from docchat.storage.uploads import StoredUpload, UploadStore, get_upload_store

__all__ = ["StoredUpload", "UploadStore", "get_upload_store"]
