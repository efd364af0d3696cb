"""Content store implementations and helpers."""

from content_bridge.infra.lookup import get_asset_by_id, get_document_by_id
from content_bridge.infra.memory import DocumentNotFoundError, InMemoryContentStore

__all__ = ["DocumentNotFoundError", "InMemoryContentStore", "get_asset_by_id", "get_document_by_id"]
