"""content-bridge: translate a content store's documents, assets and models for an editing host."""

from content_bridge.core.exceptions import (
    ContentBridgeError,
    MissingConfigurationError,
    UnsupportedFieldTypeError,
    UnsupportedOperationError,
    UnsupportedUploadError,
)
from content_bridge.core.ports import ContentStore, WatchOptions
from content_bridge.observer import ChangeObserver, ChangeStream
from content_bridge.source import ContentSource
from content_bridge.translation import build_model_map

__all__ = [
    "ChangeObserver",
    "ChangeStream",
    "ContentBridgeError",
    "ContentSource",
    "ContentStore",
    "MissingConfigurationError",
    "UnsupportedFieldTypeError",
    "UnsupportedOperationError",
    "UnsupportedUploadError",
    "WatchOptions",
    "build_model_map",
]
