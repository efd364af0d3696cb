"""Native <-> normalized translation for models, documents, assets and updates."""

from content_bridge.translation.documents import (
    derive_status,
    translate_asset,
    translate_assets,
    translate_document,
    translate_documents,
)
from content_bridge.translation.models import build_model_map, translate_models
from content_bridge.translation.updates import apply_field_map, apply_operations

__all__ = [
    "apply_field_map",
    "apply_operations",
    "build_model_map",
    "derive_status",
    "translate_asset",
    "translate_assets",
    "translate_document",
    "translate_documents",
    "translate_models",
]
