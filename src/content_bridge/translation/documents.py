"""Translate store documents and assets into normalized entities."""

import logging
from collections.abc import Iterable

from content_bridge.core.fields import REFERENCE_FIELD_TYPES, to_normalized
from content_bridge.core.native import NativeAsset, NativeDocument
from content_bridge.core.types import (
    Asset,
    AssetFileField,
    AssetFields,
    Dimensions,
    Document,
    DocumentField,
    DocumentStatus,
    ModelMap,
    ScalarField,
)

logger = logging.getLogger(__name__)


def derive_status(native_status: str) -> DocumentStatus:
    """Map a store status onto the editing lifecycle.

    ``draft`` is a document that was never published and ``published`` is
    live as-is; every other store status means unpublished changes.
    """
    match native_status:
        case "draft":
            return DocumentStatus.ADDED
        case "published":
            return DocumentStatus.PUBLISHED
        case _:
            return DocumentStatus.MODIFIED


def document_manage_url(manage_url: str, document_id: str) -> str:
    return f"{manage_url}/document/{document_id}"


def asset_manage_url(manage_url: str, asset_id: str) -> str:
    return f"{manage_url}/assets/{asset_id}"


def translate_document(document: NativeDocument, model_map: ModelMap, manage_url: str) -> Document:
    model = model_map.get(document.type)
    fields: dict[str, DocumentField] = {}
    if model is None:
        logger.debug("No model '%s' for document %s, dropping its fields", document.type, document.id)
    else:
        for field_name, value in document.fields.items():
            model_field = model.get_field(field_name)
            if model_field is None:
                continue
            # An unset link has no id to point at.
            if value is None and model_field.type in REFERENCE_FIELD_TYPES:
                continue
            fields[field_name] = to_normalized(value, model_field.type)

    return Document(
        id=document.id,
        model_name=document.type,
        status=derive_status(document.status),
        created_at=document.created_at,
        updated_at=document.updated_at,
        manage_url=document_manage_url(manage_url, document.id),
        fields=fields,
    )


def translate_documents(
    documents: Iterable[NativeDocument],
    model_map: ModelMap,
    manage_url: str,
) -> list[Document]:
    """Translate store documents using the host's model map.

    Fields the model does not declare are dropped. A field whose model type
    has no normalized form fails the whole call with
    ``UnsupportedFieldTypeError``.
    """
    return [translate_document(document, model_map, manage_url) for document in documents]


def translate_asset(asset: NativeAsset, manage_url: str, public_base_url: str) -> Asset:
    return Asset(
        id=asset.id,
        created_at=asset.created_at,
        updated_at=asset.updated_at,
        manage_url=asset_manage_url(manage_url, asset.id),
        fields=AssetFields(
            title=ScalarField(type="string", value=asset.title),
            file=AssetFileField(
                url=f"{public_base_url}{asset.url}",
                dimensions=Dimensions(width=asset.width, height=asset.height),
            ),
        ),
    )


def translate_assets(
    assets: Iterable[NativeAsset],
    manage_url: str,
    public_base_url: str,
) -> list[Asset]:
    """Translate store assets; assets are always published."""
    return [translate_asset(asset, manage_url, public_base_url) for asset in assets]
