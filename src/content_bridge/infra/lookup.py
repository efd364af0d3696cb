"""Single-entity lookups over a content store, for site pages rendering one item."""

from content_bridge.core.native import NativeAsset, NativeDocument
from content_bridge.core.ports import ContentStore


async def get_document_by_id(store: ContentStore, document_id: str | None) -> NativeDocument | None:
    if not document_id:
        return None
    documents = await store.get_documents()
    return next((document for document in documents if document.id == document_id), None)


async def get_asset_by_id(store: ContentStore, asset_id: str | None) -> NativeAsset | None:
    if not asset_id:
        return None
    assets = await store.get_assets()
    return next((asset for asset in assets if asset.id == asset_id), None)
