"""In-memory content store for local previews and tests.

Keeps native models, documents and assets in dicts and notifies observers of
every change. Nothing is persisted; all data is lost on process exit.

Example:
    store = InMemoryContentStore.from_data({
        "models": [{"name": "post", "fields": [{"name": "title", "type": "string"}]}],
        "documents": [],
        "assets": [],
    })
    observer_id = await store.start_observing_content_changes(print)
    await store.create_document("post", {"title": "Hello"})
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import uuid
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from content_bridge.core.native import (
    ABSENT,
    AssetCreatedEvent,
    DocumentCreatedEvent,
    DocumentDeletedEvent,
    DocumentUpdatedEvent,
    NativeAsset,
    NativeDocument,
    NativeEvent,
    NativeEventBatch,
    NativeFieldMap,
    NativeSchemaModel,
)
from content_bridge.core.ports import NativeChangeCallback

logger = logging.getLogger(__name__)

STATUS_DRAFT = "draft"
STATUS_PUBLISHED = "published"
STATUS_CHANGED = "changed"


class DocumentNotFoundError(KeyError):
    """Raised when a document id is not in the store."""

    def __init__(self, document_id: str) -> None:
        self.document_id = document_id
        super().__init__(f"Document '{document_id}' not found.")


def _patch_fields(fields: NativeFieldMap, patch: NativeFieldMap) -> NativeFieldMap:
    merged = dict(fields)
    for key, value in patch.items():
        if value is ABSENT:
            merged.pop(key, None)
        else:
            merged[key] = value
    return merged


class InMemoryContentStore:
    """Dict-backed ``ContentStore``.

    Document status moves ``draft`` -> ``published`` on publish and
    ``published`` -> ``changed`` on a later edit. Writes are serialized with an
    asyncio lock.
    """

    def __init__(
        self,
        models: list[NativeSchemaModel] | None = None,
        documents: list[NativeDocument] | None = None,
        assets: list[NativeAsset] | None = None,
    ) -> None:
        self._models = list(models or [])
        self._documents: dict[str, NativeDocument] = {doc.id: doc for doc in documents or []}
        self._assets: dict[str, NativeAsset] = {asset.id: asset for asset in assets or []}
        self._observers: dict[str, NativeChangeCallback] = {}
        self._webhooks: dict[str, dict[str, Any]] = {}
        self._lock = asyncio.Lock()

    @classmethod
    def from_data(cls, data: Mapping[str, Any]) -> InMemoryContentStore:
        """Build a store from a JSON-shaped mapping with models, documents and assets."""
        return cls(
            models=[NativeSchemaModel.model_validate(item) for item in data.get("models", [])],
            documents=[NativeDocument.model_validate(item) for item in data.get("documents", [])],
            assets=[NativeAsset.model_validate(item) for item in data.get("assets", [])],
        )

    def to_data(self) -> dict[str, Any]:
        return {
            "models": [model.model_dump(mode="json", by_alias=True) for model in self._models],
            "documents": [doc.model_dump(mode="json", by_alias=True) for doc in self._documents.values()],
            "assets": [asset.model_dump(mode="json", by_alias=True) for asset in self._assets.values()],
        }

    # --- Reads ---
    async def get_models(self) -> list[NativeSchemaModel]:
        return list(self._models)

    async def get_documents(self) -> list[NativeDocument]:
        return list(self._documents.values())

    async def get_assets(self) -> list[NativeAsset]:
        return list(self._assets.values())

    # --- Writes ---
    async def create_document(self, type: str, fields: NativeFieldMap) -> NativeDocument:
        async with self._lock:
            now = datetime.now(UTC)
            document = NativeDocument(
                id=uuid.uuid4().hex,
                type=type,
                status=STATUS_DRAFT,
                created_at=now,
                updated_at=now,
                fields=_patch_fields({}, fields),
            )
            self._documents[document.id] = document
        await self._notify([DocumentCreatedEvent(document=document)])
        return document

    async def update_document(self, document_id: str, fields: NativeFieldMap) -> NativeDocument:
        async with self._lock:
            current = self._get_document(document_id)
            status = STATUS_CHANGED if current.status == STATUS_PUBLISHED else current.status
            document = current.model_copy(
                update={
                    "fields": _patch_fields(current.fields, fields),
                    "status": status,
                    "updated_at": datetime.now(UTC),
                }
            )
            self._documents[document_id] = document
        await self._notify([DocumentUpdatedEvent(document=document)])
        return document

    async def delete_document(self, document_id: str) -> None:
        async with self._lock:
            self._get_document(document_id)
            del self._documents[document_id]
        await self._notify([DocumentDeletedEvent(document_id=document_id)])

    async def upload_asset(self, url: str, title: str, width: int, height: int) -> NativeAsset:
        async with self._lock:
            now = datetime.now(UTC)
            asset = NativeAsset(
                id=uuid.uuid4().hex,
                url=url,
                title=title,
                width=width,
                height=height,
                created_at=now,
                updated_at=now,
            )
            self._assets[asset.id] = asset
        await self._notify([AssetCreatedEvent(asset=asset)])
        return asset

    async def publish_documents(self, document_ids: list[str]) -> None:
        published: list[NativeEvent] = []
        async with self._lock:
            now = datetime.now(UTC)
            for document_id in document_ids:
                document = self._get_document(document_id).model_copy(
                    update={"status": STATUS_PUBLISHED, "updated_at": now}
                )
                self._documents[document_id] = document
                published.append(DocumentUpdatedEvent(document=document))
        if published:
            await self._notify(published)

    def _get_document(self, document_id: str) -> NativeDocument:
        try:
            return self._documents[document_id]
        except KeyError:
            raise DocumentNotFoundError(document_id) from None

    # --- Observers ---
    async def start_observing_content_changes(self, callback: NativeChangeCallback) -> str:
        observer_id = uuid.uuid4().hex
        self._observers[observer_id] = callback
        logger.debug("Observer %s registered", observer_id)
        return observer_id

    async def stop_observing_content_changes(self, observer_id: str) -> None:
        if self._observers.pop(observer_id, None) is not None:
            logger.debug("Observer %s removed", observer_id)

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    async def emit(self, events: list[NativeEvent | dict[str, Any]]) -> None:
        """Push a raw batch to observers, e.g. to simulate changes made outside this process."""
        await self._notify(NativeEventBatch.from_raw(events).events)

    async def _notify(self, events: list[NativeEvent]) -> None:
        batch = NativeEventBatch(events=events)
        for callback in list(self._observers.values()):
            result = callback(batch)
            if inspect.isawaitable(result):
                await result

    # --- Webhooks ---
    async def get_webhook(self, name: str) -> dict[str, Any] | None:
        return self._webhooks.get(name)

    async def create_webhook(self, name: str, url: str) -> dict[str, Any] | None:
        webhook = {"name": name, "url": url}
        self._webhooks[name] = webhook
        return webhook
