from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from content_bridge.core.native import NativeAsset, NativeDocument, NativeEventBatch, NativeFieldMap, NativeSchemaModel
from content_bridge.core.types import Asset, ContentChangeEvent, Document, ModelMap

NativeChangeCallback = Callable[[NativeEventBatch], None]


@runtime_checkable
class ContentStore(Protocol):
    """The backing content store the bridge reads from and writes to."""

    async def get_models(self) -> list[NativeSchemaModel]: ...
    async def get_documents(self) -> list[NativeDocument]: ...
    async def get_assets(self) -> list[NativeAsset]: ...

    async def create_document(self, type: str, fields: NativeFieldMap) -> NativeDocument: ...
    async def update_document(self, document_id: str, fields: NativeFieldMap) -> NativeDocument: ...
    async def delete_document(self, document_id: str) -> None: ...
    async def upload_asset(self, url: str, title: str, width: int, height: int) -> NativeAsset: ...
    async def publish_documents(self, document_ids: list[str]) -> None: ...

    async def start_observing_content_changes(self, callback: NativeChangeCallback) -> str:
        """Register ``callback`` for change batches and return an observer id."""
        ...

    async def stop_observing_content_changes(self, observer_id: str) -> None: ...


@runtime_checkable
class WebhookStore(Protocol):
    """Optional store capability: named webhooks pointing back at the host."""

    async def get_webhook(self, name: str) -> dict[str, Any] | None: ...
    async def create_webhook(self, name: str, url: str) -> dict[str, Any] | None: ...


@dataclass(frozen=True)
class WatchOptions:
    """Host hooks for change propagation.

    Attributes:
        get_model_map: Returns the host's current model map; called for every
            document event so schema changes are picked up.
        get_document: Looks up a document the host already holds.
        get_asset: Looks up an asset the host already holds.
        on_content_change: Receives one change event per store batch.
        on_schema_change: Called when the store schema changes.
    """

    get_model_map: Callable[[], ModelMap]
    on_content_change: Callable[[ContentChangeEvent], Awaitable[None]]
    get_document: Callable[[str], Document | None] = lambda document_id: None
    get_asset: Callable[[str], Asset | None] = lambda asset_id: None
    on_schema_change: Callable[[], None] = lambda: None
