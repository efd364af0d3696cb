"""Forward store change notifications to the host as normalized change events.

The store pushes batches into a ``ChangeStream``; a single delivery task pulls
them one at a time, translates each into a ``ContentChangeEvent`` and awaits
the host callback before pulling the next, so deliveries never overlap. If
the callback raises, the observer unsubscribes itself and the error surfaces
from ``ChangeObserver.join``.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING, cast

from content_bridge.core.native import (
    AssetCreatedEvent,
    DocumentCreatedEvent,
    DocumentDeletedEvent,
    DocumentUpdatedEvent,
    NativeEventBatch,
)
from content_bridge.core.types import ContentChangeEvent, ModelMap
from content_bridge.translation.documents import translate_asset, translate_document

if TYPE_CHECKING:
    from content_bridge.core.ports import ContentStore, WatchOptions

logger = logging.getLogger(__name__)

_CLOSED = object()


class ObserverState(str, Enum):
    IDLE = "idle"
    WATCHING = "watching"


class ChangeStream:
    """Async iterator over native change batches.

    ``push`` is handed to the store as its notification callback and must be
    called from the event loop thread. After ``close`` the iterator ends and
    batches still queued are discarded.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[NativeEventBatch | object] = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def push(self, batch: NativeEventBatch) -> None:
        if self._closed:
            logger.debug("Dropping change batch pushed after the stream was closed")
            return
        self._queue.put_nowait(batch)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(_CLOSED)

    def __aiter__(self) -> ChangeStream:
        return self

    async def __anext__(self) -> NativeEventBatch:
        if self._closed:
            raise StopAsyncIteration
        item = await self._queue.get()
        if item is _CLOSED or self._closed:
            raise StopAsyncIteration
        return cast(NativeEventBatch, item)


def build_change_event(
    batch: NativeEventBatch,
    get_model_map: Callable[[], ModelMap],
    manage_url: str,
    public_base_url: str,
) -> ContentChangeEvent:
    """Classify a native batch into one change event; unknown event kinds are skipped."""
    change = ContentChangeEvent()
    for event in batch.events:
        match event:
            case DocumentCreatedEvent() | DocumentUpdatedEvent():
                change.documents.append(translate_document(event.document, get_model_map(), manage_url))
            case DocumentDeletedEvent():
                change.deleted_document_ids.append(event.document_id)
            case AssetCreatedEvent():
                change.assets.append(translate_asset(event.asset, manage_url, public_base_url))
            case _:
                logger.debug("Ignoring change event '%s'", event.name)
    return change


class ChangeObserver:
    """Subscription lifecycle for store change notifications (idle -> watching -> idle)."""

    def __init__(self, manage_url: str, public_base_url: str) -> None:
        self.manage_url = manage_url
        self.public_base_url = public_base_url
        self._store: ContentStore | None = None
        self._observer_id: str | None = None
        self._stream: ChangeStream | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def state(self) -> ObserverState:
        return ObserverState.WATCHING if self._stream is not None else ObserverState.IDLE

    @property
    def is_watching(self) -> bool:
        return self.state is ObserverState.WATCHING

    async def start(self, store: ContentStore, options: WatchOptions) -> None:
        """Subscribe to ``store``, replacing any live subscription."""
        if self.is_watching:
            await self.stop()
        self._report_failed_delivery()

        stream = ChangeStream()
        self._observer_id = await store.start_observing_content_changes(stream.push)
        self._store = store
        self._stream = stream
        self._task = asyncio.create_task(self._deliver(stream, options), name="content-bridge-changes")
        logger.debug("Watching content changes, observer id: %s", self._observer_id)

    async def stop(self) -> None:
        """Unsubscribe and end deliveries; a callback already running is not interrupted."""
        if self._stream is None:
            return

        store, observer_id, stream = self._store, self._observer_id, self._stream
        self._store = None
        self._observer_id = None
        self._stream = None

        if store is not None and observer_id is not None:
            await store.stop_observing_content_changes(observer_id)
        stream.close()
        logger.debug("Stopped watching content changes, observer id: %s", observer_id)

    async def join(self) -> None:
        """Wait for the delivery task to finish, re-raising a failure from the host callback."""
        if self._task is not None:
            await self._task

    def _report_failed_delivery(self) -> None:
        task = self._task
        if task is None or not task.done() or task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.warning("Previous change delivery ended with %r", error)

    async def _deliver(self, stream: ChangeStream, options: WatchOptions) -> None:
        try:
            async for batch in stream:
                change = build_change_event(batch, options.get_model_map, self.manage_url, self.public_base_url)
                await options.on_content_change(change)
        finally:
            # A failed callback leaves nobody draining the stream.
            if self._stream is stream:
                await self.stop()
