"""Tests for change observation and delivery."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from content_bridge.core.native import NativeEventBatch
from content_bridge.core.ports import WatchOptions
from content_bridge.core.types import ContentChangeEvent, DocumentStatus
from content_bridge.observer import ChangeObserver, ChangeStream, ObserverState

MANAGE_URL = "https://example.com/project/example"
SITE_URL = "http://localhost:3000"


def _collecting_options(model_map, received: asyncio.Queue) -> WatchOptions:
    async def on_content_change(event: ContentChangeEvent) -> None:
        await received.put(event)

    return WatchOptions(get_model_map=lambda: model_map, on_content_change=on_content_change)


async def _next(received: asyncio.Queue) -> ContentChangeEvent:
    return await asyncio.wait_for(received.get(), timeout=1)


def _mock_store(observer_ids=("obs-1", "obs-2")) -> MagicMock:
    store = MagicMock()
    store.start_observing_content_changes = AsyncMock(side_effect=list(observer_ids))
    store.stop_observing_content_changes = AsyncMock()
    return store


@pytest.mark.asyncio
async def test_change_stream_yields_batches_until_closed():
    stream = ChangeStream()
    first, second = NativeEventBatch(), NativeEventBatch()
    stream.push(first)
    stream.push(second)

    assert await stream.__anext__() is first
    stream.close()
    stream.push(NativeEventBatch())

    with pytest.raises(StopAsyncIteration):
        await stream.__anext__()
    assert stream.closed


@pytest.mark.asyncio
async def test_document_and_asset_events_are_translated(store, model_map):
    received: asyncio.Queue = asyncio.Queue()
    observer = ChangeObserver(MANAGE_URL, SITE_URL)
    await observer.start(store, _collecting_options(model_map, received))

    created = await store.create_document("post", {"title": "New", "author": "u1"})
    change = await _next(received)

    assert [document.id for document in change.documents] == [created.id]
    assert change.documents[0].status is DocumentStatus.ADDED
    assert change.documents[0].fields["author"].ref_id == "u1"

    await store.delete_document(created.id)
    change = await _next(received)
    assert change.deleted_document_ids == [created.id]
    assert change.documents == []

    asset = await store.upload_asset("/images/new.png", "New", 10, 20)
    change = await _next(received)
    assert [item.id for item in change.assets] == [asset.id]
    assert change.assets[0].fields.file.url == f"{SITE_URL}/images/new.png"

    await observer.stop()


@pytest.mark.asyncio
async def test_one_event_per_batch_and_unknown_kinds_are_ignored(store, model_map, native_documents):
    received: asyncio.Queue = asyncio.Queue()
    observer = ChangeObserver(MANAGE_URL, SITE_URL)
    await observer.start(store, _collecting_options(model_map, received))

    await store.emit(
        [
            {"name": "model-updated", "modelName": "post"},
            {"name": "document-updated", "document": native_documents[0].model_dump(by_alias=True)},
            {"name": "document-deleted", "documentId": "gone"},
        ]
    )
    change = await _next(received)

    assert [document.id for document in change.documents] == ["p1"]
    assert change.deleted_document_ids == ["gone"]
    assert change.assets == []
    assert change.deleted_asset_ids == []
    assert received.empty()

    await observer.stop()


@pytest.mark.asyncio
async def test_model_map_is_read_at_dispatch_time(store, model_map):
    received: asyncio.Queue = asyncio.Queue()
    current = {"map": {}}

    async def on_content_change(event):
        await received.put(event)

    observer = ChangeObserver(MANAGE_URL, SITE_URL)
    await observer.start(store, WatchOptions(get_model_map=lambda: current["map"], on_content_change=on_content_change))

    await store.create_document("post", {"title": "Before"})
    assert (await _next(received)).documents[0].fields == {}

    current["map"] = model_map
    await store.create_document("post", {"title": "After"})
    assert (await _next(received)).documents[0].fields["title"].value == "After"

    await observer.stop()


@pytest.mark.asyncio
async def test_deliveries_never_overlap(store, model_map):
    in_flight = 0
    max_in_flight = 0
    titles: list[str] = []
    done = asyncio.Event()

    async def on_content_change(event):
        nonlocal in_flight, max_in_flight
        in_flight += 1
        max_in_flight = max(max_in_flight, in_flight)
        await asyncio.sleep(0.01)
        titles.append(event.documents[0].fields["title"].value)
        in_flight -= 1
        if len(titles) == 3:
            done.set()

    observer = ChangeObserver(MANAGE_URL, SITE_URL)
    await observer.start(store, WatchOptions(get_model_map=lambda: model_map, on_content_change=on_content_change))

    for title in ("one", "two", "three"):
        await store.create_document("post", {"title": title})
    await asyncio.wait_for(done.wait(), timeout=1)

    assert titles == ["one", "two", "three"]
    assert max_in_flight == 1
    await observer.stop()


@pytest.mark.asyncio
async def test_stop_twice_is_a_noop():
    store = _mock_store()
    observer = ChangeObserver(MANAGE_URL, SITE_URL)
    await observer.start(store, WatchOptions(get_model_map=dict, on_content_change=AsyncMock()))
    assert observer.state is ObserverState.WATCHING

    await observer.stop()
    await observer.stop()

    store.stop_observing_content_changes.assert_awaited_once_with("obs-1")
    assert observer.state is ObserverState.IDLE


@pytest.mark.asyncio
async def test_stop_without_start_is_a_noop():
    observer = ChangeObserver(MANAGE_URL, SITE_URL)

    await observer.stop()
    await observer.join()

    assert not observer.is_watching


@pytest.mark.asyncio
async def test_start_twice_replaces_the_subscription(store, model_map):
    received: asyncio.Queue = asyncio.Queue()
    observer = ChangeObserver(MANAGE_URL, SITE_URL)
    options = _collecting_options(model_map, received)

    await observer.start(store, options)
    await observer.start(store, options)
    assert store.observer_count == 1

    await store.create_document("post", {"title": "Once"})
    await _next(received)
    await asyncio.sleep(0.01)
    assert received.empty()

    await observer.stop()
    assert store.observer_count == 0


@pytest.mark.asyncio
async def test_start_twice_unsubscribes_previous_handle():
    store = _mock_store()
    observer = ChangeObserver(MANAGE_URL, SITE_URL)
    options = WatchOptions(get_model_map=dict, on_content_change=AsyncMock())

    await observer.start(store, options)
    await observer.start(store, options)

    store.stop_observing_content_changes.assert_awaited_once_with("obs-1")
    assert store.start_observing_content_changes.await_count == 2
    await observer.stop()
    store.stop_observing_content_changes.assert_awaited_with("obs-2")


@pytest.mark.asyncio
async def test_stop_does_not_interrupt_a_running_callback(store, model_map):
    started = asyncio.Event()
    release = asyncio.Event()
    finished: list[str] = []

    async def on_content_change(event):
        started.set()
        await release.wait()
        finished.append(event.documents[0].id)

    observer = ChangeObserver(MANAGE_URL, SITE_URL)
    await observer.start(store, WatchOptions(get_model_map=lambda: model_map, on_content_change=on_content_change))
    document = await store.create_document("post", {"title": "Slow"})
    await asyncio.wait_for(started.wait(), timeout=1)

    await observer.stop()
    await store.create_document("post", {"title": "After stop"})
    release.set()
    await asyncio.wait_for(observer.join(), timeout=1)

    assert finished == [document.id]


@pytest.mark.asyncio
async def test_callback_failure_propagates_from_join(store, model_map):
    async def on_content_change(event):
        raise RuntimeError("host failed")

    observer = ChangeObserver(MANAGE_URL, SITE_URL)
    await observer.start(store, WatchOptions(get_model_map=lambda: model_map, on_content_change=on_content_change))
    await store.create_document("post", {"title": "Boom"})

    with pytest.raises(RuntimeError, match="host failed"):
        await asyncio.wait_for(observer.join(), timeout=1)

    assert observer.state is ObserverState.IDLE
    assert store.observer_count == 0
    # Later changes are no longer queued for a dead delivery task.
    await store.create_document("post", {"title": "Ignored"})
    await observer.stop()


@pytest.mark.asyncio
async def test_restart_after_callback_failure_reports_it(store, model_map, caplog):
    async def failing(event):
        raise RuntimeError("host failed")

    received: asyncio.Queue = asyncio.Queue()
    observer = ChangeObserver(MANAGE_URL, SITE_URL)
    await observer.start(store, WatchOptions(get_model_map=lambda: model_map, on_content_change=failing))
    await store.create_document("post", {"title": "Boom"})
    with pytest.raises(RuntimeError):
        await asyncio.wait_for(observer.join(), timeout=1)

    with caplog.at_level("WARNING", logger="content_bridge.observer"):
        await observer.start(store, _collecting_options(model_map, received))
    assert "host failed" in caplog.text
    assert observer.is_watching
    assert store.observer_count == 1

    document = await store.create_document("post", {"title": "Recovered"})
    event = await _next(received)
    assert [doc.id for doc in event.documents] == [document.id]
    await observer.stop()
