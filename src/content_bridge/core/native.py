"""Backing store shapes: models, documents, assets and change events as the store sees them."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from content_bridge.core.types import FieldType


class _Absent:
    """Marker for a native field that should be cleared."""

    _instance: "_Absent | None" = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()

NativeFieldMap = dict[str, Any]


class NativeModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, protected_namespaces=())


class NativeField(NativeModel):
    name: str
    type: FieldType
    allowed_types: list[str] = Field(default_factory=list)


class NativeSchemaModel(NativeModel):
    name: str
    fields: list[NativeField] = Field(default_factory=list)


class NativeDocument(NativeModel):
    id: str
    type: str
    status: str = "draft"
    created_at: datetime
    updated_at: datetime
    fields: NativeFieldMap = Field(default_factory=dict)


class NativeAsset(NativeModel):
    id: str
    url: str
    title: str = ""
    width: int | None = None
    height: int | None = None
    created_at: datetime
    updated_at: datetime


# --- Change events ---
class NativeEvent(NativeModel):
    """A change notification of a kind the bridge does not interpret."""

    model_config = ConfigDict(extra="allow")

    name: str


class DocumentCreatedEvent(NativeEvent):
    name: Literal["document-created"] = "document-created"
    document: NativeDocument


class DocumentUpdatedEvent(NativeEvent):
    name: Literal["document-updated"] = "document-updated"
    document: NativeDocument


class DocumentDeletedEvent(NativeEvent):
    name: Literal["document-deleted"] = "document-deleted"
    document_id: str


class AssetCreatedEvent(NativeEvent):
    name: Literal["asset-created"] = "asset-created"
    asset: NativeAsset


_EVENT_TYPES: dict[str, type[NativeEvent]] = {
    "document-created": DocumentCreatedEvent,
    "document-updated": DocumentUpdatedEvent,
    "document-deleted": DocumentDeletedEvent,
    "asset-created": AssetCreatedEvent,
}


def parse_native_event(data: dict[str, Any] | NativeEvent) -> NativeEvent:
    """Build the typed event for a raw notification, keeping unknown kinds as plain ``NativeEvent``."""
    if isinstance(data, NativeEvent):
        return data
    event_cls = _EVENT_TYPES.get(data.get("name", ""), NativeEvent)
    return event_cls.model_validate(data)


class NativeEventBatch(NativeModel):
    events: list[NativeEvent] = Field(default_factory=list)

    @classmethod
    def from_raw(cls, events: list[dict[str, Any] | NativeEvent]) -> "NativeEventBatch":
        return cls(events=[parse_native_event(event) for event in events])
