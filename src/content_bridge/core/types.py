"""Normalized content types shared with the editing host.

Everything the host reads or sends goes through these models. They are
serialized to the host's camelCase wire shape with ``model_dump(by_alias=True)``
and accept both snake_case and camelCase keys on input.
"""

from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class BridgeModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, protected_namespaces=())


# --- Field vocabulary ---
class FieldType(str, Enum):
    """Closed vocabulary of field type tags."""

    STRING = "string"
    TEXT = "text"
    MARKDOWN = "markdown"
    DATE = "date"
    URL = "url"
    SLUG = "slug"
    HTML = "html"
    BOOLEAN = "boolean"
    DATETIME = "datetime"
    COLOR = "color"
    NUMBER = "number"
    ENUM = "enum"
    FILE = "file"
    JSON = "json"
    STYLE = "style"
    RICH_TEXT = "richText"
    IMAGE = "image"
    REFERENCE = "reference"
    OBJECT = "object"
    MODEL = "model"
    CROSS_REFERENCE = "cross-reference"
    LIST = "list"


ScalarFieldType = Literal[
    "string",
    "text",
    "markdown",
    "date",
    "url",
    "slug",
    "html",
    "boolean",
    "datetime",
    "color",
    "number",
    "enum",
    "file",
    "json",
    "style",
    "richText",
]
CompositeFieldType = Literal["object", "model", "cross-reference", "list"]


class FieldDescriptor(BridgeModel):
    name: str
    type: FieldType
    models: list[str] = Field(default_factory=list)


class ModelDescriptor(BridgeModel):
    name: str
    type: Literal["data"] = "data"
    fields: list[FieldDescriptor] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_unique_field_names(self) -> "ModelDescriptor":
        seen: set[str] = set()
        for field in self.fields:
            if field.name in seen:
                msg = f"Model '{self.name}' declares field '{field.name}' more than once."
                raise ValueError(msg)
            seen.add(field.name)
        return self

    def get_field(self, name: str) -> FieldDescriptor | None:
        return next((field for field in self.fields if field.name == name), None)


ModelMap = Mapping[str, ModelDescriptor]


# --- Normalized field values ---
class ScalarField(BridgeModel):
    type: ScalarFieldType
    value: Any = None


class ReferenceField(BridgeModel):
    type: Literal["reference"] = "reference"
    ref_type: Literal["document", "asset"]
    ref_id: str


class Dimensions(BridgeModel):
    width: int | None = None
    height: int | None = None


class AssetFileField(BridgeModel):
    type: Literal["assetFile"] = "assetFile"
    url: str
    dimensions: Dimensions = Field(default_factory=Dimensions)


DocumentField = Annotated[ScalarField | ReferenceField, Field(discriminator="type")]


# --- Documents and assets ---
class DocumentStatus(str, Enum):
    ADDED = "added"
    MODIFIED = "modified"
    PUBLISHED = "published"


class Document(BridgeModel):
    type: Literal["document"] = "document"
    id: str
    model_name: str
    status: DocumentStatus
    created_at: datetime
    updated_at: datetime
    manage_url: str
    context: dict[str, Any] = Field(default_factory=dict)
    fields: dict[str, DocumentField] = Field(default_factory=dict)


class AssetFields(BridgeModel):
    title: ScalarField
    file: AssetFileField


class Asset(BridgeModel):
    type: Literal["asset"] = "asset"
    id: str
    status: DocumentStatus = DocumentStatus.PUBLISHED
    created_at: datetime
    updated_at: datetime
    manage_url: str
    context: dict[str, Any] = Field(default_factory=dict)
    fields: AssetFields


# --- Update operations ---
class ImageField(BridgeModel):
    type: Literal["image"] = "image"
    ref_id: str


class CompositeField(BridgeModel):
    """Update payload for nested types; accepted on input, rejected by the codec."""

    type: CompositeFieldType
    value: Any = None


UpdateOperationField = Annotated[
    ScalarField | ReferenceField | ImageField | CompositeField,
    Field(discriminator="type"),
]

FieldPath = Annotated[list[str | int], Field(min_length=1)]


class SetOperation(BridgeModel):
    op_type: Literal["set"] = "set"
    field_path: FieldPath
    field: UpdateOperationField


class UnsetOperation(BridgeModel):
    op_type: Literal["unset"] = "unset"
    field_path: FieldPath
    model_field: FieldDescriptor


class InsertOperation(BridgeModel):
    op_type: Literal["insert"] = "insert"
    field_path: FieldPath
    item: UpdateOperationField
    index: int | None = None


class RemoveOperation(BridgeModel):
    op_type: Literal["remove"] = "remove"
    field_path: FieldPath
    index: int


class ReorderOperation(BridgeModel):
    op_type: Literal["reorder"] = "reorder"
    field_path: FieldPath
    order: list[int]


UpdateOperation = Annotated[
    SetOperation | UnsetOperation | InsertOperation | RemoveOperation | ReorderOperation,
    Field(discriminator="op_type"),
]


# --- Host-facing results ---
class ContentChangeEvent(BridgeModel):
    documents: list[Document] = Field(default_factory=list)
    assets: list[Asset] = Field(default_factory=list)
    deleted_document_ids: list[str] = Field(default_factory=list)
    deleted_asset_ids: list[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.documents or self.assets or self.deleted_document_ids or self.deleted_asset_ids)


class AccessStatus(BridgeModel):
    has_connection: bool
    has_permissions: bool


class Locale(BridgeModel):
    code: str
    default: bool = False


class DocumentValidationError(BridgeModel):
    """A content problem reported back to the host (not an exception)."""

    message: str
    object_type: Literal["document", "asset"]
    object_id: str
    field_path: list[str | int] = Field(default_factory=list)


class FilesChangeResult(BridgeModel):
    schema_changed: bool | None = None
    content_change_event: ContentChangeEvent | None = None


class SiteMapDocument(BridgeModel):
    src_type: str
    src_project_id: str
    model_name: str
    id: str


class SiteMapEntry(BridgeModel):
    stable_id: str
    label: str
    url_path: str
    is_home_page: bool = False
    document: SiteMapDocument | None = None
