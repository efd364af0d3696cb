"""Translate store schema models into model descriptors."""

from collections.abc import Iterable

from content_bridge.core.native import NativeField, NativeSchemaModel
from content_bridge.core.types import FieldDescriptor, FieldType, ModelDescriptor


def translate_field(field: NativeField) -> FieldDescriptor:
    if field.type is FieldType.REFERENCE:
        return FieldDescriptor(name=field.name, type=field.type, models=list(field.allowed_types))
    return FieldDescriptor(name=field.name, type=field.type)


def translate_models(models: Iterable[NativeSchemaModel]) -> list[ModelDescriptor]:
    """Map every native model to one descriptor, keeping field order.

    Only the type tag is needed here, so nested field types pass through;
    they are rejected later when a document value of that type is translated.
    """
    return [
        ModelDescriptor(name=model.name, fields=[translate_field(field) for field in model.fields])
        for model in models
    ]


def build_model_map(models: Iterable[ModelDescriptor]) -> dict[str, ModelDescriptor]:
    """Key descriptors by model name."""
    return {model.name: model for model in models}
