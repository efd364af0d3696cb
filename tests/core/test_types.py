"""Tests for the normalized content models."""

import pytest
from pydantic import TypeAdapter
from pydantic import ValidationError

from content_bridge.core.types import (
    DocumentValidationError,
    FieldDescriptor,
    FieldType,
    ModelDescriptor,
    SetOperation,
    UnsetOperation,
    UpdateOperation,
)


def test_model_descriptor_rejects_duplicate_field_names():
    with pytest.raises(ValidationError, match="more than once"):
        ModelDescriptor(
            name="post",
            fields=[
                FieldDescriptor(name="title", type=FieldType.STRING),
                FieldDescriptor(name="title", type=FieldType.TEXT),
            ],
        )


def test_operations_parse_from_host_payload():
    adapter = TypeAdapter(list[UpdateOperation])

    operations = adapter.validate_python(
        [
            {"opType": "set", "fieldPath": ["title"], "field": {"type": "string", "value": "New"}},
            {"opType": "unset", "fieldPath": ["author"], "modelField": {"name": "author", "type": "reference"}},
        ]
    )

    assert isinstance(operations[0], SetOperation)
    assert operations[0].field.value == "New"
    assert isinstance(operations[1], UnsetOperation)
    assert operations[1].model_field.type is FieldType.REFERENCE


def test_operations_require_a_field_path():
    with pytest.raises(ValidationError):
        SetOperation(field_path=[], field={"type": "string", "value": "x"})


def test_document_validation_error_is_a_host_payload():
    problem = DocumentValidationError(message="Title is required", object_type="document", object_id="p1", field_path=["title"])

    assert not isinstance(problem, Exception)
    assert problem.model_dump(by_alias=True) == {
        "message": "Title is required",
        "objectType": "document",
        "objectId": "p1",
        "fieldPath": ["title"],
    }
