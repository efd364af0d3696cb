"""Field codec: converts single field values between native and normalized form.

This is the only module that knows how every ``FieldType`` maps. Each dispatch
ends in ``assert_never`` so that a type checker reports any tag added to
``FieldType`` without a matching branch here.

Scalar tags are stored identically on both sides. ``image`` and ``reference``
values are native ids that become references to an asset or a document.
Nested types (``object``, ``model``, ``cross-reference``, ``list``) are not
supported in either direction.
"""

from typing import Any, assert_never

from content_bridge.core.exceptions import UnsupportedFieldTypeError
from content_bridge.core.types import (
    CompositeField,
    DocumentField,
    FieldType,
    ImageField,
    ReferenceField,
    ScalarField,
    UpdateOperationField,
)

SCALAR_FIELD_TYPES: frozenset[FieldType] = frozenset(
    {
        FieldType.STRING,
        FieldType.TEXT,
        FieldType.MARKDOWN,
        FieldType.DATE,
        FieldType.URL,
        FieldType.SLUG,
        FieldType.HTML,
        FieldType.BOOLEAN,
        FieldType.DATETIME,
        FieldType.COLOR,
        FieldType.NUMBER,
        FieldType.ENUM,
        FieldType.FILE,
        FieldType.JSON,
        FieldType.STYLE,
        FieldType.RICH_TEXT,
    }
)
REFERENCE_FIELD_TYPES: frozenset[FieldType] = frozenset({FieldType.IMAGE, FieldType.REFERENCE})


def to_normalized(value: Any, field_type: FieldType) -> DocumentField:
    """Convert a native field value into the normalized field for ``field_type``.

    Raises:
        UnsupportedFieldTypeError: for nested field types.

    """
    field_type = FieldType(field_type)
    match field_type:
        case (
            FieldType.STRING
            | FieldType.TEXT
            | FieldType.MARKDOWN
            | FieldType.DATE
            | FieldType.URL
            | FieldType.SLUG
            | FieldType.HTML
            | FieldType.BOOLEAN
            | FieldType.DATETIME
            | FieldType.COLOR
            | FieldType.NUMBER
            | FieldType.ENUM
            | FieldType.FILE
            | FieldType.JSON
            | FieldType.STYLE
            | FieldType.RICH_TEXT
        ):
            return ScalarField(type=field_type.value, value=value)
        case FieldType.IMAGE:
            return ReferenceField(ref_type="asset", ref_id=value)
        case FieldType.REFERENCE:
            return ReferenceField(ref_type="document", ref_id=value)
        case FieldType.OBJECT | FieldType.MODEL | FieldType.CROSS_REFERENCE | FieldType.LIST:
            raise UnsupportedFieldTypeError(field_type.value)
        case _:
            assert_never(field_type)


def to_native(field: UpdateOperationField) -> Any:
    """Convert a normalized (update) field into the value the store keeps.

    Raises:
        UnsupportedFieldTypeError: for nested field types.

    """
    match field:
        case ScalarField():
            return field.value
        case ReferenceField() | ImageField():
            return field.ref_id
        case CompositeField():
            raise UnsupportedFieldTypeError(field.type)
        case _:
            assert_never(field)


def is_clearable(field_type: FieldType) -> bool:
    """Whether a field of this type can be removed from a native document."""
    field_type = FieldType(field_type)
    match field_type:
        case (
            FieldType.STRING
            | FieldType.TEXT
            | FieldType.MARKDOWN
            | FieldType.DATE
            | FieldType.URL
            | FieldType.SLUG
            | FieldType.HTML
            | FieldType.BOOLEAN
            | FieldType.DATETIME
            | FieldType.COLOR
            | FieldType.NUMBER
            | FieldType.ENUM
            | FieldType.FILE
            | FieldType.JSON
            | FieldType.STYLE
            | FieldType.RICH_TEXT
            | FieldType.IMAGE
            | FieldType.REFERENCE
        ):
            return True
        case FieldType.OBJECT | FieldType.MODEL | FieldType.CROSS_REFERENCE | FieldType.LIST:
            return False
        case _:
            assert_never(field_type)
