"""Turn host update requests into native field patches."""

import logging
from collections.abc import Iterable, Mapping

from content_bridge.core.exceptions import UnsupportedFieldTypeError, UnsupportedOperationError
from content_bridge.core.fields import is_clearable, to_native
from content_bridge.core.native import ABSENT, NativeFieldMap
from content_bridge.core.types import SetOperation, UnsetOperation, UpdateOperation, UpdateOperationField

logger = logging.getLogger(__name__)


def apply_field_map(fields: Mapping[str, UpdateOperationField]) -> NativeFieldMap:
    """Denormalize a full set of field values, e.g. for a new document."""
    return {field_name: to_native(field) for field_name, field in fields.items()}


def _native_key(field_path: list[str | int]) -> str:
    # Nested paths are not resolved; the first segment names the document field.
    if len(field_path) > 1:
        logger.debug("Ignoring nested path segments %s", field_path[1:])
    return str(field_path[0])


def apply_operations(operations: Iterable[UpdateOperation]) -> NativeFieldMap:
    """Build the native patch for a list of update operations.

    Operations apply in order; a later operation on the same field wins.
    ``unset`` writes ``ABSENT`` so the store clears the field.

    Raises:
        UnsupportedFieldTypeError: when setting or clearing a nested field type.
        UnsupportedOperationError: for operations other than set/unset.

    """
    fields: NativeFieldMap = {}
    for operation in operations:
        match operation:
            case SetOperation():
                fields[_native_key(operation.field_path)] = to_native(operation.field)
            case UnsetOperation():
                if not is_clearable(operation.model_field.type):
                    raise UnsupportedFieldTypeError(operation.model_field.type.value)
                fields[_native_key(operation.field_path)] = ABSENT
            case _:
                raise UnsupportedOperationError(operation.op_type)
    return fields
