from __future__ import annotations

from typing import Any

import jsonpatch
import jsonpointer

from app.core.errors import InvalidPayload, PatchDocumentMissing
from app.services.query.descriptors import FieldDescriptorTable


def _canonical_pointer(pointer: Any, table: FieldDescriptorTable) -> Any:
    if not isinstance(pointer, str) or not pointer.startswith("/"):
        return pointer
    head, sep, rest = pointer[1:].partition("/")
    descriptor = table.get(head)
    if descriptor is None or descriptor.name == head:
        return pointer
    return "/" + descriptor.name + sep + rest


def _canonical_document(document: Any, table: FieldDescriptorTable) -> list[dict[str, Any]]:
    if document is None:
        raise PatchDocumentMissing()
    if not isinstance(document, list) or not all(isinstance(op, dict) for op in document):
        raise InvalidPayload("Patch document must be a JSON array of operations")
    operations: list[dict[str, Any]] = []
    for op in document:
        # Accept the PascalCase member names some clients send.
        normalized = {str(key).lower(): value for key, value in op.items()}
        for key in ("path", "from"):
            if key in normalized:
                normalized[key] = _canonical_pointer(normalized[key], table)
        operations.append(normalized)
    return operations


def _patched_changes(snapshot: dict[str, Any], document: Any, table: FieldDescriptorTable) -> dict[str, Any]:
    """Apply an RFC 6902 document to ``snapshot`` and return the fields it changed.

    Removed members come back as ``None``.
    """
    operations = _canonical_document(document, table)
    try:
        patched = jsonpatch.JsonPatch(operations).apply(snapshot)
    except (jsonpatch.JsonPatchException, jsonpointer.JsonPointerException, KeyError, TypeError) as exc:
        raise InvalidPayload(f"Patch document cannot be applied: {exc}")
    if not isinstance(patched, dict):
        raise InvalidPayload("Patch document cannot replace the whole record")

    changes = {key: value for key, value in patched.items() if key not in snapshot or snapshot[key] != value}
    for key in snapshot:
        if key not in patched:
            changes[key] = None
    return changes
