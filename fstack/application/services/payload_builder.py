"""Build collection create/update payloads for the PocketBase API.

Pure functions: no I/O, same schema in gives an equal payload out. The
field layout follows PocketBase v0.23+ (``fields`` rather than ``schema``).
"""

from __future__ import annotations

from typing import Any

from fstack.domain.schema import (
    BoolField,
    CollectionSchema,
    EditorField,
    FieldDefinition,
    FileField,
    NumberField,
    OptionsField,
    RelationField,
    SelectField,
    TextField,
)


def build_field_payload(field: FieldDefinition) -> dict[str, Any]:
    """Return the wire dict for one field with kind-specific attributes."""
    out: dict[str, Any] = {
        "name": field.name,
        "type": field.type,
        "required": field.required,
    }
    if isinstance(field, TextField):
        out["min"] = field.min
        out["max"] = field.max
        out["pattern"] = field.pattern
    elif isinstance(field, NumberField):
        out["min"] = field.min
        out["max"] = field.max
        out["noDecimal"] = field.no_decimal
    elif isinstance(field, BoolField):
        pass
    elif isinstance(field, SelectField):
        out["values"] = list(field.values)
        out["maxSelect"] = field.max_select
    elif isinstance(field, RelationField):
        out["collectionId"] = field.collection_id
        out["cascadeDelete"] = field.cascade_delete
        out["maxSelect"] = field.max_select
    elif isinstance(field, FileField):
        out["maxSelect"] = field.max_select
        out["maxSize"] = field.max_size
        out["mimeTypes"] = list(field.mime_types)
    elif isinstance(field, EditorField):
        out["convertUrls"] = field.convert_urls
    elif isinstance(field, OptionsField):
        # Shallow merge, options may override the base keys
        out.update(field.options)
    return out


def build_collection_payload(schema: CollectionSchema) -> dict[str, Any]:
    """Return the create/update body for a collection schema.

    Access rules are copied through unchanged; None (locked) stays None.
    """
    return {
        "name": schema.name,
        "type": schema.type.value,
        "fields": [build_field_payload(f) for f in schema.fields],
        "indexes": list(schema.indexes),
        "listRule": schema.list_rule,
        "viewRule": schema.view_rule,
        "createRule": schema.create_rule,
        "updateRule": schema.update_rule,
        "deleteRule": schema.delete_rule,
    }
