"""Unit tests for collection payload building (defaults per field kind, rules pass-through)."""

import json

from fstack.application.services.payload_builder import (
    build_collection_payload,
    build_field_payload,
)
from fstack.domain.registry import test_items_collection as items_collection
from fstack.domain.schema import CollectionSchema, parse_field

AUTH_RULE = '@request.auth.id != ""'


def test_items_payload_matches_wire_format() -> None:
    """The test_items schema builds the exact body sent to POST /api/collections."""
    text_defaults = {"min": 0, "max": 0, "pattern": ""}
    assert build_collection_payload(items_collection) == {
        "name": "test_items",
        "type": "base",
        "fields": [
            {"name": "title", "type": "text", "required": True, **text_defaults},
            {"name": "description", "type": "text", "required": False, **text_defaults},
            {"name": "status", "type": "text", "required": False, **text_defaults},
        ],
        "indexes": [],
        "listRule": AUTH_RULE,
        "viewRule": AUTH_RULE,
        "createRule": AUTH_RULE,
        "updateRule": AUTH_RULE,
        "deleteRule": AUTH_RULE,
    }


def test_defaults_per_field_kind() -> None:
    cases = {
        "number": {"min": None, "max": None, "noDecimal": False},
        "bool": {},
        "select": {"values": [], "maxSelect": 1},
        "relation": {"collectionId": "", "cascadeDelete": False, "maxSelect": 1},
        "file": {"maxSelect": 1, "maxSize": 5242880, "mimeTypes": []},
        "editor": {"convertUrls": False},
    }
    for kind, extra in cases.items():
        field = parse_field({"name": "f", "type": kind})
        assert build_field_payload(field) == {
            "name": "f",
            "type": kind,
            "required": False,
            **extra,
        }, kind


def test_options_override_defaults() -> None:
    field = parse_field(
        {
            "name": "avatar",
            "type": "file",
            "required": True,
            "options": {"maxSize": 1024, "mimeTypes": ["image/png"]},
        }
    )

    assert build_field_payload(field) == {
        "name": "avatar",
        "type": "file",
        "required": True,
        "maxSelect": 1,
        "maxSize": 1024,
        "mimeTypes": ["image/png"],
    }


def test_select_and_relation_options() -> None:
    status = parse_field(
        {"name": "status", "type": "select", "options": {"values": ["draft", "live"], "maxSelect": 2}}
    )
    owner = parse_field(
        {"name": "owner", "type": "relation", "collectionId": "_pb_users_auth_", "cascadeDelete": True}
    )

    assert build_field_payload(status)["values"] == ["draft", "live"]
    assert build_field_payload(status)["maxSelect"] == 2
    assert build_field_payload(owner)["collectionId"] == "_pb_users_auth_"
    assert build_field_payload(owner)["cascadeDelete"] is True


def test_untyped_kinds_merge_options_verbatim() -> None:
    """email/url/date/json pass their options through unchanged."""
    field = parse_field(
        {"name": "contact", "type": "email", "options": {"exceptDomains": ["spam.io"], "onlyDomains": []}}
    )

    assert build_field_payload(field) == {
        "name": "contact",
        "type": "email",
        "required": False,
        "exceptDomains": ["spam.io"],
        "onlyDomains": [],
    }


def test_rules_copied_through_including_locked() -> None:
    """Empty string (public) and None (locked) survive unchanged."""
    schema = CollectionSchema(
        name="notes",
        list_rule="",
        view_rule="",
        create_rule=AUTH_RULE,
        indexes=("CREATE INDEX idx_notes_title ON notes (title)",),
    )

    payload = build_collection_payload(schema)

    assert payload["listRule"] == ""
    assert payload["createRule"] == AUTH_RULE
    assert payload["updateRule"] is None
    assert payload["deleteRule"] is None
    assert payload["indexes"] == ["CREATE INDEX idx_notes_title ON notes (title)"]
    assert payload["fields"] == []


def test_payload_is_deterministic() -> None:
    """Same schema in, byte-identical JSON out; building never mutates the schema."""
    schema = CollectionSchema(
        name="gallery",
        type="base",
        fields=(
            parse_field({"name": "photo", "type": "file", "options": {"mimeTypes": ["image/jpeg"]}}),
            parse_field({"name": "meta", "type": "json", "options": {"maxSize": 2000}}),
        ),
    )

    first = json.dumps(build_collection_payload(schema), sort_keys=True)
    build_collection_payload(schema)["fields"][0]["mimeTypes"].append("image/gif")
    second = json.dumps(build_collection_payload(schema), sort_keys=True)

    assert first == second
