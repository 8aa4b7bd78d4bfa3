"""Collection registry: the collections the starter kit provisions.

Add new collections to DEFAULT_COLLECTIONS to have them created by the
setup script.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from fstack.core.constants import RULE_AUTHENTICATED, RULE_PUBLIC
from fstack.domain.exceptions import SchemaDefinitionError
from fstack.domain.schema import CollectionSchema, parse_field

# Used by the integration test dashboard: CRUD and realtime subscriptions.
test_items_collection = CollectionSchema(
    name="test_items",
    type="base",
    fields=(
        parse_field({"name": "title", "type": "text", "required": True}),
        parse_field({"name": "description", "type": "text"}),
        parse_field({"name": "status", "type": "text"}),
    ),
    list_rule=RULE_AUTHENTICATED,
    view_rule=RULE_AUTHENTICATED,
    create_rule=RULE_AUTHENTICATED,
    update_rule=RULE_AUTHENTICATED,
    delete_rule=RULE_AUTHENTICATED,
)

# Public timeline: anyone lists and posts, only signed-in users edit.
tweets_collection = CollectionSchema(
    name="tweets",
    type="base",
    fields=(parse_field({"name": "content", "type": "text", "required": True}),),
    list_rule=RULE_PUBLIC,
    view_rule=RULE_PUBLIC,
    create_rule=RULE_PUBLIC,
    update_rule=RULE_AUTHENTICATED,
    delete_rule=RULE_AUTHENTICATED,
)

DEFAULT_COLLECTIONS: tuple[CollectionSchema, ...] = (
    test_items_collection,
    tweets_collection,
)


def _as_fields(fields: Iterable[Any]) -> tuple[Any, ...]:
    return tuple(parse_field(f) if isinstance(f, dict) else f for f in fields)


def create_collection_schema(
    name: str,
    fields: Iterable[Any],
    *,
    type: str = "base",
    list_rule: str | None = RULE_AUTHENTICATED,
    view_rule: str | None = RULE_AUTHENTICATED,
    create_rule: str | None = RULE_AUTHENTICATED,
    update_rule: str | None = RULE_AUTHENTICATED,
    delete_rule: str | None = RULE_AUTHENTICATED,
    indexes: Sequence[str] = (),
) -> CollectionSchema:
    """Build a collection that requires authentication for every operation.

    Fields may be typed field models or loose mappings.
    """
    return CollectionSchema(
        name=name,
        type=type,
        fields=_as_fields(fields),
        indexes=tuple(indexes),
        list_rule=list_rule,
        view_rule=view_rule,
        create_rule=create_rule,
        update_rule=update_rule,
        delete_rule=delete_rule,
    )


def create_public_collection_schema(
    name: str,
    fields: Iterable[Any],
    *,
    type: str = "base",
    create_rule: str | None = RULE_AUTHENTICATED,
    update_rule: str | None = RULE_AUTHENTICATED,
    delete_rule: str | None = RULE_AUTHENTICATED,
    indexes: Sequence[str] = (),
) -> CollectionSchema:
    """Build a publicly readable collection; writes still require auth by default."""
    return create_collection_schema(
        name,
        fields,
        type=type,
        list_rule=RULE_PUBLIC,
        view_rule=RULE_PUBLIC,
        create_rule=create_rule,
        update_rule=update_rule,
        delete_rule=delete_rule,
        indexes=indexes,
    )


def validate_registry(registry: Sequence[CollectionSchema]) -> None:
    """Raise SchemaDefinitionError if two schemas share a name."""
    seen: set[str] = set()
    for schema in registry:
        if schema.name in seen:
            raise SchemaDefinitionError(
                f"Collection {schema.name!r} is declared more than once",
                collection=schema.name,
            )
        seen.add(schema.name)
