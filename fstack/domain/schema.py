"""Declarative collection schemas (fields, indexes, access rules).

Field definitions are a tagged union keyed by ``type``: each variant
carries only the attributes its kind understands, with the defaults the
PocketBase API expects. Kinds without typed attributes (email, url, date,
json) keep a free-form ``options`` mapping that is passed through as-is.

Definitions may use the loose ``{"name", "type", "required", "options"}``
shape; for typed kinds the ``options`` keys are lifted into the variant
and unknown keys are rejected at construction time.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator

from fstack.core.constants import DEFAULT_FILE_MAX_SIZE, DEFAULT_MAX_SELECT
from fstack.domain.enums import CollectionType
from fstack.domain.exceptions import SchemaDefinitionError


class _FieldBase(BaseModel):
    """Attributes shared by every field kind."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    name: str = Field(..., min_length=1)
    required: bool = False

    @model_validator(mode="before")
    @classmethod
    def lift_options(cls, data: Any) -> Any:
        """Merge a loose ``options`` mapping into the typed attributes.

        Explicit top-level attributes win over the same key in options.
        """
        if not isinstance(data, dict) or "options" not in data:
            return data
        data = dict(data)
        options = data.pop("options") or {}
        return {**options, **data}


class TextField(_FieldBase):
    type: Literal["text"] = "text"
    min: int = 0
    max: int = 0  # 0 = no limit
    pattern: str = ""


class NumberField(_FieldBase):
    type: Literal["number"] = "number"
    min: int | float | None = None
    max: int | float | None = None
    no_decimal: bool = Field(default=False, alias="noDecimal")


class BoolField(_FieldBase):
    type: Literal["bool"] = "bool"


class SelectField(_FieldBase):
    type: Literal["select"] = "select"
    values: tuple[str, ...] = ()
    max_select: int = Field(default=DEFAULT_MAX_SELECT, alias="maxSelect")


class RelationField(_FieldBase):
    type: Literal["relation"] = "relation"
    collection_id: str = Field(default="", alias="collectionId")
    cascade_delete: bool = Field(default=False, alias="cascadeDelete")
    max_select: int = Field(default=DEFAULT_MAX_SELECT, alias="maxSelect")


class FileField(_FieldBase):
    type: Literal["file"] = "file"
    max_select: int = Field(default=DEFAULT_MAX_SELECT, alias="maxSelect")
    max_size: int = Field(default=DEFAULT_FILE_MAX_SIZE, alias="maxSize")
    mime_types: tuple[str, ...] = Field(default=(), alias="mimeTypes")


class EditorField(_FieldBase):
    type: Literal["editor"] = "editor"
    convert_urls: bool = Field(default=False, alias="convertUrls")


class OptionsField(_FieldBase):
    """Field kind with no typed attributes; options are sent verbatim."""

    type: Literal["email", "url", "date", "json"]
    options: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def lift_options(cls, data: Any) -> Any:
        return data


FieldDefinition = Annotated[
    Union[
        TextField,
        NumberField,
        BoolField,
        SelectField,
        RelationField,
        FileField,
        EditorField,
        OptionsField,
    ],
    Field(discriminator="type"),
]

_field_adapter: TypeAdapter[FieldDefinition] = TypeAdapter(FieldDefinition)


def parse_field(data: dict[str, Any]) -> FieldDefinition:
    """Build the typed field variant for a loose field mapping."""
    return _field_adapter.validate_python(data)


class CollectionSchema(BaseModel):
    """Desired state of one collection, keyed by ``name`` on the server.

    Access rules: ``""`` is public, a non-empty expression gates the
    operation, ``None`` locks it to admins only.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    name: str = Field(..., min_length=1)
    type: CollectionType = CollectionType.BASE
    fields: tuple[FieldDefinition, ...] = ()
    indexes: tuple[str, ...] = ()
    list_rule: str | None = Field(default=None, alias="listRule")
    view_rule: str | None = Field(default=None, alias="viewRule")
    create_rule: str | None = Field(default=None, alias="createRule")
    update_rule: str | None = Field(default=None, alias="updateRule")
    delete_rule: str | None = Field(default=None, alias="deleteRule")

    @model_validator(mode="after")
    def check_names(self) -> CollectionSchema:
        """Reject reserved collection names and duplicate field names."""
        if self.name.startswith("_"):
            raise SchemaDefinitionError(
                f"Collection name {self.name!r} is reserved (leading underscore)",
                collection=self.name,
            )
        seen: set[str] = set()
        for field in self.fields:
            if field.name in seen:
                raise SchemaDefinitionError(
                    f"Duplicate field {field.name!r} in collection {self.name!r}",
                    collection=self.name,
                )
            seen.add(field.name)
        return self

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]
