"""Typed model of a GraphQL schema.

Built from the ``__schema`` object of an introspection response. Field
aliases follow the camelCase names the introspection query returns, so a
payload can be validated as-is.
"""

from functools import cached_property
from typing import Annotated, Literal, Union

import pydantic
from pydantic import BaseModel, BeforeValidator, ConfigDict, model_validator

WRAPPER_KINDS = ("NON_NULL", "LIST")
TYPE_KINDS = ("OBJECT", "INPUT_OBJECT", "INTERFACE", "ENUM", "UNION", "SCALAR")


def _empty_if_none(value):
    # Introspection returns null for list attributes that don't apply to a kind.
    return [] if value is None else value


def _names_of(value):
    """Reduce a list of introspected ``{kind, name}`` refs to their names."""
    if value is None:
        return []
    if not isinstance(value, list):
        return value
    return [item.get("name") if isinstance(item, dict) else item for item in value]


def _root_name(value):
    # queryType / mutationType / subscriptionType are ``{"name": ...}`` or null.
    if isinstance(value, dict):
        return value.get("name")
    return value


NameList = Annotated[list[str], BeforeValidator(_names_of)]


class _Model(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class TypeRef(_Model):
    """A possibly wrapped reference to a named type.

    Holds the name only; the referenced TypeDef is looked up on the Schema.
    """

    kind: str
    name: str | None = None
    of_type: "TypeRef | None" = pydantic.Field(default=None, alias="ofType")

    @model_validator(mode="after")
    def check_shape(self):
        if self.kind in WRAPPER_KINDS and self.of_type is None:
            raise ValueError(f"{self.kind} type reference needs ofType")
        if self.kind not in WRAPPER_KINDS and not self.name:
            raise ValueError(f"{self.kind} type reference needs a name")
        return self

    @property
    def named_type(self) -> str:
        """Name of the innermost named type."""
        ref = self
        while ref.of_type is not None:
            ref = ref.of_type
        return ref.name or ""

    def decorated_name(self) -> str:
        """Render with GraphQL wrapper syntax, e.g. ``[String!]!``."""
        if self.kind == "NON_NULL":
            return f"{self.of_type.decorated_name()}!"
        if self.kind == "LIST":
            return f"[{self.of_type.decorated_name()}]"
        return self.name or ""


class InputValue(_Model):
    """An argument or an input object field."""

    name: str
    description: str | None = None
    type: TypeRef
    default_value: str | None = pydantic.Field(default=None, alias="defaultValue")


class FieldDef(_Model):
    """A field of an object or interface type."""

    name: str
    description: str | None = None
    args: Annotated[list[InputValue], BeforeValidator(_empty_if_none)] = []
    type: TypeRef
    is_deprecated: bool = pydantic.Field(default=False, alias="isDeprecated")
    deprecation_reason: str | None = pydantic.Field(default=None, alias="deprecationReason")


class EnumValue(_Model):
    name: str
    description: str | None = None
    is_deprecated: bool = pydantic.Field(default=False, alias="isDeprecated")
    deprecation_reason: str | None = pydantic.Field(default=None, alias="deprecationReason")


class _TypeDefBase(_Model):
    name: str
    description: str | None = None


class ObjectType(_TypeDefBase):
    kind: Literal["OBJECT"]
    fields: Annotated[list[FieldDef], BeforeValidator(_empty_if_none)] = []
    interfaces: NameList = []


class InterfaceType(_TypeDefBase):
    kind: Literal["INTERFACE"]
    fields: Annotated[list[FieldDef], BeforeValidator(_empty_if_none)] = []
    interfaces: NameList = []
    possible_types: NameList = pydantic.Field(default=[], alias="possibleTypes")


class InputObjectType(_TypeDefBase):
    kind: Literal["INPUT_OBJECT"]
    input_fields: Annotated[list[InputValue], BeforeValidator(_empty_if_none)] = pydantic.Field(
        default=[], alias="inputFields"
    )


class EnumType(_TypeDefBase):
    kind: Literal["ENUM"]
    enum_values: Annotated[list[EnumValue], BeforeValidator(_empty_if_none)] = pydantic.Field(
        default=[], alias="enumValues"
    )


class UnionType(_TypeDefBase):
    kind: Literal["UNION"]
    possible_types: NameList = pydantic.Field(default=[], alias="possibleTypes")


class ScalarType(_TypeDefBase):
    kind: Literal["SCALAR"]


TypeDef = Annotated[
    Union[ObjectType, InterfaceType, InputObjectType, EnumType, UnionType, ScalarType],
    pydantic.Field(discriminator="kind"),
]


class Directive(_Model):
    name: str
    description: str | None = None
    locations: Annotated[list[str], BeforeValidator(_empty_if_none)] = []
    args: Annotated[list[InputValue], BeforeValidator(_empty_if_none)] = []


class Schema(_Model):
    """Root of the model: every declared type plus the root operation types."""

    query_type: Annotated[str | None, BeforeValidator(_root_name)] = pydantic.Field(
        default=None, alias="queryType"
    )
    mutation_type: Annotated[str | None, BeforeValidator(_root_name)] = pydantic.Field(
        default=None, alias="mutationType"
    )
    subscription_type: Annotated[str | None, BeforeValidator(_root_name)] = pydantic.Field(
        default=None, alias="subscriptionType"
    )
    types: list[TypeDef]
    directives: Annotated[list[Directive], BeforeValidator(_empty_if_none)] = []

    @cached_property
    def types_by_name(self) -> dict[str, TypeDef]:
        return {typedef.name: typedef for typedef in self.types}

    def get_type(self, name: str | None) -> TypeDef | None:
        """Look up a TypeDef by name; ``None`` when it isn't declared."""
        if name is None:
            return None
        return self.types_by_name.get(name)

    def get_types_of_kind(self, kind: str) -> list[TypeDef]:
        return [typedef for typedef in self.types if typedef.kind == kind]
