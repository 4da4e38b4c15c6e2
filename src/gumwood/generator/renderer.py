"""Schema renderer: turns a Schema into markdown, one unit per entity kind."""

import logging

from gumwood.markdown import (
    anchor_name,
    blockquote,
    bullet_list,
    escape_cell,
    front_matter as front_matter_block,
    heading,
    inline_code,
    link,
    named_anchor,
    table,
    title_case,
)
from gumwood.parser.base import (
    Directive,
    EnumType,
    FieldDef,
    InputObjectType,
    InputValue,
    InterfaceType,
    ObjectType,
    Schema,
    TypeDef,
    TypeRef,
    UnionType,
)

logger = logging.getLogger(__name__)

# Unit key for each TypeDef kind, in canonical output order.
KIND_UNITS = {
    "OBJECT": "objects",
    "INPUT_OBJECT": "inputs",
    "INTERFACE": "interfaces",
    "ENUM": "enums",
    "UNION": "unions",
    "SCALAR": "scalars",
}

# Unit key -> Schema attribute naming the root operation type.
ROOT_UNITS = {
    "queries": "query_type",
    "mutations": "mutation_type",
    "subscriptions": "subscription_type",
}

UNIT_ORDER = (*ROOT_UNITS, *KIND_UNITS.values())

RenderedDoc = dict[str, str]


def _by_name(item) -> str:
    return item.name


def _deprecation(is_deprecated: bool, reason: str | None) -> str:
    if not is_deprecated:
        return ""
    reason = escape_cell(reason)
    if reason:
        return f" (deprecated: {reason})"
    return " (deprecated)"


class SchemaRenderer:
    """Renders a Schema into markdown units keyed by entity kind.

    With ``split=True`` each unit is meant to be written to its own
    ``<kind>.md`` file, so links into another unit carry the file name.
    Otherwise all links are plain in-document anchors.
    """

    def __init__(
        self,
        schema: Schema,
        split: bool = True,
        include_introspection_types: bool = True,
        include_directives: bool = False,
    ):
        self.schema = schema
        self.split = split
        self.include_introspection_types = include_introspection_types
        self.include_directives = include_directives
        self._unresolved: set[str] = set()

    def render(self, front_matter: dict[str, str] | None = None) -> RenderedDoc:
        """Render every non-empty unit in canonical order.

        A non-empty *front_matter* mapping is prefixed to each unit.
        """
        self._unresolved = set()
        contents: RenderedDoc = {}

        for unit, attribute in ROOT_UNITS.items():
            blocks = self._root_blocks(unit, getattr(self.schema, attribute))
            if blocks:
                contents[unit] = self._assemble(blocks, front_matter)

        for kind, unit in KIND_UNITS.items():
            blocks = self._kind_blocks(kind, unit)
            if blocks:
                contents[unit] = self._assemble(blocks, front_matter)

        if self.include_directives and self.schema.directives:
            contents["directives"] = self._assemble(self._directive_blocks(), front_matter)

        logger.debug("Rendered units: %s", ", ".join(contents) or "(none)")
        return contents

    def _assemble(self, blocks: list[str], front_matter: dict[str, str] | None) -> str:
        text = "\n\n".join(block for block in blocks if block) + "\n"
        prefix = front_matter_block(front_matter)
        if prefix:
            return f"{prefix}\n\n{text}"
        return text

    # -- type references -----------------------------------------------------

    def _resolve(self, name: str) -> TypeDef | None:
        typedef = self.schema.get_type(name)
        if typedef is None:
            if name and name not in self._unresolved:
                self._unresolved.add(name)
                logger.warning("Type %r is referenced but not declared; rendering without a link", name)
            return None
        if not self._is_rendered(typedef):
            return None
        return typedef

    def _is_rendered(self, typedef: TypeDef) -> bool:
        return self.include_introspection_types or not typedef.name.startswith("__")

    def _href(self, typedef: TypeDef, current_unit: str) -> str:
        anchor = anchor_name(typedef.name)
        target_unit = KIND_UNITS[typedef.kind]
        if self.split and target_unit != current_unit:
            return f"{target_unit}.md#{anchor}"
        return f"#{anchor}"

    def type_ref(self, ref: TypeRef, current_unit: str) -> str:
        """Render *ref* with wrapper syntax, linked to its type when declared."""
        label = inline_code(ref.decorated_name())
        typedef = self._resolve(ref.named_type)
        if typedef is None:
            return label
        return link(label, self._href(typedef, current_unit))

    def type_name(self, name: str, current_unit: str) -> str:
        label = inline_code(name)
        typedef = self._resolve(name)
        if typedef is None:
            return label
        return link(label, self._href(typedef, current_unit))

    # -- root operations -----------------------------------------------------

    def _root_blocks(self, unit: str, root_name: str | None) -> list[str]:
        root = self.schema.get_type(root_name)
        if root_name and root is None:
            logger.warning("Root type %r for %s is not declared; skipping", root_name, unit)
        if not isinstance(root, ObjectType) or not root.fields:
            return []

        blocks = [heading(1, title_case(unit))]
        if root.description:
            blocks.append(blockquote(root.description))
        for field in sorted(root.fields, key=_by_name):
            blocks.extend(self._operation_blocks(field, unit))
        return blocks

    def _operation_blocks(self, field: FieldDef, unit: str) -> list[str]:
        blocks = [heading(2, field.name + _deprecation(field.is_deprecated, field.deprecation_reason))]
        if field.description:
            blocks.append(blockquote(field.description))
        blocks.append(f"**Type:** {self.type_ref(field.type, unit)}")
        if field.args:
            blocks.append(heading(3, "Arguments"))
            blocks.append(self._input_table(field.args, unit))
        return blocks

    # -- named types ---------------------------------------------------------

    def _kind_blocks(self, kind: str, unit: str) -> list[str]:
        typedefs = [t for t in self.schema.get_types_of_kind(kind) if self._is_rendered(t)]
        if not typedefs:
            return []

        blocks = [heading(1, title_case(unit))]
        for typedef in sorted(typedefs, key=_by_name):
            blocks.extend(self._typedef_blocks(typedef, unit))
        return blocks

    def _typedef_blocks(self, typedef: TypeDef, unit: str) -> list[str]:
        blocks = [heading(2, named_anchor(typedef.name))]
        if typedef.description:
            blocks.append(blockquote(typedef.description))

        if isinstance(typedef, (ObjectType, InterfaceType)):
            if typedef.interfaces:
                names = ", ".join(self.type_name(n, unit) for n in sorted(typedef.interfaces))
                blocks.append(f"**Implements:** {names}")
            if typedef.fields:
                blocks.append(heading(3, "Fields"))
                blocks.append(self._field_table(typedef.fields, unit))
        if isinstance(typedef, InterfaceType) and typedef.possible_types:
            blocks.append(heading(3, "Implemented By"))
            blocks.append(self._name_list(typedef.possible_types, unit))
        elif isinstance(typedef, InputObjectType) and typedef.input_fields:
            blocks.append(heading(3, "Fields"))
            blocks.append(self._input_table(typedef.input_fields, unit))
        elif isinstance(typedef, EnumType) and typedef.enum_values:
            blocks.append(heading(3, "Values"))
            blocks.append(self._enum_table(typedef, unit))
        elif isinstance(typedef, UnionType) and typedef.possible_types:
            blocks.append(heading(3, "Possible Types"))
            blocks.append(self._name_list(typedef.possible_types, unit))
        return blocks

    def _name_list(self, names: list[str], unit: str) -> str:
        return bullet_list([self.type_name(name, unit) for name in sorted(names)])

    # -- member tables -------------------------------------------------------

    def _field_table(self, fields: list[FieldDef], unit: str) -> str:
        with_args = any(field.args for field in fields)
        headers = ["Name", "Type", "Description"]
        if with_args:
            headers.insert(2, "Arguments")

        rows = []
        for field in sorted(fields, key=_by_name):
            row = [
                inline_code(field.name) + _deprecation(field.is_deprecated, field.deprecation_reason),
                self.type_ref(field.type, unit),
                escape_cell(field.description),
            ]
            if with_args:
                row.insert(2, self._argument_summary(field.args, unit))
            rows.append(row)
        return table(headers, rows)

    def _argument_summary(self, args: list[InputValue], unit: str) -> str:
        return ", ".join(
            f"{inline_code(arg.name)}: {self.type_ref(arg.type, unit)}"
            for arg in sorted(args, key=_by_name)
        )

    def _input_table(self, values: list[InputValue], unit: str) -> str:
        rows = [
            [
                inline_code(value.name),
                self.type_ref(value.type, unit),
                inline_code(escape_cell(value.default_value)),
                escape_cell(value.description),
            ]
            for value in sorted(values, key=_by_name)
        ]
        return table(["Name", "Type", "Default Value", "Description"], rows)

    def _enum_table(self, typedef: EnumType, unit: str) -> str:
        rows = [
            [
                inline_code(value.name) + _deprecation(value.is_deprecated, value.deprecation_reason),
                escape_cell(value.description),
            ]
            for value in sorted(typedef.enum_values, key=_by_name)
        ]
        return table(["Name", "Description"], rows)

    # -- directives ----------------------------------------------------------

    def _directive_blocks(self) -> list[str]:
        blocks = [heading(1, "Directives")]
        for directive in sorted(self.schema.directives, key=_by_name):
            blocks.extend(self._single_directive_blocks(directive))
        return blocks

    def _single_directive_blocks(self, directive: Directive) -> list[str]:
        blocks = [heading(2, f"@{directive.name}")]
        if directive.description:
            blocks.append(blockquote(directive.description))
        if directive.locations:
            locations = ", ".join(inline_code(loc) for loc in directive.locations)
            blocks.append(f"**Locations:** {locations}")
        if directive.args:
            blocks.append(heading(3, "Arguments"))
            blocks.append(self._input_table(directive.args, "directives"))
        return blocks


def render(
    schema: Schema,
    front_matter: dict[str, str] | None = None,
    split: bool = True,
    include_introspection_types: bool = True,
    include_directives: bool = False,
) -> RenderedDoc:
    """Render *schema* into ``{unit: markdown}`` in canonical unit order."""
    renderer = SchemaRenderer(
        schema,
        split=split,
        include_introspection_types=include_introspection_types,
        include_directives=include_directives,
    )
    return renderer.render(front_matter)
