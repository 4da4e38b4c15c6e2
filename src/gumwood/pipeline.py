"""Pipeline: introspection bytes -> Schema -> markdown.

No I/O happens here; sources and writers live in ``gumwood.source`` and
``gumwood.cli``.
"""

import logging

from pydantic import BaseModel

from gumwood.errors import SourceError
from gumwood.generator.renderer import RenderedDoc, render
from gumwood.markdown import front_matter as front_matter_block
from gumwood.parser.introspection import build_schema

logger = logging.getLogger(__name__)

UNIT_SEPARATOR = "\n---\n\n"


class RunOptions(BaseModel):
    """Options consumed by :func:`run`."""

    front_matter: dict[str, str] | None = None
    split_by_kind: bool = False
    include_introspection_types: bool = True
    include_directives: bool = False


def run(source: bytes | str, options: RunOptions | None = None) -> RenderedDoc | str:
    """Parse *source* and render it.

    Returns the ``{unit: markdown}`` mapping when ``split_by_kind`` is set,
    otherwise one combined markdown document.

    Raises:
        SourceError: *source* is empty.
        SchemaParseError: *source* is not a valid introspection response.
    """
    options = options or RunOptions()
    if not source or not source.strip():
        raise SourceError("no introspection data supplied")

    schema = build_schema(source)
    if options.split_by_kind:
        return render(
            schema,
            front_matter=options.front_matter,
            split=True,
            include_introspection_types=options.include_introspection_types,
            include_directives=options.include_directives,
        )

    units = render(
        schema,
        split=False,
        include_introspection_types=options.include_introspection_types,
        include_directives=options.include_directives,
    )
    return combine(units, options.front_matter)


def combine(units: RenderedDoc, front_matter: dict[str, str] | None = None) -> str:
    """Join rendered units into one document, front matter first."""
    body = UNIT_SEPARATOR.join(units.values())
    logger.debug("Combined %d units into one document", len(units))
    prefix = front_matter_block(front_matter)
    if prefix:
        return f"{prefix}\n\n{body}"
    return body
