"""Markdown building blocks.

Schema-agnostic helpers. Each returns a block of text without a trailing
blank line; callers join blocks with ``"\\n\\n"``.
"""

import re

from gumwood.errors import FormatError

SMALL_WORDS = {"a", "an", "and", "as", "at", "by", "for", "in", "of", "on", "or", "the", "to"}


def heading(level: int, text: str) -> str:
    """Return a level 1-6 ATX heading."""
    if not 1 <= level <= 6:
        raise FormatError(f"heading level must be between 1 and 6, got {level}")
    return f"{'#' * level} {text}"


def link(label: str, target: str) -> str:
    """Return ``[label](target)``, or an empty string for an empty label."""
    if not label:
        return ""
    return f"[{label}]({target})"


def anchor_name(type_name: str) -> str:
    """Derive the anchor slug for *type_name*.

    Used both for the anchor placed on a heading and for every link that
    points at it.
    """
    return re.sub(r"\s+", "-", type_name.strip()).lower()


def named_anchor(text: str) -> str:
    """Return *text* preceded by an HTML anchor named after it."""
    return f'<a name="{anchor_name(text)}"></a>{text}'


def inline_code(text: str) -> str:
    if not text:
        return ""
    return f"`{text}`"


def code_fence(language: str, text: str) -> str:
    return f"```{language}\n{text}\n```"


def blockquote(text: str) -> str:
    """Quote every line of *text*."""
    lines = text.strip().splitlines() or [""]
    return "\n".join(f"> {line}".rstrip() for line in lines)


def bullet_list(items: list[str]) -> str:
    return "\n".join(f"* {item}" for item in items)


def escape_cell(text: str | None) -> str:
    """Make *text* safe for a single table cell."""
    if not text:
        return ""
    collapsed = " ".join(text.split())
    return collapsed.replace("|", "\\|")


def table(headers: list[str], rows: list[list[str]]) -> str:
    """Return a markdown table.

    Raises:
        FormatError: a row does not have one cell per header.
    """
    lines = [_table_row(headers), _table_row(["---"] * len(headers))]
    for index, row in enumerate(rows):
        if len(row) != len(headers):
            raise FormatError(
                f"table row {index} has {len(row)} cells, expected {len(headers)}"
            )
        lines.append(_table_row(row))
    return "\n".join(lines)


def _table_row(cells: list[str]) -> str:
    return f"| {' | '.join(cells)} |"


def title_case(text: str) -> str:
    """Turn a machine-case identifier into a title.

    ``SCALAR`` -> ``Scalar``, ``INPUT_OBJECT`` -> ``Input Object``,
    ``implemented_by`` -> ``Implemented By``.
    """
    words = [w for w in re.split(r"[\s_-]+", text.strip()) if w]
    titled = []
    for index, word in enumerate(words):
        lower = word.lower()
        if 0 < index < len(words) - 1 and lower in SMALL_WORDS:
            titled.append(lower)
        else:
            titled.append(lower[:1].upper() + lower[1:])
    return " ".join(titled)


def front_matter(values: dict[str, str] | None) -> str:
    """Return a ``---`` fenced block of ``key: value`` lines in mapping order."""
    if not values:
        return ""
    lines = ["---"]
    lines.extend(f"{key}: {value}" for key, value in values.items())
    lines.append("---")
    return "\n".join(lines)
