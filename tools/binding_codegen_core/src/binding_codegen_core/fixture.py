from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from .errors import BindingCodegenError
from .model import CodeFragmentPair

_LITERAL_RE = re.compile(r'r#"(?P<raw>.*?)"#|"(?P<plain>(?:[^"\\\n]|\\.)*)"', re.S)


def normalize_ws(value: str) -> str:
    return re.sub(r"\s+", " ", value).strip()


def render_literal(text: str) -> str:
    if "\n" not in text:
        escaped = text.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}";'
    if '"#' in text:
        raise BindingCodegenError("multi-line fixture entry cannot contain '\"#'")
    return f'r#"{text}"#;'


def render_fixture(
    pairs: Sequence[CodeFragmentPair],
    typedefs: Iterable[str] = (),
    member_signatures: Iterable[str] = (),
) -> str:
    """Render expectations as a flat list of string literals.

    Blocks are separated by a blank line: opaque typedefs, boundary
    declarations, wrapper member signatures, then wrapper definitions.
    """
    blocks: list[list[str]] = [
        [render_literal(item) for item in typedefs],
        [render_literal(pair.boundary_declaration) for pair in pairs],
        [render_literal(item) for item in member_signatures],
        [render_literal(pair.wrapper_definition) for pair in pairs],
    ]
    sections: list[str] = []
    for block in blocks:
        if not block:
            continue
        separator = "\n\n" if any("\n" in entry for entry in block) else "\n"
        sections.append(separator.join(block))
    return "\n\n".join(sections) + "\n"


def parse_fixture(text: str) -> list[str]:
    entries: list[str] = []
    for match in _LITERAL_RE.finditer(text):
        raw = match.group("raw")
        if raw is not None:
            entries.append(raw)
        else:
            entries.append(re.sub(r"\\(.)", r"\1", match.group("plain")))
    return entries


def find_missing(generated: str, expectations: Iterable[str]) -> list[str]:
    haystack = normalize_ws(generated)
    return [item for item in expectations if normalize_ws(item) not in haystack]
