from __future__ import annotations

import re
from collections.abc import Sequence

from .handles import HandleTypeMapper, opaque_typedef
from .model import CodeFragmentPair
from .wrapper_template import WrapperInstance


def default_header_guard(name: str) -> str:
    return re.sub(r"[^A-Za-z0-9]", "_", name).upper()


def render_header(
    instances: Sequence[WrapperInstance],
    free_pairs: Sequence[CodeFragmentPair],
    mapper: HandleTypeMapper,
    tool_path: str,
    guard: str = "BINDINGS_H",
) -> str:
    lines: list[str] = [
        "// <auto-generated />",
        f"// Generated by {tool_path}",
        f"#ifndef {guard}",
        f"#define {guard}",
        "",
        "#include <cstdint>",
        "",
    ]

    for name in sorted(mapper.object_types):
        lines.append(opaque_typedef(mapper.opaque_name(name)))
    lines.append("")

    lines.append('extern "C" {')
    for instance in instances:
        lines.extend(instance.boundary_declarations())
    lines.extend(pair.boundary_declaration for pair in free_pairs)
    lines.append('} // extern "C"')
    lines.append("")

    # Member declarations may name any wrapper, so all of them are declared first.
    for instance in instances:
        lines.append(instance.forward_declaration())
    lines.append("")

    for instance in instances:
        lines.append(instance.class_declaration())
        lines.append("")

    for instance in instances:
        for definition in instance.method_definitions():
            lines.append(definition)
            lines.append("")

    for pair in free_pairs:
        lines.append(pair.wrapper_definition)
        lines.append("")

    lines.append(f"#endif // {guard}")
    return "\n".join(lines) + "\n"
