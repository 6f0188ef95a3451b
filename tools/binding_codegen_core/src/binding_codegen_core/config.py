from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any

from .errors import BindingCodegenError


@dataclass(frozen=True)
class RenderOptions:
    opaque_suffix: str = "Opaque"
    wrapper_suffix: str = "Wrapper"
    ref_suffix: str = "Ref"
    ownership_param: str = "OWN_DATA"
    receiver_name: str = "self"
    receiver_field: str = "this->self_"
    release_method: str = "release"
    delete_suffix: str = "delete"
    exception_spec: str = "noexcept"
    param_prefix: str = "a_"
    free_symbol_prefix: str = "ffi_"
    indent: str = "    "


DEFAULT_RENDER_OPTIONS = RenderOptions()


def resolve_render_options(raw: Any, overrides: dict[str, str | None] | None = None) -> RenderOptions:
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise BindingCodegenError("'render' must be an object when specified")

    known = {item.name for item in fields(RenderOptions)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise BindingCodegenError(f"'render' has unknown keys: {', '.join(unknown)}")

    values: dict[str, str] = {}
    for key, value in raw.items():
        if not isinstance(value, str):
            raise BindingCodegenError(f"render.{key} must be string when specified")
        if not value and key != "exception_spec":
            raise BindingCodegenError(f"render.{key} must not be empty")
        values[key] = value

    for key, value in (overrides or {}).items():
        if value is None:
            continue
        if key not in known:
            raise BindingCodegenError(f"unknown render option override '{key}'")
        values[key] = value

    return replace(DEFAULT_RENDER_OPTIONS, **values)
