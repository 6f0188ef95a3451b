from __future__ import annotations

from collections.abc import Iterable

from .config import DEFAULT_RENDER_OPTIONS, RenderOptions
from .errors import UnresolvedTypeError
from .model import PASSTHROUGH, HandleType, Mode, TypeRef, Passthrough


def handle_is_const(mode: Mode) -> bool:
    return mode is Mode.BORROWED_IMMUTABLE


class HandleTypeMapper:
    """Resolves object types to their opaque boundary handles.

    The registry is fixed at construction; mapping never mutates it, so one
    mapper can serve any number of methods concurrently.
    """

    def __init__(self, object_types: Iterable[str], options: RenderOptions = DEFAULT_RENDER_OPTIONS) -> None:
        self._object_types = frozenset(object_types)
        self.options = options

    @property
    def object_types(self) -> frozenset[str]:
        return self._object_types

    def opaque_name(self, type_name: str) -> str:
        if type_name not in self._object_types:
            raise UnresolvedTypeError(type_name)
        return f"{type_name}{self.options.opaque_suffix}"

    def map_handle(self, type_ref: TypeRef, mode: Mode) -> HandleType | Passthrough:
        if not type_ref.is_object:
            return PASSTHROUGH
        return HandleType(base_name=self.opaque_name(type_ref.name), is_const=handle_is_const(mode))


def render_handle(handle: HandleType) -> str:
    if handle.is_const:
        return f"const {handle.base_name} *"
    return f"{handle.base_name} *"


def opaque_typedef(opaque_name: str) -> str:
    return f"typedef struct {opaque_name} {opaque_name};"
