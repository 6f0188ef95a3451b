from __future__ import annotations

from dataclasses import dataclass

from .config import DEFAULT_RENDER_OPTIONS, RenderOptions
from .handles import HandleTypeMapper, render_handle
from .model import HandleType, MethodSignature, Parameter, receiver_mode


@dataclass(frozen=True)
class BoundaryParameter:
    name: str
    c_type: str
    handle: HandleType | None = None
    is_receiver: bool = False

    def render(self) -> str:
        if self.is_receiver:
            return f"{self.c_type} const {self.name}"
        return f"{self.c_type} {self.name}"


@dataclass(frozen=True)
class BoundarySignature:
    symbol: str
    return_type: str
    parameters: tuple[BoundaryParameter, ...]

    @property
    def text(self) -> str:
        params = ", ".join(param.render() for param in self.parameters) or "void"
        return f"{self.return_type} {self.symbol}({params});"


def parameter_name(param: Parameter, index: int, options: RenderOptions) -> str:
    return param.name or f"{options.param_prefix}{index}"


def boundary_symbol(method: MethodSignature, options: RenderOptions = DEFAULT_RENDER_OPTIONS) -> str:
    # Free functions share their name with the C++ wrapper, so the C side is prefixed.
    if method.owner_type is None:
        return f"{options.free_symbol_prefix}{method.name}"
    return f"{method.owner_type.name}_{method.name}"


def emit_boundary_parameter(
    param: Parameter,
    index: int,
    mapper: HandleTypeMapper,
    options: RenderOptions = DEFAULT_RENDER_OPTIONS,
) -> BoundaryParameter:
    name = parameter_name(param, index, options)
    handle = mapper.map_handle(param.type, param.mode)
    if not isinstance(handle, HandleType):
        return BoundaryParameter(name=name, c_type=param.type.name)
    return BoundaryParameter(name=name, c_type=render_handle(handle), handle=handle)


def emit_boundary_signature(
    method: MethodSignature,
    mapper: HandleTypeMapper,
    options: RenderOptions = DEFAULT_RENDER_OPTIONS,
) -> BoundarySignature:
    params: list[BoundaryParameter] = []

    mode = receiver_mode(method)
    if mode is not None:
        handle = mapper.map_handle(method.owner_type, mode)
        params.append(
            BoundaryParameter(
                name=options.receiver_name,
                c_type=render_handle(handle),
                handle=handle,
                is_receiver=True,
            )
        )

    for index, param in enumerate(method.parameters):
        params.append(emit_boundary_parameter(param, index, mapper, options))

    return BoundarySignature(
        symbol=boundary_symbol(method, options),
        return_type=method.return_type.name,
        parameters=tuple(params),
    )
