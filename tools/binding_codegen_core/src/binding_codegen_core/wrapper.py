from __future__ import annotations

from dataclasses import dataclass

from .boundary import boundary_symbol, parameter_name
from .classifier import classify, reconstruct_native_form
from .config import DEFAULT_RENDER_OPTIONS, RenderOptions
from .errors import InconsistentModeError
from .handles import HandleTypeMapper, render_handle
from .model import HandleType, MethodSignature, Mode, NativeForm, Parameter


@dataclass(frozen=True)
class WrapperBody:
    return_type: str
    name: str
    parameters: tuple[str, ...]
    qualifiers: str
    is_static: bool
    arguments: tuple[str, ...]
    forwarding_call: str
    doc_comments: tuple[str, ...] = ()

    @property
    def native_signature(self) -> str:
        head = f"{self.return_type} {self.name}({', '.join(self.parameters)})"
        if self.is_static:
            head = f"static {head}"
        return f"{head} {self.qualifiers}".rstrip()

    @property
    def member_declaration(self) -> str:
        return f"{self.native_signature};"


def render_native_parameter(type_name: str, form: NativeForm, name: str) -> str:
    if form is NativeForm.IMMUTABLE_REFERENCE:
        return f"const {type_name} & {name}"
    if form is NativeForm.MUTABLE_REFERENCE:
        return f"{type_name} & {name}"
    return f"{type_name} {name}"


def checked_native_form(method: MethodSignature, index: int, param: Parameter) -> NativeForm:
    form = reconstruct_native_form(param.mode)
    if classify(form) is not param.mode:
        raise InconsistentModeError(method.label, index, form.value, param.mode.value)
    if param.declared_form is not None and classify(param.declared_form) is not param.mode:
        raise InconsistentModeError(method.label, index, param.declared_form.value, param.mode.value)
    return form


def forwarding_expression(
    param: Parameter,
    name: str,
    mapper: HandleTypeMapper,
    options: RenderOptions = DEFAULT_RENDER_OPTIONS,
) -> str:
    handle = mapper.map_handle(param.type, param.mode)
    if not isinstance(handle, HandleType):
        return name
    if param.mode is Mode.CONSUMED_BY_VALUE:
        # Ownership moves to the callee; the local wrapper is left empty.
        return f"{name}.{options.release_method}()"
    return f"static_cast<{render_handle(handle)}>({name})"


def emit_wrapper_body(
    method: MethodSignature,
    mapper: HandleTypeMapper,
    options: RenderOptions = DEFAULT_RENDER_OPTIONS,
) -> WrapperBody:
    native_params: list[str] = []
    arguments: list[str] = []

    if method.has_receiver:
        arguments.append(options.receiver_field)

    for index, param in enumerate(method.parameters):
        name = parameter_name(param, index, options)
        if param.type.is_object:
            form = checked_native_form(method, index, param)
            native_params.append(render_native_parameter(param.type.name, form, name))
        else:
            native_params.append(f"{param.type.name} {name}")
        arguments.append(forwarding_expression(param, name, mapper, options))

    if method.is_static:
        qualifiers = options.exception_spec
    else:
        const_part = "const " if method.is_const_receiver else ""
        qualifiers = f"{const_part} {options.exception_spec}"

    return_type = method.return_type.name
    call = f"{boundary_symbol(method, options)}({', '.join(arguments)});"
    if return_type != "void":
        call = f"return {call}"

    return WrapperBody(
        return_type=return_type,
        name=method.wrapper_name,
        parameters=tuple(native_params),
        qualifiers=qualifiers,
        is_static=method.is_static,
        arguments=tuple(arguments),
        forwarding_call=call,
        doc_comments=method.doc_comments,
    )


def doc_lines(doc_comments: tuple[str, ...], indent: str = "") -> list[str]:
    return [f"{indent}/// {line}".rstrip() for line in doc_comments]


def wrapper_class_name(owner: str, options: RenderOptions = DEFAULT_RENDER_OPTIONS) -> str:
    return f"{owner}{options.wrapper_suffix}"


def render_wrapper_definition(
    owner: str,
    body: WrapperBody,
    options: RenderOptions = DEFAULT_RENDER_OPTIONS,
    ownership_arg: str | None = None,
) -> str:
    """Out-of-class definition of one wrapper method.

    With ``ownership_arg`` unset the definition stays generic over the
    ownership parameter; otherwise it is an explicit specialization for the
    given argument (``true`` or ``false``). Only the header line differs.
    """
    if ownership_arg is None:
        template_line = f"template<bool {options.ownership_param}>"
        type_arg = options.ownership_param
    else:
        template_line = "template<>"
        type_arg = ownership_arg
    qualified = f"{wrapper_class_name(owner, options)}<{type_arg}>::{body.name}"
    head = f"inline {body.return_type} {qualified}({', '.join(body.parameters)}) {body.qualifiers}".rstrip()
    return "\n".join(
        [
            *doc_lines(body.doc_comments),
            template_line,
            head,
            "{",
            f"{options.indent}{body.forwarding_call}",
            "}",
        ]
    )


def emit_wrapper_definition(
    method: MethodSignature,
    mapper: HandleTypeMapper,
    options: RenderOptions = DEFAULT_RENDER_OPTIONS,
) -> str:
    body = emit_wrapper_body(method, mapper, options)
    if method.owner_type is None:
        return render_free_function_definition(body, options)
    return render_wrapper_definition(method.owner_type.name, body, options)


def render_free_function_definition(body: WrapperBody, options: RenderOptions = DEFAULT_RENDER_OPTIONS) -> str:
    head = f"inline {body.return_type} {body.name}({', '.join(body.parameters)}) {body.qualifiers}".rstrip()
    return "\n".join([*doc_lines(body.doc_comments), head, "{", f"{options.indent}{body.forwarding_call}", "}"])
