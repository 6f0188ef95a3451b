from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .classifier import classify, classify_receiver, parse_parameter_declaration
from .config import RenderOptions, resolve_render_options
from .errors import BindingCodegenError, ModelError
from .model import MethodSignature, Mode, NativeForm, Parameter, TypeRef

BUILTIN_PRIMITIVE_TYPES = frozenset(
    {
        "void",
        "bool",
        "char",
        "i8",
        "i16",
        "i32",
        "i64",
        "u8",
        "u16",
        "u32",
        "u64",
        "isize",
        "usize",
        "f32",
        "f64",
        "int",
        "unsigned int",
        "long",
        "unsigned long",
        "short",
        "unsigned short",
        "float",
        "double",
        "int8_t",
        "uint8_t",
        "int16_t",
        "uint16_t",
        "int32_t",
        "uint32_t",
        "int64_t",
        "uint64_t",
        "size_t",
        "ssize_t",
        "intptr_t",
        "uintptr_t",
    }
)


@dataclass(frozen=True)
class BindingModel:
    object_types: tuple[str, ...]
    methods: tuple[MethodSignature, ...]
    failures: tuple[tuple[str, BindingCodegenError], ...]
    options: RenderOptions


def _require_list(value: Any, label: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ModelError(f"{label} must be an array when specified")
    return value


def _require_name(value: Any, label: str) -> str:
    if not isinstance(value, str) or not value:
        raise ModelError(f"{label} must be a non-empty string")
    return value


def _type_ref(name: str, primitives: frozenset[str]) -> TypeRef:
    if name in primitives:
        return TypeRef.primitive(name)
    return TypeRef.object(name)


def parse_parameter(raw: Any, label: str, primitives: frozenset[str]) -> Parameter:
    if isinstance(raw, str):
        raw = {"type": raw}
    if not isinstance(raw, dict):
        raise ModelError(f"{label} must be an object or a type string")

    type_text = _require_name(raw.get("type"), f"{label}.type")
    name = raw.get("name")
    if name is not None:
        name = _require_name(name, f"{label}.name")

    stripped = " ".join(type_text.split())
    if stripped in primitives:
        # Multi-word C primitives ("unsigned int") never carry reference syntax.
        form, type_name = NativeForm.BY_VALUE, stripped
    else:
        form, type_name = parse_parameter_declaration(type_text)
    type_ref = _type_ref(type_name, primitives)

    raw_mode = raw.get("mode")
    if raw_mode is None:
        return Parameter(type=type_ref, mode=classify(form), name=name)

    try:
        mode = Mode(raw_mode)
    except ValueError as exc:
        raise ModelError(f"{label}.mode '{raw_mode}' is not one of {[m.value for m in Mode]}") from exc
    # A bare type name carries no reference syntax, so only explicit reference
    # spellings are recorded for the consistency check.
    declared = form if form is not NativeForm.BY_VALUE else None
    return Parameter(type=type_ref, mode=mode, name=name, declared_form=declared)


def parse_method(raw: Any, owner: str | None, label: str, primitives: frozenset[str]) -> MethodSignature:
    if not isinstance(raw, dict):
        raise ModelError(f"{label} must be an object")
    name = _require_name(raw.get("name"), f"{label}.name")
    method_label = f"{owner}::{name}" if owner else name

    receiver_text = raw.get("receiver")
    receiver_form = None
    if receiver_text is not None:
        if owner is None:
            raise ModelError(f"{method_label}: free functions cannot declare a receiver")
        receiver_form = classify_receiver(_require_name(receiver_text, f"{method_label}.receiver"))

    params = [
        parse_parameter(item, f"{method_label}.parameters[{index}]", primitives)
        for index, item in enumerate(_require_list(raw.get("parameters"), f"{method_label}.parameters"))
    ]

    return_text = raw.get("return_type", "void")
    return_type = TypeRef.primitive(_require_name(return_text, f"{method_label}.return_type"))

    alias = raw.get("alias")
    if alias is not None:
        alias = _require_name(alias, f"{method_label}.alias")

    docs = _require_list(raw.get("doc"), f"{method_label}.doc")
    for index, item in enumerate(docs):
        if not isinstance(item, str):
            raise ModelError(f"{method_label}.doc[{index}] must be a string")

    return MethodSignature(
        owner_type=TypeRef.object(owner) if owner else None,
        name=name,
        parameters=tuple(params),
        is_const_receiver=receiver_form.is_read_only if receiver_form is not None else False,
        is_static=receiver_form is None,
        return_type=return_type,
        receiver_form=receiver_form,
        name_alias=alias,
        doc_comments=tuple(docs),
    )


def load_model(payload: dict[str, Any], render_overrides: dict[str, str | None] | None = None) -> BindingModel:
    """Build the method model from a JSON document.

    Structural problems in the document are fatal. Problems local to one
    method are collected in ``failures`` so the remaining methods still
    generate.
    """
    if not isinstance(payload, dict):
        raise ModelError("model root must be an object")

    extra_primitives = _require_list(payload.get("primitive_types"), "primitive_types")
    primitives = BUILTIN_PRIMITIVE_TYPES | frozenset(
        _require_name(item, "primitive_types[]") for item in extra_primitives
    )

    object_types: list[str] = []
    for item in _require_list(payload.get("object_types"), "object_types"):
        object_types.append(_require_name(item, "object_types[]"))

    classes: list[str] = []
    methods: list[MethodSignature] = []
    failures: list[tuple[str, BindingCodegenError]] = []

    for class_index, raw_class in enumerate(_require_list(payload.get("classes"), "classes")):
        if not isinstance(raw_class, dict):
            raise ModelError(f"classes[{class_index}] must be an object")
        owner = _require_name(raw_class.get("name"), f"classes[{class_index}].name")
        if owner in classes:
            raise ModelError(f"class '{owner}' is declared twice")
        if owner in primitives:
            raise ModelError(f"class '{owner}' collides with a primitive type name")
        classes.append(owner)
        if owner not in object_types:
            object_types.append(owner)
        for index, raw_method in enumerate(_require_list(raw_class.get("methods"), f"{owner}.methods")):
            label = f"{owner}.methods[{index}]"
            try:
                methods.append(parse_method(raw_method, owner, label, primitives))
            except BindingCodegenError as exc:
                failures.append((label, exc))

    for index, raw_function in enumerate(_require_list(payload.get("functions"), "functions")):
        label = f"functions[{index}]"
        try:
            methods.append(parse_method(raw_function, None, label, primitives))
        except BindingCodegenError as exc:
            failures.append((label, exc))

    options = resolve_render_options(payload.get("render"), render_overrides)
    return BindingModel(
        object_types=tuple(object_types),
        methods=tuple(methods),
        failures=tuple(failures),
        options=options,
    )
