from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .boundary import emit_boundary_signature
from .config import DEFAULT_RENDER_OPTIONS, RenderOptions
from .errors import BindingCodegenError, ModelError, WrapperAssemblyError
from .handles import HandleTypeMapper
from .model import CodeFragmentPair, MethodSignature, TypeRef
from .wrapper import WrapperBody, doc_lines, emit_wrapper_body, render_wrapper_definition, wrapper_class_name


@dataclass(frozen=True)
class WrapperMethod:
    signature: MethodSignature
    body: WrapperBody
    pair: CodeFragmentPair


@dataclass(frozen=True)
class WrapperInstance:
    """One wrapper type, generated once and instantiable as owning or referencing.

    Ownership only changes the destructor; every method definition is shared
    and differs between instantiations in the template header alone.
    """

    owner: str
    opaque_name: str
    methods: tuple[WrapperMethod, ...]
    options: RenderOptions = DEFAULT_RENDER_OPTIONS

    @property
    def class_name(self) -> str:
        return wrapper_class_name(self.owner, self.options)

    @property
    def pairs(self) -> tuple[CodeFragmentPair, ...]:
        return tuple(item.pair for item in self.methods)

    @property
    def delete_symbol(self) -> str:
        return f"{self.owner}_{self.options.delete_suffix}"

    @property
    def storage_field(self) -> str:
        return self.options.receiver_field.split("->")[-1]

    def boundary_declarations(self) -> list[str]:
        lines = [f"void {self.delete_symbol}({self.opaque_name} * {self.options.receiver_name});"]
        lines.extend(item.pair.boundary_declaration for item in self.methods)
        return lines

    def class_declaration(self) -> str:
        o = self.options
        ind = o.indent
        cls = self.class_name
        opaque = self.opaque_name
        field_name = self.storage_field
        own = o.ownership_param

        lines = [
            f"template<bool {own}>",
            f"class {cls}",
            "{",
            "public:",
            f"{ind}explicit {cls}({opaque} *raw) noexcept : {field_name}(raw) {{}}",
            f"{ind}{cls}(const {cls} &) = delete;",
            f"{ind}{cls} &operator=(const {cls} &) = delete;",
            f"{ind}{cls}({cls} &&other) noexcept : {field_name}(other.{field_name}) {{ other.{field_name} = nullptr; }}",
            f"{ind}~{cls}() noexcept",
            f"{ind}{{",
            f"{ind}{ind}if ({own} && {o.receiver_field} != nullptr) {{",
            f"{ind}{ind}{ind}{self.delete_symbol}({o.receiver_field});",
            f"{ind}{ind}}}",
            f"{ind}}}",
            f"{ind}explicit operator {opaque} *() const noexcept {{ return {o.receiver_field}; }}",
            f"{ind}explicit operator const {opaque} *() const noexcept {{ return {o.receiver_field}; }}",
            f"{ind}{opaque} *{o.release_method}() noexcept",
            f"{ind}{{",
            f"{ind}{ind}{opaque} *ret = {o.receiver_field};",
            f"{ind}{ind}{o.receiver_field} = nullptr;",
            f"{ind}{ind}return ret;",
            f"{ind}}}",
        ]
        if self.methods:
            lines.append("")
            for item in self.methods:
                lines.extend(doc_lines(item.body.doc_comments, ind))
                lines.append(f"{ind}{item.body.member_declaration}")
        lines.extend(
            [
                "",
                "private:",
                f"{ind}{opaque} *{field_name};",
                "};",
            ]
        )
        return "\n".join(lines)

    def forward_declaration(self) -> str:
        cls = self.class_name
        return "\n".join(
            [
                f"template<bool {self.options.ownership_param}> class {cls};",
                f"using {self.owner} = {cls}<true>;",
                f"using {self.owner}{self.options.ref_suffix} = {cls}<false>;",
            ]
        )

    def method_definitions(self) -> list[str]:
        return [item.pair.wrapper_definition for item in self.methods]

    def instantiate(self, owning: bool) -> list[str]:
        ownership_arg = "true" if owning else "false"
        return [
            render_wrapper_definition(self.owner, item.body, self.options, ownership_arg)
            for item in self.methods
        ]


def assemble_wrapper_partial(
    object_type: TypeRef | str,
    methods: Iterable[MethodSignature],
    mapper: HandleTypeMapper,
    options: RenderOptions = DEFAULT_RENDER_OPTIONS,
) -> tuple[WrapperInstance, list[tuple[str, BindingCodegenError]]]:
    """Assemble the methods that generate cleanly and return the failures of the rest."""
    owner = object_type.name if isinstance(object_type, TypeRef) else object_type
    opaque_name = mapper.opaque_name(owner)

    assembled: list[WrapperMethod] = []
    failures: list[tuple[str, BindingCodegenError]] = []
    for method in methods:
        try:
            if method.owner_type is None or method.owner_type.name != owner:
                raise ModelError(f"{method.label} does not belong to {owner}")
            signature = emit_boundary_signature(method, mapper, options)
            body = emit_wrapper_body(method, mapper, options)
            pair = CodeFragmentPair(
                boundary_declaration=signature.text,
                wrapper_definition=render_wrapper_definition(owner, body, options),
                method=method,
            )
        except BindingCodegenError as exc:
            failures.append((method.label, exc))
            continue
        assembled.append(WrapperMethod(signature=method, body=body, pair=pair))

    instance = WrapperInstance(owner=owner, opaque_name=opaque_name, methods=tuple(assembled), options=options)
    return instance, failures


def assemble_wrapper(
    object_type: TypeRef | str,
    methods: Iterable[MethodSignature],
    mapper: HandleTypeMapper,
    options: RenderOptions = DEFAULT_RENDER_OPTIONS,
) -> WrapperInstance:
    instance, failures = assemble_wrapper_partial(object_type, methods, mapper, options)
    if failures:
        raise WrapperAssemblyError(instance.owner, failures)
    return instance
