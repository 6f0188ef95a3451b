from __future__ import annotations

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[3]
SRC_ROOT = REPO_ROOT / "tools" / "binding_codegen_core" / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from binding_codegen_core.boundary import emit_boundary_signature
from binding_codegen_core.config import RenderOptions
from binding_codegen_core.errors import UnresolvedTypeError
from binding_codegen_core.handles import HandleTypeMapper
from binding_codegen_core.model import MethodSignature, Mode, Parameter, TypeRef

OWNER = TypeRef.object("Widget")
FOO = TypeRef.object("Foo")
BOO = TypeRef.object("Boo")


def instance_method(name: str, params: list[Parameter], const: bool = True, **kwargs) -> MethodSignature:
    return MethodSignature(owner_type=OWNER, name=name, parameters=params, is_const_receiver=const, **kwargs)


class BoundarySignatureTests(unittest.TestCase):
    def setUp(self) -> None:
        self.mapper = HandleTypeMapper(["Widget", "Foo", "Boo"])

    def test_immutable_borrow_with_const_receiver(self) -> None:
        method = instance_method("f1", [Parameter(FOO, Mode.BORROWED_IMMUTABLE)])
        signature = emit_boundary_signature(method, self.mapper)
        self.assertEqual(
            signature.text,
            "void Widget_f1(const WidgetOpaque * const self, const FooOpaque * a_0);",
        )

    def test_consumed_parameter_with_mutable_receiver(self) -> None:
        method = instance_method("take", [Parameter(FOO, Mode.CONSUMED_BY_VALUE)], const=False)
        signature = emit_boundary_signature(method, self.mapper)
        self.assertEqual(signature.text, "void Widget_take(WidgetOpaque * const self, FooOpaque * a_0);")
        self.assertFalse(signature.parameters[0].handle.is_const)
        self.assertFalse(signature.parameters[1].handle.is_const)

    def test_static_method_has_no_receiver(self) -> None:
        method = MethodSignature(
            owner_type=OWNER,
            name="f5",
            parameters=[Parameter(FOO, Mode.BORROWED_MUTABLE)],
            is_static=True,
        )
        signature = emit_boundary_signature(method, self.mapper)
        self.assertEqual(signature.text, "void Widget_f5(FooOpaque * a_0);")
        self.assertFalse(any(param.is_receiver for param in signature.parameters))

    def test_free_function_without_parameters_uses_void(self) -> None:
        method = MethodSignature(owner_type=None, name="init", is_static=True, return_type=TypeRef.primitive("int32_t"))
        self.assertEqual(emit_boundary_signature(method, self.mapper).text, "int32_t ffi_init(void);")

    def test_free_function_symbol_differs_from_wrapper_name(self) -> None:
        method = MethodSignature(
            owner_type=None,
            name="init",
            parameters=[Parameter(TypeRef.primitive("int"), Mode.CONSUMED_BY_VALUE)],
            is_static=True,
            return_type=TypeRef.primitive("int"),
        )
        signature = emit_boundary_signature(method, self.mapper)
        self.assertEqual(signature.text, "int ffi_init(int a_0);")
        self.assertNotEqual(signature.symbol, method.wrapper_name)

    def test_free_symbol_prefix_is_configurable(self) -> None:
        mapper = HandleTypeMapper(["Foo"], RenderOptions(free_symbol_prefix="c_"))
        method = MethodSignature(owner_type=None, name="init", is_static=True)
        self.assertEqual(emit_boundary_signature(method, mapper, mapper.options).symbol, "c_init")

    def test_preserves_parameter_order_with_receiver_first(self) -> None:
        params = [
            Parameter(TypeRef.primitive("int32_t"), Mode.CONSUMED_BY_VALUE),
            Parameter(FOO, Mode.BORROWED_MUTABLE),
            Parameter(TypeRef.primitive("bool"), Mode.CONSUMED_BY_VALUE, name="flag"),
            Parameter(BOO, Mode.BORROWED_IMMUTABLE),
        ]
        signature = emit_boundary_signature(instance_method("mix", params, const=False), self.mapper)
        self.assertEqual(
            [param.name for param in signature.parameters],
            ["self", "a_0", "a_1", "flag", "a_3"],
        )
        self.assertEqual(
            [param.c_type for param in signature.parameters],
            ["WidgetOpaque *", "int32_t", "FooOpaque *", "bool", "const BooOpaque *"],
        )
        self.assertIsNone(signature.parameters[1].handle)
        self.assertIsNone(signature.parameters[3].handle)

    def test_constness_tracks_mode_for_every_handle(self) -> None:
        for const_receiver in (True, False):
            for mode in Mode:
                with self.subTest(const_receiver=const_receiver, mode=mode):
                    method = instance_method("m", [Parameter(FOO, mode)], const=const_receiver)
                    receiver, param = emit_boundary_signature(method, self.mapper).parameters
                    self.assertEqual(receiver.handle.is_const, const_receiver)
                    self.assertEqual(param.handle.is_const, mode is Mode.BORROWED_IMMUTABLE)

    def test_return_type_passes_through(self) -> None:
        method = instance_method("size", [], return_type=TypeRef.primitive("uint64_t"))
        self.assertEqual(
            emit_boundary_signature(method, self.mapper).text,
            "uint64_t Widget_size(const WidgetOpaque * const self);",
        )

    def test_unknown_parameter_type_fails(self) -> None:
        method = instance_method("bad", [Parameter(TypeRef.object("Ghost"), Mode.BORROWED_IMMUTABLE)])
        with self.assertRaises(UnresolvedTypeError):
            emit_boundary_signature(method, self.mapper)


if __name__ == "__main__":
    unittest.main()
