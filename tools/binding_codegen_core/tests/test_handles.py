from __future__ import annotations

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[3]
SRC_ROOT = REPO_ROOT / "tools" / "binding_codegen_core" / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from binding_codegen_core.config import RenderOptions
from binding_codegen_core.errors import UnresolvedTypeError
from binding_codegen_core.handles import HandleTypeMapper, opaque_typedef, render_handle
from binding_codegen_core.model import PASSTHROUGH, HandleType, Mode, TypeRef


class HandleTypeMapperTests(unittest.TestCase):
    def setUp(self) -> None:
        self.mapper = HandleTypeMapper(["Foo", "Boo"])

    def test_primitives_pass_through_for_every_mode(self) -> None:
        for mode in Mode:
            with self.subTest(mode=mode):
                self.assertIs(self.mapper.map_handle(TypeRef.primitive("i32"), mode), PASSTHROUGH)

    def test_handle_is_const_only_for_immutable_borrow(self) -> None:
        foo = TypeRef.object("Foo")
        self.assertEqual(self.mapper.map_handle(foo, Mode.BORROWED_IMMUTABLE), HandleType("FooOpaque", True))
        self.assertEqual(self.mapper.map_handle(foo, Mode.BORROWED_MUTABLE), HandleType("FooOpaque", False))
        self.assertEqual(self.mapper.map_handle(foo, Mode.CONSUMED_BY_VALUE), HandleType("FooOpaque", False))

    def test_unregistered_object_type_names_the_type(self) -> None:
        with self.assertRaises(UnresolvedTypeError) as ctx:
            self.mapper.map_handle(TypeRef.object("Missing"), Mode.BORROWED_MUTABLE)
        self.assertEqual(ctx.exception.type_name, "Missing")
        self.assertIn("Missing", str(ctx.exception))

    def test_opaque_suffix_is_configurable(self) -> None:
        mapper = HandleTypeMapper(["Foo"], RenderOptions(opaque_suffix="Handle"))
        handle = mapper.map_handle(TypeRef.object("Foo"), Mode.BORROWED_IMMUTABLE)
        self.assertEqual(render_handle(handle), "const FooHandle *")

    def test_renders_handles_and_typedefs(self) -> None:
        self.assertEqual(render_handle(HandleType("FooOpaque", True)), "const FooOpaque *")
        self.assertEqual(render_handle(HandleType("FooOpaque", False)), "FooOpaque *")
        self.assertEqual(opaque_typedef("FooOpaque"), "typedef struct FooOpaque FooOpaque;")


if __name__ == "__main__":
    unittest.main()
