from .boundary import BoundaryParameter, BoundarySignature, emit_boundary_signature
from .classifier import classify, classify_receiver, parse_parameter_declaration, reconstruct_native_form
from .config import DEFAULT_RENDER_OPTIONS, RenderOptions, resolve_render_options
from .errors import (
    BindingCodegenError,
    InconsistentModeError,
    ModelError,
    ReceiverOwnershipViolation,
    UnresolvedTypeError,
    WrapperAssemblyError,
)
from .fixture import find_missing, parse_fixture, render_fixture
from .generator import BatchResult, emit_fragment_pair, generate_batch
from .handles import HandleTypeMapper, opaque_typedef, render_handle
from .idl import BindingModel, load_model
from .model import (
    PASSTHROUGH,
    CodeFragmentPair,
    HandleType,
    MethodSignature,
    Mode,
    NativeForm,
    Parameter,
    ReceiverForm,
    TypeRef,
)
from .orchestration import GenerationResult, build_bindings
from .wrapper import WrapperBody, emit_wrapper_body, emit_wrapper_definition
from .wrapper_template import WrapperInstance, assemble_wrapper, assemble_wrapper_partial

__all__ = [
    "BatchResult",
    "BindingCodegenError",
    "BindingModel",
    "BoundaryParameter",
    "BoundarySignature",
    "CodeFragmentPair",
    "DEFAULT_RENDER_OPTIONS",
    "GenerationResult",
    "HandleType",
    "HandleTypeMapper",
    "InconsistentModeError",
    "MethodSignature",
    "Mode",
    "ModelError",
    "NativeForm",
    "PASSTHROUGH",
    "Parameter",
    "ReceiverForm",
    "ReceiverOwnershipViolation",
    "RenderOptions",
    "TypeRef",
    "UnresolvedTypeError",
    "WrapperAssemblyError",
    "WrapperBody",
    "WrapperInstance",
    "assemble_wrapper",
    "assemble_wrapper_partial",
    "build_bindings",
    "classify",
    "classify_receiver",
    "emit_boundary_signature",
    "emit_fragment_pair",
    "emit_wrapper_body",
    "emit_wrapper_definition",
    "find_missing",
    "generate_batch",
    "load_model",
    "opaque_typedef",
    "parse_fixture",
    "parse_parameter_declaration",
    "reconstruct_native_form",
    "render_fixture",
    "render_handle",
    "resolve_render_options",
]
