from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .boundary import emit_boundary_signature
from .config import DEFAULT_RENDER_OPTIONS, RenderOptions
from .errors import BindingCodegenError
from .handles import HandleTypeMapper
from .model import CodeFragmentPair, MethodSignature
from .wrapper import emit_wrapper_definition


@dataclass(frozen=True)
class BatchResult:
    pairs: tuple[CodeFragmentPair, ...] = ()
    failures: tuple[tuple[str, BindingCodegenError], ...] = field(default=())

    @property
    def ok(self) -> bool:
        return not self.failures


def emit_fragment_pair(
    method: MethodSignature,
    mapper: HandleTypeMapper,
    options: RenderOptions = DEFAULT_RENDER_OPTIONS,
) -> CodeFragmentPair:
    signature = emit_boundary_signature(method, mapper, options)
    definition = emit_wrapper_definition(method, mapper, options)
    return CodeFragmentPair(
        boundary_declaration=signature.text,
        wrapper_definition=definition,
        method=method,
    )


def generate_batch(
    methods: Iterable[MethodSignature],
    mapper: HandleTypeMapper,
    options: RenderOptions = DEFAULT_RENDER_OPTIONS,
) -> BatchResult:
    """Emit one fragment pair per method; a failing method never stops its siblings."""
    pairs: list[CodeFragmentPair] = []
    failures: list[tuple[str, BindingCodegenError]] = []
    for method in methods:
        try:
            pairs.append(emit_fragment_pair(method, mapper, options))
        except BindingCodegenError as exc:
            failures.append((method.label, exc))
    return BatchResult(pairs=tuple(pairs), failures=tuple(failures))


def group_by_owner(methods: Iterable[MethodSignature]) -> tuple[dict[str, list[MethodSignature]], list[MethodSignature]]:
    owned: dict[str, list[MethodSignature]] = {}
    free: list[MethodSignature] = []
    for method in methods:
        if method.owner_type is None:
            free.append(method)
        else:
            owned.setdefault(method.owner_type.name, []).append(method)
    return owned, free
