from __future__ import annotations

from dataclasses import dataclass

from .errors import BindingCodegenError
from .generator import generate_batch, group_by_owner
from .handles import HandleTypeMapper, opaque_typedef
from .header import render_header
from .idl import BindingModel
from .model import CodeFragmentPair
from .wrapper_template import WrapperInstance, assemble_wrapper_partial


@dataclass(frozen=True)
class GenerationResult:
    mapper: HandleTypeMapper
    instances: tuple[WrapperInstance, ...]
    free_pairs: tuple[CodeFragmentPair, ...]
    failures: tuple[tuple[str, BindingCodegenError], ...]

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def pairs(self) -> tuple[CodeFragmentPair, ...]:
        out: list[CodeFragmentPair] = []
        for instance in self.instances:
            out.extend(instance.pairs)
        out.extend(self.free_pairs)
        return tuple(out)

    def opaque_typedefs(self) -> list[str]:
        return [opaque_typedef(self.mapper.opaque_name(name)) for name in sorted(self.mapper.object_types)]

    def member_signatures(self) -> list[str]:
        return [item.body.native_signature for instance in self.instances for item in instance.methods]

    def render_header(self, tool_path: str, guard: str) -> str:
        return render_header(self.instances, self.free_pairs, self.mapper, tool_path, guard)


def build_bindings(model: BindingModel) -> GenerationResult:
    """Generate every wrapper and free function of ``model``, collecting all failures.

    Failed methods are left out of their wrapper; the rest of the wrapper and
    every other wrapper are still generated.
    """
    mapper = HandleTypeMapper(model.object_types, model.options)
    failures: list[tuple[str, BindingCodegenError]] = list(model.failures)

    owned, free = group_by_owner(model.methods)
    instances: list[WrapperInstance] = []
    # Types that only appear as parameters still need a wrapper to convert from.
    for owner in model.object_types:
        instance, owner_failures = assemble_wrapper_partial(owner, owned.get(owner, []), mapper, model.options)
        instances.append(instance)
        failures.extend(owner_failures)

    batch = generate_batch(free, mapper, model.options)
    failures.extend(batch.failures)

    return GenerationResult(
        mapper=mapper,
        instances=tuple(instances),
        free_pairs=batch.pairs,
        failures=tuple(failures),
    )
