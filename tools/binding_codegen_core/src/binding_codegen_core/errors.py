from __future__ import annotations


class BindingCodegenError(Exception):
    pass


class ModelError(BindingCodegenError):
    pass


class UnresolvedTypeError(BindingCodegenError):
    def __init__(self, type_name: str) -> None:
        super().__init__(f"object type '{type_name}' has no registered opaque handle")
        self.type_name = type_name


class InconsistentModeError(BindingCodegenError):
    def __init__(self, method: str, index: int, declared: str, recorded: str) -> None:
        super().__init__(
            f"{method}: parameter #{index} is declared as {declared} but recorded as {recorded}"
        )
        self.method = method
        self.index = index
        self.declared = declared
        self.recorded = recorded


class ReceiverOwnershipViolation(BindingCodegenError):
    def __init__(self, method: str) -> None:
        super().__init__(f"{method}: a method may not consume its own receiver")
        self.method = method


class WrapperAssemblyError(BindingCodegenError):
    """Every per-method failure collected while assembling one wrapper type."""

    def __init__(self, owner: str, failures: list[tuple[str, BindingCodegenError]]) -> None:
        lines = [f"{owner}: {len(failures)} method(s) failed"]
        lines.extend(f"  {label}: {exc}" for label, exc in failures)
        super().__init__("\n".join(lines))
        self.owner = owner
        self.failures = list(failures)
