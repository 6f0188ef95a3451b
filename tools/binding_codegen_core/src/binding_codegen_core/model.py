from __future__ import annotations

import enum
from dataclasses import dataclass, field

from .errors import ModelError, ReceiverOwnershipViolation


class Mode(enum.Enum):
    CONSUMED_BY_VALUE = "consumed_by_value"
    BORROWED_IMMUTABLE = "borrowed_immutable"
    BORROWED_MUTABLE = "borrowed_mutable"


class NativeForm(enum.Enum):
    BY_VALUE = "by_value"
    IMMUTABLE_REFERENCE = "immutable_reference"
    MUTABLE_REFERENCE = "mutable_reference"


class ReceiverForm(enum.Enum):
    REF = "&self"
    REF_MUT = "&mut self"
    VALUE = "self"
    VALUE_MUT = "mut self"

    @property
    def is_read_only(self) -> bool:
        return self in (ReceiverForm.REF, ReceiverForm.VALUE)

    @property
    def is_borrow(self) -> bool:
        return self in (ReceiverForm.REF, ReceiverForm.REF_MUT)


@dataclass(frozen=True)
class TypeRef:
    name: str
    is_object: bool

    @classmethod
    def object(cls, name: str) -> TypeRef:
        return cls(name=name, is_object=True)

    @classmethod
    def primitive(cls, name: str) -> TypeRef:
        return cls(name=name, is_object=False)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Parameter:
    type: TypeRef
    mode: Mode
    name: str | None = None
    # Native spelling recorded by the upstream model, if any.
    declared_form: NativeForm | None = None


@dataclass(frozen=True)
class MethodSignature:
    owner_type: TypeRef | None
    name: str
    parameters: tuple[Parameter, ...] = ()
    is_const_receiver: bool = False
    is_static: bool = False
    return_type: TypeRef = TypeRef.primitive("void")
    receiver_form: ReceiverForm | None = None
    name_alias: str | None = None
    doc_comments: tuple[str, ...] = field(default=(), compare=False)

    def __post_init__(self) -> None:
        if not self.name:
            raise ModelError("method name must be a non-empty string")
        # Accept lists from callers but store an immutable sequence.
        object.__setattr__(self, "parameters", tuple(self.parameters))
        object.__setattr__(self, "doc_comments", tuple(self.doc_comments))
        if self.owner_type is None and not self.is_static:
            raise ModelError(f"{self.name}: free functions must be static")
        if self.receiver_form is None:
            return
        if self.is_static:
            raise ModelError(f"{self.label}: static method cannot declare a receiver")
        if not self.receiver_form.is_borrow:
            raise ReceiverOwnershipViolation(self.label)
        if self.receiver_form.is_read_only != self.is_const_receiver:
            raise ModelError(
                f"{self.label}: receiver '{self.receiver_form.value}' does not match "
                f"is_const_receiver={self.is_const_receiver}"
            )

    @property
    def label(self) -> str:
        if self.owner_type is None:
            return self.name
        return f"{self.owner_type.name}::{self.name}"

    @property
    def wrapper_name(self) -> str:
        return self.name_alias or self.name

    @property
    def has_receiver(self) -> bool:
        return not self.is_static


@dataclass(frozen=True)
class HandleType:
    base_name: str
    is_const: bool


class Passthrough:
    _instance: Passthrough | None = None

    def __new__(cls) -> Passthrough:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "PASSTHROUGH"


PASSTHROUGH = Passthrough()


@dataclass(frozen=True)
class CodeFragmentPair:
    boundary_declaration: str
    wrapper_definition: str
    method: MethodSignature = field(compare=False)


def receiver_mode(method: MethodSignature) -> Mode | None:
    """Borrow mode the receiver handle is forwarded with, None for static methods."""
    if method.is_static:
        return None
    if method.is_const_receiver:
        return Mode.BORROWED_IMMUTABLE
    return Mode.BORROWED_MUTABLE
