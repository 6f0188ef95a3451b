from __future__ import annotations

import re

from .errors import ModelError
from .model import Mode, NativeForm, ReceiverForm

_MODE_BY_FORM: dict[NativeForm, Mode] = {
    NativeForm.BY_VALUE: Mode.CONSUMED_BY_VALUE,
    NativeForm.IMMUTABLE_REFERENCE: Mode.BORROWED_IMMUTABLE,
    NativeForm.MUTABLE_REFERENCE: Mode.BORROWED_MUTABLE,
}
_FORM_BY_MODE: dict[Mode, NativeForm] = {mode: form for form, mode in _MODE_BY_FORM.items()}

_IDENT = r"[A-Za-z_][A-Za-z0-9_]*(?:::[A-Za-z_][A-Za-z0-9_]*)*"
_RUST_REF_RE = re.compile(
    r"^&\s*(?:'[A-Za-z_][A-Za-z0-9_]*\s+)?(?P<mut>mut\s+)?(?P<name>" + _IDENT + r")$"
)
_CPP_CONST_REF_RE = re.compile(
    r"^(?:const\s+(?P<lead>" + _IDENT + r")|(?P<trail>" + _IDENT + r")\s+const)\s*&$"
)
_CPP_REF_RE = re.compile(r"^(?P<name>" + _IDENT + r")\s*&$")
_VALUE_RE = re.compile(r"^(?P<name>" + _IDENT + r")$")
_RECEIVER_RE = re.compile(r"^(?P<ref>&\s*(?:'[A-Za-z_][A-Za-z0-9_]*\s+)?)?(?P<mut>mut\s+)?self$")


def classify(declaration: NativeForm) -> Mode:
    return _MODE_BY_FORM[declaration]


def reconstruct_native_form(mode: Mode) -> NativeForm:
    return _FORM_BY_MODE[mode]


def _last_segment(path: str) -> str:
    return path.rsplit("::", 1)[-1]


def parse_parameter_declaration(text: str) -> tuple[NativeForm, str]:
    """Split a parameter type spelling into its native form and bare type name.

    Accepts both Rust (``Foo``, ``&Foo``, ``&'a mut Foo``) and C++
    (``Foo``, ``const Foo &``, ``Foo const &``, ``Foo &``) spellings.
    Module paths are reduced to their last segment (``crate::Boo`` is ``Boo``).
    """
    decl = re.sub(r"\s+", " ", text).strip()

    rust_ref = _RUST_REF_RE.match(decl)
    if rust_ref:
        form = NativeForm.MUTABLE_REFERENCE if rust_ref.group("mut") else NativeForm.IMMUTABLE_REFERENCE
        return form, _last_segment(rust_ref.group("name"))

    const_ref = _CPP_CONST_REF_RE.match(decl)
    if const_ref:
        return NativeForm.IMMUTABLE_REFERENCE, _last_segment(const_ref.group("lead") or const_ref.group("trail"))

    mut_ref = _CPP_REF_RE.match(decl)
    if mut_ref and mut_ref.group("name") != "const":
        return NativeForm.MUTABLE_REFERENCE, _last_segment(mut_ref.group("name"))

    value = _VALUE_RE.match(decl)
    if value and value.group("name") not in ("const", "mut"):
        return NativeForm.BY_VALUE, _last_segment(value.group("name"))

    raise ModelError(f"unsupported parameter declaration '{text}'")


def classify_receiver(text: str) -> ReceiverForm:
    decl = re.sub(r"\s+", " ", text).strip()
    match = _RECEIVER_RE.match(decl)
    if not match:
        raise ModelError(f"unsupported receiver declaration '{text}'")
    is_mut = bool(match.group("mut"))
    if match.group("ref"):
        return ReceiverForm.REF_MUT if is_mut else ReceiverForm.REF
    return ReceiverForm.VALUE_MUT if is_mut else ReceiverForm.VALUE
