from __future__ import annotations

import difflib
import json
from pathlib import Path
from typing import Any

from .errors import BindingCodegenError


def load_json_object(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise BindingCodegenError(f"model file not found: {path}")
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise BindingCodegenError(f"invalid JSON in '{path}': {exc}") from exc
    if not isinstance(payload, dict):
        raise BindingCodegenError(f"JSON root in '{path}' must be an object")
    return payload


def write_if_changed(path: Path, content: str, check: bool, dry_run: bool) -> int:
    """Persist a generated header or fixture.

    Returns 0 when ``path`` already holds ``content`` or was rewritten. With
    ``check`` nothing is written: a missing or stale file is reported as
    drift with a unified diff from the file on disk to the generated text,
    and 1 is returned. ``dry_run`` renders and reports without touching disk.
    """
    existing = path.read_text(encoding="utf-8") if path.exists() else None
    if existing == content:
        return 0
    if check:
        state = "missing" if existing is None else "out of date"
        print(f"{path}: generated output is {state}")
        diff = difflib.unified_diff(
            (existing or "").splitlines(),
            content.splitlines(),
            fromfile=f"{path} (on disk)",
            tofile=f"{path} (generated)",
            lineterm="",
        )
        print("\n".join(diff))
        return 1
    if dry_run:
        print(f"{path}: would write {len(content.splitlines())} line(s)")
        return 0
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    print(f"{path}: written")
    return 0
