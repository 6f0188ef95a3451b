from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .common import load_json_object, write_if_changed
from .errors import BindingCodegenError
from .fixture import find_missing, parse_fixture, render_fixture
from .header import default_header_guard
from .idl import load_model
from .orchestration import GenerationResult, build_bindings

TOOL_PATH = "tools/binding_codegen_core/src/binding_codegen_core/cli.py"


def _render_overrides(args: argparse.Namespace) -> dict[str, str | None]:
    return {
        "opaque_suffix": args.opaque_suffix,
        "wrapper_suffix": args.wrapper_suffix,
        "ownership_param": args.ownership_param,
    }


def _build(args: argparse.Namespace) -> GenerationResult:
    model_path = Path(args.model).resolve()
    model = load_model(load_json_object(model_path), _render_overrides(args))
    result = build_bindings(model)

    for instance in result.instances:
        print(f"[{instance.owner}] generate: methods={len(instance.methods)}")
    if result.free_pairs:
        print(f"[<free>] generate: functions={len(result.free_pairs)}")
    if result.failures:
        print(f"generate: {len(result.failures)} failure(s)")
        for label, exc in result.failures:
            print(f"  {label}: {exc}")
    return result


def command_generate(args: argparse.Namespace) -> int:
    result = _build(args)
    out_path = Path(args.out).resolve()
    guard = args.guard or default_header_guard(out_path.name)
    content = result.render_header(TOOL_PATH, guard)
    status = write_if_changed(out_path, content, args.check, args.dry_run)
    if args.fail_on_errors and not result.ok:
        return 1
    return status


def command_fixture(args: argparse.Namespace) -> int:
    result = _build(args)
    if not result.ok:
        return 1
    content = render_fixture(result.pairs, result.opaque_typedefs(), result.member_signatures())
    return write_if_changed(Path(args.out).resolve(), content, args.check, args.dry_run)


def command_verify_fixture(args: argparse.Namespace) -> int:
    fixture_path = Path(args.fixture).resolve()
    if not fixture_path.exists():
        raise BindingCodegenError(f"fixture not found: {fixture_path}")
    expectations = parse_fixture(fixture_path.read_text(encoding="utf-8"))
    if not expectations:
        raise BindingCodegenError(f"fixture '{fixture_path}' has no string literals")

    result = _build(args)
    if not result.ok:
        return 1
    generated = result.render_header(TOOL_PATH, "VERIFY_FIXTURE_H")
    missing = find_missing(generated, expectations)
    print(f"verify-fixture: expectations={len(expectations)} missing={len(missing)}")
    for item in missing:
        print("  missing:")
        for line in item.splitlines():
            print(f"    {line}")
    return 1 if missing else 0


def _add_model_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--model", required=True, help="Path to the method model JSON.")
    parser.add_argument("--opaque-suffix", help="Override render.opaque_suffix.")
    parser.add_argument("--wrapper-suffix", help="Override render.wrapper_suffix.")
    parser.add_argument("--ownership-param", help="Override render.ownership_param.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="binding_codegen",
        description="Generate opaque-handle boundary declarations and ownership-aware C++ wrappers.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    generate = sub.add_parser("generate", help="Render the C++ bindings header.")
    _add_model_arguments(generate)
    generate.add_argument("--out", required=True, help="Header output path.")
    generate.add_argument("--guard", help="Include guard macro (default: derived from --out).")
    generate.add_argument("--check", action="store_true", help="Fail with a diff if the output would change.")
    generate.add_argument("--dry-run", action="store_true", help="Do not write files.")
    generate.add_argument(
        "--fail-on-errors",
        action="store_true",
        help="Exit with status 1 when any method failed to generate.",
    )
    generate.set_defaults(func=command_generate)

    fixture = sub.add_parser("fixture", help="Render expectation literals for golden tests.")
    _add_model_arguments(fixture)
    fixture.add_argument("--out", required=True, help="Fixture output path.")
    fixture.add_argument("--check", action="store_true", help="Fail with a diff if the output would change.")
    fixture.add_argument("--dry-run", action="store_true", help="Do not write files.")
    fixture.set_defaults(func=command_fixture)

    verify = sub.add_parser("verify-fixture", help="Check generated code against an expectation fixture.")
    _add_model_arguments(verify)
    verify.add_argument("--fixture", required=True, help="Expectation fixture path.")
    verify.set_defaults(func=command_verify_fixture)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return int(args.func(args))
    except BindingCodegenError as exc:
        print(f"binding_codegen error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
