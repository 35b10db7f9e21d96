"""`archdispatch` — forward build targets to the selected architecture's sub-build."""

import logging
import sys
from pathlib import Path

from archdispatch.dispatch import plan, run
from archdispatch.errors import DispatchError
from archdispatch.layout import list_architectures, load_config


def _build_parser():
    import argparse

    ap = argparse.ArgumentParser(
        prog="archdispatch",
        description="Run a build target in arch/<ARCH>/ with RUST_ROOT, LLVM_ROOT and GCC_PREFIX exported",
    )
    ap.add_argument(
        "args",
        nargs="*",
        metavar="TARGET|NAME=value",
        help="targets to forward (default: all) and make-style variable assignments",
    )
    ap.add_argument(
        "-C",
        "--project-root",
        type=Path,
        default=None,
        help="Project root (default: cwd)",
    )
    ap.add_argument("--arch", default=None, help="Architecture (default: $ARCH or arm)")
    ap.add_argument(
        "--arch-dir",
        default=None,
        help="Directory holding per-architecture sub-builds (default: arch)",
    )
    ap.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Config file (default: <project-root>/archdispatch.yaml if present)",
    )
    ap.add_argument("--dry-run", action="store_true", help="Print sub-build commands, run nothing")
    ap.add_argument(
        "--list-archs", action="store_true", help="List architectures with a sub-build and exit"
    )
    ap.add_argument(
        "--print-config", action="store_true", help="Print resolved toolchain variables and exit"
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")
    return ap


def _list_archs(project_root: Path, config_path: Path | None, arch_dir: str | None) -> int:
    try:
        layout = dict(load_config(project_root, config_path)["layout"])
    except DispatchError as e:
        print(f"❌ {e}", file=sys.stderr)
        return e.exit_code
    if arch_dir:
        layout["arch_dir"] = arch_dir
    for name in list_architectures(project_root, layout):
        print(name)
    return 0


def _print_config(project_root: Path, argv: list[str], args) -> int:
    try:
        invocation = plan(
            project_root,
            argv,
            arch=args.arch,
            config_path=args.config,
            arch_dir=args.arch_dir,
        )
    except DispatchError as e:
        print(f"❌ {e}", file=sys.stderr)
        return e.exit_code
    print(f"ARCH={invocation.arch}")
    for k, v in invocation.toolchain.as_env().items():
        print(f"{k}={v}")
    return 0


def main(argv: list[str] | None = None) -> None:
    """Parse argv (default: sys.argv[1:]) and exit with the dispatch status."""
    if argv is None:
        argv = sys.argv[1:]
    # targets, options and NAME=value may be interleaved, as with make
    args = _build_parser().parse_intermixed_args(argv)
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(name)s: %(message)s", stream=sys.stderr
        )
    project_root = (args.project_root or Path.cwd()).resolve()

    if args.list_archs:
        sys.exit(_list_archs(project_root, args.config, args.arch_dir))
    if args.print_config:
        sys.exit(_print_config(project_root, args.args, args))

    rc = run(
        project_root,
        args.args,
        arch=args.arch,
        config_path=args.config,
        arch_dir=args.arch_dir,
        dry_run=args.dry_run,
    )
    sys.exit(rc)


if __name__ == "__main__":
    main()
