"""Command-line entry point for crudgen.

Usage::

    crudgen Blog.Post --bundle-path src/Acme/BlogBundle \\
        --bundle-namespace Acme.BlogBundle --metadata post.yaml --with-write
    python -m crudgen Blog.Post ... --format xml --dir Controller/Admin
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pydantic import ValidationError

from crudgen.config import Config
from crudgen.scaffolder import (
    Bundle,
    CrudGenerator,
    CrudGeneratorError,
    TemplateRenderer,
    load_metadata,
    normalize_format,
)
from crudgen.utils import (
    print_error,
    print_header,
    print_success,
    print_summary_table,
    print_warning,
    print_written_files,
)


def default_route_prefix(entity: str) -> str:
    """``Blog.Post`` -> ``blog/post``."""
    return entity.replace(".", "/").lower()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crudgen",
        description="Generate a CRUD controller, views, tests and routing for an entity",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  crudgen Blog.Post --bundle-path src/BlogBundle --bundle-namespace Acme.BlogBundle \\\n"
            "      --metadata post.yaml\n"
            "  crudgen Blog.Post ... --with-write --format xml --route-prefix admin/post\n"
        ),
    )

    parser.add_argument("entity", help="Dotted entity name, e.g. Blog.Post")
    parser.add_argument(
        "--bundle-path", required=True, help="Root directory of the target bundle"
    )
    parser.add_argument(
        "--bundle-namespace", required=True, help="Bundle namespace, e.g. Acme.BlogBundle"
    )
    parser.add_argument(
        "--bundle-name",
        default=None,
        help="Bundle display name (default: namespace without separators)",
    )
    parser.add_argument(
        "--metadata", required=True, help="YAML or JSON file describing the entity fields"
    )
    parser.add_argument(
        "--format",
        default=None,
        help="Routing format: yaml, xml, php or annotation (default: yaml)",
    )
    parser.add_argument(
        "--route-prefix",
        default=None,
        help="Route prefix (default: the entity name as a path, e.g. blog/post)",
    )
    parser.add_argument(
        "--with-write",
        action="store_true",
        help="Also generate the new, edit and delete actions",
    )
    parser.add_argument(
        "--dir",
        dest="controller_dir",
        default=None,
        help="Controller sub-directory (default: Controller)",
    )
    parser.add_argument(
        "--skeleton-dir", default=None, help="Directory with custom .j2 skeletons"
    )
    parser.add_argument(
        "--config", default=None, help="JSON configuration file (default: environment)"
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``crudgen`` and ``python -m crudgen``."""
    args = build_parser().parse_args(argv)

    try:
        config = Config.load(Path(args.config)) if args.config else Config.from_env()
    except OSError as exc:
        print_error(f"Error: cannot read configuration {args.config}: {exc.strerror or exc}")
        sys.exit(1)
    except ValidationError as exc:
        source = args.config or "environment"
        print_error(f"Error: invalid configuration in {source}:\n{exc}")
        sys.exit(1)

    if args.skeleton_dir:
        config.skeleton_dir = Path(args.skeleton_dir)

    requested_format = args.format or config.default_format.value
    fmt = normalize_format(requested_format)
    if fmt.value != requested_format:
        print_warning(f"Unsupported format '{requested_format}', using '{fmt.value}'.")

    bundle = Bundle(
        name=args.bundle_name or args.bundle_namespace.replace(".", ""),
        namespace=args.bundle_namespace,
        path=Path(args.bundle_path),
    )
    route_prefix = (
        args.route_prefix if args.route_prefix is not None
        else default_route_prefix(args.entity)
    )

    generator = CrudGenerator(
        TemplateRenderer(config.skeleton_dir),
        source_extension=config.source_extension,
        view_extension=config.view_extension,
    )

    print_header(f"CRUD generation for {bundle.name}:{args.entity}")
    try:
        metadata = load_metadata(args.metadata)
        result = generator.generate(
            bundle,
            args.entity,
            metadata,
            requested_format,
            route_prefix,
            args.with_write,
            args.controller_dir or config.controller_dir,
        )
    except CrudGeneratorError as exc:
        print_error(f"Error: {exc}")
        if exc.written:
            print_warning("Files generated before the failure were left in place:")
            print_written_files(exc.written, bundle.path)
        sys.exit(1)

    print_written_files(result.written, bundle.path)
    print_summary_table(
        {
            "Entity": result.entity,
            "Format": result.format.value,
            "Actions": ", ".join(a.value for a in result.plan.actions),
            "Route prefix": route_prefix or "/",
            "Files written": str(len(result.written)),
        },
        title="CRUD scaffold",
    )
    print_success("CRUD generation completed successfully!")


if __name__ == "__main__":
    main()
