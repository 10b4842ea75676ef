"""Command that creates a model with its schema, form, handler, routes, templates and admin entry."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Sequence, TextIO

from gojang.addmodel.examples import show_examples
from gojang.addmodel.fileops import FileWriter, find_project_root
from gojang.addmodel.generator import (
    GeneratorError,
    add_form_struct,
    create_handler,
    create_routes,
    create_schema,
    generate_ent_code,
    register_with_admin,
    update_main_go,
)
from gojang.addmodel.naming import Field, FieldError, is_valid_model_name, parse_field, parse_fields
from gojang.addmodel.templates import create_templates

DEFAULT_ICON = "📄"

_TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_INVALID_MODEL_NAME = (
    "❌ Model name must start with uppercase letter, contain only alphanumeric characters, "
    "and not be a Go keyword, built-in type, or Ent predeclared identifier (String, Int, "
    "Error, Client, Mutation, Config, Query, Tx, Value, Hook, Policy, etc.)"
)


def _ask(prompt: str, stream: TextIO) -> str:
    print(prompt, end="", flush=True)
    return stream.readline().strip()


def run_interactive_mode(stream: TextIO | None = None) -> tuple[str, str, list[Field]]:
    """Prompt for a model name, icon and fields; return them as a tuple."""
    stream = stream or sys.stdin

    model_name = _ask("Model name (e.g., 'Product', 'Category', 'Order'): ", stream)
    if not model_name:
        raise SystemExit("❌ Model name is required")

    model_icon = (
        _ask(f"Model icon (optional, e.g., '📦', '🏷️', '📋') [default: {DEFAULT_ICON}]: ", stream)
        or DEFAULT_ICON
    )

    print()
    print("Enter fields for the model (press Enter without input to finish):")
    print("Format: name:type (e.g., 'name:string', 'price:float', 'stock:int', 'active:bool')")
    print("Supported types: string, text, int, float, bool, time")

    fields: list[Field] = []
    while True:
        entry = _ask(f"Field {len(fields) + 1}: ", stream)
        if not entry:
            break
        try:
            field = parse_field(entry)
        except FieldError as exc:
            print(f"⚠️  {exc}. Try again.")
            continue

        answer = _ask(f"   Is '{field.name}' required? (Y/n): ", stream).lower()
        field = Field(name=field.name, type=field.type, required=answer not in ("n", "no"))
        fields.append(field)
        print(f"✅ Added: {field.name} ({field.type})")

    if not fields:
        raise SystemExit("❌ At least one field is required")
    return model_name, model_icon, fields


def print_summary(
    model_name: str, model_icon: str, fields: Sequence[Field], is_dry_run: bool
) -> None:
    """Print what is about to be created."""
    print()
    if is_dry_run:
        print("🔍 DRY RUN MODE - No files will be created")
        print()
    print("Model summary:")
    print(f"  Name: {model_name}")
    print(f"  Icon: {model_icon}")
    print("  Fields:")
    for field in fields:
        suffix = " (required)" if field.required else ""
        print(f"    - {field.name}: {field.type}{suffix}")
    print()


def confirm_creation(stream: TextIO | None = None) -> bool:
    """Ask for confirmation; anything but ``n`` or ``no`` counts as yes."""
    answer = _ask("Continue? (Y/n): ", stream or sys.stdin).lower()
    return answer not in ("n", "no")


def _step(title: str, failure: str, action) -> None:
    print()
    print(title)
    try:
        action()
    except (GeneratorError, OSError) as exc:
        raise SystemExit(f"❌ Failed to {failure}: {exc}") from exc


def execute_model_creation(
    writer: FileWriter,
    project_root: "str | os.PathLike[str]",
    model_name: str,
    model_icon: str,
    fields: Sequence[Field],
    include_timestamps: bool,
) -> None:
    """Run every generation step in order, stopping at the first failure."""
    root = Path(project_root)
    lower = model_name.lower()
    app = root / "gojang"

    schema_path = app / "models" / "schema" / f"{lower}.go"
    models_path = app / "models"
    forms_path = app / "views" / "forms" / "forms.go"
    handler_path = app / "http" / "handlers" / f"{lower}s.go"
    routes_path = app / "http" / "routes" / f"{lower}s.go"
    main_path = app / "cmd" / "web" / "main.go"
    template_path = app / "views" / "templates" / f"{lower}s"
    admin_models_path = app / "admin" / "models.go"

    _step(
        "📝 Step 1: Creating Ent schema...",
        "create schema",
        lambda: create_schema(writer, schema_path, model_name, fields, include_timestamps),
    )
    print(f"✅ Created: {schema_path}")

    _step(
        "⚙️  Step 2: Generating Ent code...",
        "generate Ent code",
        lambda: generate_ent_code(writer, models_path),
    )
    print("✅ Ent code generated")

    _step(
        "📝 Step 3: Adding form validation struct...",
        "add form struct",
        lambda: add_form_struct(writer, forms_path, model_name, fields),
    )
    print("✅ Form validation struct added")

    _step(
        "📝 Step 4: Creating handler...",
        "create handler",
        lambda: create_handler(writer, handler_path, model_name, fields),
    )
    print(f"✅ Created: {handler_path}")

    _step(
        "📝 Step 5: Creating routes...",
        "create routes",
        lambda: create_routes(writer, routes_path, model_name),
    )
    print(f"✅ Created: {routes_path}")

    _step(
        "📝 Step 6: Registering routes in main.go...",
        "update main.go",
        lambda: update_main_go(writer, main_path, model_name),
    )
    print("✅ Routes registered")

    _step(
        "📝 Step 7: Creating templates...",
        "create templates",
        lambda: create_templates(writer, template_path, model_name, fields),
    )
    print(f"✅ Created templates in: {template_path}")

    _step(
        "📝 Step 8: Registering with admin panel...",
        "register with admin",
        lambda: register_with_admin(writer, admin_models_path, model_name, model_icon, fields),
    )
    print("✅ Registered with admin panel")

    print_success_message(
        model_name,
        writer.dry_run,
        schema_path,
        models_path,
        forms_path,
        handler_path,
        routes_path,
        main_path,
        template_path,
        admin_models_path,
    )


def print_success_message(model_name: str, is_dry_run: bool, *args) -> None:
    """Print the closing message; in dry-run mode list the paths that would change."""
    print()
    lower = model_name.lower()
    if not is_dry_run:
        print("✨ Model created successfully!")
        print()
        print("Next steps:")
        print("1. Review the generated files and customize as needed")
        print("2. Restart your server: go run ./gojang/cmd/web")
        print(f"3. Visit: http://localhost:8080/{lower}s")
        print(f"4. Admin panel: http://localhost:8080/admin/{lower}s")
        return

    print("✨ Dry run completed successfully!")
    print()
    print("Files that would be created/modified:")
    for raw in args:
        path = os.fspath(raw)
        if "models" in path and "schema" not in path:
            print(f"  - {path} (generated)")
        elif "forms" in path or "main.go" in path or "admin" in path:
            print(f"  - {path} (modified)")
        elif "templates" in path:
            print(f"  - {path} (directory with templates)")
        else:
            print(f"  - {path}")
    print()
    print("Run without --dry-run flag to create the model")


def _parse_bool(value: str) -> bool:
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value {value!r}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a data model and its CRUD code.")
    parser.add_argument("--model", default="", help="Model name (e.g., 'Product', 'Category', 'Order')")
    parser.add_argument("--icon", default=DEFAULT_ICON, help="Model icon (e.g., '📦', '🏷️', '📋')")
    parser.add_argument(
        "--fields",
        default="",
        help="Comma-separated fields (e.g., 'name:string:required,price:float,stock:int')",
    )
    parser.add_argument(
        "--dry-run",
        dest="dry_run",
        nargs="?",
        const=True,
        default=False,
        type=_parse_bool,
        help="Preview changes without writing files",
    )
    parser.add_argument(
        "--timestamps",
        nargs="?",
        const=True,
        default=True,
        type=_parse_bool,
        help="Add a created_at field (default: true)",
    )
    parser.add_argument(
        "--examples",
        nargs="?",
        const=True,
        default=False,
        type=_parse_bool,
        help="Show usage examples and exit",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the model generator command."""
    args = _build_parser().parse_args(argv)

    if args.examples:
        show_examples()
        return 0

    print("🚀 Gojang Data Model Generator")
    print("================================")
    print()

    interactive = not args.model
    if interactive:
        model_name, model_icon, fields = run_interactive_mode(sys.stdin)
    else:
        model_name, model_icon = args.model, args.icon
        if not args.fields:
            raise SystemExit("❌ Fields are required when using --model flag")
        try:
            fields = parse_fields(args.fields)
        except FieldError as exc:
            raise SystemExit(f"❌ {exc}") from exc

    if not is_valid_model_name(model_name):
        raise SystemExit(_INVALID_MODEL_NAME)
    if not fields:
        raise SystemExit("❌ At least one field is required")

    print_summary(model_name, model_icon, fields, args.dry_run)

    if interactive and not confirm_creation(sys.stdin):
        print("❌ Cancelled")
        return 0

    try:
        project_root = find_project_root()
    except FileNotFoundError as exc:
        raise SystemExit(f"❌ Failed to find project root: {exc}") from exc

    writer = FileWriter(dry_run=args.dry_run)
    execute_model_creation(
        writer, project_root, model_name, model_icon, fields, args.timestamps
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())