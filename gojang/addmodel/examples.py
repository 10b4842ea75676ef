"""Usage examples for the model generator command."""

from __future__ import annotations

from typing import Iterator

COLOR_RESET = "\033[0m"
COLOR_RED = "\033[31m"
COLOR_GREEN = "\033[32m"
COLOR_YELLOW = "\033[33m"
COLOR_BLUE = "\033[34m"
COLOR_CYAN = "\033[36m"

_COMMAND = "python -m gojang.addmodel.runner"

_EXAMPLES = (
    ("Interactive Mode (Default)", [], "# You'll be prompted for model name, icon, and fields"),
    (
        "Non-Interactive Mode",
        [
            "--model Product",
            "--icon '📦'",
            "--fields 'name:string:required,price:float:required,stock:int'",
        ],
        None,
    ),
    (
        "Preview with Dry-Run",
        ["--model Product", "--fields 'name:string:required,price:float'", "--dry-run"],
        None,
    ),
    (
        "Without Timestamps",
        ["--model Tag", "--fields 'name:string:required'", "--timestamps=false"],
        None,
    ),
    (
        "Complex Example",
        [
            "--model Article",
            "--icon '📰'",
            "--fields 'title:string:required,content:text:required,published:bool,views:int'",
        ],
        None,
    ),
)

_FIELD_FORMAT = (
    "   name:type[:required]",
    "   - name: lowercase, snake_case (e.g., 'user_name', 'created_by')",
    "   - type: string, text, int, float, bool, time",
    "   - required: optional suffix to make field required",
)

_RESTRICTIONS = (
    "   - Cannot use Go reserved keywords (for, func, if, return, etc.)",
    "   - Cannot use Go built-in types (String, Int, Int16, Error, etc.)",
    "   - Cannot use Ent predeclared identifiers (Client, Mutation, Config, "
    "Query, Tx, Value, Hook, Policy, etc.)",
    "   - Field names must start with lowercase letter",
    "   - Model names must start with uppercase letter (PascalCase)",
)


def colorize(color: str, text: str) -> str:
    """Wrap ``text`` in an ANSI colour code and a reset."""
    return color + text + COLOR_RESET


def _example_lines() -> Iterator[str]:
    yield colorize(COLOR_CYAN, "\n🚀 Gojang Add Model - Usage Examples")
    yield "=" * 60

    for number, (title, options, note) in enumerate(_EXAMPLES, start=1):
        yield colorize(COLOR_YELLOW, f"\n{number}. {title}:")
        if options:
            yield f"   {_COMMAND} \\"
            *leading, last = options
            for option in leading:
                yield f"     {option} \\"
            yield f"     {last}"
        else:
            yield f"   {_COMMAND}"
        if note:
            yield f"   {note}"

    yield colorize(COLOR_GREEN, "\n📝 Field Format:")
    yield from _FIELD_FORMAT

    yield colorize(COLOR_RED, "\n⚠️  Restrictions:")
    yield from _RESTRICTIONS

    yield colorize(COLOR_BLUE, "\n📚 For more information:")
    yield f"   Run: {_COMMAND} --help"
    yield ""


def show_examples() -> str:
    """Print usage examples, the field format and naming restrictions.

    Returns the printed text.
    """
    text = "\n".join(_example_lines())
    print(text)
    return text