"""Interactive generator that adds a static page, its handler and its route."""

from __future__ import annotations

import os
import re
import sys
from pathlib import Path
from typing import Sequence, TextIO

from gojang.addmodel import fileops

_PAGE_NAME = re.compile(r"[A-Za-z\t\n\f\r ]+")
_NOT_FOUND_MARKER = "// NotFound renders the 404 page"
_PROTECTED_MARKER = "// Protected pages"
_DASHBOARD_ROUTE = 'auth.Get("/dashboard"'
_HOME_ROUTE = 'r.Get("/", handler.Home)'


class PageError(RuntimeError):
    """Raised when a page cannot be added to the project."""


def is_valid_page_name(name: str) -> bool:
    """True if ``name`` holds only ASCII letters and whitespace."""
    return _PAGE_NAME.fullmatch(name) is not None


def _title(word: str) -> str:
    out = []
    previous_separator = True
    for ch in word:
        out.append(ch.upper() if previous_separator else ch)
        previous_separator = not (ch.isalnum() or ch == "_")
    return "".join(out)


def to_pascal_case(text: str) -> str:
    """Convert spaced words to PascalCase, e.g. ``about us`` to ``AboutUs``."""
    return "".join(_title(word.lower()) for word in text.split())


def find_project_root(start: "str | os.PathLike[str] | None" = None) -> Path:
    """Return the nearest directory at or above ``start`` holding ``go.mod``."""
    return fileops.find_project_root(start)


def create_template_file(path: "str | os.PathLike[str]", title: str, page_name: str) -> None:
    """Write the HTML template for the new page."""
    file_name = os.path.basename(os.fspath(path))
    content = (
        f'{{{{define "title"}}}}{title}{{{{end}}}}\n'
        "\n"
        '{{define "content"}}\n'
        '<div class="container">\n'
        f"    <h1>{title}</h1>\n"
        "    \n"
        '    <div class="card">\n'
        "        <p>\n"
        f"            Welcome to the {page_name} page. This page was auto-generated "
        "by the Gojang static page generator.\n"
        "        </p>\n"
        "        \n"
        "        <p>\n"
        f"            Edit this template at <code>{file_name}</code> to customize the content.\n"
        "        </p>\n"
        "        \n"
        '        <div class="alert alert-info" style="margin-top: 2rem;">\n'
        "            <p>\n"
        "                <strong>Tip:</strong> You can add HTMX attributes to make "
        "this page interactive!\n"
        "            </p>\n"
        "        </div>\n"
        "    </div>\n"
        "</div>\n"
        "{{end}}\n"
    )
    Path(path).write_text(content, encoding="utf-8")


def add_handler(
    path: "str | os.PathLike[str]", func_name: str, title: str, template_file_name: str
) -> None:
    """Insert a page handler method before the ``NotFound`` handler."""
    content = Path(path).read_text(encoding="utf-8")
    if f"func (h *PageHandler) {func_name}(" in content:
        raise PageError(f"handler {func_name} already exists")

    pos = content.find(_NOT_FOUND_MARKER)
    if pos == -1:
        pos = len(content)

    handler_code = (
        f"\n// {func_name} renders the {func_name.lower()} page\n"
        f"func (h *PageHandler) {func_name}(w http.ResponseWriter, r *http.Request) {{\n"
        f'\th.Renderer.Render(w, r, "{template_file_name}", &renderers.TemplateData{{\n'
        f'\t\tTitle: "{title}",\n'
        "\t\tData:  map[string]interface{}{},\n"
        "\t})\n"
        "}\n\n"
    )
    Path(path).write_text(content[:pos] + handler_code + content[pos:], encoding="utf-8")


def _after_line(content: str, pos: int) -> int:
    return pos + content.find("\n", pos) - pos + 1


def add_route(
    path: "str | os.PathLike[str]", route_path: str, handler_func_name: str, is_protected: bool
) -> None:
    """Register the page route, in the protected group when ``is_protected``."""
    content = Path(path).read_text(encoding="utf-8")
    if f'r.Get("{route_path}"' in content or f'auth.Get("{route_path}"' in content:
        raise PageError(f"route {route_path} already exists")

    if is_protected:
        group_pos = content.find(_PROTECTED_MARKER)
        if group_pos == -1:
            raise PageError("could not find protected pages section")
        dashboard_pos = content.find(_DASHBOARD_ROUTE, group_pos)
        if dashboard_pos == -1:
            raise PageError("could not find dashboard route")
        insert_at = _after_line(content, dashboard_pos)
        route_code = f'\t\tauth.Get("{route_path}", handler.{handler_func_name})\n'
    else:
        home_pos = content.find(_HOME_ROUTE)
        if home_pos == -1:
            raise PageError("could not find home route")
        insert_at = _after_line(content, home_pos)
        route_code = f'\tr.Get("{route_path}", handler.{handler_func_name})\n'

    Path(path).write_text(
        content[:insert_at] + route_code + content[insert_at:], encoding="utf-8"
    )


def _ask(prompt: str, stream: TextIO) -> str:
    print(prompt, end="", flush=True)
    return stream.readline().strip()


def main(argv: Sequence[str] | None = None) -> int:
    """Prompt for a page and add its template, handler and route."""
    stream = sys.stdin
    print("🚀 Gojang Static Page Generator")
    print("==================================")
    print()

    page_name = _ask("Page name (e.g., 'About', 'Contact', 'Terms'): ", stream)
    if not page_name:
        raise SystemExit("❌ Page name is required")
    if not is_valid_page_name(page_name):
        raise SystemExit("❌ Page name must contain only letters and spaces")

    page_title = _ask("Page title (e.g., 'About Us', 'Contact Us'): ", stream) or page_name

    slug = page_name.replace(" ", "-").lower()
    default_route = "/" + slug
    route_path = _ask(f"Route path (default: {default_route}): ", stream) or default_route
    if not route_path.startswith("/"):
        raise SystemExit("❌ Route path must start with /")

    answer = _ask("Require authentication? (y/N): ", stream).lower()
    is_protected = answer in ("y", "yes")

    try:
        project_root = find_project_root()
    except FileNotFoundError as exc:
        raise SystemExit(f"❌ Failed to find project root: {exc}") from exc

    template_dir = project_root / "gojang" / "views" / "templates"
    handler_path = project_root / "gojang" / "http" / "handlers" / "pages.go"
    routes_path = project_root / "gojang" / "http" / "routes" / "pages.go"

    template_file_name = slug + ".html"
    template_file_path = template_dir / template_file_name
    if template_file_path.exists():
        raise SystemExit(f"❌ Template file already exists: {template_file_path}")

    print()
    print("📝 Creating template file...")
    try:
        create_template_file(template_file_path, page_title, page_name)
    except OSError as exc:
        raise SystemExit(f"❌ Failed to create template file: {exc}") from exc
    print(f"✅ Created: {template_file_path}")

    print()
    print("🔧 Adding handler to pages.go...")
    handler_func_name = to_pascal_case(page_name)
    try:
        add_handler(handler_path, handler_func_name, page_title, template_file_name)
    except (PageError, OSError) as exc:
        raise SystemExit(f"❌ Failed to add handler: {exc}") from exc
    print(f"✅ Added handler: {handler_func_name}")

    print()
    print("🔗 Adding route to pages.go...")
    try:
        add_route(routes_path, route_path, handler_func_name, is_protected)
    except (PageError, OSError) as exc:
        raise SystemExit(f"❌ Failed to add route: {exc}") from exc
    print(f"✅ Added route: {route_path} -> {handler_func_name}")

    print()
    print("✨ Static page created successfully!")
    print()
    print("Next steps:")
    print("1. Restart your server: go run ./gojang/cmd/web")
    print(f"2. Visit: http://localhost:8080{route_path}")
    print("3. Edit the template to customize your page")
    return 0


if __name__ == "__main__":
    sys.exit(main())