# gojang

Tools for working on a gojang web project:

- **`gojang-addmodel`**: scaffolds a new data model. It writes the ORM
  schema, runs `go generate`, adds a form struct, creates a handler, routes
  and templates, registers the routes in `main.go` and adds the model to the
  admin panel's `models.go`.
- **`gojang-addpage`**: adds a static page template, its handler and its route.
- **`gojang.config`**: reads the application settings from the environment
  and from `.env` files.
- **`gojang.admin`**: an in-memory record store (`gojang.admin.store`) and
  display helpers for admin templates (`gojang.admin.display`).

## Installation

```
pip install .
```

Add the `test` extra (`pip install .[test]`) to run the test suite with `pytest`.

## Adding a model

Run the command from anywhere inside the project. It walks up the directory
tree to the nearest directory holding `go.mod` and treats that as the project
root. Step 2 runs `go generate ./...` in `gojang/models`, so the Go toolchain
must be on the `PATH` unless `--dry-run` is given.

Interactive mode asks for the model name, the icon and the fields (each one
followed by "required?"), then asks you to confirm:

```
gojang-addmodel
```

Non-interactive mode skips the confirmation:

```
gojang-addmodel --model Product --icon "📦" --fields "name:string:required,price:float:required,stock:int"
```

To see what would be written without changing anything:

```
gojang-addmodel --model Product --fields "name:string:required,price:float" --dry-run
```

To leave out the `created_at` timestamp:

```
gojang-addmodel --model Tag --fields "name:string:required" --timestamps=false
```

To print more usage examples:

```
gojang-addmodel --examples
```

The files it touches, relative to the project root:

| Path | Action |
|------|--------|
| `gojang/models/schema/<model>.go` | created |
| `gojang/views/forms/forms.go` | form struct inserted |
| `gojang/http/handlers/<model>s.go` | created |
| `gojang/http/routes/<model>s.go` | created |
| `gojang/cmd/web/main.go` | handler and route mount inserted |
| `gojang/views/templates/<model>s/` | `index.html`, `new.partial.html`, `edit.partial.html` |
| `gojang/admin/models.go` | admin registration inserted |

Files that are created must not exist yet; a file that already holds the
model's form, handler or registration is refused. Generated imports use the
module path read from the project's `go.mod`.

### Field format

Each field is written as `name:type[:required]`.

- `name` is lower-case snake_case and starts with a letter, for example `unit_price`.
- `type` is one of `string`, `text`, `int`, `float`, `bool` or `time`.
- `required` is an optional suffix that makes the field required.

Model names are PascalCase. Reserved keywords, built-in type names and the
identifiers the ORM declares itself (`Client`, `Mutation`, `Config`, `Query`,
`Tx`, `Value`, `Hook`, `Policy`, `OrderFunc`, `Predicate`) are refused, both
as model names and as field names.

### Using the generators from code

```python
from gojang.addmodel.fileops import FileWriter
from gojang.addmodel.generator import create_schema
from gojang.addmodel.naming import parse_fields, to_camel_case, is_valid_model_name

fields = parse_fields("name:string:required,unit_price:float")
assert is_valid_model_name("Product")
assert to_camel_case("unit_price") == "UnitPrice"

writer = FileWriter(dry_run=True)   # only reports what it would write
create_schema(writer, "product.go", "Product", fields, include_timestamps=True)
```

A malformed specification raises `FieldError`; a generator that cannot create
or patch its file raises `GeneratorError`.

## Adding a static page

```
gojang-addpage
```

The command asks for the page name (letters and spaces only), the title, the
route path (the default is built from the name, for example `/about-us`) and
whether the page requires a logged-in user. It writes the template to
`gojang/views/templates/<name>.html`, inserts a handler before `NotFound` in
`gojang/http/handlers/pages.go` and adds the route to
`gojang/http/routes/pages.go`, after the home route or, for protected pages,
after the dashboard route.

## Configuration

`gojang.config.load()` reads `.env`, or `.env.example` if `.env` does not
exist, then reads the environment. Given a mapping, `load(environ)` reads only
that mapping.

| Variable           | Default             |
|--------------------|---------------------|
| `DATABASE_URL`     | required            |
| `SESSION_KEY`      | required            |
| `DEBUG`            | `false`             |
| `PORT`             | `8080`              |
| `ALLOWED_HOSTS`    | empty, comma-separated |
| `SESSION_LIFETIME` | `12h`               |
| `SMTP_HOST`        | empty               |
| `SMTP_PORT`        | `587`               |
| `SMTP_USER`        | empty               |
| `SMTP_PASS`        | empty               |
| `SMTP_FROM`        | `noreply@localhost` |

```python
from gojang.config import load

cfg = load({"DATABASE_URL": "sqlite://app.db", "SESSION_KEY": "placeholder"})
print(cfg.port, cfg.session_lifetime)
```

`SESSION_LIFETIME` is a duration such as `12h`, `1h30m` or `1.5s`, parsed by
`parse_duration`. `load` raises `ConfigError` when a required variable is
missing or a value cannot be parsed. `must_load` logs the failure and exits
the program with `SystemExit`.

## Admin helpers

`MemoryStore` keeps records of dataclass models that have an `id` field. It
assigns ids in order, fills `created_at` and `updated_at` fields when the
model has them, and keeps string settings:

```python
from dataclasses import dataclass
from datetime import datetime
from gojang.admin.store import MemoryStore

@dataclass
class Tag:
    id: int
    name: str
    created_at: datetime | None = None

store = MemoryStore()
store.add_model(Tag)
tag = store.create("Tag", {"name": "news"})
store.update("Tag", tag.id, {"name": "updates"})
store.set_setting("admin_model_order", '["Tag"]')
```

A missing record raises `RecordNotFoundError`.

`gojang.admin.display` holds `TemplateData` and the template helpers
`field_value` (`Yes`/`No` for flags, `-` for empty values), `get_id`,
`format_datetime_field` (for `datetime-local` inputs) and `render_error`,
which returns the HTML error fragment.

## What this package does not do

- It does not serve the web application: there is no HTTP server, router,
  session handling or page rendering here.
- It has no admin panel pages or request handlers, and no model registry that
  discovers fields; only the in-memory store and display helpers above.
- It does not connect to a database or run migrations; `MemoryStore` keeps
  everything in memory for the life of the process.
- It has no command to create a superuser.