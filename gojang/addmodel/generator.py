"""Generators that write or patch the Go sources for a new model."""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path
from string import Template
from typing import Iterable, Sequence

from gojang.addmodel.fileops import FileWriter
from gojang.addmodel.naming import (
    Field,
    ent_field_type,
    form_field_extraction,
    go_type,
    to_camel_case,
    validation_tag,
)

_DEFAULT_MODULE = "example.com/app"

_SCHEMA_IMPORTS = '"time"\n\t"entgo.io/ent"\n\t"entgo.io/ent/schema/field"'
_VALIDATE_MARKER = "// Validate validates a form struct"
_POST_HANDLER_MARKER = "postHandler := handlers.NewPostHandler"
_POST_ROUTES_MARKER = 'r.Mount("/posts", routes.PostRoutes'

_SCHEMA_TEMPLATE = Template(
    """package schema

import (
\t$imports
)

type $model struct {
\tent.Schema
}

func ($model) Fields() []ent.Field {
\treturn []ent.Field{
$fields\t}
}
"""
)

_HANDLER_TEMPLATE = Template(
    """package handlers

import (
\t"log"
\t"net/http"
\t"strconv"
\t"time"

\t"github.com/go-chi/chi/v5"
\t"$module/gojang/models"
\t"$module/gojang/views/forms"
\t"$module/gojang/views/renderers"
)

var _ time.Time // to avoid unused import

type $handler struct {
\tClient   *models.Client
\tRenderer *renderers.Renderer
}

func New$handler(client *models.Client, renderer *renderers.Renderer) *$handler {
\treturn &$handler{
\t\tClient:   client,
\t\tRenderer: renderer,
\t}
}

// Index lists all $plural
func (h *$handler) Index(w http.ResponseWriter, r *http.Request) {
\t$plural, err := h.Client.$model.Query().
\t\tOrder(models.Desc("created_at")).
\t\tAll(r.Context())
\tif err != nil {
\t\th.Renderer.RenderError(w, r, http.StatusInternalServerError, "Failed to load $plural")
\t\treturn
\t}

\th.Renderer.Render(w, r, "$plural/index.html", &renderers.TemplateData{
\t\tTitle: "$model",
\t\tData: map[string]interface{}{
\t\t\t"$camel": $plural,
\t\t},
\t})
}

// New shows the create form
func (h *$handler) New(w http.ResponseWriter, r *http.Request) {
\th.Renderer.Render(w, r, "$plural/new.partial.html", &renderers.TemplateData{
\t\tTitle: "New $model",
\t})
}

// Create creates a new $lower
func (h *$handler) Create(w http.ResponseWriter, r *http.Request) {
\tif err := r.ParseForm(); err != nil {
\t\th.Renderer.RenderError(w, r, http.StatusBadRequest, "Invalid form")
\t\treturn
\t}

\tform := forms.${model}Form{
$extraction\t}

\tif errors := forms.Validate(&form); len(errors) > 0 {
\t\th.Renderer.Render(w, r, "$plural/new.partial.html", &renderers.TemplateData{
\t\t\tTitle: "New $model",
\t\t\tData: map[string]interface{}{
\t\t\t\t"Form":   form,
\t\t\t\t"Errors": errors,
\t\t\t},
\t\t})
\t\treturn
\t}

\t_, err := h.Client.$model.Create().
$setters\t\tSave(r.Context())

\tif err != nil {
\t\tlog.Printf("Error creating $lower: %v", err)
\t\th.Renderer.RenderError(w, r, http.StatusInternalServerError, "Failed to create $lower")
\t\treturn
\t}

\thttp.Redirect(w, r, "/$plural", http.StatusSeeOther)
}

// Edit shows the edit form
func (h *$handler) Edit(w http.ResponseWriter, r *http.Request) {
\tid, _ := strconv.Atoi(chi.URLParam(r, "id"))

\t$lower, err := h.Client.$model.Get(r.Context(), id)
\tif err != nil {
\t\th.Renderer.RenderError(w, r, http.StatusNotFound, "$model not found")
\t\treturn
\t}

\th.Renderer.Render(w, r, "$plural/edit.partial.html", &renderers.TemplateData{
\t\tTitle: "Edit $model",
\t\tData: map[string]interface{}{
\t\t\t"$model": $lower,
\t\t},
\t})
}

// Update updates a $lower
func (h *$handler) Update(w http.ResponseWriter, r *http.Request) {
\tid, _ := strconv.Atoi(chi.URLParam(r, "id"))

\tif err := r.ParseForm(); err != nil {
\t\th.Renderer.RenderError(w, r, http.StatusBadRequest, "Invalid form")
\t\treturn
\t}

\tform := forms.${model}Form{
$extraction\t}

\tif errors := forms.Validate(&form); len(errors) > 0 {
\t\t$lower, _ := h.Client.$model.Get(r.Context(), id)
\t\th.Renderer.Render(w, r, "$plural/edit.partial.html", &renderers.TemplateData{
\t\t\tTitle: "Edit $model",
\t\t\tData: map[string]interface{}{
\t\t\t\t"$model": $lower,
\t\t\t\t"Form":     form,
\t\t\t\t"Errors":   errors,
\t\t\t},
\t\t})
\t\treturn
\t}

\t_, err := h.Client.$model.UpdateOneID(id).
$setters\t\tSave(r.Context())

\tif err != nil {
\t\tlog.Printf("Error updating $lower: %v", err)
\t\th.Renderer.RenderError(w, r, http.StatusInternalServerError, "Failed to update $lower")
\t\treturn
\t}

\thttp.Redirect(w, r, "/$plural", http.StatusSeeOther)
}

// Delete deletes a $lower
func (h *$handler) Delete(w http.ResponseWriter, r *http.Request) {
\tid, _ := strconv.Atoi(chi.URLParam(r, "id"))

\tif err := h.Client.$model.DeleteOneID(id).Exec(r.Context()); err != nil {
\t\tlog.Printf("Error deleting $lower: %v", err)
\t\th.Renderer.RenderError(w, r, http.StatusInternalServerError, "Failed to delete $lower")
\t\treturn
\t}

\thttp.Redirect(w, r, "/$plural", http.StatusSeeOther)
}
"""
)

_ROUTES_TEMPLATE = Template(
    """package routes

import (
\t"github.com/alexedwards/scs/v2"
\t"github.com/go-chi/chi/v5"
\t"$module/gojang/http/handlers"
\t"$module/gojang/http/middleware"
\t"$module/gojang/models"
\t"github.com/justinas/nosurf"
)

func ${model}Routes(handler *handlers.$handler, sm *scs.SessionManager, client *models.Client) chi.Router {
\tr := chi.NewRouter()
\tr.Use(nosurf.NewPure)

\t// Public routes
\tr.Get("/", handler.Index)

\t// Protected routes - auth required
\tr.Group(func(auth chi.Router) {
\t\tauth.Use(middleware.RequireAuth(sm, client))

\t\tauth.Get("/new", handler.New)
\t\tauth.Post("/", handler.Create)
\t\tauth.Get("/{id}/edit", handler.Edit)
\t\tauth.Put("/{id}", handler.Update)
\t\tauth.Delete("/{id}", handler.Delete)
\t})

\treturn r
}
"""
)


class GeneratorError(RuntimeError):
    """Raised when a generated file cannot be created or patched."""


def _ensure_absent(path: "str | os.PathLike[str]", kind: str) -> None:
    if Path(path).exists():
        raise GeneratorError(f"{kind} file already exists: {os.fspath(path)}")


def _read(path: "str | os.PathLike[str]") -> str:
    return Path(path).read_text(encoding="utf-8")


def _module_path(path: "str | os.PathLike[str]") -> str:
    """Return the Go module path of the project holding ``path``."""
    for directory in Path(path).resolve().parents:
        go_mod = directory / "go.mod"
        if go_mod.is_file():
            for line in go_mod.read_text(encoding="utf-8").splitlines():
                words = line.split()
                if len(words) == 2 and words[0] == "module":
                    return words[1]
            break
    return _DEFAULT_MODULE


def _insert_after_line(content: str, marker: str, addition: str, missing: str) -> str:
    pos = content.find(marker)
    if pos == -1:
        raise GeneratorError(missing)
    insert_at = content.find("\n", pos) + 1
    return content[:insert_at] + addition + content[insert_at:]


def generate_ent_code(writer: FileWriter, models_dir: "str | os.PathLike[str]") -> None:
    """Run ``go generate ./...`` in ``models_dir``."""
    if writer.dry_run:
        print(
            f"  [DRY-RUN] Would run: go generate in {os.fspath(models_dir)}",
            file=writer.out or sys.stdout,
        )
        return
    try:
        subprocess.run(["go", "generate", "./..."], cwd=models_dir, check=True)
    except subprocess.CalledProcessError as exc:
        raise GeneratorError(f"go generate failed with exit status {exc.returncode}") from exc
    except OSError as exc:
        raise GeneratorError(f"could not run go generate: {exc}") from exc


def _schema_field(field: Field) -> str:
    parts = [f'\t\tfield.{ent_field_type(field.type)}("{field.name}")']
    if field.required:
        if field.type in ("string", "text"):
            parts.append(".\n\t\t\tNotEmpty()")
        if field.type == "float":
            parts.append(".\n\t\t\tPositive()")
    elif field.type == "int":
        parts.append(".\n\t\t\tDefault(0)")
    elif field.type == "bool":
        parts.append(".\n\t\t\tDefault(false)")
    else:
        parts.append(".\n\t\t\tOptional()")
        if field.type == "float":
            parts.append(".\n\t\t\tPositive()")
    parts.append(",\n\t\t\n")
    return "".join(parts)


def create_schema(
    writer: FileWriter,
    path: "str | os.PathLike[str]",
    model_name: str,
    fields: Iterable[Field],
    include_timestamps: bool,
) -> None:
    """Write the Ent schema file for the model."""
    _ensure_absent(path, "schema")
    body = "".join(_schema_field(field) for field in fields)
    if include_timestamps:
        body += '\t\tfield.Time("created_at").\n\t\t\tDefault(time.Now).\n\t\t\tImmutable(),\n'
    content = _SCHEMA_TEMPLATE.substitute(
        imports=_SCHEMA_IMPORTS, model=model_name, fields=body
    )
    writer.write(path, content)


def add_form_struct(
    writer: FileWriter,
    path: "str | os.PathLike[str]",
    model_name: str,
    fields: Iterable[Field],
) -> None:
    """Insert a validated form struct for the model into ``forms.go``."""
    content = _read(path)
    form_name = model_name + "Form"
    if f"type {form_name} struct" in content:
        raise GeneratorError(f"form struct {form_name} already exists")

    lines = [
        f"\n// {form_name} represents {model_name.lower()} create/update form\n",
        f"type {form_name} struct {{\n",
    ]
    for field in fields:
        lines.append(
            f"\t{to_camel_case(field.name)} {go_type(field.type)} "
            f'`form:"{field.name}" validate:"{validation_tag(field)}"`\n'
        )
    lines.append("}\n")

    pos = content.find(_VALIDATE_MARKER)
    if pos == -1:
        pos = len(content)
    writer.write(path, content[:pos] + "".join(lines) + "\n" + content[pos:])


def create_handler(
    writer: FileWriter,
    path: "str | os.PathLike[str]",
    model_name: str,
    fields: Sequence[Field],
) -> None:
    """Write the CRUD handler file for the model."""
    _ensure_absent(path, "handler")
    model_lower = model_name.lower()
    setters = "".join(
        f"\t\tSet{to_camel_case(field.name)}(form.{to_camel_case(field.name)}).\n"
        for field in fields
    )
    content = _HANDLER_TEMPLATE.substitute(
        module=_module_path(path),
        handler=model_name + "Handler",
        model=model_name,
        lower=model_lower,
        plural=model_lower + "s",
        camel=to_camel_case(model_name),
        extraction=form_field_extraction(fields),
        setters=setters,
    )
    writer.write(path, content)


def create_routes(writer: FileWriter, path: "str | os.PathLike[str]", model_name: str) -> None:
    """Write the routes file for the model."""
    _ensure_absent(path, "routes")
    content = _ROUTES_TEMPLATE.substitute(
        module=_module_path(path), model=model_name, handler=model_name + "Handler"
    )
    writer.write(path, content)


def update_main_go(writer: FileWriter, path: "str | os.PathLike[str]", model_name: str) -> None:
    """Add the handler construction and route mount for the model to ``main.go``."""
    content = _read(path)
    model_lower = model_name.lower()
    handler_name = model_lower + "Handler"

    if f"{handler_name} := handlers.New{model_name}Handler" in content:
        raise GeneratorError(f"handler {handler_name} already registered in main.go")

    content = _insert_after_line(
        content,
        _POST_HANDLER_MARKER,
        f"\t{handler_name} := handlers.New{model_name}Handler(client, publicRenderer)\n",
        "could not find handler initialization section",
    )
    content = _insert_after_line(
        content,
        _POST_ROUTES_MARKER,
        f'\tr.Mount("/{model_lower}s", routes.{model_name}Routes('
        f"{handler_name}, sessionManager, client))\n",
        "could not find route mounting section",
    )
    writer.write(path, content)


def register_with_admin(
    writer: FileWriter,
    path: "str | os.PathLike[str]",
    model_name: str,
    model_icon: str,
    fields: Sequence[Field],
) -> None:
    """Append an admin registration for the model to the admin ``models.go``."""
    content = _read(path)
    if f"ModelType:      &models.{model_name}{{}}" in content:
        raise GeneratorError(f"model {model_name} already registered in admin")

    list_fields = ["ID", *(to_camel_case(field.name) for field in fields[:4])]
    optional_fields = [to_camel_case(field.name) for field in fields if not field.required]

    parts = [
        f"\n\t// Register {model_name} model\n\tregistry.RegisterModel(ModelRegistration{{\n",
        f"\t\tModelType:      &models.{model_name}{{}},\n",
        f'\t\tIcon:           "{model_icon}",\n',
        f'\t\tNamePlural:     "{model_name}s",\n',
        '\t\tListFields:     []string{"' + '", "'.join(list_fields) + '"},\n',
        '\t\tReadonlyFields: []string{"ID", "CreatedAt"},\n',
    ]
    if optional_fields:
        parts.append('\t\tOptionalFields: []string{"' + '", "'.join(optional_fields) + '"},\n')
    parts.append("\t})\n")

    closing = content.rfind("}")
    if closing == -1:
        raise GeneratorError("could not find closing brace in models.go")
    insert_at = content.rfind("\n", 0, closing) + 1
    writer.write(path, content[:insert_at] + "".join(parts) + "\n" + content[insert_at:])