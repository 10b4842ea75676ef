"""HTML template generation for a new model's public pages."""

from __future__ import annotations

import os
from pathlib import Path
from string import Template
from typing import Sequence

from gojang.addmodel.fileops import FileWriter
from gojang.addmodel.naming import Field, input_type, to_camel_case

_LIST_COLUMNS = 4

_INDEX_TEMPLATE = Template(
    """{{define "title"}}$title{{end}}

{{define "content"}}
<div class="container" style="padding: 2rem 2rem;">
\t<h1>$title</h1>
\t<h3>This is a sample page for demonstration only, not fully implemented.</h3>

    {{if .Data.$key}}
    <div class="table-container">
        <table class="table">
            <thead>
                <tr>
                    <th style="width: 80px;">#</th>
$headers                </tr>
            </thead>
            <tbody>
                {{range .Data.$key}}
                <tr>
                    <td style="font-weight: 600; color: #64748b;">{{.ID}}</td>
$cells                </tr>
                {{end}}
            </tbody>
        </table>
    </div>
    {{else}}
    <div style="background: white; padding: 3rem; text-align: center; border-radius: 8px; box-shadow: 0 1px 3px rgba(0,0,0,0.1);">
        <p style="font-size: 1.25rem; color: #64748b; margin-bottom: 1rem;">📭 No $plural found</p>
    </div>
    {{end}}
</div>
{{end}}
"""
)

_FORM_TEMPLATE = Template(
    """{{define "title"}}$title{{end}}

{{define "content"}}
<div class="modal-header">
    <h2>$title</h2>
</div>

<form method="POST" action="$action" $htmx hx-swap="none">
    {{if .Data.Errors}}
    <div class="alert alert-danger">
        {{range .Data.Errors}}
        <p>{{.}}</p>
        {{end}}
    </div>
    {{end}}
$fields
    <div class="form-actions">
        <button type="submit" class="btn btn-primary">$button</button>
        <button type="button" onclick="closeModal()" class="btn btn-secondary">Cancel</button>
    </div>
</form>
{{end}}
"""
)


def _block(*lines: str) -> Template:
    return Template("\n".join(("", *lines, "")))


_CHECKBOX_BLOCK = _block(
    '    <div class="form-group">',
    "        <label>",
    '            <input type="checkbox" ',
    '                   id="$name" ',
    '                   name="$name"',
    "                   $checked>",
    "            $title",
    "        </label>",
    "    </div>",
)

_TEXTAREA_BLOCK = _block(
    '    <div class="form-group">',
    '        <label for="$name">$title</label>',
    '        <textarea id="$name" ',
    '                  name="$name" ',
    '                  rows="3"',
    '                  class="form-control">{{if .Data.Form}}{{.Data.Form.$title}}'
    "{{else}}{{if .Data.$model}}{{.Data.$model.$title}}{{end}}{{end}}</textarea>",
    "    </div>",
)

_INPUT_BLOCK = _block(
    '    <div class="form-group">',
    '        <label for="$name">$title</label>',
    '        <input type="$input" ',
    '               id="$name" ',
    '               name="$name" $step$required',
    "               $value",
    '               class="form-control">',
    "    </div>",
)


def create_templates(
    writer: FileWriter,
    directory: "str | os.PathLike[str]",
    model_name: str,
    fields: Sequence[Field],
) -> None:
    """Create the template directory with index, new and edit templates."""
    writer.mkdir(directory)
    model_plural = model_name.lower() + "s"
    model_title = to_camel_case(model_name)
    base = Path(directory)

    create_index_template(
        writer, base / "index.html", model_name, model_title, model_plural, fields
    )
    for form_type in ("new", "edit"):
        create_form_template(
            writer,
            base / f"{form_type}.partial.html",
            model_name,
            model_title,
            model_plural,
            fields,
            form_type,
        )


def _index_cell(field: Field) -> str:
    name = to_camel_case(field.name)
    if field.type == "float":
        body = '${{printf "%.2f" .' + name + "}}"
    elif field.type == "bool":
        body = "{{if ." + name + "}}Yes{{else}}No{{end}}"
    else:
        body = "{{." + name + "}}"
    return f"                <td>{body}</td>\n"


def create_index_template(
    writer: FileWriter,
    path: "str | os.PathLike[str]",
    model_name: str,
    model_title: str,
    model_plural: str,
    fields: Sequence[Field],
) -> None:
    """Write the list page showing the first four fields of each record."""
    shown = fields[:_LIST_COLUMNS]
    headers = "".join(
        f"                <th>{to_camel_case(field.name)}</th>\n" for field in shown
    )
    cells = "".join(_index_cell(field) for field in shown)
    content = _INDEX_TEMPLATE.substitute(
        title=model_title,
        key=to_camel_case(model_name),
        headers=headers,
        cells=cells,
        plural=model_plural,
    )
    writer.write(path, content)


def _form_field(field: Field, model_key: str, is_edit: bool) -> str:
    name = field.name
    title = to_camel_case(field.name)

    if field.type == "bool":
        checked = "{{if .Data.Form}}{{if .Data.Form." + title + "}}checked{{end}}"
        if is_edit:
            checked += "{{else}}{{if .Data." + model_key + "." + title + "}}checked{{end}}"
        checked += "{{end}}"
        return _CHECKBOX_BLOCK.substitute(name=name, title=title, checked=checked)

    if is_edit:
        value = (
            'value="{{if .Data.Form}}{{.Data.Form.' + title + "}}{{else}}"
            "{{.Data." + model_key + "." + title + '}}{{end}}"'
        )
    else:
        value = 'value="{{if .Data.Form}}{{.Data.Form.' + title + '}}{{end}}"'

    if field.type == "text":
        return _TEXTAREA_BLOCK.substitute(name=name, title=title, model=model_key)

    return _INPUT_BLOCK.substitute(
        name=name,
        title=title,
        input=input_type(field.type),
        step='\n               step="0.01"' if field.type == "float" else "",
        required="\n               required" if field.required else "",
        value=value,
    )


def create_form_template(
    writer: FileWriter,
    path: "str | os.PathLike[str]",
    model_name: str,
    model_title: str,
    model_plural: str,
    fields: Sequence[Field],
    form_type: str,
) -> None:
    """Write the ``new`` or ``edit`` modal form template."""
    is_edit = form_type == "edit"
    model_key = to_camel_case(model_name)

    if is_edit:
        title = "Edit " + model_title
        action = f"/{model_plural}/{{{{.Data.{model_key}.ID}}}}"
        htmx = f'hx-put="{action}"'
        button = "Update " + model_title
    else:
        title = "New " + model_title
        action = "/" + model_plural
        htmx = f'hx-post="{action}"'
        button = "Create " + model_title

    form_fields = "".join(_form_field(field, model_key, is_edit) for field in fields)
    content = _FORM_TEMPLATE.substitute(
        title=title, action=action, htmx=htmx, fields=form_fields, button=button
    )
    writer.write(path, content)