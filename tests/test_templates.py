from pathlib import Path

import io

from gojang.addmodel.fileops import FileWriter
from gojang.addmodel.naming import Field
from gojang.addmodel.templates import (
    create_form_template,
    create_index_template,
    create_templates,
)

FORM_FIELDS = [
    Field("name", "string", True),
    Field("description", "text", False),
    Field("price", "float", False),
    Field("active", "bool", False),
]


def test_create_index_template(tmp_path):
    path = tmp_path / "index.html"
    fields = [Field("name", "string", True), Field("price", "float", False)]
    create_index_template(FileWriter(), path, "Product", "Product", "products", fields)
    content = path.read_text(encoding="utf-8")

    for expected in [
        '{{define "title"}}Product{{end}}',
        '{{define "content"}}',
        "<h1>Product</h1>",
        "<th>Name</th>",
        "<th>Price</th>",
        "{{.Name}}",
        '{{printf "%.2f" .Price}}',
    ]:
        assert expected in content

    for unwanted in [
        'href="/products/new"',
        "{{if .User}}",
        "{{if $.User}}",
        "btn btn-primary",
        "btn btn-sm btn-primary",
        "btn btn-sm btn-danger",
        "Edit",
        "Delete",
        "Actions",
    ]:
        assert unwanted not in content


def test_index_template_shows_first_four_fields_only(tmp_path):
    path = tmp_path / "index.html"
    fields = [Field(f"f{i}", "string") for i in range(6)]
    create_index_template(FileWriter(), path, "Item", "Item", "items", fields)
    content = path.read_text(encoding="utf-8")
    assert "<th>F3</th>" in content
    assert "<th>F4</th>" not in content
    assert "{{.F5}}" not in content


def test_index_template_bool_cell(tmp_path):
    path = tmp_path / "index.html"
    create_index_template(
        FileWriter(), path, "Item", "Item", "items", [Field("active", "bool")]
    )
    assert "<td>{{if .Active}}Yes{{else}}No{{end}}</td>" in path.read_text(encoding="utf-8")


def test_create_form_template_new(tmp_path):
    path = tmp_path / "new.partial.html"
    create_form_template(
        FileWriter(), path, "Product", "Product", "products", FORM_FIELDS, "new"
    )
    content = path.read_text(encoding="utf-8")
    for expected in [
        '{{define "title"}}New Product{{end}}',
        '{{define "content"}}',
        "<h2>New Product</h2>",
        'action="/products"',
        'hx-post="/products"',
        '<label for="name">Name</label>',
        '<input type="text"',
        'name="name"',
        "required",
        '<label for="description">Description</label>',
        "<textarea",
        '<label for="price">Price</label>',
        'type="number"',
        'step="0.01"',
        '<input type="checkbox"',
        'name="active"',
        "Create Product",
    ]:
        assert expected in content


def test_create_form_template_edit(tmp_path):
    path = tmp_path / "edit.partial.html"
    create_form_template(
        FileWriter(), path, "Product", "Product", "products", FORM_FIELDS, "edit"
    )
    content = path.read_text(encoding="utf-8")
    assert '{{define "title"}}Edit Product{{end}}' in content
    assert 'action="/products/{{.Data.Product.ID}}"' in content
    assert 'hx-put="/products/{{.Data.Product.ID}}"' in content
    assert "Update Product" in content
    assert (
        'value="{{if .Data.Form}}{{.Data.Form.Name}}{{else}}{{.Data.Product.Name}}{{end}}"'
        in content
    )
    assert (
        "{{if .Data.Form}}{{if .Data.Form.Active}}checked{{end}}"
        "{{else}}{{if .Data.Product.Active}}checked{{end}}{{end}}>" in content
    )
    assert "hx-post" not in content


def test_create_templates_writes_three_files(tmp_path):
    directory = tmp_path / "products"
    create_templates(FileWriter(), directory, "Product", FORM_FIELDS)
    names = sorted(p.name for p in Path(directory).iterdir())
    assert names == ["edit.partial.html", "index.html", "new.partial.html"]


def test_create_templates_dry_run_writes_nothing(tmp_path):
    directory = tmp_path / "products"
    out = io.StringIO()
    create_templates(FileWriter(dry_run=True, out=out), directory, "Product", FORM_FIELDS)
    assert not directory.exists()
    report = out.getvalue()
    assert "Would create directory" in report
    assert report.count("Would write to") == 3