import io

import pytest

from gojang.addmodel.fileops import FileWriter
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
from gojang.addmodel.naming import Field

FORMS_GO = """package forms

// Validate validates a form struct
func Validate(form interface{}) map[string]string {
\treturn nil
}
"""

MAIN_GO = """package main

func main() {
\tpostHandler := handlers.NewPostHandler(client, publicRenderer)

\tr.Mount("/posts", routes.PostRoutes(postHandler, sessionManager, client))
\tr.Mount("/admin", admin.AdminRoutes(adminHandler, sessionManager, client))
}
"""

ADMIN_GO = """package admin

func RegisterModels(registry *Registry) {
\t// Existing models
}
"""


@pytest.fixture
def writer():
    return FileWriter()


def test_create_schema(tmp_path, writer):
    path = tmp_path / "product.go"
    fields = [
        Field("name", "string", True),
        Field("price", "float", False),
        Field("stock", "int", False),
    ]
    create_schema(writer, path, "Product", fields, True)
    content = path.read_text(encoding="utf-8")
    for expected in [
        "package schema",
        "type Product struct",
        "func (Product) Fields()",
        'field.String("name")',
        'field.Float("price")',
        'field.Int("stock")',
        'field.Time("created_at")',
        "NotEmpty()",
        "Positive()",
        "Default(0)",
    ]:
        assert expected in content


def test_create_schema_without_timestamps(tmp_path, writer):
    path = tmp_path / "tag.go"
    create_schema(writer, path, "Tag", [Field("active", "bool", False)], False)
    content = path.read_text(encoding="utf-8")
    assert "created_at" not in content
    assert "Default(false)" in content


def test_create_schema_already_exists(tmp_path, writer):
    path = tmp_path / "product.go"
    path.write_text("existing content")
    with pytest.raises(GeneratorError, match="already exists"):
        create_schema(writer, path, "Product", [Field("name", "string", True)], True)
    assert path.read_text() == "existing content"


def test_create_schema_dry_run_writes_nothing(tmp_path):
    out = io.StringIO()
    path = tmp_path / "product.go"
    create_schema(FileWriter(dry_run=True, out=out), path, "Product", [Field("name", "string")], True)
    assert not path.exists()
    assert "[DRY-RUN] Would write to:" in out.getvalue()


def test_add_form_struct(tmp_path, writer):
    path = tmp_path / "forms.go"
    path.write_text(FORMS_GO)
    fields = [Field("name", "string", True), Field("price", "float", False)]
    add_form_struct(writer, path, "Product", fields)
    content = path.read_text(encoding="utf-8")
    for expected in [
        "type ProductForm struct",
        "Name string",
        "Price float64",
        'form:"name"',
        'form:"price"',
        'validate:"required,max=255"',
        'validate:"gt=0"',
    ]:
        assert expected in content
    assert content.index("type ProductForm struct") < content.index("// Validate validates")


def test_add_form_struct_duplicate(tmp_path, writer):
    path = tmp_path / "forms.go"
    path.write_text(FORMS_GO)
    add_form_struct(writer, path, "Product", [Field("name", "string", True)])
    with pytest.raises(GeneratorError, match="already exists"):
        add_form_struct(writer, path, "Product", [Field("name", "string", True)])


def test_create_handler(tmp_path, writer):
    path = tmp_path / "products.go"
    fields = [Field("name", "string", True), Field("price", "float", False)]
    create_handler(writer, path, "Product", fields)
    content = path.read_text(encoding="utf-8")
    for expected in [
        "package handlers",
        "type ProductHandler struct",
        "func NewProductHandler",
        "func (h *ProductHandler) Index",
        "func (h *ProductHandler) New",
        "func (h *ProductHandler) Create",
        "func (h *ProductHandler) Edit",
        "func (h *ProductHandler) Update",
        "func (h *ProductHandler) Delete",
        "SetName(form.Name)",
        "SetPrice(form.Price)",
    ]:
        assert expected in content
    assert 'log.Printf("Error creating product: %v", err)' in content


def test_create_routes(tmp_path, writer):
    path = tmp_path / "products.go"
    create_routes(writer, path, "Product")
    content = path.read_text(encoding="utf-8")
    for expected in [
        "package routes",
        "func ProductRoutes",
        "*handlers.ProductHandler",
        'r.Get("/", handler.Index)',
        'auth.Get("/new", handler.New)',
        'auth.Post("/", handler.Create)',
        'auth.Get("/{id}/edit", handler.Edit)',
        'auth.Put("/{id}", handler.Update)',
        'auth.Delete("/{id}", handler.Delete)',
    ]:
        assert expected in content


def test_create_routes_already_exists(tmp_path, writer):
    path = tmp_path / "products.go"
    path.write_text("x")
    with pytest.raises(GeneratorError, match="already exists"):
        create_routes(writer, path, "Product")


def test_update_main_go(tmp_path, writer):
    path = tmp_path / "main.go"
    path.write_text(MAIN_GO)
    update_main_go(writer, path, "Product")
    content = path.read_text(encoding="utf-8")
    assert "productHandler := handlers.NewProductHandler(client, publicRenderer)" in content
    mount = 'r.Mount("/products", routes.ProductRoutes(productHandler, sessionManager, client))'
    assert mount in content
    assert content.index('r.Mount("/posts"') < content.index(mount) < content.index('r.Mount("/admin"')


def test_update_main_go_duplicate(tmp_path, writer):
    path = tmp_path / "main.go"
    path.write_text(MAIN_GO)
    update_main_go(writer, path, "Product")
    with pytest.raises(GeneratorError, match="already registered"):
        update_main_go(writer, path, "Product")


def test_update_main_go_missing_section(tmp_path, writer):
    path = tmp_path / "main.go"
    path.write_text("package main\n")
    with pytest.raises(GeneratorError, match="handler initialization"):
        update_main_go(writer, path, "Product")


def test_register_with_admin(tmp_path, writer):
    path = tmp_path / "models.go"
    path.write_text(ADMIN_GO)
    fields = [Field("name", "string", True), Field("price", "float", False)]
    register_with_admin(writer, path, "Product", "📦", fields)
    content = path.read_text(encoding="utf-8")
    for expected in [
        "registry.RegisterModel(ModelRegistration{",
        "ModelType:      &models.Product{}",
        'Icon:           "📦"',
        'NamePlural:     "Products"',
        'ListFields:     []string{"ID", "Name", "Price"}',
        'ReadonlyFields: []string{"ID", "CreatedAt"}',
        'OptionalFields: []string{"Price"}',
    ]:
        assert expected in content
    assert content.rstrip().endswith("}")
    assert content.index("RegisterModel(") < content.rindex("}")


def test_register_with_admin_limits_list_fields(tmp_path, writer):
    path = tmp_path / "models.go"
    path.write_text(ADMIN_GO)
    fields = [Field(n, "string", True) for n in ["a", "b", "c", "d", "e"]]
    register_with_admin(writer, path, "Thing", "📄", fields)
    content = path.read_text(encoding="utf-8")
    assert 'ListFields:     []string{"ID", "A", "B", "C", "D"}' in content
    assert "OptionalFields" not in content


def test_register_with_admin_duplicate(tmp_path, writer):
    path = tmp_path / "models.go"
    path.write_text(ADMIN_GO)
    register_with_admin(writer, path, "Product", "📦", [Field("name", "string", True)])
    with pytest.raises(GeneratorError, match="already registered"):
        register_with_admin(writer, path, "Product", "📦", [Field("name", "string", True)])


def test_generate_ent_code_dry_run(tmp_path):
    out = io.StringIO()
    generate_ent_code(FileWriter(dry_run=True, out=out), tmp_path)
    assert out.getvalue() == f"  [DRY-RUN] Would run: go generate in {tmp_path}\n"


def test_generate_ent_code_missing_directory(tmp_path, writer):
    with pytest.raises(GeneratorError):
        generate_ent_code(writer, tmp_path / "does-not-exist")