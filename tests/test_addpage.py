import io

import pytest

from gojang.addpage import (
    PageError,
    add_handler,
    add_route,
    create_template_file,
    find_project_root,
    is_valid_page_name,
    main,
    to_pascal_case,
)

HANDLERS = """package handlers

import (
	"net/http"

	"example.com/app/gojang/views/renderers"
)

type PageHandler struct {
	Renderer *renderers.Renderer
}

func NewPageHandler(renderer *renderers.Renderer) *PageHandler {
	return &PageHandler{
		Renderer: renderer,
	}
}

// Home renders the home page
func (h *PageHandler) Home(w http.ResponseWriter, r *http.Request) {
	h.Renderer.Render(w, r, "home.html", nil)
}

// NotFound renders the 404 page
func (h *PageHandler) NotFound(w http.ResponseWriter, r *http.Request) {
	w.WriteHeader(http.StatusNotFound)
	h.Renderer.Render(w, r, "404.html", &renderers.TemplateData{
		Title: "404 Not Found",
	})
}
"""

HANDLERS_WITH_ABOUT = """package handlers

type PageHandler struct {
	Renderer *renderers.Renderer
}

// About renders the about page
func (h *PageHandler) About(w http.ResponseWriter, r *http.Request) {
	h.Renderer.Render(w, r, "about.html", nil)
}

// NotFound renders the 404 page
func (h *PageHandler) NotFound(w http.ResponseWriter, r *http.Request) {
	w.WriteHeader(http.StatusNotFound)
	h.Renderer.Render(w, r, "404.html", nil)
}
"""

ROUTES = """package routes

func PageRoutes(handler *handlers.PageHandler, sm *scs.SessionManager, client *models.Client) chi.Router {
	r := chi.NewRouter()
	r.Use(nosurf.NewPure)

	r.Get("/", handler.Home)
%s
	// Protected pages
	r.Group(func(auth chi.Router) {
		auth.Use(middleware.RequireAuth(sm, client))
		auth.Get("/dashboard", handler.Dashboard)
	})

	return r
}
"""


@pytest.mark.parametrize(
    "name, expected",
    [
        ("About", True),
        ("About Us", True),
        ("Terms of Service", True),
        ("About123", False),
        ("About!", False),
        ("About-Us", False),
        ("", False),
    ],
)
def test_is_valid_page_name(name, expected):
    assert is_valid_page_name(name) is expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("About", "About"),
        ("about", "About"),
        ("About Us", "AboutUs"),
        ("about us", "AboutUs"),
        ("terms of service", "TermsOfService"),
        ("CONTACT", "Contact"),
        ("Contact Us", "ContactUs"),
    ],
)
def test_to_pascal_case(text, expected):
    assert to_pascal_case(text) == expected


def test_create_template_file(tmp_path):
    path = tmp_path / "test-page.html"
    create_template_file(path, "Test Page", "Test")
    content = path.read_text(encoding="utf-8")
    for expected in [
        '{{define "title"}}Test Page{{end}}',
        '{{define "content"}}',
        "<h1>Test Page</h1>",
        "Welcome to the Test page",
        "test-page.html",
    ]:
        assert expected in content


def test_add_handler(tmp_path):
    path = tmp_path / "pages.go"
    path.write_text(HANDLERS, encoding="utf-8")
    add_handler(path, "About", "About Us", "about.html")
    content = path.read_text(encoding="utf-8")
    for expected in [
        "// About renders the about page",
        "func (h *PageHandler) About(w http.ResponseWriter, r *http.Request) {",
        'h.Renderer.Render(w, r, "about.html"',
        'Title: "About Us"',
    ]:
        assert expected in content
    assert content.index("func (h *PageHandler) About") < content.index(
        "func (h *PageHandler) NotFound"
    )


def test_add_handler_duplicate(tmp_path):
    path = tmp_path / "pages.go"
    path.write_text(HANDLERS_WITH_ABOUT, encoding="utf-8")
    with pytest.raises(PageError, match="already exists"):
        add_handler(path, "About", "About Us", "about.html")


def test_add_route_public(tmp_path):
    path = tmp_path / "pages.go"
    path.write_text(ROUTES % "", encoding="utf-8")
    add_route(path, "/about", "About", False)
    content = path.read_text(encoding="utf-8")
    route = 'r.Get("/about", handler.About)'
    assert route in content
    assert content.index(route) > content.index('r.Get("/", handler.Home)')


def test_add_route_protected(tmp_path):
    path = tmp_path / "pages.go"
    path.write_text(ROUTES % "", encoding="utf-8")
    add_route(path, "/settings", "Settings", True)
    content = path.read_text(encoding="utf-8")
    route = 'auth.Get("/settings", handler.Settings)'
    assert route in content
    settings_pos = content.index(route)
    assert settings_pos > content.index("// Protected pages")
    assert settings_pos > content.index('auth.Get("/dashboard", handler.Dashboard)')


def test_add_route_duplicate(tmp_path):
    path = tmp_path / "pages.go"
    path.write_text(ROUTES % '\tr.Get("/about", handler.About)\n', encoding="utf-8")
    with pytest.raises(PageError, match="already exists"):
        add_route(path, "/about", "About", False)


def test_add_route_missing_home(tmp_path):
    path = tmp_path / "pages.go"
    path.write_text("package routes\n", encoding="utf-8")
    with pytest.raises(PageError, match="could not find home route"):
        add_route(path, "/about", "About", False)


def test_find_project_root(tmp_path):
    (tmp_path / "go.mod").write_text("module example\n", encoding="utf-8")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    assert find_project_root(nested) == tmp_path.resolve()


def _make_project(root):
    (root / "go.mod").write_text("module example\n", encoding="utf-8")
    (root / "gojang" / "views" / "templates").mkdir(parents=True)
    (root / "gojang" / "http" / "handlers").mkdir(parents=True)
    (root / "gojang" / "http" / "routes").mkdir(parents=True)
    (root / "gojang" / "http" / "handlers" / "pages.go").write_text(HANDLERS, encoding="utf-8")
    (root / "gojang" / "http" / "routes" / "pages.go").write_text(ROUTES % "", encoding="utf-8")


def test_main_creates_page(tmp_path, monkeypatch, capsys):
    _make_project(tmp_path)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("sys.stdin", io.StringIO("About Us\n\n\nn\n"))
    assert main([]) == 0

    template = tmp_path / "gojang" / "views" / "templates" / "about-us.html"
    assert "<h1>About Us</h1>" in template.read_text(encoding="utf-8")
    handlers = (tmp_path / "gojang" / "http" / "handlers" / "pages.go").read_text(encoding="utf-8")
    assert "func (h *PageHandler) AboutUs(" in handlers
    routes = (tmp_path / "gojang" / "http" / "routes" / "pages.go").read_text(encoding="utf-8")
    assert 'r.Get("/about-us", handler.AboutUs)' in routes
    assert "Static page created successfully" in capsys.readouterr().out


def test_main_rejects_invalid_name(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("sys.stdin", io.StringIO("About123\n"))
    with pytest.raises(SystemExit, match="only letters and spaces"):
        main([])


def test_main_rejects_route_without_slash(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("sys.stdin", io.StringIO("About\nAbout\nabout\n"))
    with pytest.raises(SystemExit, match="must start with /"):
        main([])