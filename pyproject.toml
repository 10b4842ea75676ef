[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gojang"
version = "0.1.0"
description = "Scaffolding commands, configuration loading and admin panel helpers for gojang web projects"
requires-python = ">=3.10"
keywords = ["scaffolding", "code generation", "admin", "crud", "htmx", "templates"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Code Generators",
]
dependencies = [
    "python-dotenv",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
gojang-addmodel = "gojang.addmodel.runner:main"
gojang-addpage = "gojang.addpage:main"

[tool.hatch.build.targets.wheel]
packages = ["gojang"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
