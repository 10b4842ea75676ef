"""Model scaffolding: field parsing, file writing, code and template generation, command line."""