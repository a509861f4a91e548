"""pl0lib: lexer, recursive-descent parser and AST for the PL/0 teaching language."""

__version__ = "0.1.0"
