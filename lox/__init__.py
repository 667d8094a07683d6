"""Lox: a tree-walking interpreter with a static scope resolver."""
