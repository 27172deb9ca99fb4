"""Core primitives shared by the compiler, validator and CLI."""
