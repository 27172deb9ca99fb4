"""praxis command-line interface (Typer)."""
