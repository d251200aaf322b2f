"""pwderive command line (typer + rich)."""
