"""Command line interface. The Typer app lives in ``certprep.cli.app``."""
