"""Command-line interface of mlforge."""
