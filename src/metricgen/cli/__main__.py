"""metricgen CLI module entry point.

Enables running the CLI via: python -m metricgen.cli
"""

from metricgen.cli.main import cli

if __name__ == "__main__":
    cli()
