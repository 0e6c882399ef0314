"""metricgen - compile metrics definitions into target-language source code."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("metricgen")
except PackageNotFoundError:
    # Package not installed (development mode without editable install)
    __version__ = "0.1.0"

from metricgen.core.compiler import compile_metrics, load_catalog

__all__ = ["__version__", "compile_metrics", "load_catalog"]
