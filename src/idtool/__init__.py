"""Command-line toolchain for interface definition (.id) spec files.

Compiles spec files to Go (`gen`), rewrites them in canonical form (`fmt`),
extracts declarations (`sym`) and exports method prototypes as JSON
(`methods-json`). The entry point is `idtool.cli:app`.
"""

try:
    from importlib.metadata import version

    __version__ = version("idtool")
except Exception:
    __version__ = "0.0.0.dev0+local"  # Not installed, e.g. running from a checkout
