"""Redis reply values, errors, command-argument encoding and typed reply conversion."""

__version__ = "0.1.0"
__all__ = ["args", "convert", "errors", "value"]