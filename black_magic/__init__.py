"""Black Magic - Cross-compile Rust projects in Docker for Lambda or scratch images."""

__version__ = "1.0.0"

# Export main CLI for convenience
from .cli.main import cli

__all__ = ['cli']
