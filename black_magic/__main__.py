"""Allow running as `python -m black_magic`."""

from .cli.main import cli

if __name__ == '__main__':
    cli()
