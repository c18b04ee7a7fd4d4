"""Main CLI entry point for Black Magic."""

import click

from .. import __version__
from ..core.constants import USAGE
from ..core.pipeline import BuildPipeline
from ..models.build import BuildMode
from ..services.exceptions import BlackMagicError
from .helpers import OutputReporter, configure_logging, get_project_root, load_build_config


@click.command(help=USAGE)
@click.option('--docker', '-d', is_flag=True, help='Build a docker image.')
@click.option('--lambda', '-l', 'lambda_', is_flag=True, help='Build a lambda zip.')
@click.option('--rebuild-builder', is_flag=True, help='Rebuild the black_magic builder image even if it exists')
@click.option('--toolchain-tag', envvar='BLACK_MAGIC_TOOLCHAIN_TAG',
              help='Tag of the rust_musl_docker base image used by the builder image')
@click.option('--verbose', '-v', is_flag=True, help='Show debug logging')
@click.version_option(__version__, prog_name='black-magic')
@click.pass_context
def cli(ctx, docker, lambda_, rebuild_builder, toolchain_tag, verbose):
    configure_logging(verbose)
    reporter = OutputReporter()

    try:
        # Resolve the mode before touching the filesystem or Docker
        mode = BuildMode.from_flags(lambda_, docker)
        project_root = get_project_root()
        config = load_build_config(project_root, toolchain_tag)
        pipeline = BuildPipeline(project_root, config, reporter=reporter)
        artifact = pipeline.run(mode, force_rebuild=rebuild_builder)
    except BlackMagicError as e:
        reporter.failure(e)
        ctx.exit(e.exit_code)

    reporter.success(artifact)


if __name__ == '__main__':
    cli()
