"""User-facing progress and result messages."""

from typing import Optional

from rich.console import Console
from rich.markup import escape

from ...models.build import Artifact, BuildMode, CommandResult
from ...services.exceptions import (
    BlackMagicError,
    BuilderSetupError,
    CompileError,
    PackagingError,
)


class OutputReporter:
    """Prints pipeline progress, artifacts and failures."""

    def __init__(self, console: Optional[Console] = None, err_console: Optional[Console] = None):
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    def _raw(self, text: str, err: bool = False):
        # Compiler output may contain [brackets] that rich would treat as markup
        (self.err_console if err else self.console).print(text, markup=False, highlight=False, soft_wrap=True)

    def builder_image_building(self, name: str):
        self.console.print(f"Building [cyan]{name}[/cyan] image...")

    def compiling(self, mode: BuildMode):
        if mode is BuildMode.LAMBDA:
            self.console.print("Compiling project to lambda zip...")
        else:
            self.console.print("Compiling project...")

    def project_image_building(self, tag: str):
        self.console.print("Building project image...")

    def success(self, artifact: Artifact):
        self._raw(artifact.describe())
        self.console.print("[green]...Done![/green]")

    def command_output(self, result: CommandResult):
        self._raw(f"stdout: {result.stdout}")
        self._raw(f"stderr: {result.stderr}")

    def failure(self, error: BlackMagicError):
        """Describe a fatal error, including captured output where there is any."""
        if isinstance(error, CompileError):
            self.console.print("[red]Build failed.[/red] Run the following command manually to see the problem:")
            if error.result is not None:
                self.console.print()
                self._raw(error.result.command)
                self.console.print()
                self.command_output(error.result)
            return

        if isinstance(error, PackagingError):
            self.console.print(f"[red]{escape(str(error))}[/red]")
            if error.result is not None:
                self.command_output(error.result)
            return

        self.err_console.print(f"[red]Error:[/red] {escape(str(error))}", highlight=False, soft_wrap=True)
        if isinstance(error, BuilderSetupError) and error.build_log:
            self._raw(error.build_log, err=True)
