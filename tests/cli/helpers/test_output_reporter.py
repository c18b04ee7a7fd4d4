import io
from pathlib import Path

import pytest
from rich.console import Console

from black_magic.cli.helpers.output_reporter import OutputReporter
from black_magic.models.build import Artifact, BuildMode, CommandResult
from black_magic.services.exceptions import (
    BuilderSetupError,
    CompileError,
    NotAProjectError,
    PackagingError,
)


@pytest.fixture
def streams():
    return io.StringIO(), io.StringIO()


@pytest.fixture
def reporter(streams):
    out, err = streams
    return OutputReporter(
        console=Console(file=out, width=200),
        err_console=Console(file=err, width=200),
    )


class TestOutputReporter:
    """Tests for user-facing messages."""

    def test_progress_messages(self, reporter, streams):
        reporter.builder_image_building("black_magic")
        reporter.compiling(BuildMode.LAMBDA)
        reporter.compiling(BuildMode.DOCKER)
        reporter.project_image_building("bm_p")

        assert streams[0].getvalue().splitlines() == [
            "Building black_magic image...",
            "Compiling project to lambda zip...",
            "Compiling project...",
            "Building project image...",
        ]

    def test_success(self, reporter, streams):
        reporter.success(Artifact(mode=BuildMode.DOCKER, image_tag="bm_p"))

        assert streams[0].getvalue().splitlines() == ["Project image: bm_p", "...Done!"]

    def test_compile_failure(self, reporter, streams):
        result = CommandResult(
            stdout="Compiling p v0.1.0",
            stderr="error[E0425]: cannot find value `x` in this scope",
            success=False,
            command="docker run -i --rm black_magic /bin/bash -c 'cargo build'",
        )

        reporter.failure(CompileError("Build failed.", result=result))

        lines = streams[0].getvalue().splitlines()
        assert lines[0] == "Build failed. Run the following command manually to see the problem:"
        assert "docker run -i --rm black_magic /bin/bash -c 'cargo build'" in lines
        assert "stdout: Compiling p v0.1.0" in lines
        # Brackets in compiler output are printed literally
        assert "stderr: error[E0425]: cannot find value `x` in this scope" in lines

    def test_packaging_failure(self, reporter, streams):
        result = CommandResult(stdout="Step 1/2 : FROM scratch", stderr="ADD failed", success=False)

        reporter.failure(PackagingError("Project image failed", result=result))

        lines = streams[0].getvalue().splitlines()
        assert lines == ["Project image failed", "stdout: Step 1/2 : FROM scratch", "stderr: ADD failed"]

    def test_environment_failure_to_stderr(self, reporter, streams):
        reporter.failure(NotAProjectError("No `Cargo.toml` was found in this directory."))

        assert streams[0].getvalue() == ""
        assert streams[1].getvalue().strip() == "Error: No `Cargo.toml` was found in this directory."

    def test_builder_failure_includes_log(self, reporter, streams):
        reporter.failure(BuilderSetupError("Unable to build `black_magic` image.", build_log="E: [zip] missing\n"))

        err = streams[1].getvalue()
        assert "Error: Unable to build `black_magic` image." in err
        assert "E: [zip] missing" in err

    def test_lambda_artifact_path(self, reporter, streams):
        reporter.success(Artifact(mode=BuildMode.LAMBDA, path=Path("/p/target/black_magic/p.zip")))

        assert f"Lambda archive: {Path('/p/target/black_magic/p.zip')}" in streams[0].getvalue()
