import shlex

import pytest

from black_magic.core.artifact_packager import ArtifactPackager
from black_magic.core.compile_runner import CompileRunner
from black_magic.models.build import BuilderImage, BuildMode, VolumeMount
from black_magic.services.exceptions import DockerServiceError


CARGO = "cargo build --release -vv --target=x86_64-unknown-linux-musl -Z unstable-options --out-dir=/"


@pytest.fixture
def runner(mock_docker_service, build_config):
    packager = ArtifactPackager(mock_docker_service, build_config)
    return CompileRunner(mock_docker_service, build_config, packager)


@pytest.fixture
def builder_image():
    return BuilderImage(name="black_magic", exists=True, dockerfile="FROM x\n")


@pytest.fixture
def mounts(project_context):
    return [
        VolumeMount(str(project_context.root), "/workdir"),
        VolumeMount("/home/dev/.cargo/registry", "/root/.cargo/registry"),
    ]


class TestCompileRunner:
    """Tests for the containerized build."""

    def test_lambda_shell_command(self, runner, project_context):
        assert runner.shell_command(BuildMode.LAMBDA, project_context) == (
            f"{CARGO} && mv /my_project /bootstrap && "
            "zip -j target/black_magic/my_project.zip /bootstrap"
        )

    def test_docker_shell_command(self, runner, project_context):
        assert runner.shell_command(BuildMode.DOCKER, project_context) == (
            f"{CARGO} && tar -czf target/black_magic/my_project.tar.gz /my_project"
        )

    def test_run_success(self, runner, mock_docker_service, mounts, builder_image, project_context):
        result = runner.run(BuildMode.LAMBDA, mounts, builder_image, project_context)

        assert result.success is True
        assert result.stdout == "compiled\n"
        mock_docker_service.run_container.assert_called_once_with(
            image="black_magic",
            command=["/bin/bash", "-c", runner.shell_command(BuildMode.LAMBDA, project_context)],
            volumes={
                str(project_context.root): {"bind": "/workdir", "mode": "rw"},
                "/home/dev/.cargo/registry": {"bind": "/root/.cargo/registry", "mode": "rw"},
            },
            working_dir="/workdir",
        )
        mock_docker_service.wait_for_container.assert_called_once_with(
            mock_docker_service.run_container.return_value
        )

    def test_run_failure(self, runner, mock_docker_service, mounts, builder_image, project_context):
        mock_docker_service.wait_for_container.return_value = (101, "", "error[E0425]: cannot find value")

        result = runner.run(BuildMode.DOCKER, mounts, builder_image, project_context)

        assert result.success is False
        assert result.stderr == "error[E0425]: cannot find value"

    def test_run_docker_error(self, runner, mock_docker_service, mounts, builder_image, project_context):
        mock_docker_service.run_container.side_effect = DockerServiceError("Failed to run container")

        result = runner.run(BuildMode.DOCKER, mounts, builder_image, project_context)

        assert result.success is False
        assert "Failed to run container" in result.stderr
        assert result.command.startswith("docker run")

    def test_reproduce_command(self, runner, mounts, builder_image, project_context):
        result = runner.run(BuildMode.LAMBDA, mounts, builder_image, project_context)

        args = shlex.split(result.command)
        assert args[:4] == ["docker", "run", "-i", "--rm"]
        assert args[4:8] == [
            "-v", f"{project_context.root}:/workdir",
            "-v", "/home/dev/.cargo/registry:/root/.cargo/registry",
        ]
        assert args[8:11] == ["-w", "/workdir", "black_magic"]
        assert args[11:] == [
            "/bin/bash", "-c", runner.shell_command(BuildMode.LAMBDA, project_context)
        ]

    def test_custom_target(self, mock_docker_service, build_config, project_context):
        config = build_config.model_copy(update={"target_triple": "aarch64-unknown-linux-musl"})
        runner = CompileRunner(mock_docker_service, config, ArtifactPackager(mock_docker_service, config))

        assert "--target=aarch64-unknown-linux-musl" in runner.cargo_command()
