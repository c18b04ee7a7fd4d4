import pytest
from click.testing import CliRunner
from unittest.mock import MagicMock
from pathlib import Path

from black_magic.models.build import ProjectContext
from black_magic.models.config import BuildConfig


@pytest.fixture
def cli_runner():
    """Provides a Click CLI runner for testing commands."""
    return CliRunner()


@pytest.fixture
def mock_docker_client():
    """Provides a mocked Docker SDK client."""
    mock_client = MagicMock()
    mock_client.ping.return_value = True
    mock_client.containers.list.return_value = []
    mock_client.images.list.return_value = []
    return mock_client


@pytest.fixture
def mock_docker_service():
    """Provides a mocked DockerService with a builder image already present."""
    service = MagicMock()
    service.image_exists.return_value = True
    service.build_image.return_value = (MagicMock(), [{"stream": "Successfully built"}])
    container = MagicMock()
    service.run_container.return_value = container
    service.wait_for_container.return_value = (0, "compiled\n", "")
    return service


@pytest.fixture
def cargo_project(tmp_path):
    """Creates a Cargo project directory named my_project."""
    project_path = tmp_path / "my_project"
    (project_path / "src").mkdir(parents=True)
    (project_path / "src" / "main.rs").write_text('fn main() { println!("Hello, world!"); }')
    (project_path / "Cargo.toml").write_text('[package]\nname = "my_project"\nversion = "0.1.0"\n')
    return project_path


@pytest.fixture
def project_context(cargo_project):
    """Provides the ProjectContext for the cargo_project fixture."""
    return ProjectContext.from_directory(cargo_project)


@pytest.fixture
def build_config():
    """Provides the default build configuration."""
    return BuildConfig()


@pytest.fixture
def cargo_home(tmp_path):
    """Creates an empty Cargo home directory."""
    home = tmp_path / "cargo_home"
    home.mkdir()
    return home


@pytest.fixture
def docker_installed(monkeypatch):
    """Make `docker --version` report a Docker installation."""
    check = MagicMock(return_value=True)
    monkeypatch.setattr("black_magic.environment.EnvironmentProbe.check_runtime_available", check)
    return check
