"""Dockerfile templates for the builder and project images."""

BUILDER_DOCKERFILE = """FROM {base_image}
RUN apt-get update
RUN apt-get install zip -y
RUN apt-get install tar -y
"""

PROJECT_DOCKERIGNORE = """*
!{archive_name}
!Dockerfile
"""

PROJECT_DOCKERFILE = """FROM scratch
ADD {archive_name} /
"""


def generate_builder_dockerfile(config):
    """Generate the builder image Dockerfile from configuration."""
    return BUILDER_DOCKERFILE.format(base_image=config.builder_base)


def generate_project_dockerfile(project_name: str):
    """Generate a scratch image Dockerfile that unpacks the project tarball."""
    return PROJECT_DOCKERFILE.format(archive_name=f"{project_name}.tar.gz")


def generate_project_dockerignore(project_name: str):
    """Limit the project image build context to the tarball and Dockerfile."""
    return PROJECT_DOCKERIGNORE.format(archive_name=f"{project_name}.tar.gz")
