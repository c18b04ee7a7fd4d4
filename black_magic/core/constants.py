"""Constants used throughout the Black Magic application."""


# Mount points inside the builder container
CARGO_GIT_MOUNT = "/root/.cargo/git"
CARGO_REGISTRY_MOUNT = "/root/.cargo/registry"

# Cargo home subdirectories mounted as dependency caches
CARGO_CACHE_DIRS = {
    "git": CARGO_GIT_MOUNT,
    "registry": CARGO_REGISTRY_MOUNT,
}

# Files written under the build-output directory
DOCKERFILE_NAME = "Dockerfile"
DOCKERIGNORE_NAME = ".dockerignore"
LOCK_FILE_NAME = ".lock"

CONTAINER_SHELL = ["/bin/bash", "-c"]

USAGE = """Black Magic

This is for building rust projects. It produces zips for AWS Lambda, or 'FROM scratch' docker images.
You will need to have docker installed.
This should only be run on projects that already compile, or at least pass 'cargo check'.

Navigate to the root of your rust project, and run 'black-magic' with either the '--lambda' or '--docker' flag.

The name of the build is assumed to be the name of the folder.

If you have a project named 'my_project':

\b
    - lambda mode produces 'target/black_magic/my_project.zip'.
    - docker mode produces a 'bm_my_project' image containing only the executable, e.g.:
        FROM bm_my_project
        EXPOSE 80/tcp
        CMD ["/my_project"]

If your project doesn't compile, you may need a newer toolchain: pass --toolchain-tag
together with --rebuild-builder.
"""
