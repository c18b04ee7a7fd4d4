"""Build configuration model."""

from pydantic import BaseModel, field_validator

DEFAULT_TOOLCHAIN_TAG = "nightly-2020-04-23"


class BuildConfig(BaseModel):
    """Settings for the builder image and the compile step."""
    base_image: str = "registry.gitlab.com/rust_musl_docker/image"
    toolchain_tag: str = DEFAULT_TOOLCHAIN_TAG
    builder_image_name: str = "black_magic"
    target_triple: str = "x86_64-unknown-linux-musl"
    container_workdir: str = "/workdir"
    image_prefix: str = "bm_"
    lambda_entrypoint: str = "bootstrap"
    output_subdir: str = "target/black_magic"

    @field_validator('output_subdir')
    @classmethod
    def validate_output_subdir(cls, v: str) -> str:
        """Output dir is shared by host and container, so it must stay inside the project."""
        if not v or v.startswith('/') or '\\' in v or ':' in v:
            raise ValueError("output_subdir must be a relative path using '/' separators")
        parts = v.split('/')
        if any(part in ('', '.', '..') for part in parts):
            raise ValueError("output_subdir must not contain empty, '.' or '..' segments")
        return v

    @property
    def builder_base(self) -> str:
        """Pinned base image reference for the builder Dockerfile."""
        return f"{self.base_image}:{self.toolchain_tag}"
