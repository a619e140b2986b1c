"""Build configuration resolved from the job environment."""
from __future__ import annotations

from typing import Dict, Mapping

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from ..utils.repository_utils import extract_project_name, is_safe_project_name, registry_for, split_image
from .errors import (
    InvalidProjectNameError,
    MissingCredentialsError,
    MissingImageError,
    MissingSourceURLError,
)

DEFAULT_REVISION = "master"
DEFAULT_REVISION_KIND = "branch"
DEFAULT_IMAGE_TAG = "latest"


class BuildConfig(BaseModel):
    """Immutable description of a single image build."""

    model_config = ConfigDict(frozen=True)

    source_url: str = Field(description="Clone URL of the repository to build")
    revision: str = Field(default=DEFAULT_REVISION, description="Branch, tag or commit to check out")
    revision_kind: str = Field(
        default=DEFAULT_REVISION_KIND,
        description="Informational kind of the revision (branch, tag, commit); not used for dispatch",
    )
    image_repository: str = Field(description="Image repository without tag")
    image_tag: str = Field(default=DEFAULT_IMAGE_TAG, description="Tag applied to the built image")
    registry_host: str = Field(description="Registry the agent logs in to")
    project_name: str = Field(description="Checkout directory name derived from the clone URL")
    build_workdir: str = Field(default="", description="Build context subdirectory within the checkout")
    dockerfile_subpath: str = Field(default="", description="Dockerfile path relative to the checkout")
    raw_build_args: str = Field(default="", description="JSON object of build arguments")
    no_cache: bool = False
    registry_user: str
    registry_token: SecretStr
    input_environment: Dict[str, str] = Field(default_factory=dict, repr=False)

    @property
    def image_reference(self) -> str:
        """Fully qualified image name including its tag."""
        return f"{self.image_repository}:{self.image_tag}"


def _get(environment: Mapping[str, str], name: str) -> str:
    return environment.get(name) or ""


def _present(value: str) -> bool:
    return bool(value.strip())


def resolve_build_config(environment: Mapping[str, str]) -> BuildConfig:
    """
    Derive a BuildConfig from a flat mapping of input variables.

    Values are used as given; surrounding whitespace only matters for the
    presence checks.

    Args:
        environment: Snapshot of the job environment. It is kept on the config so
            that ${NAME} build arguments can be resolved later.

    Raises:
        MissingSourceURLError: GIT_CLONE_URL is empty.
        MissingImageError: IMAGE is empty or has no repository part.
        InvalidProjectNameError: GIT_CLONE_URL ends in no usable directory name.
        MissingCredentialsError: HUB_USER or HUB_TOKEN is empty.
    """
    source_url = _get(environment, "GIT_CLONE_URL")
    if not _present(source_url):
        raise MissingSourceURLError()

    revision = _get(environment, "GIT_REF")
    revision_kind = _get(environment, "GIT_TYPE")
    if not _present(revision):
        revision, revision_kind = DEFAULT_REVISION, DEFAULT_REVISION_KIND

    image = _get(environment, "IMAGE")
    if not _present(image):
        raise MissingImageError()

    image_repository, embedded_tag = split_image(image)
    if not _present(image_repository):
        raise MissingImageError()

    registry_host = registry_for(image_repository)
    override_tag = _get(environment, "IMAGE_TAG")
    image_tag = override_tag if _present(override_tag) else embedded_tag or DEFAULT_IMAGE_TAG

    project_name = extract_project_name(source_url)
    if not is_safe_project_name(project_name):
        raise InvalidProjectNameError(source_url)

    registry_user = _get(environment, "HUB_USER")
    registry_token = _get(environment, "HUB_TOKEN")
    if not _present(registry_user) or not _present(registry_token):
        raise MissingCredentialsError()

    return BuildConfig(
        source_url=source_url,
        revision=revision,
        revision_kind=revision_kind,
        image_repository=image_repository,
        image_tag=image_tag,
        registry_host=registry_host,
        project_name=project_name,
        build_workdir=_get(environment, "BUILD_WORKDIR"),
        dockerfile_subpath=_get(environment, "DOCKERFILE_PATH"),
        raw_build_args=_get(environment, "BUILD_ARGS"),
        no_cache=_get(environment, "NO_CACHE").lower() == "true",
        registry_user=registry_user,
        registry_token=SecretStr(registry_token),
        input_environment=dict(environment),
    )
