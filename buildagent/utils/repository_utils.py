"""Utility functions for repository and image references."""

DEFAULT_REGISTRY = "docker.io"


def extract_project_name(repo_url: str) -> str:
    """Extract the checkout directory name from a clone URL.

    Args:
        repo_url: Repository URL (e.g., 'https://github.com/user/repo.git')

    Returns:
        The last path segment after dropping one trailing '/' and one trailing
        '.git'. May be empty; see is_safe_project_name.
    """
    stripped = repo_url.removesuffix("/").removesuffix(".git")
    return stripped.rsplit("/", 1)[-1]


def is_safe_project_name(name: str) -> bool:
    """True when name is a single directory entry below the working root."""
    return bool(name) and name not in (".", "..") and "/" not in name and "\\" not in name


def split_image(image: str) -> tuple[str, str]:
    """Split an image identifier on its first ':' into (repository, tag)."""
    repository, _, tag = image.partition(":")
    return repository, tag


def registry_for(repository: str) -> str:
    """Registry to authenticate against for an image repository."""
    if "." in repository:
        return repository
    return DEFAULT_REGISTRY
