"""Git operations used by a podspec release.

Usage:
    from podrel.git import Repository

    repo = Repository(Path("."))
    match repo.list_tags():
        case Ok(tags):
            print(tags)
        case Err(e):
            print(f"Error: {e.message}")
"""

from podrel.git.repository import (
    DEFAULT_REMOTE,
    GitError,
    Repository,
)

__all__ = [
    "DEFAULT_REMOTE",
    "GitError",
    "Repository",
]
