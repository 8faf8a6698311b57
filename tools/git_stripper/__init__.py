"""Git Stripper - Remove git metadata from first-level subdirectories."""

from .stripper import GitStripper, StripResult, strip_git_artifacts

__all__ = ["GitStripper", "StripResult", "strip_git_artifacts"]
