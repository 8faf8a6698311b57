"""CLI interface for Git Stripper."""

from pathlib import Path

import click

from shared.cli import handle_errors, warning
from shared.logger import setup_logger

from .stripper import GitStripper


@click.command()
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@handle_errors
def main(verbose: bool):
    """
    Git Stripper - Remove .git directories and .gitignore files.

    Every first-level subdirectory of the current directory is checked. A
    .git directory found inside one is deleted with everything under it, and
    a .gitignore file is deleted. Nothing deeper is looked at, and nothing is
    asked before deleting.

    Examples:

        \b
        # Turn a folder of cloned repos into plain source trees
        cd ~/exports && git-stripper

        \b
        # Same, with diagnostics on stderr
        git-stripper --verbose
    """
    # Setup logging
    log_level = "DEBUG" if verbose else "INFO"
    setup_logger("tools.git_stripper", level=log_level)

    result = GitStripper(Path.cwd()).run()

    if result.failed:
        warning(f"{len(result.failed)} item(s) could not be removed")


if __name__ == "__main__":
    main()
