"""
Git client infrastructure for scsspkg.

Provides a clean abstraction over git command execution.
All git operations go through this client, making them:
- Easy to mock for testing
- Consistent in error handling
- Isolated from business logic
"""

import subprocess
from pathlib import Path
from typing import Optional, List, Union
import logging

logger = logging.getLogger(__name__)


class GitError(Exception):
    """A git command exited with a non-zero status or could not be started."""

    def __init__(self, cmd: List[str], returncode: int, stderr: str = ""):
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr.strip()
        message = f"'{' '.join(cmd)}' failed with exit code {returncode}"
        if self.stderr:
            message += f": {self.stderr}"
        super().__init__(message)


class GitClient:
    """
    Abstraction over git commands.

    Example:
        client = GitClient()
        refs = client.list_remote_tags("https://github.com/swagger-api/swagger-ui.git")
        client.clone(url, Path("tmp/swagger-ui"), branch="v5.17.14", depth=1)
    """

    def __init__(self, executable: str = "git", timeout: Optional[int] = None):
        """
        Initialize GitClient.

        Args:
            executable: Git executable to run
            timeout: Command timeout in seconds (default: no timeout)
        """
        self.executable = executable
        self.timeout = timeout

    def _run(self, args: List[str], cwd: Optional[Union[str, Path]] = None) -> str:
        """
        Run a git command.

        Args:
            args: Arguments after the git executable
            cwd: Working directory

        Returns:
            Command stdout

        Raises:
            GitError: On non-zero exit or when git cannot be started
        """
        cmd = [self.executable] + args
        logger.debug(f"Running command in '{cwd or '.'}': {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise GitError(cmd, -1, str(e)) from e
        except subprocess.TimeoutExpired as e:
            raise GitError(cmd, -1, f"timed out after {self.timeout}s") from e

        if result.returncode != 0:
            raise GitError(cmd, result.returncode, result.stderr or "")
        return result.stdout

    def list_remote_tags(self, url: str, sort: Optional[str] = "-v:refname") -> str:
        """
        List tag refs on a remote repository.

        Args:
            url: Remote repository URL
            sort: Sort key passed to --sort (default: descending version order)

        Returns:
            Raw 'git ls-remote' output, one '<sha>\\trefs/tags/<name>' per line
        """
        args = ["ls-remote", "--tags"]
        if sort:
            args.append(f"--sort={sort}")
        args.append(url)
        return self._run(args)

    def clone(
        self,
        url: str,
        dest: Union[str, Path],
        branch: Optional[str] = None,
        depth: Optional[int] = None,
    ) -> None:
        """
        Clone a repository.

        Args:
            url: Repository URL
            dest: Destination directory (must not exist)
            branch: Branch or tag to check out; implies --single-branch
            depth: Create a shallow clone with this many commits
        """
        args = ["clone"]
        if depth:
            args += ["--depth", str(depth)]
        if branch:
            args += ["--branch", branch, "--single-branch"]
        args += [url, str(dest)]
        self._run(args)
