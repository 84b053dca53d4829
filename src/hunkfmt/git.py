import subprocess
from pathlib import Path


class GitError(RuntimeError):
    def __init__(self, args: list[str], returncode: int, stderr: str) -> None:
        message = f"git {' '.join(args)} failed with status {returncode}"
        if stderr.strip():
            message = f"{message}: {stderr.strip().splitlines()[0]}"
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


def _run_git(args: list[str], cwd: Path | None) -> str:
    # Raw paths; undecodable bytes survive as surrogates.
    cmd = ["git", "-c", "core.quotePath=false"]
    if cwd is not None:
        cmd += ["-C", str(cwd)]
    result = subprocess.run(
        [*cmd, *args],
        check=False,
        capture_output=True,
        encoding="utf-8",
        errors="surrogateescape",
    )
    if result.returncode != 0:
        raise GitError(args, result.returncode, result.stderr)
    return result.stdout


def get_repo_root(start_dir: Path) -> Path | None:
    result = subprocess.run(
        ["git", "-C", str(start_dir), "rev-parse", "--show-toplevel"],
        check=False,
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        return None
    root = result.stdout.strip()
    if not root:
        return None
    return Path(root)


def git_diff(repo: Path | None = None, staged: bool = False, revision: str | None = None) -> str:
    """Return a zero-context diff of *repo*, paths relative to its root."""
    args = ["diff", "--no-color", "--no-ext-diff", "--src-prefix=a/", "--dst-prefix=b/", "-U0"]
    if staged:
        args.append("--cached")
    if revision:
        args.append(revision)
    args.append("--")
    return _run_git(args, repo)
