"""
apiscout/repo/materializer.py

Local working copies of remote repositories.

Contains:
- RemoteCredentials: access token for private repositories
- MaterializedRepo: handle to one temporary checkout
- RepositoryMaterializer: clone / download, then release
"""

from __future__ import annotations

import shutil
import subprocess
import tarfile
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import requests

from apiscout.config import Config
from apiscout.utils.exceptions import MaterializationError
from apiscout.utils.logger import get_logger

logger = get_logger(name=__name__)

GITHUB_HOSTS = {"github.com", "www.github.com"}


@dataclass(frozen=True)
class RemoteCredentials:
    token: str

    def __repr__(self) -> str:
        return "RemoteCredentials(token=***)"


@dataclass(frozen=True)
class MaterializedRepo:
    """
    A temporary checkout.

    `workdir` is the temp directory owned by the handle (removed on release);
    `root` is where the sources start inside it.
    """

    locator: str
    workdir: Path
    root: Path


def is_remote_locator(locator: str) -> bool:
    return locator.startswith(("http://", "https://"))


def parse_github_url(url: str) -> Optional[tuple[str, str, Optional[str]]]:
    """
    https://github.com/owner/repo(.git)            -> (owner, repo, None)
    https://github.com/owner/repo/tree/some/branch -> (owner, repo, "some/branch")
    Returns None for non-GitHub URLs.
    """
    parsed = urlparse(url)
    if parsed.hostname not in GITHUB_HOSTS:
        return None
    parts = [p for p in parsed.path.split("/") if p]
    if len(parts) < 2:
        return None
    owner, repo = parts[0], parts[1]
    if repo.endswith(".git"):
        repo = repo[:-4]
    ref = "/".join(parts[3:]) if len(parts) > 3 and parts[2] == "tree" else None
    return owner, repo, ref or None


class RepositoryMaterializer:
    """
    Acquires remote source trees into temporary directories.

    With credentials and a GitHub URL the repository tarball is downloaded
    through the REST API; other hosts are cloned with git, passing the token
    as a bearer header. Without credentials a shallow `git clone` is used.
    """

    def __init__(self, session: Optional[requests.Session] = None) -> None:
        self._session = session

    def materialize(self, locator: str, credentials: Optional[RemoteCredentials] = None) -> MaterializedRepo:
        workdir = Path(tempfile.mkdtemp(prefix="apiscout-"))
        logger.info("Materializing %s into %s", locator, workdir)
        try:
            github = parse_github_url(locator) if credentials is not None else None
            if github is not None:
                root = self._download_github_tarball(*github, credentials=credentials, dest=workdir)
            else:
                root = self._clone(locator, workdir / "repo", credentials=credentials)
        except BaseException:
            # the caller never sees a handle for a failed materialization
            shutil.rmtree(workdir, ignore_errors=True)
            raise
        return MaterializedRepo(locator=locator, workdir=workdir, root=root)

    def release(self, handle: MaterializedRepo) -> None:
        if not handle.workdir.exists():
            return
        try:
            shutil.rmtree(handle.workdir)
            logger.info("Removed temporary copy %s", handle.workdir)
        except OSError as e:
            logger.warning("Failed to remove temporary copy %s: %s", handle.workdir, e)

    # ----------------------------
    # git
    # ----------------------------

    def _clone(self, url: str, dest: Path, credentials: Optional[RemoteCredentials]) -> Path:
        cmd = ["git"]
        if credentials is not None:
            cmd += ["-c", f"http.extraHeader=Authorization: Bearer {credentials.token}"]
        cmd += ["clone", "--depth", "1", "--quiet", url, str(dest)]

        try:
            subprocess.run(
                cmd,
                check=True,
                capture_output=True,
                text=True,
                timeout=Config.CLONE_TIMEOUT,
            )
        except FileNotFoundError as e:
            raise MaterializationError("git executable not found") from e
        except subprocess.TimeoutExpired as e:
            raise MaterializationError(f"git clone of {url} timed out after {Config.CLONE_TIMEOUT}s") from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            if credentials is not None:
                stderr = stderr.replace(credentials.token, "***")
            raise MaterializationError(f"git clone of {url} failed: {stderr or e.returncode}") from e
        return dest

    # ----------------------------
    # GitHub REST API
    # ----------------------------

    def _download_github_tarball(
        self,
        owner: str,
        repo: str,
        ref: Optional[str],
        credentials: RemoteCredentials,
        dest: Path,
    ) -> Path:
        url = f"{Config.GITHUB_API_URL}/repos/{owner}/{repo}/tarball"
        if ref:
            url = f"{url}/{ref}"
        headers = {
            "Authorization": f"Bearer {credentials.token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

        http = self._session or requests
        try:
            with http.get(url, headers=headers, stream=True, timeout=Config.HTTP_TIMEOUT) as response:
                if response.status_code in (401, 403):
                    raise MaterializationError(f"GitHub rejected the credentials for {owner}/{repo} ({response.status_code})")
                if response.status_code == 404:
                    raise MaterializationError(f"GitHub repository {owner}/{repo} not found or not accessible")
                response.raise_for_status()
                with tarfile.open(fileobj=response.raw, mode="r|gz") as archive:
                    archive.extractall(dest, filter="data")
        except requests.RequestException as e:
            raise MaterializationError(f"Download of {owner}/{repo} failed: {e}") from e
        except tarfile.TarError as e:
            raise MaterializationError(f"Archive for {owner}/{repo} is not a valid tarball: {e}") from e

        # GitHub wraps everything in a single "<owner>-<repo>-<sha>/" directory
        entries = [p for p in dest.iterdir()]
        if len(entries) == 1 and entries[0].is_dir():
            return entries[0]
        return dest
