from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from apiscout.config import Config
from apiscout.domain.models import EndpointRecord
from apiscout.extractors.profiles import FrameworkProfile, get_profile
from apiscout.repo.framework_detector import detect_framework
from apiscout.repo.materializer import (
    MaterializedRepo,
    RemoteCredentials,
    RepositoryMaterializer,
    is_remote_locator,
)
from apiscout.repo.scanner import walk_directory
from apiscout.utils.logger import get_logger

logger = get_logger(name=__name__)

AUTO_FRAMEWORK = "auto"


@dataclass(frozen=True)
class DiscoveryResult:
    locator: str
    framework: str
    confidence: float
    object_instance: str
    endpoints: list[EndpointRecord]
    materialized: bool


def discover(
    locator: str,
    framework: str,
    object_instance: str,
    credentials: Optional[RemoteCredentials] = None,
    *,
    materializer: Optional[RepositoryMaterializer] = None,
    ignore_dirs: Iterable[str] = (),
) -> list[EndpointRecord]:
    """
    Discover every endpoint in a local directory or remote repository URL.

    Errors from materialization, the walk, or a TypeScript parse propagate
    unchanged; a temporary checkout is released exactly once either way.
    """
    return run_discovery(
        locator,
        framework,
        object_instance,
        credentials,
        materializer=materializer,
        ignore_dirs=ignore_dirs,
    ).endpoints


def run_discovery(
    locator: str,
    framework: str,
    object_instance: str,
    credentials: Optional[RemoteCredentials] = None,
    *,
    materializer: Optional[RepositoryMaterializer] = None,
    ignore_dirs: Iterable[str] = (),
) -> DiscoveryResult:
    logger.info("Discovering APIs in %s", locator)

    # fail on a bad profile name before touching the network
    profile: Optional[FrameworkProfile] = None
    if framework.strip().lower() != AUTO_FRAMEWORK:
        profile = get_profile(framework)

    materializer = materializer or RepositoryMaterializer()
    handle: Optional[MaterializedRepo] = None
    try:
        if is_remote_locator(locator):
            handle = materializer.materialize(locator, credentials)
            root = handle.root
        else:
            root = Path(locator).expanduser()

        confidence = 1.0
        if profile is None:
            profile, confidence = _detect_profile(root)

        endpoints = walk_directory(
            root,
            profile,
            object_instance,
            ignore_dirs=ignore_dirs,
            relative_to=handle.root if handle is not None else None,
        )
        logger.info("Found %d endpoint(s) in %s", len(endpoints), locator)
        return DiscoveryResult(
            locator=locator,
            framework=profile.name,
            confidence=confidence,
            object_instance=object_instance,
            endpoints=endpoints,
            materialized=handle is not None,
        )
    finally:
        if handle is not None:
            materializer.release(handle)


def _detect_profile(root: Path) -> tuple[FrameworkProfile, float]:
    name, confidence = detect_framework(root)
    if name == "unknown":
        logger.warning(
            "Could not detect a framework in %s; using %s",
            root,
            Config.DEFAULT_FRAMEWORK,
        )
        return get_profile(Config.DEFAULT_FRAMEWORK), confidence
    logger.info("Detected framework %s (confidence=%.2f)", name, confidence)
    return get_profile(name), confidence
