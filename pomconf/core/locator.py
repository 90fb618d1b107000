"""Artifact lookup against a repository.

The builder only needs one answer from the outside world: does a module
with ``pom`` packaging publish an implicit jar anyway? Any object with a
``locate(artifact)`` method can answer it; :class:`RepositoryArtifactLocator`
does so by probing a Maven-layout repository over HTTP.

Lookups never raise. Every failure is reported as "not found".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from pomconf.exceptions import PomConfError
from pomconf.utils.http import HTTPClient
from pomconf.utils.logger import get_logger
from pomconf.models.descriptor import Artifact
from pomconf.constants import DEFAULT_REPOSITORY_URL

logger = get_logger("locator")


@dataclass(frozen=True)
class ArtifactOrigin:
    """Where a located artifact lives."""

    location: str
    is_local: bool = False


class ArtifactLocator(Protocol):
    def locate(self, artifact: Artifact) -> Optional[ArtifactOrigin]:
        ...


def artifact_path(artifact: Artifact) -> str:
    """Return the repository-relative path of ``artifact``.

    Example:
        ``org/example/lib/1.0/lib-1.0.jar`` for ``org.example#lib;1.0``.
    """
    mrid = artifact.module_revision_id
    version = mrid.version or ""
    file_name = f"{artifact.name}-{version}"
    if artifact.classifier:
        file_name += f"-{artifact.classifier}"
    return "/".join(
        (
            mrid.group.replace(".", "/"),
            mrid.artifact,
            version,
            f"{file_name}.{artifact.ext}",
        )
    )


class RepositoryArtifactLocator:
    """Locate artifacts in a Maven-layout repository with HEAD requests.

    Args:
        repository_url: Root URL of the repository.
        http_client: Client used for probing; one is created on demand and
            closed by :meth:`close` when omitted.
    """

    def __init__(
        self,
        repository_url: str = DEFAULT_REPOSITORY_URL,
        *,
        http_client: Optional[HTTPClient] = None,
    ) -> None:
        self.repository_url = repository_url.rstrip("/")
        self._owns_client = http_client is None
        self._http = http_client or HTTPClient()

    def __enter__(self) -> "RepositoryArtifactLocator":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def url_for(self, artifact: Artifact) -> str:
        return f"{self.repository_url}/{artifact_path(artifact)}"

    def locate(self, artifact: Artifact) -> Optional[ArtifactOrigin]:
        if artifact.module_revision_id.version is None:
            logger.debug("Cannot locate %s without a version", artifact.name)
            return None

        url = self.url_for(artifact)
        try:
            found = self._http.exists(url)
        except PomConfError as exc:
            logger.debug("Lookup of %s failed: %s", url, exc)
            return None

        if not found:
            logger.debug("Artifact not found: %s", url)
            return None
        return ArtifactOrigin(url)
