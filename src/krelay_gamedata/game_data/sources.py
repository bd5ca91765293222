"""
Document sources and the fallback resolver.

A dataset is acquired by trying an ordered list of sources until one of
them yields a parsed XML document:

- `LocalFileSource`: operator-provided file, e.g. Resources/Tiles.xml
- `EmbeddedSource`: the copy bundled with the package
- `RemoteSource`: HTTP download, saved to a cache file on success
- `CachedFileSource`: the last successfully downloaded copy

Sources raise `SourceError` on failure. `SourceResolver` swallows those
while there is something left to try and only reports the exhausted chain.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence
from xml.etree import ElementTree
from xml.etree.ElementTree import Element

import aiohttp

from ..resources import get_embedded_document

logger = logging.getLogger(__name__)

ERROR_DOCUMENT_TAG = "Error"


class SourceError(Exception):
    """A single source could not produce a document."""


class ExhaustedChainError(Exception):
    """Every source of a dataset failed."""

    def __init__(self, dataset: str, message: str):
        super().__init__(message)
        self.dataset = dataset


def parse_document(payload: bytes, origin: str) -> Element:
    """Parse raw XML bytes into the document's root element.

    An unknown `encoding=` in the XML declaration surfaces as LookupError
    rather than ParseError; both mean the payload is unusable.
    """
    try:
        return ElementTree.fromstring(payload)
    except (ElementTree.ParseError, LookupError) as e:
        raise SourceError(f"Malformed XML from {origin}: {e}") from e


class DocumentSource(ABC):
    """One way of acquiring a dataset document."""

    label: str = "source"

    @abstractmethod
    def fetch(self) -> Element:
        """Return the root element of the document.

        Raises:
            SourceError: If the document cannot be acquired or parsed
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.label}>"


class LocalFileSource(DocumentSource):
    """Document read from a file on disk."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.label = str(self.path)

    def fetch(self) -> Element:
        try:
            payload = self.path.read_bytes()
        except OSError as e:
            raise SourceError(f"Cannot read {self.path}: {e.strerror or e}") from e
        return parse_document(payload, str(self.path))


class CachedFileSource(LocalFileSource):
    """Previously downloaded copy of a remote document."""

    def __init__(self, path: str | Path):
        super().__init__(path)
        self.label = f"cache {self.path}"


class EmbeddedSource(DocumentSource):
    """Document bundled with the package."""

    def __init__(self, resource: str):
        self.resource = resource
        self.label = f"embedded {resource}"

    def fetch(self) -> Element:
        try:
            payload = get_embedded_document(self.resource)
        except OSError as e:
            raise SourceError(f"Embedded document {self.resource} is missing: {e}") from e
        return parse_document(payload, self.label)


class RemoteSource(DocumentSource):
    """Document downloaded over HTTP, with a bounded timeout.

    A successful download that is not an `<Error>` document is written to
    `cache_path` so `CachedFileSource` can serve it when the endpoint is
    unreachable later on. Failing to write the cache is only logged.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        cache_path: Optional[str | Path] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.cache_path = Path(cache_path) if cache_path is not None else None
        self.label = url
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    async def _download(self) -> bytes:
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(self.url) as response:
                response.raise_for_status()
                return await response.read()

    def fetch(self) -> Element:
        self.logger.debug(f"Requesting {self.url} (timeout {self.timeout}s)")
        try:
            # Runs on a loader worker thread, which has no event loop of its own
            payload = asyncio.run(self._download())
        except asyncio.TimeoutError as e:
            raise SourceError(f"Timed out after {self.timeout}s requesting {self.url}") from e
        except aiohttp.ClientResponseError as e:
            raise SourceError(f"{self.url} answered HTTP {e.status}: {e.message}") from e
        except aiohttp.ClientError as e:
            raise SourceError(f"Request to {self.url} failed: {e}") from e

        document = parse_document(payload, self.url)
        if document.tag == ERROR_DOCUMENT_TAG:
            detail = (document.text or "").strip() or "no details"
            raise SourceError(f"{self.url} returned an error document: {detail}")

        self._store(payload)
        return document

    def _store(self, payload: bytes) -> None:
        if self.cache_path is None:
            return
        tmp_path = self.cache_path.with_name(self.cache_path.name + ".tmp")
        try:
            self.cache_path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(payload)
            tmp_path.replace(self.cache_path)
            self.logger.debug(f"Saved {len(payload)} bytes to {self.cache_path}")
        except OSError as e:
            self.logger.warning(f"Could not update cache file {self.cache_path}: {e}")


@dataclass(frozen=True)
class ResolvedDocument:
    """A document together with the label of the source that produced it."""

    document: Element
    source: str


class SourceResolver:
    """Try the sources of one dataset in order until one succeeds."""

    def __init__(self, dataset: str, sources: Sequence[DocumentSource]):
        self.dataset = dataset
        self.sources: List[DocumentSource] = list(sources)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def resolve(self) -> ResolvedDocument:
        """Return the first document any source can provide.

        Failures of earlier sources are expected (an operator override
        file is usually absent) and are dropped once a later source works.

        Raises:
            ExhaustedChainError: If no source produced a document
        """
        last_error: Optional[SourceError] = None

        for position, source in enumerate(self.sources):
            try:
                document = source.fetch()
            except SourceError as e:
                self.logger.debug(f"{self.dataset}: {source.label} unavailable: {e}")
                last_error = e
                continue

            if position > 0:
                self.logger.info(f"{self.dataset}: using fallback {source.label}")
            else:
                self.logger.debug(f"{self.dataset}: loaded from {source.label}")
            return ResolvedDocument(document=document, source=source.label)

        if last_error is None:
            raise ExhaustedChainError(self.dataset, "No sources configured")
        raise ExhaustedChainError(
            self.dataset,
            f"All {len(self.sources)} sources failed, last error: {last_error}",
        ) from last_error
