"""
Main service for loading game data.

Runs one pipeline per dataset (resolve document -> decode -> build lookup
table -> publish to the registry) on a small thread pool. A failing
dataset never stops the others; failures are gathered into the returned
`LoadReport` and logged together once every pipeline has finished.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple
from xml.etree.ElementTree import Element

from .loaders import DecodeError, load_items, load_objects, load_packets, load_servers, load_tiles
from .models import ITEMS, OBJECTS, PACKETS, SERVERS, TILES
from .registry import GameDataRegistry
from .sources import (
    CachedFileSource,
    DocumentSource,
    EmbeddedSource,
    ExhaustedChainError,
    LocalFileSource,
    RemoteSource,
    SourceResolver,
)
from .store import GameDataMap

if TYPE_CHECKING:
    from ..settings import AppSettings

Decoder = Callable[[Element], Mapping[Any, Any]]


@dataclass(frozen=True)
class DatasetSpec:
    """How to acquire and decode one dataset."""

    name: str
    sources: Sequence[DocumentSource]
    decode: Decoder


@dataclass(frozen=True)
class LoadError:
    """A dataset that could not be loaded, and why."""

    dataset: str
    message: str

    def __str__(self) -> str:
        return f"({self.dataset}) {self.message}"


@dataclass
class LoadReport:
    """Outcome of `GameDataService.load()`."""

    success_count: int = 0
    errors: List[LoadError] = field(default_factory=list)
    # dataset name -> label of the source its document came from
    sources: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success_count": self.success_count,
            "error_count": len(self.errors),
            "errors": [{"dataset": e.dataset, "message": e.message} for e in self.errors],
            "sources": dict(self.sources),
        }


def default_datasets(
    resources_dir: str | Path,
    char_list_url: str,
    cache_path: str | Path,
    timeout: float,
) -> List[DatasetSpec]:
    """Build the standard dataset list.

    Bundled datasets try the operator's file in `resources_dir` first and
    the embedded copy second. The server list is downloaded and falls back
    to the copy saved by the last successful download.
    """
    resources = Path(resources_dir)

    def bundled(name: str, document: str, decode: Decoder) -> DatasetSpec:
        return DatasetSpec(
            name=name,
            sources=(LocalFileSource(resources / document), EmbeddedSource(document)),
            decode=decode,
        )

    return [
        bundled(ITEMS, "Objects.xml", load_items),
        bundled(TILES, "Tiles.xml", load_tiles),
        bundled(OBJECTS, "Objects.xml", load_objects),
        bundled(PACKETS, "Packets.xml", load_packets),
        DatasetSpec(
            name=SERVERS,
            sources=(
                RemoteSource(char_list_url, timeout=timeout, cache_path=cache_path),
                CachedFileSource(cache_path),
            ),
            decode=load_servers,
        ),
    ]


class GameDataService:
    """Loads every configured dataset concurrently into a registry.

    Example:
        service = GameDataService.from_settings(settings)
        report = service.load()
        packet = service.registry.packets.by_name("NEWTICK")
    """

    def __init__(
        self,
        datasets: Sequence[DatasetSpec],
        registry: Optional[GameDataRegistry] = None,
    ):
        """Initialize the service.

        Args:
            datasets: Datasets to load, in reporting order
            registry: Registry to publish into (a new one when omitted)
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.datasets: List[DatasetSpec] = list(datasets)
        self.registry = registry if registry is not None else GameDataRegistry()

    @classmethod
    def from_settings(
        cls, settings: "AppSettings", registry: Optional[GameDataRegistry] = None
    ) -> "GameDataService":
        """Create a service for the standard datasets using app settings."""
        datasets = default_datasets(
            resources_dir=settings.resources_dir,
            char_list_url=settings.char_list_url,
            cache_path=settings.char_list_cache,
            timeout=settings.fetch_timeout,
        )
        return cls(datasets, registry)

    def load(self) -> LoadReport:
        """Load all datasets and publish them to the registry.

        Blocks until every pipeline has finished. Never raises for a
        dataset failure; check the returned report instead.
        """
        self.logger.info(f"Loading {len(self.datasets)} game data sets...")
        self.registry.clear()
        report = LoadReport()

        if not self.datasets:
            self._log_summary(report)
            return report

        outcomes: Dict[int, Tuple[Optional[str], Optional[LoadError]]] = {}
        with ThreadPoolExecutor(
            max_workers=len(self.datasets), thread_name_prefix="gamedata"
        ) as executor:
            future_to_index = {
                executor.submit(self._run_pipeline, spec): index
                for index, spec in enumerate(self.datasets)
            }
            for future in as_completed(future_to_index):
                outcomes[future_to_index[future]] = future.result()

        # Report in declaration order regardless of completion order
        for index, spec in enumerate(self.datasets):
            source, error = outcomes[index]
            if error is not None:
                report.errors.append(error)
            else:
                report.success_count += 1
                report.sources[spec.name] = source or ""

        self._log_summary(report)
        return report

    def _run_pipeline(self, spec: DatasetSpec) -> Tuple[Optional[str], Optional[LoadError]]:
        """Resolve, decode, build and publish one dataset.

        Returns the winning source label, or a LoadError. All exceptions
        stay inside this method so sibling pipelines are unaffected.
        """
        try:
            resolved = SourceResolver(spec.name, spec.sources).resolve()
            store: GameDataMap[Any, Any] = GameDataMap(spec.decode(resolved.document))
            self.registry.publish(spec.name, store)
        except ExhaustedChainError as e:
            return None, LoadError(spec.name, str(e))
        except DecodeError as e:
            return None, LoadError(spec.name, f"Cannot decode document: {e}")
        except Exception as e:
            self.logger.exception(f"Unexpected failure while loading {spec.name}")
            return None, LoadError(spec.name, f"{e.__class__.__name__}: {e}")

        self.logger.info(f"Mapped {len(store)} {spec.name.lower()}.")
        return resolved.source, None

    def _log_summary(self, report: LoadReport) -> None:
        if report.ok:
            self.logger.info(
                f"Successfully loaded game data ({report.success_count} data sets)."
            )
            return

        count = len(report.errors)
        self.logger.error(
            f"{count} error{'' if count == 1 else 's'} encountered while loading game data "
            f"({report.success_count} data sets loaded)."
        )
        self.logger.error("It is recommended to fix these issues before connecting.")
        for index, error in enumerate(report.errors, start=1):
            self.logger.error(f"  {index}: {error}")
