"""Per-type restore strategies.

Restorable types fall into two families:

- ``BulkStrategy`` (vertices, edges): sharded dump files are processed
  concurrently, one worker task per file; records are uploaded in batches of at
  most 500 through a bounded retry policy.
- ``SchemaStrategy`` (property keys, vertex/edge/index labels): exactly one dump
  file per type, replayed sequentially on the caller's thread, one record per
  call, without batching and without retry.

A failed schema call stops its type immediately.
"""

import logging
import os
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from concurrent.futures import Executor, Future, wait
from pathlib import Path
from typing import Any

from graphvault.config.models import RestoreConfig
from graphvault.constants import DUMP_ENCODING
from graphvault.exceptions import DumpIOError, InvalidInputError, RestorationError
from graphvault.graph.models import SCHEMA_TYPES, IdStrategy, RestoreType, Vertex
from graphvault.hugegraph.client import HugeGraphClient
from graphvault.restoration.batching import iter_batches
from graphvault.restoration.counters import RestoreCounters
from graphvault.restoration.decoder import RecordDecoder
from graphvault.restoration.file_locator import locate_files
from graphvault.restoration.results import UnitFailure
from graphvault.restoration.retry import call_with_retry

logger = logging.getLogger(__name__)


def build_vertex_label_index(client: HugeGraphClient) -> frozenset[str]:
    """Names of vertex labels whose ids are derived from primary keys.

    Built from the live remote schema; the result is immutable and shared
    read-only by all vertex workers.
    """
    return frozenset(
        vertex_label.name
        for vertex_label in client.schema().get_vertex_labels()
        if vertex_label.id_strategy == IdStrategy.PRIMARY_KEY
    )


def sanitize_vertices(vertices: list[Vertex], primary_key_labels: frozenset[str]) -> None:
    """Clear ids of vertices whose label derives ids from primary keys.

    The server computes such ids from the primary key values, so a dumped id
    must not be sent. Vertices of other labels keep their id unchanged.
    """
    for vertex in vertices:
        if vertex.label in primary_key_labels:
            vertex.id = None


def read_lines(path: Path) -> Iterator[str]:
    """Yield non-blank lines of a dump file.

    Raises:
        DumpIOError: If the file cannot be opened or read
    """
    try:
        with path.open(encoding=DUMP_ENCODING) as f:
            for line in f:
                if line.strip():
                    yield line
    except (OSError, UnicodeDecodeError) as e:
        raise DumpIOError(f"IOException occur while reading {path.name}: {e}") from e


class RestoreStrategy(ABC):
    """Restores every dump file of one restore type."""

    #: Restore types this strategy handles
    handles: frozenset[RestoreType] = frozenset()

    def __init__(
        self,
        client: HugeGraphClient,
        counters: RestoreCounters,
        config: RestoreConfig,
        decoder: RecordDecoder | None = None,
    ):
        self.client = client
        self.counters = counters
        self.config = config
        self.decoder = decoder or RecordDecoder()

    @abstractmethod
    def restore(self, restore_type: RestoreType, directory: str | Path) -> None:
        """Restore all records of ``restore_type`` found in ``directory``.

        Blocks until every unit of work for the type has finished.

        Raises:
            GraphVaultError: If the type did not fully restore
        """

    def _check_type(self, restore_type: RestoreType) -> None:
        if restore_type not in self.handles:
            raise ValueError(f"{type(self).__name__} cannot restore {restore_type!r}")


class BulkStrategy(RestoreStrategy):
    """Concurrent, batched, retried restore of sharded vertex/edge dumps.

    Each dump file is one unit of work submitted to the shared executor. A unit
    streams its file line by line, splits each line's records into batches and
    uploads the batches strictly in file order. A failing unit stops at its
    first fatal error; sibling units are never cancelled. Once every unit has
    finished, failures are raised together as a RestorationError.

    Examples:
        >>> with ThreadPoolExecutor(max_workers=8) as executor:
        ...     strategy = BulkStrategy(client, counters, RestoreConfig(), executor)
        ...     strategy.restore(RestoreType.VERTEX, "/backups/graph")
    """

    handles = frozenset({RestoreType.VERTEX, RestoreType.EDGE})

    # Operation labels used for retry logging and failure reports
    _DESCRIPTIONS: dict[RestoreType, str] = {
        RestoreType.VERTEX: "restoring vertices",
        RestoreType.EDGE: "restoring edges",
    }

    def __init__(
        self,
        client: HugeGraphClient,
        counters: RestoreCounters,
        config: RestoreConfig,
        executor: Executor,
        decoder: RecordDecoder | None = None,
    ):
        super().__init__(client, counters, config, decoder)
        self.executor = executor

    def restore(self, restore_type: RestoreType, directory: str | Path) -> None:
        self._check_type(restore_type)

        # Schema dumps share the prefix ("vertex" -> "vertexlabel") and are not shards
        files = locate_files(
            directory, restore_type.tag, exclude=[t.tag for t in RestoreType if t.is_schema]
        )
        if not files:
            logger.info(f"No {restore_type.tag} dump files found in {directory}")
            return

        upload = self._uploader(restore_type)
        logger.info(f"Restoring {restore_type.tag} from {len(files)} file(s)")

        futures: dict[Future, Path] = {
            self.executor.submit(self._restore_file, restore_type, path, upload): path
            for path in files
        }
        wait(futures)

        failures = []
        for future, path in futures.items():
            error = future.exception()
            if error is None:
                continue
            logger.error(f"Failed to restore {restore_type.tag} from {path.name}: {error}")
            failures.append(
                UnitFailure(
                    restore_type=restore_type,
                    operation=self._DESCRIPTIONS[restore_type],
                    error=error,
                    path=path,
                )
            )

        if failures:
            raise RestorationError(
                f"{len(failures)} of {len(files)} {restore_type.tag} file(s) failed",
                failures=failures,
            )

    def _uploader(self, restore_type: RestoreType) -> Callable[[list[Any]], None]:
        """Return the batch upload function for a type."""
        if restore_type == RestoreType.VERTEX:
            # Snapshot of the live schema, taken before any vertex worker starts
            primary_key_labels = build_vertex_label_index(self.client)
            logger.debug(f"Vertex labels with primary-key ids: {sorted(primary_key_labels)}")

            def upload_vertices(batch: list[Any]) -> None:
                sanitize_vertices(batch, primary_key_labels)
                self.client.graph().add_vertices(batch)

            return upload_vertices

        def upload_edges(batch: list[Any]) -> None:
            # Vertices were restored earlier in the run
            self.client.graph().add_edges(batch, check_vertex=False)

        return upload_edges

    def _restore_file(
        self,
        restore_type: RestoreType,
        path: Path,
        upload: Callable[[list[Any]], None],
    ) -> int:
        """Restore one dump file; runs on a worker thread.

        Returns:
            Number of records restored from the file
        """
        description = self._DESCRIPTIONS[restore_type]
        restored = 0
        logger.debug(f"[{threading.current_thread().name}] Restoring {path.name}")

        for line in read_lines(path):
            records = self.decoder.decode(restore_type, line)
            for batch in iter_batches(records, self.config.batch_size):
                call_with_retry(
                    lambda batch=batch: upload(batch),
                    description,
                    max_attempts=self.config.max_retries,
                    min_wait=self.config.retry_min_wait,
                    max_wait=self.config.retry_max_wait,
                )
                self.counters.increment(restore_type, len(batch))
                restored += len(batch)

        logger.info(f"Restored {restored} {restore_type.tag} record(s) from {path.name}")
        return restored


class SchemaStrategy(RestoreStrategy):
    """Sequential, unbatched, unretried restore of one schema dump file."""

    handles = SCHEMA_TYPES

    # SchemaAPI method creating one record of each type
    _CREATE_METHODS: dict[RestoreType, str] = {
        RestoreType.PROPERTY_KEY: "add_property_key",
        RestoreType.VERTEX_LABEL: "add_vertex_label",
        RestoreType.EDGE_LABEL: "add_edge_label",
        RestoreType.INDEX_LABEL: "add_index_label",
    }

    def restore(self, restore_type: RestoreType, directory: str | Path) -> None:
        self._check_type(restore_type)

        path = Path(directory) / restore_type.tag
        if not (path.is_file() and os.access(path, os.R_OK)):
            raise InvalidInputError(
                f"Need to specify a readable {restore_type.tag} dump file rather than: {path}"
            )

        create = getattr(self.client.schema(), self._CREATE_METHODS[restore_type])
        restored = 0
        for line in read_lines(path):
            for record in self.decoder.decode(restore_type, line):
                create(record)
                self.counters.increment(restore_type)
                restored += 1

        logger.info(f"Restored {restored} {restore_type.tag} record(s)")
