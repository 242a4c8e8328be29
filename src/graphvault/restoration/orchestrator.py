"""Restore orchestrator driving a whole restore run.

This module provides the RestoreOrchestrator class that handles:
- Replaying restore types in the order supplied by the caller
- Dispatching each type to its strategy (bulk or schema)
- Owning the worker pool shared by all bulk types of a run
- Aggregating per-type counters and failures into a RestoreSummary
"""

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from graphvault.config.models import RestoreConfig
from graphvault.exceptions import GraphVaultError, RestorationError
from graphvault.graph.models import RestoreType
from graphvault.hugegraph.client import HugeGraphClient
from graphvault.restoration.counters import RestoreCounters
from graphvault.restoration.decoder import RecordDecoder
from graphvault.restoration.results import RestoreSummary, UnitFailure
from graphvault.restoration.strategies import BulkStrategy, RestoreStrategy, SchemaStrategy

logger = logging.getLogger(__name__)


class RestoreOrchestrator:
    """Restores a dumped HugeGraph dataset type by type.

    Types are restored strictly one after another, in exactly the order given to
    ``restore()``. The orchestrator does not reorder them: callers must pass
    schema types before graph elements and vertices before edges (see
    ``graphvault.graph.models.RESTORE_ORDER``). Within a bulk type, dump files
    are restored concurrently on a ``ThreadPoolExecutor``.

    Replaying the same dump twice is not idempotent: every run creates the
    records again, and only the server's own id handling prevents duplicates.

    Thread Safety:
    - Counters are the only state shared between worker threads and are
      lock-protected (RestoreCounters)
    - The primary-key vertex label index is an immutable snapshot

    Examples:
        >>> client = HugeGraphClient("http://localhost:8080", graph="hugegraph")
        >>> orchestrator = RestoreOrchestrator(client, RestoreConfig(workers=4))
        >>> summary = orchestrator.restore(list(RESTORE_ORDER), "/backups/graph")
        >>> print(summary.counts[RestoreType.VERTEX])

        >>> # Only graph elements, schema already present on the server
        >>> orchestrator.restore([RestoreType.VERTEX, RestoreType.EDGE], "/backups/graph")
    """

    def __init__(
        self,
        client: HugeGraphClient,
        config: RestoreConfig | None = None,
        counters: RestoreCounters | None = None,
        decoder: RecordDecoder | None = None,
    ):
        """Initialize RestoreOrchestrator.

        Args:
            client: HugeGraphClient for the destination graph
            config: RestoreConfig with worker count, batch size and retry policy
            counters: Optional counters instance (a fresh one by default)
            decoder: Optional RecordDecoder shared by all strategies
        """
        self.client = client
        self.config = config or RestoreConfig()
        self.counters = counters or RestoreCounters()
        self.decoder = decoder or RecordDecoder()

        logger.info(f"Initialized RestoreOrchestrator: {self.config}")

    def restore(self, types: Sequence[RestoreType], input_directory: str | Path) -> RestoreSummary:
        """Restore the given types from a dump directory, in the given order.

        Each type is fully restored, including every concurrent file task it
        spawned, before the next one starts.

        Args:
            types: Restore types in dependency order (caller's responsibility)
            input_directory: Directory holding the dump files

        Returns:
            RestoreSummary with per-type counts and elapsed time

        Raises:
            RestorationError: If any type or file failed; carries the summary
            ValueError: If a type has no strategy (programming error)
        """
        self.counters.start_timer()
        failures: list[UnitFailure] = []
        skipped: list[RestoreType] = []

        logger.info(f"Starting restore from {input_directory}: {[str(t) for t in types]}")

        executor = ThreadPoolExecutor(
            max_workers=self.config.workers, thread_name_prefix="graphvault-restore"
        )
        try:
            strategies = self._build_strategies(executor)

            for index, restore_type in enumerate(types):
                strategy = self._strategy_for(strategies, restore_type)
                logger.info(f"Restoring {restore_type.tag}")

                try:
                    strategy.restore(restore_type, input_directory)
                except RestorationError as e:
                    failures.extend(e.failures or [self._type_failure(restore_type, e)])
                except GraphVaultError as e:
                    logger.error(f"Failed to restore {restore_type.tag}: {e}")
                    failures.append(self._type_failure(restore_type, e))
                else:
                    logger.info(
                        f"Completed {restore_type.tag}: "
                        f"{self.counters.get(restore_type)} record(s) restored"
                    )
                    continue

                if self.config.stop_on_error:
                    skipped = list(types[index + 1 :])
                    if skipped:
                        logger.warning(
                            f"Stopping restore, skipped types: {[t.tag for t in skipped]}"
                        )
                    break
        except BaseException:
            # Queued files never start once the run is abandoned
            executor.shutdown(wait=True, cancel_futures=True)
            raise
        executor.shutdown(wait=True)

        summary = RestoreSummary(
            counts={t: self.counters.get(t) for t in types},
            duration_seconds=self.counters.elapsed(),
            failures=failures,
            skipped_types=skipped,
        )
        self._log_summary(summary)

        if not summary.succeeded:
            raise RestorationError(
                f"Restore did not complete: {len(failures)} failure(s)", failures, summary
            )
        return summary

    def _build_strategies(self, executor: ThreadPoolExecutor) -> list[RestoreStrategy]:
        """Create one strategy of each family for this run."""
        return [
            BulkStrategy(self.client, self.counters, self.config, executor, self.decoder),
            SchemaStrategy(self.client, self.counters, self.config, self.decoder),
        ]

    @staticmethod
    def _strategy_for(
        strategies: list[RestoreStrategy], restore_type: RestoreType
    ) -> RestoreStrategy:
        for strategy in strategies:
            if isinstance(restore_type, RestoreType) and restore_type in strategy.handles:
                return strategy
        raise ValueError(f"Bad restore type: {restore_type!r}")

    @staticmethod
    def _type_failure(restore_type: RestoreType, error: BaseException) -> UnitFailure:
        return UnitFailure(
            restore_type=restore_type,
            operation=f"restoring {restore_type.tag}",
            error=error,
        )

    def _log_summary(self, summary: RestoreSummary) -> None:
        """Log per-type counters and elapsed time."""
        counts = ", ".join(f"{t.tag}={n}" for t, n in summary.counts.items())
        logger.info(
            f"Restore finished in {summary.duration_seconds:.1f}s "
            f"({summary.total} records): {counts}"
        )
        for failure in summary.failures:
            logger.error(f"Restore failure - {failure}")
