"""Loaded dataset state with latest-load-wins semantics.

A caller may start a new dataset load before an earlier one finishes. Each
load gets a ticket; only the newest ticket per dataset kind may publish its
payload, and results for superseded tickets are discarded.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Mapping

from core.logging_config import get_logger
from core.types import KeyOrder
from store.payload_fingerprint import fingerprint_payload

_LOGGER = get_logger(__name__)

DatasetKind = Literal["snapshot", "transition"]


@dataclass(frozen=True)
class LoadTicket:
    """Handle for one in-flight dataset load.

    Attributes:
        kind: Dataset kind being loaded.
        generation: Monotonic load counter for the kind.
        key_order: Key order of a snapshot payload, unused for transitions.
    """

    kind: DatasetKind
    generation: int
    key_order: KeyOrder | None = None


@dataclass(frozen=True)
class LoadedDataset:
    """Payload published by the newest completed load."""

    payload: Mapping[str, Any]
    fingerprint: str
    source: str
    key_order: KeyOrder | None = None


class DatasetSession:
    """Current snapshot and transition payloads."""

    def __init__(self) -> None:
        self._generations: dict[DatasetKind, int] = {"snapshot": 0, "transition": 0}
        self._datasets: dict[DatasetKind, LoadedDataset] = {}

    def begin_load(self, kind: DatasetKind, key_order: KeyOrder | None = None) -> LoadTicket:
        """Start a load, superseding any load of the same kind still in flight."""
        self._generations[kind] += 1
        return LoadTicket(kind=kind, generation=self._generations[kind], key_order=key_order)

    def complete_load(
        self,
        ticket: LoadTicket,
        payload: Mapping[str, Any],
        source: str = "memory",
    ) -> bool:
        """Publish a loaded payload if its ticket is still the newest.

        Args:
            ticket: Ticket returned by ``begin_load``.
            payload: Parsed dataset payload.
            source: Human readable origin, e.g. the file path.

        Returns:
            True when the payload was published, False when it was stale.
        """
        if ticket.generation != self._generations[ticket.kind]:
            _LOGGER.info(
                "stale_dataset_load_discarded",
                kind=ticket.kind,
                generation=ticket.generation,
                newest_generation=self._generations[ticket.kind],
                source=source,
            )
            return False
        self._datasets[ticket.kind] = LoadedDataset(
            payload=payload,
            fingerprint=fingerprint_payload(payload),
            source=source,
            key_order=ticket.key_order,
        )
        _LOGGER.info("dataset_loaded", kind=ticket.kind, source=source, entry_count=len(payload))
        return True

    def dataset(self, kind: DatasetKind) -> LoadedDataset | None:
        """Return the published dataset of a kind, if any."""
        return self._datasets.get(kind)

    def fingerprint(self, kind: DatasetKind) -> str | None:
        """Return the fingerprint of the published dataset of a kind."""
        dataset = self._datasets.get(kind)
        if dataset is None:
            return None
        return dataset.fingerprint
