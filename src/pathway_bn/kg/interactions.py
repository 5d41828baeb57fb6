"""
# ==============================================================================
# Module: pathway_bn/kg/interactions.py
# ==============================================================================
# Purpose: Interaction label lookup table
#          label -> (from subtype, to subtype, polarity)
#
# Input:
#   - 4-field lines: label, from_subtype, to_subtype, polarity
#
# Output:
#   - InteractionMap, read-only once loaded
# ==============================================================================
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Union

from pathway_bn.core.exceptions import MalformedInputError, UnknownInteractionError
from pathway_bn.core.types import InteractionRecord, Polarity
from pathway_bn.kg.readers import LineSource, iter_records, open_lines

logger = logging.getLogger(__name__)


DEFAULT_INTERACTION_MAP = (
    "-dt>\tgenome\tmRNA\tpositive\n"
    "-dr>\tmRNA\tprotein\tpositive\n"
    "-dp>\tprotein\tactive\tpositive\n"
    "-t>\tactive\tmRNA\tpositive\n"
    "-t|\tactive\tmRNA\tnegative\n"
    "-a>\tactive\tactive\tpositive\n"
    "-a|\tactive\tactive\tnegative\n"
    "-ap>\tactive\tactive\tpositive\n"
    "-ap|\tactive\tactive\tnegative\n"
    "->\tactive\tactive\tpositive\n"
    "-|\tactive\tactive\tnegative\n"
    "<->\tactive\tactive\tpositive\n"
    "component>\tactive\tactive\tpositive\n"
)


class InteractionMap:
    """
    Interaction type registry

    Maps an interaction label (e.g. ``-t>``) to the subtypes it connects and
    the sign of its influence.
    """

    def __init__(self, records: Iterable[InteractionRecord] = ()):
        self._records: Dict[str, InteractionRecord] = {}
        for record in records:
            self._records[record.label] = record

    @classmethod
    def from_lines(cls, lines: LineSource, source: str = "interaction map") -> "InteractionMap":
        """
        Parse 4-field interaction map lines.

        A label seen twice keeps its last definition.
        """
        imap = cls()
        for line_number, (label, from_subtype, to_subtype, polarity) in iter_records(
            open_lines(lines), expected=(4,), source=source
        ):
            try:
                sign = Polarity(polarity)
            except ValueError:
                raise MalformedInputError(
                    f"unknown polarity {polarity!r} for interaction {label!r}",
                    source=source,
                    line_number=line_number,
                ) from None
            imap._records[label] = InteractionRecord(label, from_subtype, to_subtype, sign)

        logger.debug(f"Loaded {len(imap)} interaction types from {source}")
        return imap

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "InteractionMap":
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Interaction map not found: {path}")
        return cls.from_lines(path, source=str(path))

    @classmethod
    def default(cls) -> "InteractionMap":
        """Built-in interaction map"""
        return cls.from_lines(DEFAULT_INTERACTION_MAP, source="default interaction map")

    def get(self, label: str) -> InteractionRecord:
        """
        Look up an interaction label

        Raises:
            UnknownInteractionError: if the label is not registered
        """
        record = self._records.get(label)
        if record is None:
            raise UnknownInteractionError(label)
        return record

    def labels(self) -> List[str]:
        return list(self._records)

    def __contains__(self, label: object) -> bool:
        return label in self._records

    def __iter__(self) -> Iterator[InteractionRecord]:
        return iter(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"InteractionMap(labels={len(self)})"
