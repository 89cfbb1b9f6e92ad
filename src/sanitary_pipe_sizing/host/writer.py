# File: src/sanitary_pipe_sizing/host/writer.py
"""
Write-back of resolved diameters.

A sizing pass is applied all-or-nothing: the sizer calls ``begin()``, one
``write()`` per sized segment, then ``commit()``. If anything raises in
between, ``rollback()`` discards every staged assignment.

Writers:
- SegmentResultWriter: applies diameters to in-memory Segment records
- RevitParameterWriter: sets the pipe diameter parameter on Revit elements
  inside a single Revit Transaction
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from ..core.segment import Segment, SegmentId

logger = logging.getLogger(__name__)


class ResultWriter:
    """
    Base class for diameter write-back.

    Subclasses implement ``_write`` and optionally the transaction hooks.
    ``write`` returns False for targets whose diameter is not writable;
    those segments are skipped and not counted.
    """

    def __init__(self):
        self._active = False

    @property
    def is_active(self) -> bool:
        return self._active

    def begin(self, name: str = "Size Sanitary Pipes") -> None:
        """Start the all-or-nothing transaction."""
        if self._active:
            raise RuntimeError("Writer transaction already started")
        self._begin(name)
        self._active = True

    def write(self, segment: Segment, diameter: float) -> bool:
        """
        Stage a diameter for ``segment``.

        Returns:
            True if the diameter was assigned, False if the target is not writable
        """
        if not self._active:
            raise RuntimeError("Writer transaction not started")
        return self._write(segment, diameter)

    def commit(self) -> None:
        """Make every staged assignment visible."""
        if not self._active:
            raise RuntimeError("Writer transaction not started")
        self._commit()
        self._active = False

    def rollback(self) -> None:
        """Discard every staged assignment."""
        if not self._active:
            return
        try:
            self._rollback()
        finally:
            self._active = False

    def _begin(self, name: str) -> None:
        pass

    def _write(self, segment: Segment, diameter: float) -> bool:
        raise NotImplementedError

    def _commit(self) -> None:
        pass

    def _rollback(self) -> None:
        pass


class SegmentResultWriter(ResultWriter):
    """
    Applies diameters to Segment records on commit.

    Nothing is visible on the segments until ``commit()``; a rollback leaves
    them untouched.

    Attributes:
        read_only_ids: Segment ids whose diameter must not be written
    """

    def __init__(self, read_only_ids: Optional[Iterable[SegmentId]] = None):
        super().__init__()
        self.read_only_ids = set(read_only_ids or [])
        self._staged: List[Tuple[Segment, float]] = []

    def _begin(self, name: str) -> None:
        self._staged = []

    def _write(self, segment: Segment, diameter: float) -> bool:
        if segment.id in self.read_only_ids:
            logger.warning(f"Segment {segment.id}: diameter is read-only, skipping")
            return False
        self._staged.append((segment, diameter))
        return True

    def _commit(self) -> None:
        for segment, diameter in self._staged:
            segment.diameter = diameter
        logger.debug(f"Committed {len(self._staged)} diameter assignments")
        self._staged = []

    def _rollback(self) -> None:
        logger.debug(f"Rolled back {len(self._staged)} staged diameter assignments")
        self._staged = []


class RevitParameterWriter(ResultWriter):
    """
    Sets the diameter parameter on Revit pipes within one Transaction.

    Revit API types are injected so the writer can run without RevitAPI
    loaded (tests pass plain mocks).

    Attributes:
        elements: Revit elements keyed by segment id (see selector)
        transaction_factory: Callable(name) -> Revit Transaction
        diameter_parameter: BuiltInParameter or parameter name for diameter
        double_storage_type: StorageType.Double value to compare against
    """

    def __init__(
        self,
        elements: Dict[SegmentId, Any],
        transaction_factory: Callable[[str], Any],
        diameter_parameter: Any = "Diameter",
        double_storage_type: Any = None,
    ):
        super().__init__()
        self.elements = elements
        self.transaction_factory = transaction_factory
        self.diameter_parameter = diameter_parameter
        self.double_storage_type = double_storage_type
        self._transaction = None

    def _begin(self, name: str) -> None:
        self._transaction = self.transaction_factory(name)
        self._transaction.Start()

    def _write(self, segment: Segment, diameter: float) -> bool:
        element = self.elements.get(segment.id)
        if element is None:
            logger.warning(f"Segment {segment.id}: no host element to write to")
            return False

        param = get_element_parameter(element, self.diameter_parameter)
        if param is None:
            logger.warning(f"Segment {segment.id}: diameter parameter not found")
            return False
        if getattr(param, 'IsReadOnly', False):
            logger.warning(f"Segment {segment.id}: diameter parameter is read-only")
            return False
        if not self._is_double(param):
            logger.warning(f"Segment {segment.id}: diameter parameter is not a double")
            return False

        param.Set(float(diameter))
        return True

    def _commit(self) -> None:
        self._transaction.Commit()
        self._transaction = None

    def _rollback(self) -> None:
        if self._transaction is not None:
            self._transaction.RollBack()
            self._transaction = None

    def _is_double(self, param: Any) -> bool:
        storage_type = getattr(param, 'StorageType', None)
        if storage_type is None:
            return False
        if self.double_storage_type is not None:
            return storage_type == self.double_storage_type
        # String comparison for cross-assembly compatibility
        return str(storage_type).endswith("Double")


def get_element_parameter(element: Any, key: Any) -> Optional[Any]:
    """
    Get a parameter from a Revit element.

    Tries ``get_Parameter(key)`` (BuiltInParameter) then
    ``LookupParameter(key)`` for string names.

    Args:
        element: Revit element
        key: BuiltInParameter value or parameter name

    Returns:
        Parameter or None
    """
    getter = getattr(element, 'get_Parameter', None)
    if getter is not None:
        try:
            param = getter(key)
            if param is not None:
                return param
        except Exception as e:
            logger.debug(f"get_Parameter({key}) failed: {e}")

    if isinstance(key, str):
        lookup = getattr(element, 'LookupParameter', None)
        if lookup is not None:
            return lookup(key)
    return None
