"""Ordered-sibling engine keeping dense ``order`` values per parent

Every parent (a board for columns, a column for tasks) owns an order-space:
the ``order`` values of its siblings are always exactly ``0..n-1``. All
methods take the caller's open session and never commit; the caller's
transaction boundary decides commit or rollback, so a failure anywhere
leaves no partial shift behind.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session

from .errors import CrossBoundaryError, NotFoundError, OutOfRangeError

logger = logging.getLogger(__name__)


class OrderedListStore:
    """Dense ordering of sibling records under a parent record

    Args:
        model: sibling model with ``id`` and ``order`` columns
        parent_field: name of the sibling column referencing the parent
        parent_model: parent model, locked while its order-space changes
        aggregate_field: name of the parent column referencing the aggregate
            root; parents must share it for a cross-parent move. ``None``
            means parents are aggregate roots themselves and siblings never
            change parent.
        sibling_code / parent_code: NotFound codes reported for each side
    """

    def __init__(
        self,
        model,
        parent_field: str,
        parent_model,
        aggregate_field: Optional[str] = None,
        sibling_code: Optional[str] = None,
        parent_code: Optional[str] = None,
    ):
        self.model = model
        self.parent_field = parent_field
        self.parent_model = parent_model
        self.aggregate_field = aggregate_field
        self.sibling_code = sibling_code
        self.parent_code = parent_code

    @property
    def _parent_column(self):
        return getattr(self.model, self.parent_field)

    @property
    def _name(self) -> str:
        return self.model.__tablename__

    # === Reads ===

    def count(self, session: Session, parent_id: str) -> int:
        """Number of siblings currently under ``parent_id``"""
        return session.execute(
            select(func.count()).select_from(self.model).where(self._parent_column == parent_id)
        ).scalar_one()

    def siblings(self, session: Session, parent_id: str) -> List:
        """Siblings of ``parent_id`` in ascending order"""
        return list(
            session.execute(
                select(self.model)
                .where(self._parent_column == parent_id)
                .order_by(self.model.order)
            ).scalars()
        )

    def lock_parent(self, session: Session, parent_id: str):
        """Load the parent row with a write lock, serializing its order-space"""
        parent = session.execute(
            select(self.parent_model)
            .where(self.parent_model.id == parent_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()
        if parent is None:
            raise NotFoundError(
                f"{self.parent_model.__tablename__} {parent_id} not found", code=self.parent_code
            )
        return parent

    def _load_sibling(self, session: Session, sibling_id: str, parent_id: str):
        sibling = session.execute(
            select(self.model)
            .where(self.model.id == sibling_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()
        if sibling is None or getattr(sibling, self.parent_field) != parent_id:
            raise NotFoundError(
                f"{self._name} {sibling_id} not found under {parent_id}", code=self.sibling_code
            )
        return sibling

    def _shift(self, session: Session, parent_id: str, delta: int, lower=None, upper=None,
               lower_inclusive: bool = True, upper_inclusive: bool = True) -> int:
        """Add ``delta`` to ``order`` for siblings whose order lies in the window"""
        order = self.model.order
        criteria = [self._parent_column == parent_id]
        if lower is not None:
            criteria.append(order >= lower if lower_inclusive else order > lower)
        if upper is not None:
            criteria.append(order <= upper if upper_inclusive else order < upper)

        result = session.execute(
            update(self.model)
            .where(*criteria)
            .values(order=order + delta)
        )
        logger.debug("[SHIFT] %s parent=%s delta=%+d window=[%s, %s] rows=%d",
                     self._name, parent_id, delta, lower, upper, result.rowcount)
        return result.rowcount

    # === Mutations ===

    def insert(self, session: Session, parent_id: str, record):
        """Append ``record`` as the last sibling of ``parent_id``

        The count is read after the parent lock, inside the same transaction
        as the insert, so two concurrent inserts can never both get ``n``.
        """
        self.lock_parent(session, parent_id)
        assigned = self.count(session, parent_id)

        setattr(record, self.parent_field, parent_id)
        record.order = assigned
        session.add(record)
        session.flush()

        logger.info("[INSERT] %s %s appended to %s at order %d", self._name, record.id, parent_id, assigned)
        return record

    def move_within_parent(self, session: Session, sibling_id: str, parent_id: str, new_order: int):
        """Move a sibling to ``new_order`` among its current parent's siblings"""
        self.lock_parent(session, parent_id)
        sibling = self._load_sibling(session, sibling_id, parent_id)

        total = self.count(session, parent_id)
        if new_order < 0 or new_order > total - 1:
            raise OutOfRangeError(
                f"Order {new_order} is out of range for {self._name} under {parent_id} (0..{total - 1})"
            )

        old_order = sibling.order
        if new_order == old_order:
            logger.debug("[MOVE] %s %s already at order %d", self._name, sibling_id, old_order)
            return sibling

        if new_order > old_order:
            # Moving down: close up (old, new]
            self._shift(session, parent_id, -1, lower=old_order, upper=new_order, lower_inclusive=False)
        else:
            # Moving up: open room in [new, old)
            self._shift(session, parent_id, +1, lower=new_order, upper=old_order, upper_inclusive=False)

        sibling.order = new_order
        session.flush()

        logger.info("[MOVE] %s %s in %s: %d -> %d", self._name, sibling_id, parent_id, old_order, new_order)
        return sibling

    def move_across_parents(self, session: Session, sibling_id: str, source_parent_id: str,
                            target_parent_id: str, new_order: int):
        """Move a sibling out of ``source_parent_id`` into ``target_parent_id`` at ``new_order``"""
        if source_parent_id == target_parent_id:
            return self.move_within_parent(session, sibling_id, source_parent_id, new_order)

        # Lock in a stable order so two opposite moves cannot deadlock
        first, second = sorted([source_parent_id, target_parent_id])
        locked = {first: self.lock_parent(session, first), second: self.lock_parent(session, second)}
        source, target = locked[source_parent_id], locked[target_parent_id]

        if self.aggregate_field is None or (
            getattr(source, self.aggregate_field) != getattr(target, self.aggregate_field)
        ):
            raise CrossBoundaryError(
                f"Cannot move {self._name} {sibling_id} from {source_parent_id} to {target_parent_id}: "
                "parents belong to different aggregates"
            )

        sibling = self._load_sibling(session, sibling_id, source_parent_id)

        target_count = self.count(session, target_parent_id)
        if new_order < 0 or new_order > target_count:
            raise OutOfRangeError(
                f"Order {new_order} is out of range for {self._name} under {target_parent_id} (0..{target_count})"
            )

        old_order = sibling.order

        # Make room in the target, then close the gap in the source
        self._shift(session, target_parent_id, +1, lower=new_order)
        self._shift(session, source_parent_id, -1, lower=old_order, lower_inclusive=False)

        setattr(sibling, self.parent_field, target_parent_id)
        sibling.order = new_order
        session.flush()

        logger.info("[MOVE] %s %s: %s@%d -> %s@%d", self._name, sibling_id,
                    source_parent_id, old_order, target_parent_id, new_order)
        return sibling

    def remove(self, session: Session, sibling_id: str, parent_id: str) -> int:
        """Delete a sibling and compact the remaining order-space; returns its former order"""
        self.lock_parent(session, parent_id)
        sibling = self._load_sibling(session, sibling_id, parent_id)
        old_order = sibling.order

        result = session.execute(
            delete(self.model)
            .where(self.model.id == sibling_id, self._parent_column == parent_id)
        )
        if result.rowcount == 0:
            # Only compact after a confirmed delete
            raise NotFoundError(f"{self._name} {sibling_id} was already deleted", code=self.sibling_code)

        self._shift(session, parent_id, -1, lower=old_order, lower_inclusive=False)
        session.flush()

        logger.info("[REMOVE] %s %s removed from %s at order %d", self._name, sibling_id, parent_id, old_order)
        return old_order
