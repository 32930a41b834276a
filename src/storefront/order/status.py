"""Order status progression.

State Machine:
    PENDING → CONFIRMED → PREPARING → READY → OUT_FOR_DELIVERY →
    DELIVERED → COMPLETED
    CANCELLED (from any state above; absorbing, no outgoing transitions)

Progress display works on the index of the current status in the ordered
progression. A cancelled order reports no progress at all, whatever it had
reached before, and unknown statuses are treated the same way.
"""

from dataclasses import dataclass
from enum import Enum


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


PROGRESSION = (
    OrderStatus.PENDING,
    OrderStatus.CONFIRMED,
    OrderStatus.PREPARING,
    OrderStatus.READY,
    OrderStatus.OUT_FOR_DELIVERY,
    OrderStatus.DELIVERED,
    OrderStatus.COMPLETED,
)

STEP_LABELS = {
    OrderStatus.PENDING: "Order Received",
    OrderStatus.CONFIRMED: "Confirmed",
    OrderStatus.PREPARING: "Preparing",
    OrderStatus.READY: "Ready",
    OrderStatus.OUT_FOR_DELIVERY: "Out for Delivery",
    OrderStatus.DELIVERED: "Delivered",
    OrderStatus.COMPLETED: "Completed",
    OrderStatus.CANCELLED: "Cancelled",
}


def _coerce(status) -> OrderStatus | None:
    if isinstance(status, OrderStatus):
        return status
    try:
        return OrderStatus(status)
    except ValueError:
        return None


def current_index(status) -> int:
    """Index of ``status`` in the progression; -1 for cancelled or unknown values."""
    coerced = _coerce(status)
    if coerced is None or coerced is OrderStatus.CANCELLED:
        return -1
    return PROGRESSION.index(coerced)


def step_completed(status, index: int) -> bool:
    current = current_index(status)
    return current >= 0 and index <= current


def step_active(status, index: int) -> bool:
    current = current_index(status)
    return current >= 0 and index == current


def is_cancelled(status) -> bool:
    return _coerce(status) is OrderStatus.CANCELLED


def can_transition(current, target) -> bool:
    """Operator transitions: strictly forward in the progression, or to cancelled.

    Nothing leaves cancelled, and unknown statuses can neither be left nor entered.
    """
    source, destination = _coerce(current), _coerce(target)
    if source is None or destination is None or source is OrderStatus.CANCELLED:
        return False
    if destination is OrderStatus.CANCELLED:
        return True
    return PROGRESSION.index(destination) > PROGRESSION.index(source)


@dataclass(frozen=True)
class ProgressStep:
    key: str
    label: str
    completed: bool
    active: bool


@dataclass(frozen=True)
class Progress:
    """What the tracking view renders: either the step list or the cancelled banner."""

    status: str
    cancelled: bool
    current_index: int
    steps: tuple[ProgressStep, ...]

    @property
    def label(self) -> str:
        if self.cancelled:
            return STEP_LABELS[OrderStatus.CANCELLED]
        if self.current_index < 0:
            return self.status
        return STEP_LABELS[PROGRESSION[self.current_index]]


def progress_for(status) -> Progress:
    raw = status.value if isinstance(status, OrderStatus) else str(status)
    if is_cancelled(status):
        return Progress(status=raw, cancelled=True, current_index=-1, steps=())

    steps = tuple(
        ProgressStep(
            key=step.value,
            label=STEP_LABELS[step],
            completed=step_completed(status, index),
            active=step_active(status, index),
        )
        for index, step in enumerate(PROGRESSION)
    )
    return Progress(status=raw, cancelled=False, current_index=current_index(status), steps=steps)
