"""Transient, dismissable user notifications (toasts)."""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import uuid4


VARIANTS = ("default", "destructive", "info")


@dataclass
class Notification:
    """A single toast shown to the user."""
    title: str
    description: str = ""
    variant: str = "default"
    id: str = field(default_factory=lambda: uuid4().hex[:12])
    created_at: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["created_at"] = self.created_at.isoformat()
        return data


class Notifier:
    """Bounded queue of active notifications; the oldest is dropped when full."""

    def __init__(self, capacity: int = 5):
        self.capacity = capacity
        self._items: List[Notification] = []

    def push(self, title: str, description: str = "", variant: str = "default") -> Notification:
        if variant not in VARIANTS:
            raise ValueError(f"Unknown notification variant: {variant}")
        notification = Notification(title=title, description=description, variant=variant)
        self._items.append(notification)
        if len(self._items) > self.capacity:
            self._items = self._items[-self.capacity:]
        return notification

    def dismiss(self, notification_id: str) -> bool:
        """Remove one notification. Returns False if it was not active."""
        before = len(self._items)
        self._items = [n for n in self._items if n.id != notification_id]
        return len(self._items) < before

    def clear(self) -> None:
        self._items = []

    def active(self) -> List[Notification]:
        return list(self._items)

    def latest(self) -> Optional[Notification]:
        return self._items[-1] if self._items else None
