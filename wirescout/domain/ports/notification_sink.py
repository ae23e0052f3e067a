"""Output port that delivers newly found articles."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence, Tuple

from wirescout.domain.entities import ArticleRecord


@dataclass(frozen=True)
class Destination:
    """Where and as whom notifications are delivered."""

    #: Addresses that receive the notification.
    recipients: Tuple[str, ...]
    #: Sender address shown to recipients.
    sender: str
    #: Subject line of the message.
    subject: str = "New results from Wirescout!"


class NotificationSink(ABC):
    """Defines how new articles leave the system."""

    @abstractmethod
    def send(self, records: Sequence[ArticleRecord], destination: Destination) -> None:
        """Deliver ``records`` or raise ``NotificationError``."""
