"""Subject/listener notification with snapshot delivery."""

from patternkit.notify.hub import (
    DeliveryFailure,
    DeliveryReport,
    NotificationHub,
    Subscription,
    listener_name,
)
from patternkit.notify.subject import Subject, create_subject

__all__ = [
    "DeliveryFailure",
    "DeliveryReport",
    "NotificationHub",
    "Subject",
    "Subscription",
    "create_subject",
    "listener_name",
]
