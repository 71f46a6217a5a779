from .notification import (
    DealSnapshot,
    NotificationListRead,
    NotificationRead,
    RecomputeRequest,
    TaskSnapshot,
    UnreadCountRead,
)
from .preferences import (
    ChannelPreferenceSchema,
    NotificationPreferencesRead,
    NotificationPreferencesUpdate,
)

__all__ = [
    "ChannelPreferenceSchema",
    "DealSnapshot",
    "NotificationListRead",
    "NotificationPreferencesRead",
    "NotificationPreferencesUpdate",
    "NotificationRead",
    "RecomputeRequest",
    "TaskSnapshot",
    "UnreadCountRead",
]
