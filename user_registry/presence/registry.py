"""In-memory record of which connections are live and who they claim to be"""
import logging
from typing import Dict, List, Optional

from user_registry.models.presence_models import LiveUser

logger = logging.getLogger(__name__)

class PresenceRegistry:
    """
    connection id -> LiveUser, one entry per connection.
    Lives as long as the process; nothing is persisted. All mutation happens
    on the event loop thread, so each join/leave is applied as a whole.
    """
    def __init__(self):
        self.live_users: Dict[str, LiveUser] = {}

    def join(self, connection_id: str, email: Optional[str], display_name: Optional[str]) -> bool:
        """Add or replace the entry for a connection.
        Returns False (and changes nothing) when email or name is empty"""
        if not connection_id or not email or not display_name:
            logger.debug("Ignoring join for %s with missing email or name", connection_id)
            return False
        self.live_users[connection_id] = LiveUser(
            connection_id=connection_id,
            email=email,
            display_name=display_name,
        )
        return True

    def leave(self, connection_id: str) -> bool:
        """Drop the entry for a connection, True if there was one"""
        return self.live_users.pop(connection_id, None) is not None

    def snapshot(self) -> List[LiveUser]:
        """Current live users, in join order"""
        return list(self.live_users.values())

    def __contains__(self, connection_id: str) -> bool:
        return connection_id in self.live_users

    def __len__(self) -> int:
        return len(self.live_users)
