"""Models for the live presence channel"""
from dataclasses import dataclass
from typing import Dict, List

from pydantic import BaseModel


@dataclass # Selected over pydantic, entries are built server side only
class LiveUser:
    """A connection that has joined the live room"""
    connection_id: str
    email: str
    display_name: str

    def to_payload(self) -> Dict[str, str]:
        """Wire shape sent with the liveUsers event"""
        return {
            "email": self.email,
            "displayName": self.display_name,
            "connectionId": self.connection_id,
        }


class LiveUsersResponse(BaseModel):
    """Body of the live users status endpoint"""
    count: int
    users: List[Dict[str, str]]
