"""MoMo sandbox API user provisioning."""
from __future__ import annotations
import uuid
from typing import Dict

from .client import MomoClient, decode_body


class UserService:
    """Service for creating sandbox API users and their API keys.
    
    Uses the plain client: these calls are authenticated by the
    subscription key only, never by a bearer token.
    """
    
    def __init__(self, client: MomoClient):
        self.client = client
    
    def create(self, host: str) -> str:
        """Create an API user.
        
        Args:
            host: Provider callback host registered for the user
            
        Returns:
            Generated user id
        """
        user_id = str(uuid.uuid4())
        self.client.post(
            "/v1_0/apiuser",
            json={"providerCallbackHost": host},
            headers={"X-Reference-Id": user_id},
        )
        return user_id
    
    def login(self, user_id: str) -> Dict[str, str]:
        """Create an API key for a user.
        
        Returns:
            {"apiKey": ...}
        """
        resp = self.client.post(f"/v1_0/apiuser/{user_id}/apikey")
        return decode_body(resp)
