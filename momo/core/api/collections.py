"""MoMo collection operations: request a payment from a consumer."""
from __future__ import annotations
import uuid
from typing import Any, Dict, Mapping, Optional

from momo.core import validators
from .client import AuthenticatingClient, decode_body


class CollectionService:
    """Service for the collection product."""
    
    def __init__(self, client: AuthenticatingClient):
        self.client = client
    
    def request_to_pay(self, payment: Mapping[str, Any], callback_url: Optional[str] = None) -> str:
        """Request a payment from a payer.
        
        The payer is asked to authorize the payment; the transaction stays
        PENDING until then. Poll get_transaction() or wait for the callback.
        
        Args:
            payment: Payment request (amount, currency, payer, and optionally
                externalId, payerMessage, payeeNote, callbackUrl)
            callback_url: URL the transaction status is posted to
            
        Returns:
            Generated reference id, used with get_transaction()
        """
        validators.validate_request_to_pay(payment)
        body = dict(payment)
        body_callback_url = body.pop("callbackUrl", None)
        callback_url = callback_url or body_callback_url
        
        reference_id = str(uuid.uuid4())
        headers = {"X-Reference-Id": reference_id}
        if callback_url:
            headers["X-Callback-Url"] = callback_url
        self.client.post("/collection/v1_0/requesttopay", json=body, headers=headers)
        return reference_id
    
    def get_transaction(self, reference_id: str) -> Dict[str, Any]:
        resp = self.client.get(f"/collection/v1_0/requesttopay/{reference_id}")
        return decode_body(resp)
    
    def get_balance(self) -> Dict[str, Any]:
        resp = self.client.get("/collection/v1_0/account/balance")
        return decode_body(resp)
    
    def is_payer_active(self, party_id: str, party_id_type: str = "MSISDN") -> Any:
        resp = self.client.get(f"/collection/v1_0/accountholder/{party_id_type}/{party_id}/active")
        return decode_body(resp)
