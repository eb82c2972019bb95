"""MoMo disbursement operations: pay out to an account holder."""
from __future__ import annotations
import uuid
from typing import Any, Dict, Mapping, Optional

from momo.core import validators
from .client import AuthenticatingClient, decode_body


class DisbursementService:
    """Service for the disbursement product."""
    
    def __init__(self, client: AuthenticatingClient):
        """Initialize disbursement service.
        
        Args:
            client: Bearer-authenticated client for the disbursement product
        """
        self.client = client
    
    def transfer(self, payout: Mapping[str, Any], callback_url: Optional[str] = None) -> str:
        """Transfer an amount from the owner's account to a payee account.
        
        Args:
            payout: Payout request (amount, currency, payee, and optionally
                externalId, payerMessage, payeeNote, callbackUrl)
            callback_url: URL the transaction status is posted to
            
        Returns:
            Generated reference id, used with get_transaction()
            
        Raises:
            ValidationError: If the payout is malformed (nothing is sent)
        """
        validators.validate_transfer(payout)
        body = dict(payout)
        body_callback_url = body.pop("callbackUrl", None)
        callback_url = callback_url or body_callback_url
        
        reference_id = str(uuid.uuid4())
        headers = {"X-Reference-Id": reference_id}
        if callback_url:
            headers["X-Callback-Url"] = callback_url
        self.client.post("/disbursement/v1_0/transfer", json=body, headers=headers)
        return reference_id
    
    def get_transaction(self, reference_id: str) -> Dict[str, Any]:
        """Return the transfer identified by the reference id from transfer()."""
        resp = self.client.get(f"/disbursement/v1_0/transfer/{reference_id}")
        return decode_body(resp)
    
    def get_balance(self) -> Dict[str, Any]:
        """Return the account balance as {availableBalance, currency}."""
        resp = self.client.get("/disbursement/v1_0/account/balance")
        return decode_body(resp)
    
    def is_payer_active(self, party_id: str, party_id_type: str = "MSISDN") -> Any:
        """Check if an account holder is registered and active.
        
        Args:
            party_id: Party number, validated according to its type
            party_id_type: One of MSISDN, EMAIL, PARTY_CODE
        """
        resp = self.client.get(f"/disbursement/v1_0/accountholder/{party_id_type}/{party_id}/active")
        return decode_body(resp)
