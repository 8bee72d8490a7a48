"""Deterministic values both sides of the reveal flow must agree on."""

from __future__ import annotations

import json

from web3 import Web3


def get_message_to_sign(transaction_id: int, *, origin: str) -> str:
    """Message the wallet signs to prove it may see codes for ``transaction_id``."""

    return json.dumps({"from": origin, "transactionId": int(transaction_id)}, separators=(",", ":"))


def get_gift_card_order_id(reward_to_address: str, permit_signature: str) -> str:
    """Custom identifier tying a marketplace order to the permit that paid for it."""

    checksum_address = Web3.to_checksum_address(reward_to_address)
    return Web3.to_hex(Web3.keccak(text=f"{checksum_address}:{permit_signature}"))


__all__ = ["get_gift_card_order_id", "get_message_to_sign"]
