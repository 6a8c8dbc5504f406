from typing import Final
from enum import StrEnum

from xrpl.models.transactions import MPTokenIssuanceCreateFlag


class TxType(StrEnum):
    MPTOKEN_ISSUANCE_CREATE    = "MPTokenIssuanceCreate"
    MPTOKEN_AUTHORIZE          = "MPTokenAuthorize"
    PAYMENT                    = "Payment"


# Every issuance this demo creates can be locked, escrowed, traded, transferred and clawed back
MPT_CAPABILITY_FLAGS: Final = (
    MPTokenIssuanceCreateFlag.TF_MPT_CAN_LOCK
    | MPTokenIssuanceCreateFlag.TF_MPT_CAN_ESCROW
    | MPTokenIssuanceCreateFlag.TF_MPT_CAN_TRADE
    | MPTokenIssuanceCreateFlag.TF_MPT_CAN_TRANSFER
    | MPTokenIssuanceCreateFlag.TF_MPT_CAN_CLAWBACK
)

TES_SUCCESS: Final = "tesSUCCESS"
TXN_NOT_FOUND: Final = "txnNotFound"

# XRPL txid = SHA512Half(HASH_PREFIX_TX || signed_bytes)
HASH_PREFIX_TX: Final = bytes.fromhex("54584E00")

GREETING: Final = "Hello, XRPL World!"

RPC_TIMEOUT = 10.0
POLL_INTERVAL = 1.0  # seconds between tx lookups while waiting for validation
POLL_ATTEMPTS = 20

__all__ = [
    "GREETING",
    "HASH_PREFIX_TX",
    "MPT_CAPABILITY_FLAGS",
    "POLL_ATTEMPTS",
    "POLL_INTERVAL",
    "RPC_TIMEOUT",
    "TES_SUCCESS",
    "TXN_NOT_FOUND",

    ######
    "TxType",
]
