"""Single-signing of transaction models.

The signer is an explicit seam between building a transaction and submitting it:
`sign(txn, wallet)` returns the signed blob plus the hash the ledger will assign,
computed locally so callers can look the transaction up without trusting the submit
response.
"""
import hashlib
import logging
from dataclasses import dataclass
from typing import Protocol

from xrpl.core.binarycodec import encode, encode_for_signing
from xrpl.core.keypairs import sign
from xrpl.models.transactions import Transaction
from xrpl.wallet import Wallet

from mpt_demo.constants import HASH_PREFIX_TX

log = logging.getLogger("mpt_demo.signing")


@dataclass(frozen=True, slots=True)
class SignedTxn:
    tx_hash: str
    tx_blob: str
    tx_json: dict

    @property
    def transaction_type(self) -> str | None:
        return self.tx_json.get("TransactionType")

    @property
    def sequence(self) -> int | None:
        return self.tx_json.get("Sequence")


class Signer(Protocol):
    def sign(self, txn: Transaction, wallet: Wallet) -> SignedTxn: ...


def _sha512half(b: bytes) -> bytes:
    return hashlib.sha512(b).digest()[:32]


def txid_from_signed_blob_hex(signed_blob_hex: str) -> str:
    return _sha512half(HASH_PREFIX_TX + bytes.fromhex(signed_blob_hex)).hex().upper()


class KeypairSigner:
    """Signs with the wallet's private key using xrpl-py's binary codec and keypairs."""

    def sign(self, txn: Transaction, wallet: Wallet) -> SignedTxn:
        tx = txn.to_xrpl()
        if tx.get("Flags") == 0:
            del tx["Flags"]

        tx["SigningPubKey"] = wallet.public_key

        signing_blob = encode_for_signing(tx)
        to_sign = signing_blob if isinstance(signing_blob, str) else signing_blob.hex()
        tx["TxnSignature"] = sign(to_sign, wallet.private_key)
        signed_blob_hex = encode(tx)
        tx_hash = txid_from_signed_blob_hex(signed_blob_hex)
        tx["hash"] = tx_hash

        log.debug("Signed %s seq=%s hash=%s", tx.get("TransactionType"), tx.get("Sequence"), tx_hash)
        return SignedTxn(tx_hash=tx_hash, tx_blob=signed_blob_hex, tx_json=tx)
