from collections.abc import Callable
from typing import Any
import logging

from xrpl.models.amounts import MPTAmount
from xrpl.models.transactions import (
    MPTokenAuthorize,
    MPTokenIssuanceCreate,
    Payment,
    Transaction,
)

from mpt_demo.constants import MPT_CAPABILITY_FLAGS, TxType

log = logging.getLogger("mpt_demo.txn")


# Builders take the caller's fields and return the type-specific part of the txn in
# XRPL JSON form. Account/Fee/Sequence are filled in by build_transaction().


def _build_mptoken_issuance_create(fields: dict) -> dict:
    """Build an MPTokenIssuanceCreate with every capability flag enabled."""
    metadata_hex = fields["metadata"].encode("utf-8").hex().upper()
    return {
        "TransactionType": "MPTokenIssuanceCreate",
        "TransferFee": int(fields["transfer_fee"]),
        "AssetScale": int(fields["asset_scale"]),
        "MaximumAmount": str(fields["maximum_amount"]),
        "MPTokenMetadata": metadata_hex,
        "Flags": int(MPT_CAPABILITY_FLAGS),
    }


def _build_mptoken_authorize(fields: dict) -> dict:
    """Build an MPTokenAuthorize; the signing Account opts in to hold the issuance."""
    return {
        "TransactionType": "MPTokenAuthorize",
        "MPTokenIssuanceID": fields["mpt_issuance_id"],
    }


def _build_mpt_payment(fields: dict) -> dict:
    """Build a Payment denominated in an MPT issuance."""
    return {
        "TransactionType": "Payment",
        "Destination": fields["destination"],
        "Amount": {
            "mpt_issuance_id": fields["mpt_issuance_id"],
            "value": str(fields["value"]),
        },
    }


_BUILDERS: dict[str, tuple[Callable[[dict], dict], type[Transaction]]] = {
    TxType.MPTOKEN_ISSUANCE_CREATE: (_build_mptoken_issuance_create, MPTokenIssuanceCreate),
    TxType.MPTOKEN_AUTHORIZE: (_build_mptoken_authorize, MPTokenAuthorize),
    TxType.PAYMENT: (_build_mpt_payment, Payment),
}


# =============================================================================
# Public API
# =============================================================================


def build_transaction(txn_type: str, *, account: str, sequence: int, fee: int | str, **fields: Any) -> Transaction:
    """Build a fully populated, unsigned transaction model.

    Args:
        txn_type: One of the registered transaction type names.
        account: Sending account's classic address.
        sequence: Account sequence fetched from the ledger for this txn.
        fee: Fee in drops.
        **fields: Type-specific inputs consumed by the builder.

    Returns:
        The xrpl-py model for txn_type.

    Raises:
        ValueError: If txn_type is not supported.
    """
    builder_spec = _BUILDERS.get(txn_type)
    if not builder_spec:
        raise ValueError(f"Unsupported txn_type: {txn_type}")

    builder_fn, model_cls = builder_spec
    composed = builder_fn(fields)
    composed.update(
        {
            "Account": account,
            "Fee": str(fee),
            "Sequence": sequence,
        }
    )
    log.debug("Transaction dict for %s: %s", txn_type, composed)
    return model_cls.from_xrpl(composed)


def create_mptoken_issuance_create(
    account: str,
    sequence: int,
    fee: int | str,
    *,
    transfer_fee: int,
    asset_scale: int,
    maximum_amount: int | str,
    metadata: str,
) -> MPTokenIssuanceCreate:
    """Create an MPTokenIssuanceCreate for the given issuer."""
    return build_transaction(
        TxType.MPTOKEN_ISSUANCE_CREATE,
        account=account,
        sequence=sequence,
        fee=fee,
        transfer_fee=transfer_fee,
        asset_scale=asset_scale,
        maximum_amount=maximum_amount,
        metadata=metadata,
    )


def create_mptoken_authorize(account: str, sequence: int, fee: int | str, *, mpt_issuance_id: str) -> MPTokenAuthorize:
    """Create an MPTokenAuthorize for a holder."""
    return build_transaction(
        TxType.MPTOKEN_AUTHORIZE,
        account=account,
        sequence=sequence,
        fee=fee,
        mpt_issuance_id=mpt_issuance_id,
    )


def create_mpt_payment(
    account: str,
    sequence: int,
    fee: int | str,
    *,
    destination: str,
    mpt_issuance_id: str,
    value: str,
) -> Payment:
    """Create a Payment of `value` units of an MPT issuance."""
    return build_transaction(
        TxType.PAYMENT,
        account=account,
        sequence=sequence,
        fee=fee,
        destination=destination,
        mpt_issuance_id=mpt_issuance_id,
        value=value,
    )


def mpt_amount(txn: Payment) -> MPTAmount:
    """Return the MPT amount of a payment, failing on XRP or IOU amounts."""
    if not isinstance(txn.amount, MPTAmount):
        raise ValueError(f"Payment amount is not an MPT amount: {txn.amount!r}")
    return txn.amount
