"""
Shared fixtures: an in-memory stand-in for rippled's JSON-RPC interface.

FakeRippled answers the four requests the demo makes (account_info, submit,
tx, account_objects) from dicts, decoding submitted blobs with xrpl-py's binary
codec so the assertions see exactly what would have gone over the wire.
"""

import pytest
from xrpl.core.addresscodec import decode_classic_address
from xrpl.core.binarycodec import decode
from xrpl.models.response import Response, ResponseStatus

from mpt_demo.demo import DemoSettings
from mpt_demo.ledger import LedgerClient
from mpt_demo.signing import txid_from_signed_blob_hex

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

ISSUER_SEED = "sEd7HFg4UKpa4UA6CJAxNLZcMF4kYbE"
RECIPIENT_SEED = "sEdTKevpT15jdZBRgLcT3Ye8rvkrY8P"
EXPLORER_URL = "https://testnet.xrpl.org/transactions/"
SAMPLE_MPT_ID = "0000000A" + "AB" * 20


def _ok(result: dict) -> Response:
    return Response(status=ResponseStatus.SUCCESS, result=result)


def _err(error: str) -> Response:
    return Response(status=ResponseStatus.ERROR, result={"error": error})


def issuance_id_for(account: str, sequence: int) -> str:
    """Issuance IDs are the creating Sequence followed by the issuer's AccountID."""
    return f"{sequence:08X}" + decode_classic_address(account).hex().upper()


class FakeRippled:
    def __init__(self, start_sequence: int = 10) -> None:
        self.start_sequence = start_sequence
        self.sequences: dict[str, int] = {}
        self.requests: list = []
        self.submitted: list[dict] = []
        self.results: dict[str, dict] = {}
        self.holdings: dict[str, dict[str, int]] = {}
        self.ledger_index = 100

        # Knobs for failure cases
        self.unfunded: set[str] = set()
        self.include_meta = True
        self.include_issuance_id = True
        self.not_found_polls = 0
        self.never_validate = False
        self.submit_error: str | None = None
        self.tx_error: str | None = None
        self.engine_result = "tesSUCCESS"
        self._polls: dict[str, int] = {}

    async def request(self, req):
        self.requests.append(req)
        handler = getattr(self, f"_{req.method.value}")
        return handler(req)

    @property
    def methods(self) -> list[str]:
        return [str(r.method.value) for r in self.requests]

    def _account_info(self, req):
        if req.account in self.unfunded:
            return _err("actNotFound")
        seq = self.sequences.setdefault(req.account, self.start_sequence)
        return _ok({"account_data": {"Account": req.account, "Sequence": seq}})

    def _submit(self, req):
        if self.submit_error:
            return _err(self.submit_error)
        tx = decode(req.tx_blob)
        tx_hash = txid_from_signed_blob_hex(req.tx_blob)
        tx["hash"] = tx_hash
        self.submitted.append(tx)
        self.sequences[tx["Account"]] = tx["Sequence"] + 1
        self.ledger_index += 1

        meta = {"TransactionResult": "tesSUCCESS"}
        if tx["TransactionType"] == "MPTokenIssuanceCreate" and self.include_issuance_id:
            meta["mpt_issuance_id"] = issuance_id_for(tx["Account"], tx["Sequence"])
        elif tx["TransactionType"] == "MPTokenAuthorize":
            self.holdings.setdefault(tx["Account"], {})[tx["MPTokenIssuanceID"]] = 0
        elif tx["TransactionType"] == "Payment":
            amount = tx["Amount"]
            held = self.holdings.setdefault(tx["Destination"], {})
            held[amount["mpt_issuance_id"]] = held.get(amount["mpt_issuance_id"], 0) + int(amount["value"])

        result = {"hash": tx_hash, "ledger_index": self.ledger_index, "validated": True, **tx}
        if self.include_meta:
            result["meta"] = meta
        self.results[tx_hash] = result

        return _ok(
            {
                "engine_result": self.engine_result,
                "engine_result_message": "The transaction was applied.",
                "tx_json": {**tx, "hash": tx_hash},
                "accepted": True,
            }
        )

    def _tx(self, req):
        if self.tx_error:
            return _err(self.tx_error)
        polls = self._polls[req.transaction] = self._polls.get(req.transaction, 0) + 1
        if req.transaction not in self.results or polls <= self.not_found_polls:
            return _err("txnNotFound")
        result = self.results[req.transaction]
        if self.never_validate:
            return _ok({**result, "validated": False})
        return _ok(result)

    def _account_objects(self, req):
        held = self.holdings.get(req.account, {})
        objects = [
            {
                "LedgerEntryType": "MPToken",
                "Account": req.account,
                "MPTokenIssuanceID": mpt_id,
                **({"MPTAmount": str(amount)} if amount else {}),
            }
            for mpt_id, amount in held.items()
        ]
        return _ok({"account": req.account, "account_objects": objects})


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def rippled() -> FakeRippled:
    return FakeRippled()


@pytest.fixture
def ledger(rippled: FakeRippled) -> LedgerClient:
    return LedgerClient(rippled, poll_interval=0, poll_attempts=3)


@pytest.fixture
def settings() -> DemoSettings:
    return DemoSettings(
        rpc_url="http://rippled.invalid:5005",
        explorer_url=EXPLORER_URL,
        issuer_seed=ISSUER_SEED,
        recipient_seed=RECIPIENT_SEED,
        poll_interval=0,
        poll_attempts=3,
    )
