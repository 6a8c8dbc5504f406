"""MPT lifecycle demo: issue a token, authorize a holder, pay the holder.

Each stage fetches a fresh Sequence for its sender right before building, signs,
submits, prints the node's verdict, and waits for the transaction to be validated
before the next stage reads anything that depends on it. The first failure raises
MptDemoError and ends the run.
"""
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from xrpl.models.transactions import Transaction

import mpt_demo.constants as C
from mpt_demo.accounts import Account, initialize_account
from mpt_demo.errors import MptDemoError
from mpt_demo.ledger import LedgerClient, SubmitResult
from mpt_demo.report import print_banner, print_submit_result, SEPARATOR
from mpt_demo.signing import KeypairSigner, SignedTxn, Signer
from mpt_demo.txn_factory import (
    create_mpt_payment,
    create_mptoken_authorize,
    create_mptoken_issuance_create,
    mpt_amount,
)

log = logging.getLogger("mpt_demo.demo")


@dataclass(frozen=True, slots=True)
class IssuanceSettings:
    transfer_fee: int = 100  # basis points
    asset_scale: int = 0
    maximum_amount: int = 1000
    metadata: str = "test"


@dataclass(frozen=True, slots=True)
class DemoSettings:
    rpc_url: str
    explorer_url: str
    issuer_seed: str
    recipient_seed: str
    issuance: IssuanceSettings = field(default_factory=IssuanceSettings)
    transfer_amount: str = "1"
    fee_drops: int = 12
    rpc_timeout: float = C.RPC_TIMEOUT
    poll_interval: float = C.POLL_INTERVAL
    poll_attempts: int = C.POLL_ATTEMPTS
    settle_delay: float = 0.0

    @classmethod
    def from_config(cls, conf: dict) -> "DemoSettings":
        """Build settings from the parsed config.toml dict."""
        rippled = conf["rippled"]
        validation = conf["validation"]
        return cls(
            rpc_url=rippled["rpc_url"],
            explorer_url=rippled["explorer_url"],
            issuer_seed=conf["accounts"]["issuer"]["seed"],
            recipient_seed=conf["accounts"]["recipient"]["seed"],
            issuance=IssuanceSettings(**conf["issuance"]),
            transfer_amount=str(conf["transfer"]["amount"]),
            fee_drops=int(conf["transaction"]["fee_drops"]),
            rpc_timeout=float(rippled["rpc_timeout"]),
            poll_interval=float(validation["poll_interval"]),
            poll_attempts=int(validation["poll_attempts"]),
            settle_delay=float(validation["settle_delay"]),
        )


@dataclass(slots=True)
class StageResult:
    name: str
    signed: SignedTxn
    submit: SubmitResult
    validated: dict[str, Any]

    @property
    def tx_hash(self) -> str:
        return self.signed.tx_hash

    @property
    def meta_result(self) -> str | None:
        return (self.validated.get("meta") or {}).get("TransactionResult")


@dataclass(slots=True)
class DemoResult:
    mpt_issuance_id: str
    stages: list[StageResult]
    holder_balance_before: int
    holder_balance_after: int

    @property
    def tx_hashes(self) -> list[str]:
        return [s.tx_hash for s in self.stages]


def extract_issuance_id(tx_result: dict[str, Any]) -> str:
    """Pull the MPT issuance ID out of a validated MPTokenIssuanceCreate `tx` result."""
    meta = tx_result.get("meta")
    if not isinstance(meta, dict):
        raise MptDemoError("Transaction metadata not found")
    mpt_issuance_id = meta.get("mpt_issuance_id")
    if not mpt_issuance_id:
        raise MptDemoError("Transaction metadata did not contain issuance ID")
    return mpt_issuance_id


class MptDemo:
    def __init__(
        self,
        ledger: LedgerClient,
        settings: DemoSettings,
        issuer: Account,
        recipient: Account,
        *,
        signer: Signer | None = None,
    ):
        self.ledger = ledger
        self.settings = settings
        self.issuer = issuer
        self.recipient = recipient
        self.signer = signer or KeypairSigner()

    async def _run_stage(self, name: str, account: Account, build: Callable[[int], Transaction]) -> StageResult:
        log.info("%s: building from %s", name, account)
        sequence = await self.ledger.account_sequence(account.address)
        txn = build(sequence)
        signed = self.signer.sign(txn, account.wallet)
        submit_result = await self.ledger.submit(signed)
        print_submit_result(name, submit_result, self.settings.explorer_url)

        if submit_result.engine_result != C.TES_SUCCESS:
            log.warning("%s engine result %s: %s", name, submit_result.engine_result, submit_result.engine_result_message)

        print(f"Waiting for {name} {signed.tx_hash} to be validated...")
        validated = await self.ledger.wait_for_validation(signed.tx_hash)
        stage = StageResult(name=name, signed=signed, submit=submit_result, validated=validated)
        if stage.meta_result != C.TES_SUCCESS:
            log.warning("%s validated with %s", name, stage.meta_result)
        else:
            log.info("%s validated in ledger %s", name, validated.get("ledger_index"))
        return stage

    async def create_issuance(self) -> tuple[str, StageResult]:
        """Step 1: create the issuance and return its ID from the validated metadata."""
        print("\n--- Step 1: Creating MPT Issuance ---")
        issuance = self.settings.issuance
        stage = await self._run_stage(
            "MPT Issuance",
            self.issuer,
            lambda seq: create_mptoken_issuance_create(
                self.issuer.address,
                seq,
                self.settings.fee_drops,
                transfer_fee=issuance.transfer_fee,
                asset_scale=issuance.asset_scale,
                maximum_amount=issuance.maximum_amount,
                metadata=issuance.metadata,
            ),
        )
        try:
            mpt_issuance_id = extract_issuance_id(stage.validated)
        except MptDemoError as e:
            raise MptDemoError(f"Failed to retrieve MPT Issuance ID: {e}") from e

        print(f"MpTokenIssuanceId: {mpt_issuance_id}")
        print(SEPARATOR)
        return mpt_issuance_id, stage

    async def authorize_holder(self, mpt_issuance_id: str) -> StageResult:
        """Step 2: the recipient opts in to holding the issuance."""
        print("\n--- Step 2: Authorizing MPT Holder ---")
        return await self._run_stage(
            "MPT Authorize",
            self.recipient,
            lambda seq: create_mptoken_authorize(
                self.recipient.address,
                seq,
                self.settings.fee_drops,
                mpt_issuance_id=mpt_issuance_id,
            ),
        )

    async def transfer(self, mpt_issuance_id: str) -> StageResult:
        """Step 3: pay the recipient `transfer_amount` units from the issuer."""
        print("\n--- Step 3: Transferring MPT Tokens ---")

        def build(seq: int) -> Transaction:
            payment = create_mpt_payment(
                self.issuer.address,
                seq,
                self.settings.fee_drops,
                destination=self.recipient.address,
                mpt_issuance_id=mpt_issuance_id,
                value=self.settings.transfer_amount,
            )
            amount = mpt_amount(payment)
            log.debug("Paying %s of %s to %s", amount.value, amount.mpt_issuance_id, self.recipient.address)
            return payment

        return await self._run_stage("MPT Transfer", self.issuer, build)

    async def run(self) -> DemoResult:
        mpt_issuance_id, issuance_stage = await self.create_issuance()
        authorize_stage = await self.authorize_holder(mpt_issuance_id)

        balance_before = await self.ledger.mpt_balance(self.recipient.address, mpt_issuance_id)
        transfer_stage = await self.transfer(mpt_issuance_id)
        balance_after = await self.ledger.mpt_balance(self.recipient.address, mpt_issuance_id)
        print(f"{self.recipient.name} MPT balance: {balance_before} -> {balance_after}")

        return DemoResult(
            mpt_issuance_id=mpt_issuance_id,
            stages=[issuance_stage, authorize_stage, transfer_stage],
            holder_balance_before=balance_before,
            holder_balance_after=balance_after,
        )


async def run_demo(settings: DemoSettings, *, ledger: LedgerClient | None = None) -> DemoResult:
    print_banner("XRPL MPT (Multi-Purpose Token) Demo")
    print()

    if ledger is None:
        ledger = LedgerClient.from_url(
            settings.rpc_url,
            rpc_timeout=settings.rpc_timeout,
            poll_interval=settings.poll_interval,
            poll_attempts=settings.poll_attempts,
            settle_delay=settings.settle_delay,
        )

    issuer = initialize_account(settings.issuer_seed, "Issuer")
    recipient = initialize_account(settings.recipient_seed, "Recipient")

    result = await MptDemo(ledger, settings, issuer, recipient).run()

    print()
    print_banner("Demo completed successfully!")
    return result
