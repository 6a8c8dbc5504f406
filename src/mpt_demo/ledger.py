import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Protocol

from xrpl.asyncio.clients import AsyncJsonRpcClient
from xrpl.models.requests import (
    AccountInfo,
    AccountObjects,
    AccountObjectType,
    SubmitOnly,
    Tx,
)
from xrpl.models.requests.request import Request
from xrpl.models.response import Response

import mpt_demo.constants as C
from mpt_demo.errors import MptDemoError
from mpt_demo.signing import SignedTxn

log = logging.getLogger("mpt_demo.ledger")


class RpcClient(Protocol):
    async def request(self, request: Request) -> Response: ...


@dataclass(frozen=True, slots=True)
class SubmitResult:
    """The node's immediate (pre-consensus) verdict on a submitted blob."""

    engine_result: str | None
    engine_result_message: str | None = None
    tx_hash: str | None = None

    @classmethod
    def from_submit_result(cls, result: dict) -> "SubmitResult":
        return cls(
            engine_result=result.get("engine_result"),
            engine_result_message=result.get("engine_result_message"),
            tx_hash=(result.get("tx_json") or {}).get("hash"),
        )


class LedgerClient:
    """The handful of JSON-RPC calls the token lifecycle needs."""

    def __init__(
        self,
        client: RpcClient,
        *,
        rpc_timeout: float = C.RPC_TIMEOUT,
        poll_interval: float = C.POLL_INTERVAL,
        poll_attempts: int = C.POLL_ATTEMPTS,
        settle_delay: float = 0.0,
    ):
        self.client = client
        self.rpc_timeout = rpc_timeout
        self.poll_interval = poll_interval
        self.poll_attempts = poll_attempts
        self.settle_delay = settle_delay

    @classmethod
    def from_url(cls, url: str, **kwargs: Any) -> "LedgerClient":
        log.info("Connecting to %s", url)
        return cls(AsyncJsonRpcClient(url), **kwargs)

    async def _rpc(self, req: Request) -> Response:
        return await asyncio.wait_for(self.client.request(req), timeout=self.rpc_timeout)

    async def account_sequence(self, address: str) -> int:
        """Current Sequence of an account from the open ledger."""
        try:
            r = await self._rpc(AccountInfo(account=address, ledger_index="current", strict=True))
        except Exception as e:
            msg = f"Error getting account info for {address}: {e.__class__.__name__} {e}"
            log.error(msg)
            raise MptDemoError(msg) from e

        if not r.is_successful():
            msg = f"Error getting account info for {address}: {r.result.get('error')}"
            log.error(msg)
            raise MptDemoError(msg)

        seq = r.result["account_data"]["Sequence"]
        log.debug("acct %s seq=%s", address, seq)
        return seq

    async def submit(self, signed: SignedTxn) -> SubmitResult:
        try:
            r = await self._rpc(SubmitOnly(tx_blob=signed.tx_blob))
        except Exception as e:
            msg = f"Failed to submit {signed.transaction_type} {signed.tx_hash}: {e.__class__.__name__} {e}"
            log.error(msg)
            raise MptDemoError(msg) from e

        if not r.is_successful():
            msg = f"Submit of {signed.transaction_type} {signed.tx_hash} rejected: {r.result.get('error')}"
            log.error(msg)
            raise MptDemoError(msg)

        result = SubmitResult.from_submit_result(r.result)
        if result.tx_hash and result.tx_hash != signed.tx_hash:
            log.warning("Server txid %s differs from local txid %s", result.tx_hash, signed.tx_hash)
        log.debug("submit %s seq=%s -> %s", signed.tx_hash, signed.sequence, result.engine_result)
        return result

    async def tx(self, tx_hash: str) -> dict[str, Any] | None:
        """Look a transaction up by hash. None if the server hasn't seen it (yet)."""
        try:
            r = await self._rpc(Tx(transaction=tx_hash))
        except Exception as e:
            msg = f"Error getting transaction {tx_hash}: {e.__class__.__name__} {e}"
            log.error(msg)
            raise MptDemoError(msg) from e

        if r.is_successful():
            return r.result
        if r.result.get("error") == C.TXN_NOT_FOUND:
            return None
        msg = f"Error getting transaction {tx_hash}: {r.result.get('error')}"
        log.error(msg)
        raise MptDemoError(msg)

    async def wait_for_validation(self, tx_hash: str) -> dict[str, Any]:
        """Poll `tx` until the transaction is in a validated ledger.

        Returns:
            The validated `tx` result, including `meta`.

        Raises:
            MptDemoError: If it isn't validated after `poll_attempts` lookups.
        """
        if self.settle_delay:
            await asyncio.sleep(self.settle_delay)

        for attempt in range(1, self.poll_attempts + 1):
            result = await self.tx(tx_hash)
            if result is not None and result.get("validated"):
                log.debug("%s validated in ledger %s (attempt %s/%s)", tx_hash, result.get("ledger_index"), attempt, self.poll_attempts)
                return result
            if attempt < self.poll_attempts:
                log.debug("%s not validated yet (attempt %s/%s), retrying in %ss", tx_hash, attempt, self.poll_attempts, self.poll_interval)
                await asyncio.sleep(self.poll_interval)

        raise MptDemoError(f"Transaction {tx_hash} not validated after {self.poll_attempts} attempts")

    async def mpt_balance(self, address: str, mpt_issuance_id: str) -> int:
        """Units of an issuance held by `address`; 0 if it holds no MPToken for it."""
        try:
            r = await self._rpc(
                AccountObjects(account=address, type=AccountObjectType.MPTOKEN, ledger_index="validated")
            )
        except Exception as e:
            msg = f"Error getting MPT balance for {address}: {e.__class__.__name__} {e}"
            log.error(msg)
            raise MptDemoError(msg) from e

        if not r.is_successful():
            msg = f"Error getting MPT balance for {address}: {r.result.get('error')}"
            log.error(msg)
            raise MptDemoError(msg)

        for obj in r.result.get("account_objects", []):
            if obj.get("MPTokenIssuanceID") == mpt_issuance_id:
                return int(obj.get("MPTAmount", "0"))
        return 0
