import logging
from dataclasses import dataclass

from xrpl.wallet import Wallet

from mpt_demo.errors import MptDemoError

log = logging.getLogger("mpt_demo.accounts")


@dataclass(frozen=True, slots=True)
class Account:
    """A keypair and the classic address derived from it."""

    name: str
    wallet: Wallet

    @property
    def address(self) -> str:
        return self.wallet.address

    @property
    def public_key(self) -> str:
        return self.wallet.public_key

    def __str__(self):
        return f"{self.name} ({self.address})"


def initialize_account(secret: str, name: str) -> Account:
    """Derive the keypair and address for a Base58-encoded family seed.

    The signing algorithm comes from the seed encoding ("sEd..." seeds are ed25519).

    Raises:
        MptDemoError: If the secret can't be decoded.
    """
    log.debug("Initializing %s account...", name)
    try:
        wallet = Wallet.from_seed(seed=secret)
    except Exception as e:
        raise MptDemoError(f"Failed to initialize {name} account: {e}") from e

    log.info("%s address: %s", name, wallet.address)
    return Account(name=name, wallet=wallet)
