from mpt_demo.ledger import SubmitResult
from mpt_demo.report import format_submit_result, print_submit_result, SEPARATOR

from conftest import EXPLORER_URL

TX_HASH = "C0FFEE" * 10 + "ABCD"


def test_with_hash() -> None:
    lines = format_submit_result("MPT Issuance", SubmitResult("tesSUCCESS", tx_hash=TX_HASH), EXPLORER_URL)
    assert lines == [
        SEPARATOR,
        "MPT Issuance - Engine Result: tesSUCCESS",
        f"MPT Issuance - Transaction Hash: {TX_HASH}",
        f"MPT Issuance - Explorer URL: https://testnet.xrpl.org/transactions/{TX_HASH}",
        SEPARATOR,
    ]


def test_without_hash() -> None:
    lines = format_submit_result("MPT Transfer", SubmitResult("terQUEUED"), EXPLORER_URL)
    assert lines == [SEPARATOR, "MPT Transfer - Engine Result: terQUEUED", SEPARATOR]


def test_print(capsys) -> None:
    print_submit_result("MPT Authorize", SubmitResult("tesSUCCESS", tx_hash=TX_HASH), EXPLORER_URL)
    out = capsys.readouterr().out
    assert "MPT Authorize - Engine Result: tesSUCCESS" in out
    assert f"{EXPLORER_URL}{TX_HASH}" in out
