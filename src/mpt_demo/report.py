"""Console output for the demo run."""
from mpt_demo.ledger import SubmitResult

SEPARATOR = "--------------------------------"
BANNER = "========================================"


def explorer_link(explorer_url: str, tx_hash: str) -> str:
    return f"{explorer_url}{tx_hash}"


def format_submit_result(label: str, result: SubmitResult, explorer_url: str) -> list[str]:
    lines = [SEPARATOR, f"{label} - Engine Result: {result.engine_result}"]
    if result.tx_hash:
        lines.append(f"{label} - Transaction Hash: {result.tx_hash}")
        lines.append(f"{label} - Explorer URL: {explorer_link(explorer_url, result.tx_hash)}")
    lines.append(SEPARATOR)
    return lines


def print_submit_result(label: str, result: SubmitResult, explorer_url: str) -> None:
    for line in format_submit_result(label, result, explorer_url):
        print(line)


def print_banner(*lines: str) -> None:
    print(BANNER)
    for line in lines:
        print(line)
    print(BANNER)
