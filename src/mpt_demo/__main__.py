import argparse
import asyncio
import logging

import uvicorn

from mpt_demo.config import cfg
from mpt_demo.demo import DemoSettings, run_demo
from mpt_demo.logging_config import setup_logging

log = logging.getLogger("mpt_demo")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="mpt-demo", description="XRPL Multi-Purpose Token lifecycle demo.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    sub = parser.add_subparsers(dest="command")
    sub.add_parser("run", help="Issue, authorize and transfer an MPT on the configured ledger (default).")
    serve = sub.add_parser("serve", help="Serve the greeting endpoint.")
    serve.add_argument("--host", default=cfg["server"]["host"])
    serve.add_argument("--port", type=int, default=cfg["server"]["port"])
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging("DEBUG" if args.verbose else None)
    if args.command == "serve":
        log.info("Serving on %s:%s", args.host, args.port)
        uvicorn.run("mpt_demo.app:app", host=args.host, port=args.port, log_config=None)
        return
    asyncio.run(run_demo(DemoSettings.from_config(cfg)))


if __name__ == "__main__":
    main()
