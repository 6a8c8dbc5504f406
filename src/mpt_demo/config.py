import os
import tomllib
from pathlib import Path

pkg_root = Path(__file__).parent
config_file = pkg_root / "config.toml"

cfg = tomllib.loads(config_file.read_text())

# Environment wins over the packaged defaults
cfg["rippled"]["rpc_url"] = os.getenv("RPC_URL", cfg["rippled"]["rpc_url"])
cfg["accounts"]["issuer"]["seed"] = os.getenv("ISSUER_SEED", cfg["accounts"]["issuer"]["seed"])
cfg["accounts"]["recipient"]["seed"] = os.getenv("RECIPIENT_SEED", cfg["accounts"]["recipient"]["seed"])
