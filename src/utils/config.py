# environment driven settings, read once at startup
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from ledger.abi import DEFAULT_CONTRACT_ADDRESS

ENV_FILE = ".env"


def _optional_float(name: str) -> Optional[float]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


@dataclass(frozen=True)
class Settings:
    """
    Fields:
      - rpc_url: wallet provider endpoint, None means no provider present
      - contract_address: deployed ProductRegistry
      - receipt_timeout: seconds to wait for finalization, None waits forever
      - poll_interval: seconds between receipt polls
      - account_poll_interval: seconds between wallet account checks
      - debug / log_file: logging switches
    """

    rpc_url: Optional[str] = None
    contract_address: str = DEFAULT_CONTRACT_ADDRESS
    receipt_timeout: Optional[float] = None
    poll_interval: float = 0.5
    account_poll_interval: float = 2.0
    debug: bool = False
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls, env_file: Optional[str] = ENV_FILE) -> "Settings":
        if env_file and os.path.exists(env_file):
            load_dotenv(env_file)

        return cls(
            rpc_url=os.getenv("REGISTRY_RPC_URL", "").strip() or None,
            contract_address=os.getenv(
                "REGISTRY_CONTRACT_ADDRESS", DEFAULT_CONTRACT_ADDRESS
            ).strip(),
            receipt_timeout=_optional_float("REGISTRY_RECEIPT_TIMEOUT"),
            poll_interval=_optional_float("REGISTRY_POLL_INTERVAL") or 0.5,
            account_poll_interval=_optional_float("REGISTRY_ACCOUNT_POLL_INTERVAL")
            or 2.0,
            debug=bool(os.getenv("REGISTRY_DEBUG") or os.getenv("DEBUG")),
            log_file=os.getenv("REGISTRY_LOG_FILE") or None,
        )
