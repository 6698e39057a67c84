"""
Signing key resolution for inachus.

The key used for contract transactions comes from the ``private_key``
field of ``config.json`` or, failing that, from ``PRIVATE_KEY`` in
``<home>/.env`` or the process environment.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv, set_key
from eth_account import Account
from eth_account.signers.local import LocalAccount

# Default home directory, relative to the working directory
INACHUS_DIR = Path(".inachus")
ENV_FILENAME = ".env"
ENV_KEY = "PRIVATE_KEY"


def save_private_key(private_key: str, env_path: Path) -> Path:
    """
    Write ``PRIVATE_KEY`` into ``env_path``, keeping its other entries.

    The file is made owner-only on POSIX systems.
    """
    env_path.parent.mkdir(parents=True, exist_ok=True)
    env_path.touch(exist_ok=True)
    set_key(str(env_path), ENV_KEY, private_key, quote_mode="never")
    if os.name != "nt":
        env_path.chmod(0o600)
    return env_path


def load_private_key(env_path: Optional[Path] = None) -> Optional[str]:
    """
    Resolve the signing key.

    Values already present in the environment win over the ``.env`` file.

    Returns:
        0x-prefixed hex key, or None for a read-only session
    """
    load_dotenv(env_path or INACHUS_DIR / ENV_FILENAME, override=False)

    private_key = os.environ.get(ENV_KEY, "").strip()
    if not private_key:
        return None
    return private_key if private_key.startswith("0x") else f"0x{private_key}"


def get_account(private_key: str) -> LocalAccount:
    return Account.from_key(private_key)


def get_address(private_key: str) -> str:
    return get_account(private_key).address
