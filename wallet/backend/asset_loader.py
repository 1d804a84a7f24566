"""
Asset loading for the Wallet Holdings Dashboard
Resolves logical asset names to the text of the bundled JSON documents.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Union

from .. import config

logger = logging.getLogger(__name__)


class AssetStore:
    """Read-only view over a directory of bundled assets.

    Unreadable assets come back as an empty string so callers treat them as
    "no data" instead of handling I/O errors.
    """

    def __init__(self, root: Optional[Union[str, Path]] = None):
        self.root = Path(root) if root is not None else config.ASSET_DIR

    def resolve(self, name: str) -> Optional[Path]:
        root = self.root.resolve()
        path = (root / name).resolve()
        if path != root and root not in path.parents:
            return None
        return path

    def read_text(self, name: str) -> str:
        logger.debug("Loading asset from: %s", name)
        path = self.resolve(name)
        if path is None:
            logger.error("Asset %s resolves outside %s", name, self.root)
            return ""
        try:
            with open(path, encoding="utf-8", errors="replace") as handle:
                return handle.read()
        except OSError:
            logger.exception("Error reading asset: %s", name)
            return ""

    async def read_text_async(self, name: str) -> str:
        return await asyncio.to_thread(self.read_text, name)
