"""
Wallet repository for the Wallet Holdings Dashboard
Loads the three bundled documents and produces the joined holdings list.
"""

import logging
from typing import List, Optional

from .. import config
from . import models
from .asset_loader import AssetStore
from .data_processor import join_holdings, parse_balances, parse_currencies, parse_rate_tiers

logger = logging.getLogger(__name__)

CURRENCIES_FILE = config.CURRENCIES_FILE
RATES_FILE = config.RATES_FILE
WALLET_FILE = config.WALLET_FILE


class WalletRepository:
    def __init__(self, store: Optional[AssetStore] = None):
        self.store = store or AssetStore()

    async def _read(self, name: str) -> str:
        text = await self.store.read_text_async(name)
        logger.debug("%s loaded: %s...", name, text[:100])
        return text

    async def get_currencies(self) -> List[models.CurrencyRecord]:
        currencies = parse_currencies(await self._read(CURRENCIES_FILE))
        logger.info("Found %d currencies", len(currencies))
        return currencies

    async def get_rates(self) -> List[models.RateTier]:
        tiers = parse_rate_tiers(await self._read(RATES_FILE))
        logger.info("Found %d rate tiers", len(tiers))
        return tiers

    async def get_wallet_balance(self) -> List[models.BalanceRecord]:
        balances = parse_balances(await self._read(WALLET_FILE))
        logger.info("Found %d wallet balances", len(balances))
        return balances

    async def get_wallet_items(self) -> List[models.HoldingView]:
        currencies = await self.get_currencies()
        tiers = await self.get_rates()
        balances = await self.get_wallet_balance()
        holdings = join_holdings(currencies, tiers, balances)
        logger.info("Joined %d of %d balances into holdings", len(holdings), len(balances))
        return holdings
