"""
Presentation state for the Wallet Holdings Dashboard
Drives the load / refresh lifecycle and publishes the result as observable slots.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Generic, List, Optional, TypeVar

from .. import config
from . import formatters, models
from .data_processor import compute_total_usd, filter_displayable
from .repository import WalletRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")

REFRESH_MIN_DELAY = config.REFRESH_MIN_DELAY
REFRESH_SETTLE_DELAY = config.REFRESH_SETTLE_DELAY
UNKNOWN_ERROR_MESSAGE = config.UNKNOWN_ERROR_MESSAGE
REFRESH_ERROR_PREFIX = config.REFRESH_ERROR_PREFIX
REFRESH_FAILED_PREFIX = config.REFRESH_FAILED_PREFIX

DIAGNOSTIC_MESSAGES = {
    "currencies": "Could not load currencies data. Check assets path.",
    "rates": "Could not load rates data. Check assets path.",
    "wallet": "Could not load wallet data. Check assets path.",
}


class StateSlot(Generic[T]):
    """A single observable value.

    Subscribers get the current value on subscription and every change after
    that. Setting an equal value replaces it silently.
    """

    def __init__(self, name: str, initial: T):
        self.name = name
        self._value = initial
        self._subscribers: List[Callable[[T], None]] = []

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        changed = value != self._value
        self._value = value
        if changed:
            self._notify()

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        self._subscribers.append(callback)
        self._call(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        for callback in list(self._subscribers):
            self._call(callback)

    def _call(self, callback: Callable[[T], None]) -> None:
        try:
            callback(self._value)
        except Exception:
            logger.exception("Subscriber of %s failed", self.name)


class WalletViewModel:
    def __init__(
        self,
        repository: Optional[WalletRepository] = None,
        refresh_delay: float = REFRESH_MIN_DELAY,
        settle_delay: float = REFRESH_SETTLE_DELAY,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        diagnose_assets: bool = config.DIAGNOSE_ASSETS,
    ):
        self.repository = repository or WalletRepository()
        self.refresh_delay = refresh_delay
        self.settle_delay = settle_delay
        self.diagnose_assets = diagnose_assets
        self._sleep = sleep
        self._load_task: Optional[asyncio.Task] = None
        self._refresh_task: Optional[asyncio.Task] = None

        self.holdings: StateSlot[List[models.HoldingView]] = StateSlot("holdings", [])
        self.is_loading: StateSlot[bool] = StateSlot("is_loading", False)
        self.is_refreshing: StateSlot[bool] = StateSlot("is_refreshing", False)
        self.error_message: StateSlot[Optional[str]] = StateSlot("error_message", None)
        self.total_usd_value: StateSlot[float] = StateSlot("total_usd_value", 0.0)

    def snapshot(self) -> Dict[str, Any]:
        return {
            "holdings": self.holdings.value,
            "is_loading": self.is_loading.value,
            "is_refreshing": self.is_refreshing.value,
            "error_message": self.error_message.value,
            "total_usd_value": self.total_usd_value.value,
        }

    async def _reload(self) -> None:
        items = await self.repository.get_wallet_items()
        holdings = filter_displayable(items)
        logger.info("Loaded %d wallet items, %d displayable", len(items), len(holdings))
        self.holdings.set(holdings)
        self.total_usd_value.set(compute_total_usd(holdings))

    async def _diagnose(self) -> None:
        if not await self.repository.get_currencies():
            self.error_message.set(DIAGNOSTIC_MESSAGES["currencies"])
        if not await self.repository.get_rates():
            self.error_message.set(DIAGNOSTIC_MESSAGES["rates"])
        if not await self.repository.get_wallet_balance():
            self.error_message.set(DIAGNOSTIC_MESSAGES["wallet"])

    async def load_wallet_data(self) -> None:
        self.is_loading.set(True)
        self.error_message.set(None)
        try:
            if self.diagnose_assets:
                await self._diagnose()
            await self._reload()
        except Exception as exc:
            logger.exception("Error in load_wallet_data")
            self.error_message.set(str(exc) or UNKNOWN_ERROR_MESSAGE)
        finally:
            self.is_loading.set(False)

    async def refresh_wallet_data(self) -> bool:
        """Reload everything while keeping the refresh indicator visible.

        Returns False without doing anything when a refresh is already running.
        """
        if self.is_refreshing.value:
            logger.info("Refresh already in progress, ignoring trigger")
            return False
        self.is_refreshing.set(True)
        self.error_message.set(None)
        try:
            await self._sleep(self.refresh_delay)
            try:
                await self._reload()
            except Exception as exc:
                logger.exception("Error refreshing wallet items")
                self.error_message.set(f"{REFRESH_FAILED_PREFIX}: {str(exc) or UNKNOWN_ERROR_MESSAGE}")
        except Exception as exc:
            logger.exception("Error in refresh_wallet_data")
            self.error_message.set(f"{REFRESH_ERROR_PREFIX}: {str(exc) or UNKNOWN_ERROR_MESSAGE}")
        finally:
            try:
                await self._sleep(self.settle_delay)
            finally:
                self.is_refreshing.set(False)
        return True

    def activate(self) -> asyncio.Task:
        self._load_task = asyncio.get_running_loop().create_task(self.load_wallet_data())
        return self._load_task

    def trigger_refresh(self) -> asyncio.Task:
        if self._refresh_task is not None and not self._refresh_task.done():
            return self._refresh_task
        self._refresh_task = asyncio.get_running_loop().create_task(self.refresh_wallet_data())
        return self._refresh_task

    format_amount = staticmethod(formatters.format_amount)
    format_usd_value = staticmethod(formatters.format_usd_value)
    format_original_rate = staticmethod(formatters.format_original_rate)
