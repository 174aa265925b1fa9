# engine/state.py
from __future__ import annotations

import threading
from datetime import date
from typing import Any, Callable, Optional

from ..config import PlannerSettings, get_settings
from ..data_model import store as ops
from ..data_model.store import RecordStore
from ..log import get_logger
from .history import record_snapshot
from .metrics import DashboardSummary, store_net_worth, summarize
from .sanitize import period_key, to_safe_number
from .storage import load_state, save_state, store_from_payload, store_to_payload

logger = get_logger(__name__)

ONBOARDING_STEPS = 4


class PlannerState:
    """Holds the current record store and mirrors it to the JSON slot.

    Every accepted mutation runs the net worth snapshot rule and writes the
    full state. Writes are best-effort.
    """

    def __init__(
        self,
        storage_path: Optional[str] = None,
        settings: Optional[PlannerSettings] = None,
        clock: Callable[[], date] = date.today,
    ):
        self.settings = settings or get_settings()
        self.storage_path = storage_path or self.settings.storage_path
        self.clock = clock
        self._lock = threading.RLock()
        self.store: RecordStore = store_from_payload(load_state(self.storage_path))
        self.withdrawal_rate = self.settings.withdrawal_rate
        self.onboarding_step = 1
        logger.info(
            "state_loaded",
            path=self.storage_path,
            items=len(self.store.items),
            goals=len(self.store.goals),
            history=len(self.store.net_worth_history),
        )

    def apply(self, mutation: Callable[..., RecordStore], *args: Any, **kwargs: Any) -> RecordStore:
        """Run a pure store mutation and commit its result."""
        with self._lock:
            self.commit(mutation(self.store, *args, **kwargs))
            return self.store

    def commit(self, new_store: RecordStore) -> None:
        with self._lock:
            if new_store is self.store:
                return
            previous_net_worth = store_net_worth(self.store)
            self.store = new_store
            if store_net_worth(new_store) != previous_net_worth:
                self._record_net_worth()
            self._save()

    def snapshot_net_worth(self) -> None:
        """Manual snapshot; same overwrite-or-append rule as the automatic one."""
        with self._lock:
            before = self.store
            self._record_net_worth()
            if self.store is not before:
                self._save()

    def _record_net_worth(self) -> None:
        history = record_snapshot(
            self.store.net_worth_history,
            period_key(self.clock()),
            store_net_worth(self.store),
            limit=self.settings.history_limit,
        )
        self.store = ops.set_history(self.store, history)

    def _save(self) -> None:
        save_state(self.storage_path, store_to_payload(self.store))

    def set_withdrawal_rate(self, rate: Any) -> None:
        self.withdrawal_rate = max(0.0, to_safe_number(rate))

    def summary(self) -> DashboardSummary:
        return summarize(
            self.store,
            self.withdrawal_rate,
            self.clock(),
            self.settings.default_goal_horizon_months,
        )

    # onboarding wizard

    def next_step(self) -> int:
        self.onboarding_step = min(ONBOARDING_STEPS, self.onboarding_step + 1)
        return self.onboarding_step

    def previous_step(self) -> int:
        self.onboarding_step = max(1, self.onboarding_step - 1)
        return self.onboarding_step

    def finish_onboarding(self) -> None:
        self.apply(ops.set_onboarding_done, True)
        self.onboarding_step = 1

    def restart_onboarding(self) -> None:
        self.apply(ops.set_onboarding_done, False)
        self.onboarding_step = 1
