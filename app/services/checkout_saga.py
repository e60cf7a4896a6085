"""
Checkout saga - zamowienie bez jednej wspolnej transakcji.

Kroki wykonywane sa po kolei, kazdy wpisuje sie do saga_log:

    FetchCart -> SnapshotItems -> PersistOrder -> ClearCart -> NotifyAdmin

- krok krytyczny (critical=True) ktory sie wywali: kompensujemy juz wykonane
  kroki w odwrotnej kolejnosci i rzucamy oryginalny wyjatek dalej
- krok niekrytyczny: blad idzie do logow i saga leci dalej,
  zamowienie zapisane wczesniej zostaje
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable

from app.utils.logging import get_logger

logger = get_logger(__name__)

EXECUTING = "EXECUTING"
COMPLETED = "COMPLETED"
FAILED = "FAILED"
COMPENSATED = "COMPENSATED"
COMPENSATION_FAILED = "COMPENSATION_FAILED"


@dataclass
class SagaStep:
    name: str
    action: Callable[[dict], Any]
    compensate: Callable[[dict], Any] | None = None
    critical: bool = True


@dataclass
class CheckoutSaga:
    steps: list[SagaStep]
    log: list[dict] = field(default_factory=list)

    def _entry(self, step: int, action: str) -> dict:
        entry = {
            "step": step,
            "action": action,
            "status": EXECUTING,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        self.log.append(entry)
        return entry

    def run(self, context: dict) -> dict:
        completed: list[SagaStep] = []

        for number, step in enumerate(self.steps, start=1):
            entry = self._entry(number, step.name)
            try:
                step.action(context)
            except Exception as e:
                entry["status"] = FAILED
                entry["error"] = str(e)

                if not step.critical:
                    logger.warning(f"Saga step {step.name} failed, continuing: {e}")
                    continue

                logger.error(f"Saga step {step.name} failed: {e}")
                self._compensate(completed, context)
                raise

            entry["status"] = COMPLETED
            completed.append(step)

        return context

    def _compensate(self, completed: list[SagaStep], context: dict):
        for step in reversed(completed):
            if step.compensate is None:
                continue

            entry = self._entry(len(self.log) + 1, f"{step.name} (COMPENSATING)")
            try:
                step.compensate(context)
                entry["status"] = COMPENSATED
            except Exception as e:
                # kompensacja nie moze przykryc oryginalnego bledu
                entry["status"] = COMPENSATION_FAILED
                entry["error"] = str(e)
                logger.error(f"Compensation of {step.name} failed: {e}")

    @property
    def failed_steps(self) -> list[str]:
        return [e["action"] for e in self.log if e["status"] == FAILED]
