import re

import pytest

from app.services import order_service
from app.services.checkout_saga import CheckoutSaga, SagaStep, COMPLETED, COMPENSATED, FAILED
from app.services.order_service import generate_order_number, to_base36


def test_critical_failure_compensates_in_reverse_order():
    calls = []

    def fail(ctx):
        raise ValueError("persist failed")

    saga = CheckoutSaga(steps=[
        SagaStep("A", lambda ctx: calls.append("A"), compensate=lambda ctx: calls.append("undo A")),
        SagaStep("B", lambda ctx: calls.append("B"), compensate=lambda ctx: calls.append("undo B")),
        SagaStep("C", fail),
    ])

    with pytest.raises(ValueError, match="persist failed"):
        saga.run({})

    assert calls == ["A", "B", "undo B", "undo A"]
    assert [e["status"] for e in saga.log] == [COMPLETED, COMPLETED, FAILED, COMPENSATED, COMPENSATED]


def test_non_critical_failure_does_not_stop_saga():
    calls = []

    def fail(ctx):
        raise RuntimeError("notify failed")

    saga = CheckoutSaga(steps=[
        SagaStep("Persist", lambda ctx: calls.append("persist"), compensate=lambda ctx: calls.append("undo")),
        SagaStep("Notify", fail, critical=False),
        SagaStep("After", lambda ctx: calls.append("after")),
    ])

    saga.run({})

    assert calls == ["persist", "after"]
    assert saga.failed_steps == ["Notify"]


def test_failed_compensation_keeps_original_error():
    def broken_undo(ctx):
        raise RuntimeError("undo failed")

    def fail(ctx):
        raise ValueError("original")

    saga = CheckoutSaga(steps=[
        SagaStep("A", lambda ctx: None, compensate=broken_undo),
        SagaStep("B", fail),
    ])

    with pytest.raises(ValueError, match="original"):
        saga.run({})

    assert saga.log[-1]["status"] == "COMPENSATION_FAILED"


def test_order_number_format():
    number = generate_order_number()

    assert re.fullmatch(r"ORD-[0-9A-Z]+-[0-9A-Z]{8}", number)


def test_order_numbers_differ_within_same_millisecond(monkeypatch):
    monkeypatch.setattr(order_service.time, "time_ns", lambda: 1_700_000_000_000_000_000)

    first, second = generate_order_number(), generate_order_number()

    assert first.split("-")[1] == second.split("-")[1]
    assert first != second


def test_to_base36():
    assert to_base36(0) == "0"
    assert to_base36(35) == "Z"
    assert to_base36(36) == "10"
