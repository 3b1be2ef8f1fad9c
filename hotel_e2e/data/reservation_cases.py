"""End-to-end reservation flow cases."""

from __future__ import annotations

from hotel_e2e.models.test_case import ReservationFlowOptions, ReservationTestCase

RESERVATION_TEST_CASES: tuple[ReservationTestCase, ...] = (
    ReservationTestCase(
        name="標準的な予約フローが正常に完了すること",
        description="プラン選択から予約入力、確認、完了までの一連のE2Eフロー検証",
        options=ReservationFlowOptions(),
        expect_success=True,
        tags=("smoke", "e2e", "regression", "booking", "positive"),
        severity="critical",
    ),
)
