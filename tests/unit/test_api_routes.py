"""HTTP-level tests: routing, status codes, error envelope, request id.

Services are replaced by AsyncMocks and the DB session dependency by a
MagicMock, so no database is needed.
"""

import uuid
from unittest.mock import AsyncMock

from src.fv_common.errors import (
    FinancialsRequiredError,
    InvalidAmountError,
    ShowNotFoundError,
    WholesalerNotFoundError,
)
from src.fv_ledger.api import router as ledger_api
from src.fv_ledger.application.schemas import (
    BalanceItem,
    BalancesResponse,
    StatementEntryItem,
    StatementResponse,
)
from src.fv_settlement.api import router as settlement_api
from src.fv_settlement.application.schemas import ObligationResponse
from src.fv_show.api import router as show_api

SHOW_ID = str(uuid.uuid4())
WHOLESALER_ID = str(uuid.uuid4())


def _obligation() -> ObligationResponse:
    return ObligationResponse(
        id=str(uuid.uuid4()),
        show_id=SHOW_ID,
        wholesaler_id=WHOLESALER_ID,
        amount="2500.0000",
        currency="USD",
        description="Settlement: 25% of payout",
        due_date=None,
        status="PENDING",
        calculation_method="PERCENT_PAYOUT",
        rate_bps=2500,
        base_amount="10000.0000",
        created_at="2025-08-01T12:00:00+00:00",
        updated_at="2025-08-01T12:00:00+00:00",
    )


class TestSettlementRoutes:
    async def test_create_settlement_201(self, client, monkeypatch) -> None:
        svc = AsyncMock()
        svc.create_settlement.return_value = _obligation()
        monkeypatch.setattr(settlement_api, "_service", svc)

        resp = await client.post(
            f"/api/shows/{SHOW_ID}/settlements",
            json={"wholesaler_id": WHOLESALER_ID, "method": "PERCENT_PAYOUT", "rate_percent": 25},
        )

        assert resp.status_code == 201
        body = resp.json()
        assert body["code"] == 0
        assert body["data"]["amount"] == "2500.0000"
        assert body["data"]["rate_bps"] == 2500
        show_id_arg = svc.create_settlement.call_args.args[1]
        assert show_id_arg == SHOW_ID

    async def test_missing_financials_409(self, client, monkeypatch) -> None:
        svc = AsyncMock()
        svc.create_settlement.side_effect = FinancialsRequiredError(SHOW_ID)
        monkeypatch.setattr(settlement_api, "_service", svc)

        resp = await client.post(
            f"/api/shows/{SHOW_ID}/settlements",
            json={"wholesaler_id": WHOLESALER_ID, "method": "PERCENT_PAYOUT", "rate_percent": 10},
        )

        assert resp.status_code == 409
        body = resp.json()
        assert body["code"] == 4002
        assert body["data"] is None
        assert "add financials" in body["message"]

    async def test_unknown_show_404(self, client, monkeypatch) -> None:
        svc = AsyncMock()
        svc.create_settlement.side_effect = ShowNotFoundError(SHOW_ID)
        monkeypatch.setattr(settlement_api, "_service", svc)

        resp = await client.post(
            f"/api/shows/{SHOW_ID}/settlements",
            json={"wholesaler_id": WHOLESALER_ID, "method": "MANUAL", "amount": "10"},
        )
        assert resp.status_code == 404
        assert resp.json()["code"] == 2001

    async def test_manual_zero_amount_400(self, client, monkeypatch) -> None:
        svc = AsyncMock()
        svc.create_settlement.side_effect = InvalidAmountError("amount", "must be greater than zero")
        monkeypatch.setattr(settlement_api, "_service", svc)

        resp = await client.post(
            f"/api/shows/{SHOW_ID}/settlements",
            json={"wholesaler_id": WHOLESALER_ID, "method": "MANUAL", "amount": 0},
        )
        assert resp.status_code == 400
        assert resp.json()["code"] == 1001

    async def test_missing_rate_is_request_validation_400(self, client) -> None:
        resp = await client.post(
            f"/api/shows/{SHOW_ID}/settlements",
            json={"wholesaler_id": WHOLESALER_ID, "method": "PERCENT_PAYOUT"},
        )
        assert resp.status_code == 400
        body = resp.json()
        assert body["code"] == 1000
        assert "rate_percent" in body["message"]

    async def test_malformed_show_id_400(self, client) -> None:
        resp = await client.post(
            "/api/shows/not-a-uuid/settlements",
            json={"wholesaler_id": WHOLESALER_ID, "method": "MANUAL", "amount": 5},
        )
        assert resp.status_code == 400
        assert resp.json()["code"] == 1000


class TestLedgerRoutes:
    async def test_balances_not_shadowed_by_wholesaler_id(self, client, monkeypatch) -> None:
        svc = AsyncMock()
        svc.balances.return_value = BalancesResponse(items=[
            BalanceItem(
                wholesaler_id=WHOLESALER_ID, wholesaler_name="W",
                owed_total="2500.0000", paid_total="1000.0000", balance_owed="1500.0000",
                balance_owed_display="$1,500.00", last_payment_date="2025-08-15",
            )
        ])
        monkeypatch.setattr(ledger_api, "_service", svc)

        resp = await client.get("/api/wholesalers/balances")

        assert resp.status_code == 200
        items = resp.json()["data"]["items"]
        assert items[0]["balance_owed"] == "1500.0000"
        assert items[0]["last_payment_date"] == "2025-08-15"

    async def test_statement(self, client, monkeypatch) -> None:
        svc = AsyncMock()
        svc.statement.return_value = StatementResponse(
            wholesaler_id=WHOLESALER_ID,
            wholesaler_name="W",
            entries=[
                StatementEntryItem(
                    type="OWED", id="o1", date="2025-08-01", amount="2500.0000",
                    running_balance="2500.0000", show_id=SHOW_ID,
                    description="Settlement: 25% of payout", reference=None,
                ),
            ],
            closing_balance="2500.0000",
        )
        monkeypatch.setattr(ledger_api, "_service", svc)

        resp = await client.get(f"/api/wholesalers/{WHOLESALER_ID}/statement")

        assert resp.status_code == 200
        assert resp.json()["data"]["entries"][0]["show_id"] == SHOW_ID

    async def test_statement_unknown_wholesaler_404(self, client, monkeypatch) -> None:
        svc = AsyncMock()
        svc.statement.side_effect = WholesalerNotFoundError(WHOLESALER_ID)
        monkeypatch.setattr(ledger_api, "_service", svc)

        resp = await client.get(f"/api/wholesalers/{WHOLESALER_ID}/statement")
        assert resp.status_code == 404
        assert resp.json()["code"] == 3001

    async def test_payment_bad_method_400(self, client) -> None:
        resp = await client.post(
            "/api/payments",
            json={
                "wholesaler_id": WHOLESALER_ID, "amount": 10,
                "payment_date": "2025-08-15", "payment_method": "BITCOIN",
            },
        )
        assert resp.status_code == 400
        assert resp.json()["code"] == 1000


class TestEnvelope:
    async def test_request_id_echoed(self, client, monkeypatch) -> None:
        svc = AsyncMock()
        svc.get_financials.side_effect = ShowNotFoundError(SHOW_ID)
        monkeypatch.setattr(show_api, "_service", svc)

        resp = await client.get(
            f"/api/shows/{SHOW_ID}/financials", headers={"X-Request-Id": "req_trace42"}
        )

        assert resp.status_code == 404
        assert resp.headers["X-Request-Id"] == "req_trace42"
        assert resp.json()["request_id"] == "req_trace42"

    async def test_request_id_generated(self, client) -> None:
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.headers["X-Request-Id"].startswith("req_")

    async def test_unhandled_error_500(self, client, monkeypatch) -> None:
        svc = AsyncMock()
        svc.get_show.side_effect = RuntimeError("boom")
        monkeypatch.setattr(show_api, "_service", svc)

        resp = await client.get(f"/api/shows/{SHOW_ID}")

        assert resp.status_code == 500
        body = resp.json()
        assert body["code"] == 9002
        assert "boom" not in body["message"]
