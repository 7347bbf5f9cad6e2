"""Integration tests: show → financials → settlement → payment → balances/statement.

Requires a running PostgreSQL with migrations applied.
Uses the session-scoped client fixture from tests/integration/conftest.py.
"""

import uuid

import pytest
from httpx import AsyncClient

pytestmark = [pytest.mark.integration, pytest.mark.asyncio(loop_scope="session")]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _create_show(client: AsyncClient, name: str, show_date: str = "2025-08-01") -> str:
    resp = await client.post(
        "/api/shows", json={"name": name, "show_date": show_date, "platform": "WHATNOT"}
    )
    assert resp.status_code == 201, resp.text
    return str(resp.json()["data"]["id"])


async def _create_wholesaler(client: AsyncClient, name: str) -> str:
    resp = await client.post("/api/wholesalers", json={"name": name})
    assert resp.status_code == 201, resp.text
    return str(resp.json()["data"]["id"])


def _unique(prefix: str) -> str:
    return f"{prefix} {uuid.uuid4().hex[:8]}"


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestSettlementFlow:
    async def test_full_flow(self, client: AsyncClient) -> None:
        show_id = await _create_show(client, _unique("August Show"))

        fin = await client.post(
            f"/api/shows/{show_id}/financials",
            json={"payout_after_fees_amount": 10000, "gross_sales_amount": 12500},
        )
        assert fin.status_code == 200
        assert fin.json()["data"]["payout_after_fees_amount"] == "10000.0000"

        wholesaler_id = await _create_wholesaler(client, _unique("Settlement Wholesaler"))

        settlement = await client.post(
            f"/api/shows/{show_id}/settlements",
            json={"wholesaler_id": wholesaler_id, "method": "PERCENT_PAYOUT", "rate_percent": 25},
        )
        assert settlement.status_code == 201
        s = settlement.json()["data"]
        assert s["calculation_method"] == "PERCENT_PAYOUT"
        assert s["amount"] == "2500.0000"
        assert s["base_amount"] == "10000.0000"
        assert s["rate_bps"] == 2500

        payment = await client.post(
            "/api/payments",
            json={
                "wholesaler_id": wholesaler_id,
                "amount": 1000,
                "payment_date": "2025-08-15",
                "reference": "CHK-001",
            },
        )
        assert payment.status_code == 201
        assert payment.json()["data"]["payment_method"] == "OTHER"

        balances = await client.get("/api/wholesalers/balances")
        assert balances.status_code == 200
        bal = next(
            b for b in balances.json()["data"]["items"] if b["wholesaler_id"] == wholesaler_id
        )
        assert bal["owed_total"] == "2500.0000"
        assert bal["paid_total"] == "1000.0000"
        assert bal["balance_owed"] == "1500.0000"
        assert bal["last_payment_date"] == "2025-08-15"

        statement = await client.get(f"/api/wholesalers/{wholesaler_id}/statement")
        assert statement.status_code == 200
        entries = statement.json()["data"]["entries"]
        assert [(e["type"], e["amount"], e["running_balance"]) for e in entries] == [
            ("OWED", "2500.0000", "2500.0000"),
            ("PAYMENT", "1000.0000", "1500.0000"),
        ]
        assert entries[0]["show_id"] == show_id

    async def test_percent_without_financials_409(self, client: AsyncClient) -> None:
        show_id = await _create_show(client, _unique("Show Without Financials"), "2025-09-01")
        wholesaler_id = await _create_wholesaler(client, _unique("Another Wholesaler"))

        resp = await client.post(
            f"/api/shows/{show_id}/settlements",
            json={"wholesaler_id": wholesaler_id, "method": "PERCENT_PAYOUT", "rate_percent": 10},
        )

        assert resp.status_code == 409
        assert "financials not found" in resp.json()["message"].lower()

    async def test_manual_zero_amount_400(self, client: AsyncClient) -> None:
        show_id = await _create_show(client, _unique("Manual Show"))
        wholesaler_id = await _create_wholesaler(client, _unique("Manual Wholesaler"))

        resp = await client.post(
            f"/api/shows/{show_id}/settlements",
            json={"wholesaler_id": wholesaler_id, "method": "MANUAL", "amount": 0},
        )
        assert resp.status_code == 400

    async def test_financials_upsert_keeps_created_at(self, client: AsyncClient) -> None:
        show_id = await _create_show(client, _unique("Upsert Show"))

        first = await client.post(
            f"/api/shows/{show_id}/financials", json={"payout_after_fees_amount": "100.50"}
        )
        second = await client.post(
            f"/api/shows/{show_id}/financials",
            json={"payout_after_fees_amount": "200", "gross_sales_amount": "250"},
        )
        assert second.status_code == 200
        a, b = first.json()["data"], second.json()["data"]
        assert a["created_at"] == b["created_at"]
        assert b["payout_after_fees_amount"] == "200.0000"
        assert b["gross_sales_amount"] == "250.0000"

        fetched = await client.get(f"/api/shows/{show_id}/financials")
        assert fetched.json()["data"]["payout_after_fees_amount"] == "200.0000"

    async def test_settlement_unaffected_by_later_financials(self, client: AsyncClient) -> None:
        show_id = await _create_show(client, _unique("Frozen Show"))
        wholesaler_id = await _create_wholesaler(client, _unique("Frozen Wholesaler"))
        await client.post(
            f"/api/shows/{show_id}/financials", json={"payout_after_fees_amount": 4000}
        )
        created = await client.post(
            f"/api/shows/{show_id}/settlements",
            json={"wholesaler_id": wholesaler_id, "method": "PERCENT_PAYOUT", "rate_percent": 10},
        )
        obligation_id = created.json()["data"]["id"]

        await client.post(
            f"/api/shows/{show_id}/financials", json={"payout_after_fees_amount": 9000}
        )

        fetched = await client.get(f"/api/owed-line-items/{obligation_id}")
        data = fetched.json()["data"]
        assert data["amount"] == "400.0000"
        assert data["base_amount"] == "4000.0000"

    async def test_statement_of_deleted_wholesaler_404(self, client: AsyncClient) -> None:
        wholesaler_id = await _create_wholesaler(client, _unique("Deleted Wholesaler"))
        deleted = await client.delete(f"/api/wholesalers/{wholesaler_id}")
        assert deleted.status_code == 200

        resp = await client.get(f"/api/wholesalers/{wholesaler_id}/statement")
        assert resp.status_code == 404
        assert resp.json()["code"] == 3001

    async def test_unknown_show_financials_404(self, client: AsyncClient) -> None:
        resp = await client.post(
            f"/api/shows/{uuid.uuid4()}/financials", json={"payout_after_fees_amount": 1}
        )
        assert resp.status_code == 404
        assert resp.json()["code"] == 2001
