"""
BizTime Backend - /invoices Endpoint Tests
===========================================

What:  End-to-end tests through FastAPI, the services and a real SQLite file.
"""

import pytest

COMPANY = {"code": "test", "name": "Test", "description": "Used for testing"}


class TestListInvoices:

    @pytest.mark.asyncio
    async def test_lists_id_and_comp_code(self, test_client, seeded):
        response = await test_client.get("/invoices")

        assert response.status_code == 200
        assert response.json() == {
            "invoices": [{"id": seeded["invoice_id"], "comp_code": "test"}]
        }

    @pytest.mark.asyncio
    async def test_ordered_by_id(self, test_client, seeded):
        for amt in (1, 2, 3):
            await test_client.post("/invoices", json={"comp_code": "test", "amt": amt})

        response = await test_client.get("/invoices")

        ids = [inv["id"] for inv in response.json()["invoices"]]
        assert ids == sorted(ids)
        assert len(ids) == 4


class TestGetInvoice:

    @pytest.mark.asyncio
    async def test_detail_with_company(self, test_client, seeded):
        response = await test_client.get(f"/invoices/{seeded['invoice_id']}")

        assert response.status_code == 200
        invoice = response.json()["invoice"]
        assert invoice["id"] == seeded["invoice_id"]
        assert invoice["amt"] == "100.00"
        assert invoice["paid"] is False
        assert isinstance(invoice["add_date"], str)
        assert invoice["paid_date"] is None
        assert invoice["company"] == COMPANY
        assert "comp_code" not in invoice

    @pytest.mark.asyncio
    async def test_zero_is_404(self, test_client, seeded):
        response = await test_client.get("/invoices/0")

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Invoice not found: 0"

    @pytest.mark.asyncio
    async def test_non_numeric_is_404(self, test_client, seeded):
        response = await test_client.get("/invoices/abc")

        assert response.status_code == 404

    @pytest.mark.asyncio
    @pytest.mark.parametrize("prefix", ["+", "0_", "%20"])
    async def test_non_canonical_id_is_404(self, test_client, seeded, prefix):
        raw = f"{prefix}{seeded['invoice_id']}"

        response = await test_client.get(f"/invoices/{raw}")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_non_ascii_digit_is_404(self, test_client, seeded):
        # ARABIC-INDIC DIGIT ONE
        response = await test_client.get("/invoices/%D9%A1")

        assert response.status_code == 404


class TestCreateInvoice:

    @pytest.mark.asyncio
    async def test_creates_with_store_defaults(self, test_client, seeded):
        response = await test_client.post("/invoices", json={"comp_code": "test", "amt": 234})

        assert response.status_code == 201
        invoice = response.json()["invoice"]
        assert set(invoice) == {"id", "comp_code", "amt", "paid", "add_date", "paid_date"}
        assert invoice["comp_code"] == "test"
        assert invoice["amt"] == "234.00"
        assert invoice["paid"] is False
        assert invoice["paid_date"] is None
        assert invoice["id"] != seeded["invoice_id"]

    @pytest.mark.asyncio
    async def test_unknown_company_is_409(self, test_client, seeded):
        response = await test_client.post("/invoices", json={"comp_code": "ghost", "amt": 10})

        assert response.status_code == 409
        assert response.json()["error"]["message"] == "Company 'ghost' does not exist"


class TestUpdateInvoice:

    @pytest.mark.asyncio
    async def test_updates_amount_only(self, test_client, seeded):
        invoice_id = seeded["invoice_id"]

        response = await test_client.put(f"/invoices/{invoice_id}", json={"amt": 1337})

        assert response.status_code == 200
        invoice = response.json()["invoice"]
        assert invoice["id"] == invoice_id
        assert invoice["comp_code"] == "test"
        assert invoice["amt"] == "1337.00"
        assert invoice["paid"] is False
        assert invoice["paid_date"] is None

        detail = (await test_client.get(f"/invoices/{invoice_id}")).json()["invoice"]
        assert detail["add_date"] == invoice["add_date"]
        assert detail["amt"] == "1337.00"

    @pytest.mark.asyncio
    async def test_unknown_id_is_404(self, test_client, seeded):
        response = await test_client.put("/invoices/0", json={"amt": 1337})

        assert response.status_code == 404


class TestDeleteInvoice:

    @pytest.mark.asyncio
    async def test_delete_then_get_is_404(self, test_client, seeded):
        invoice_id = seeded["invoice_id"]

        response = await test_client.delete(f"/invoices/{invoice_id}")

        assert response.status_code == 200
        assert response.json() == {"status": "deleted"}
        assert (await test_client.get(f"/invoices/{invoice_id}")).status_code == 404

        company = (await test_client.get("/companies/test")).json()["company"]
        assert company["invoices"] == []

    @pytest.mark.asyncio
    async def test_unknown_id_is_404(self, test_client, seeded):
        response = await test_client.delete("/invoices/0")

        assert response.status_code == 404
