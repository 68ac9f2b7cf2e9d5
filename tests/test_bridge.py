import asyncio
import base64
import io
import json
import threading

from bizdesk.bridge import Request
from bizdesk.bridge.handlers import HandlerGroup, operation
from bizdesk.bridge.runner import serve
from bizdesk.models import ChartRequest


def call(bridge, name, payload=None, request_id="req-1"):
    return bridge.handle(Request(operation=name, payload=payload, request_id=request_id))


def test_unknown_operation(bridge):
    response = call(bridge, "launch-rockets", request_id="abc")
    assert response.ok is False
    assert response.reply == "error"
    assert response.error_type == "unknown_operation"
    assert response.error == "Unknown operation: launch-rockets"
    assert response.request_id == "abc"


def test_every_catalog_operation_is_registered(bridge):
    catalog = {
        "save-client", "get-clients", "get-client-by-id", "get-client-by-id-for-docs",
        "update-client", "delete-client", "save-lead", "get-leads", "get-lead-by-id",
        "update-lead", "get-dashboard-stats", "get-accounts", "save-transaction",
        "get-transactions", "delete-transaction", "get-financial-reports",
        "get-documents", "get-client-documents", "save-document",
        "save-client-document", "delete-client-document", "get-compliance-alerts",
        "get-tax-report", "get-invoices", "save-invoice", "get-invoice-details",
        "delete-invoice", "mark-invoice-paid", "get-products", "save-product",
        "delete-product", "get-settings", "save-settings", "backup-data",
        "restore-data",
    }
    assert catalog <= set(bridge.operations)


def test_startup_push_is_sent_once(bridge):
    push = bridge.startup_push()
    assert push.reply == "business-data"
    assert push.data["name"] == "AgoraX Media"
    assert bridge.startup_push() is None


def test_client_round_trip(bridge, business_id):
    saved = call(bridge, "save-client", {"business_id": business_id, "name": "Globex"})
    assert saved.ok and saved.reply == "client-saved"

    listed = call(bridge, "get-clients", business_id)
    assert listed.reply == "clients-data"
    assert [c["name"] for c in listed.data] == ["Globex"]

    fetched = call(bridge, "get-client-by-id-for-docs", {"id": saved.data["id"]})
    assert fetched.reply == "client-data-for-docs"
    assert fetched.data["name"] == "Globex"


def test_validation_error_is_data(bridge, business_id):
    response = call(bridge, "save-client", {"business_id": business_id})
    assert response.ok is False
    assert response.reply == "client-saved"
    assert response.error_type == "validation_error"
    assert response.field == "name"


def test_not_found(bridge):
    response = call(bridge, "get-lead-by-id", 404)
    assert response.error_type == "not_found"


def test_save_invoice_replies(bridge, business_id, client):
    payload = {
        "business_id": business_id,
        "client_id": client.id,
        "invoice_number": "INV-100",
        "date": "2024-03-01",
        "total_amount": 1,
        "items": [{"description": "Work", "quantity": 4, "unit_price": 25}],
    }
    saved = call(bridge, "save-invoice", payload)
    assert saved.reply == "invoice-saved"
    assert saved.data["total_amount"] == 100

    failed = call(bridge, "save-invoice", {**payload, "items": []})
    assert failed.ok is False
    assert failed.reply == "invoice-save-error"

    details = call(bridge, "get-invoice-details", saved.data["id"])
    assert details.data["invoiceId"] == saved.data["id"]
    assert len(details.data["items"]) == 1

    paid = call(bridge, "mark-invoice-paid", {"id": saved.data["id"]})
    assert paid.reply == "invoice-paid-success"
    assert paid.data["transaction"]["amount"] == 100

    blocked = call(bridge, "delete-client", client.id)
    assert blocked.ok is False
    assert blocked.error_type == "constraint_error"


def test_save_product_reports_success(bridge, business_id):
    response = call(bridge, "save-product", {"business_id": business_id, "name": "Audit"})
    assert response.reply == "product-saved"
    assert response.data["success"] is True


def test_infinite_price_is_rejected(bridge, business_id):
    response = call(
        bridge, "save-product", {"business_id": business_id, "name": "Audit", "price": "inf"}
    )
    assert response.ok is False
    assert response.error_type == "validation_error"
    assert response.field == "price"


def test_transactions_month_filter(bridge, business_id, add_transaction):
    add_transaction(10, on="2024-01-15")
    add_transaction(20, on="2024-02-15")
    response = call(
        bridge, "get-transactions", {"business_id": business_id, "month": 2, "year": 2024}
    )
    assert [t["amount"] for t in response.data] == [20]

    bad = call(bridge, "get-transactions", {"business_id": business_id, "month": 13})
    assert bad.error_type == "validation_error"


def test_dashboard_and_reports(bridge, business_id):
    stats = call(bridge, "get-dashboard-stats", business_id)
    assert stats.reply == "dashboard-stats"
    assert set(stats.data) == {
        "forecast", "revenue", "expenses", "profit", "clients", "leads", "forecasted_clients",
    }
    report = call(bridge, "get-financial-reports", {"business_id": business_id})
    assert set(report.data) == {"incomeStatement", "balanceSheet"}


def test_export_is_base64(bridge, business_id, add_transaction):
    add_transaction(10)
    response = call(bridge, "export-transactions", {"business_id": business_id, "format": "csv"})
    content = base64.b64decode(response.data["content"]).decode("utf-8-sig")
    assert content.splitlines()[0].startswith("ID,Date")
    assert response.data["filename"].endswith(".csv")


def test_backup_and_restore_through_bridge(bridge, business_id, tmp_path):
    target = str(tmp_path / "bridge-backup.sqlite")
    assert call(bridge, "backup-data", {"path": target}).reply == "backup-complete"

    call(bridge, "save-settings", {"currency": "JPY"})
    restored = call(bridge, "restore-data", {"path": target})
    assert restored.ok and restored.reply == "restore-complete"
    assert call(bridge, "get-settings").data["currency"] == "USD"

    missing = call(bridge, "restore-data", {"path": str(tmp_path / "none.sqlite")})
    assert missing.error_type == "backup_error"


def test_closed_database_is_reported(bridge, repository):
    repository.close()
    response = call(bridge, "get-settings")
    assert response.ok is False
    assert response.error_type == "database_unavailable"


def serve_lines(bridge, lines):
    stdin = io.StringIO("\n".join(lines) + "\n")
    stdout = io.StringIO()
    asyncio.run(serve(bridge, stdin, stdout))
    return [json.loads(line) for line in stdout.getvalue().splitlines()]


def test_stdio_serve(bridge, business_id):
    out = serve_lines(
        bridge,
        [
            json.dumps({"operation": "get-settings", "request_id": 1}),
            "not json",
            "",
            json.dumps({"operation": "get-leads", "payload": business_id, "request_id": "2"}),
        ],
    )

    assert out[0]["reply"] == "business-data"
    assert len(out) == 4
    by_id = {o.get("request_id"): o for o in out[1:]}
    assert by_id["1"]["reply"] == "settings-data"
    assert by_id["2"]["reply"] == "leads-data"
    assert by_id["2"]["data"] == []
    assert by_id[None]["error_type"] == "invalid_request"


class GateHandler(HandlerGroup):
    """Two operations where the first only finishes once the second has run."""

    def __init__(self, repository):
        super().__init__(repository)
        self.opened = threading.Event()

    @operation("wait-for-gate", "gate-passed")
    def wait_for_gate(self, payload):
        return {"opened": self.opened.wait(timeout=5)}

    @operation("open-gate", "gate-opened")
    def open_gate(self, payload):
        self.opened.set()
        return {}


def test_slow_request_does_not_block_later_ones(bridge, repository):
    bridge.add_handler(GateHandler(repository))

    out = serve_lines(
        bridge,
        [
            json.dumps({"operation": "wait-for-gate", "request_id": "slow"}),
            json.dumps({"operation": "open-gate", "request_id": "fast"}),
        ],
    )

    by_id = {o["request_id"]: o for o in out[1:]}
    assert by_id["fast"]["reply"] == "gate-opened"
    assert by_id["slow"]["data"] == {"opened": True}


class StrictHandler(HandlerGroup):
    @operation("build-chart-request", "chart-request")
    def build_chart_request(self, payload):
        return ChartRequest(months=payload).model_dump()


def test_raw_pydantic_errors_become_validation_errors(bridge, repository):
    bridge.add_handler(StrictHandler(repository))

    assert call(bridge, "build-chart-request", 12).data == {"months": 12}
    response = call(bridge, "build-chart-request", 0)
    assert response.error_type == "validation_error"
    assert response.field == "months"
