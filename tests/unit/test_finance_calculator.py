"""Unit tests for the finance ledger calculations (sync planning, pruning, reports, CSV)."""

from datetime import date

from concierge.application.dtos.caller import Caller
from concierge.application.dtos.document import StoredDocument
from concierge.application.dtos.finance import FinanceFilters, FinanceRecordView, LedgerEntry
from concierge.application.services.finance_calculator import (
    client_display_name,
    export_filename,
    export_rows,
    filter_records,
    find_orphan_records,
    finance_reservations,
    is_visible_to,
    monthly_snapshots,
    normalize_record,
    plan_sync,
    provider_cost_writeback,
    rows_to_csv,
    service_amount,
    service_breakdown,
    summarize,
)

ADMIN = Caller(company_id="c1", user_id="u1", email="a@example.com", role="admin", is_admin=True)
AGENT = Caller(company_id="c1", user_id="u2", email="b@example.com", role="agent")


def _record(record_id: str, **overrides) -> FinanceRecordView:
    values = {
        "id": record_id,
        "booking_id": None,
        "client_id": None,
        "client_name": "",
        "service_key": None,
        "service": "Villa",
        "client_amount": 0.0,
        "provider_cost": None,
        "profit": 0.0,
        "status": "pending",
        "date": "",
    }
    values.update(overrides)
    return FinanceRecordView(**values)


class TestReadingRecords:
    """Legacy field names and visibility."""

    def test_client_display_name_variants(self) -> None:
        assert client_display_name({"name": "Ana"}) == "Ana"
        assert client_display_name({"name": {"ro": "Ioana"}}) == "Ioana"
        assert client_display_name({"firstName": "Ion", "lastName": "Pop"}) == "Ion Pop"
        assert client_display_name(None) == "Client"

    def test_normalize_legacy_record(self) -> None:
        doc = StoredDocument("f1", {"clientIncome": 500, "providerCost": 300, "category": "Boat", "date": "2026-02-03T10:00:00Z"})
        record = normalize_record(doc)
        assert record.client_amount == 500.0
        assert record.provider_cost == 300.0
        assert record.profit == 200.0
        assert record.status == "settled"
        assert record.service == "Boat"
        assert record.date == "2026-02-03"

    def test_record_without_cost_is_pending(self) -> None:
        record = normalize_record(StoredDocument("f1", {"amount": 100}))
        assert record.provider_cost is None
        assert record.status == "pending"

    def test_visibility(self) -> None:
        assert is_visible_to("someone", None, ADMIN)
        assert is_visible_to("u2", None, AGENT)
        assert is_visible_to(None, "b@example.com", AGENT)
        assert not is_visible_to("u1", None, AGENT)
        assert is_visible_to(None, None, AGENT)

    def test_cancelled_reservations_excluded(self) -> None:
        reservations = [
            StoredDocument("r1", {"status": "confirmed"}),
            StoredDocument("r2", {"status": "cancelled"}),
            StoredDocument("r3", {"status": "declined"}),
        ]
        assert [r.id for r in finance_reservations(reservations)] == ["r1"]

    def test_service_amount_prefers_item_price(self) -> None:
        assert service_amount({"price": 0, "total": 50}, {"paidAmount": 900}) == 0.0
        assert service_amount({"clientPrice": 75}, {"paidAmount": 900}) == 75.0
        assert service_amount(None, {"totalValue": 400}) == 400.0


class TestPlanSync:
    """Creating and refreshing one record per booking service."""

    CLIENTS = {"cl1": StoredDocument("cl1", {"name": "Ana"})}

    def test_one_record_per_service(self) -> None:
        booking = StoredDocument(
            "b1",
            {
                "clientId": "cl1",
                "createdAt": "2026-03-01T00:00:00Z",
                "services": [
                    {"id": "s1", "name": "Villa", "price": 1000},
                    {"id": "s2", "name": "Boat", "price": 300, "providerCost": 200},
                ],
            },
        )
        plan = plan_sync([booking], [], self.CLIENTS, ADMIN)
        assert len(plan.creates) == 2
        villa, boat = plan.creates
        assert villa["serviceKey"] == "s1"
        assert villa["clientAmount"] == 1000.0
        assert villa["status"] == "pending"
        assert villa["clientName"] == "Ana"
        assert villa["date"] == "2026-03-01"
        assert boat["status"] == "settled"
        assert boat["createdBy"] == "u1"

    def test_booking_without_services_gets_one_record(self) -> None:
        booking = StoredDocument("b1", {"clientId": "cl1", "totalValue": 800, "accommodationType": "Villa Sol"})
        plan = plan_sync([booking], [], self.CLIENTS, ADMIN, today=date(2026, 4, 1))
        assert len(plan.creates) == 1
        assert plan.creates[0]["serviceKey"] == "service-0"
        assert plan.creates[0]["service"] == "Villa Sol"
        assert plan.creates[0]["clientAmount"] == 800.0
        assert plan.creates[0]["date"] == "2026-04-01"

    def test_existing_record_refreshed_on_amount_change(self) -> None:
        booking = StoredDocument("b1", {"clientId": "cl1", "services": [{"id": "s1", "name": "Villa", "price": 1200}]})
        existing = [_record("f1", booking_id="b1", service_key="s1", client_amount=1000.0, client_name="Ana")]
        plan = plan_sync([booking], existing, self.CLIENTS, ADMIN)
        assert plan.creates == []
        assert len(plan.updates) == 1
        record_id, fields = plan.updates[0]
        assert record_id == "f1"
        assert fields["clientAmount"] == 1200.0
        assert "providerCost" not in fields

    def test_unchanged_record_left_alone(self) -> None:
        booking = StoredDocument("b1", {"clientId": "cl1", "services": [{"id": "s1", "price": 1000}]})
        existing = [_record("f1", booking_id="b1", service_key="s1", client_amount=1000.0, client_name="Ana")]
        assert plan_sync([booking], existing, self.CLIENTS, ADMIN).is_empty

    def test_deleted_client_skipped(self) -> None:
        booking = StoredDocument("b1", {"clientId": "gone", "totalValue": 100})
        assert plan_sync([booking], [], self.CLIENTS, ADMIN).is_empty

    def test_services_sharing_a_key_keep_their_own_records(self) -> None:
        """Two chefs without ids are matched one record each, so a re-sync changes nothing."""
        booking = StoredDocument(
            "b1",
            {
                "clientId": "cl1",
                "services": [{"type": "chef", "price": 100}, {"type": "chef", "price": 250}],
            },
        )
        first = plan_sync([booking], [], self.CLIENTS, ADMIN)
        assert [c["serviceKey"] for c in first.creates] == ["chef", "chef"]
        existing = [
            _record("f2", booking_id="b1", service_key="chef", client_amount=250.0, client_name="Ana"),
            _record("f1", booking_id="b1", service_key="chef", client_amount=100.0, client_name="Ana"),
        ]
        assert plan_sync([booking], existing, self.CLIENTS, ADMIN).is_empty

    def test_changed_amount_on_shared_key_updates_one_record(self) -> None:
        booking = StoredDocument(
            "b1",
            {
                "clientId": "cl1",
                "services": [{"type": "chef", "price": 150}, {"type": "chef", "price": 250}],
            },
        )
        existing = [
            _record("f2", booking_id="b1", service_key="chef", client_amount=250.0, client_name="Ana"),
            _record("f1", booking_id="b1", service_key="chef", client_amount=100.0, client_name="Ana"),
        ]
        plan = plan_sync([booking], existing, self.CLIENTS, ADMIN)
        assert plan.creates == []
        assert [(record_id, fields["clientAmount"]) for record_id, fields in plan.updates] == [("f1", 150.0)]


class TestOrphans:
    """Records whose booking or client disappeared."""

    def test_orphans_detected(self) -> None:
        reservations = [
            StoredDocument("b1", {"clientId": "cl1"}),
            StoredDocument("b2", {"clientId": "gone"}),
        ]
        records = [
            _record("keep", booking_id="b1", client_id="cl1"),
            _record("no-booking", booking_id="b9"),
            _record("no-client", client_id="gone"),
            _record("booking-client-gone", booking_id="b2"),
            _record("manual"),
        ]
        assert find_orphan_records(records, reservations, ["cl1"]) == [
            "no-booking",
            "no-client",
            "booking-client-gone",
        ]

    def test_everything_orphaned_without_bookings_or_clients(self) -> None:
        assert find_orphan_records([_record("a"), _record("b")], [], []) == ["a", "b"]


class TestReports:
    """Summary, breakdown, monthly snapshots and filters."""

    RECORDS = [
        _record("r1", service="Villa", client_amount=1000.0, provider_cost=600.0, status="settled", date="2026-01-10", client_name="Ana"),
        _record("r2", service="Boat", client_amount=500.0, provider_cost=None, date="2026-01-20", client_name="Marco"),
        _record("r3", service="Villa", client_amount=2000.0, provider_cost=1500.0, status="settled", date="2026-02-05", client_name="Ana"),
    ]
    PAYMENTS = [LedgerEntry("p1", "Boats", 100.0, "2026-01-15")]
    EXPENSES = [LedgerEntry("e1", "Office", 50.0, "2026-01-25"), LedgerEntry("e2", "Fuel", 30.0, "2026-03-01")]

    def test_summary(self) -> None:
        summary = summarize(self.RECORDS, self.PAYMENTS, self.EXPENSES)
        assert summary.client_revenue == 3500.0
        assert summary.provider_costs == 2200.0
        assert summary.gross_profit == 1300.0
        assert summary.expenses == 80.0
        assert summary.net_profit == 1220.0
        assert summary.pending_count == 1
        assert summary.record_count == 3

    def test_breakdown_ordered_by_profit(self) -> None:
        rows = service_breakdown(self.RECORDS)
        assert [r.service for r in rows] == ["Villa", "Boat"]
        assert rows[0].count == 2
        assert rows[0].profit == 900.0
        assert rows[1].margin == 100.0

    def test_monthly_snapshots_oldest_first(self) -> None:
        snapshots = monthly_snapshots(self.RECORDS, self.EXPENSES)
        assert [s.month for s in snapshots] == ["2026-01", "2026-02"]
        january = snapshots[0]
        assert january.income == 1500.0
        assert january.payments == 600.0
        assert january.expenses == 50.0
        assert january.profit == 850.0

    def test_filters(self) -> None:
        by_service = filter_records(self.RECORDS, FinanceFilters(service="Boat"))
        assert [r.id for r in by_service] == ["r2"]
        by_range = filter_records(self.RECORDS, FinanceFilters(start_date="2026-01-15", end_date="2026-01-31"))
        assert [r.id for r in by_range] == ["r2"]
        by_client = filter_records(self.RECORDS, FinanceFilters(service="all", client="ana"))
        assert [r.id for r in by_client] == ["r1", "r3"]


class TestExport:
    """Monthly CSV export."""

    def test_rows_for_month_sorted_by_date(self) -> None:
        rows = export_rows("2026-01", TestReports.RECORDS, TestReports.PAYMENTS, TestReports.EXPENSES)
        assert [(r.type, r.date) for r in rows] == [
            ("financeRecord", "2026-01-10"),
            ("categoryPayment", "2026-01-15"),
            ("financeRecord", "2026-01-20"),
            ("expense", "2026-01-25"),
        ]

    def test_malformed_month_exports_nothing(self) -> None:
        assert export_rows("2026-13", TestReports.RECORDS, [], []) == []

    def test_csv_quotes_cells(self) -> None:
        rows = export_rows("2026-01", TestReports.RECORDS[:1], [], [])
        text = rows_to_csv(rows)
        lines = text.split("\n")
        assert lines[0] == "Date,Type,Category,Description,AmountIn,AmountOut,Status,Source"
        assert lines[1] == '"2026-01-10","financeRecord","Villa","","1000","600","settled","financeRecords"'

    def test_csv_escapes_quotes(self) -> None:
        rows = export_rows("2026-01", [], [], [LedgerEntry("e1", "Office", 12.5, "2026-01-02", 'Paper "A4"')])
        assert '"Paper ""A4"""' in rows_to_csv(rows)
        assert '"12.5"' in rows_to_csv(rows)

    def test_filename(self) -> None:
        assert export_filename("2026-01") == "finance-2026-01.csv"


class TestProviderCostWriteback:
    """Confirmed provider costs copied onto the booking."""

    def test_matching_service_updated(self) -> None:
        record = _record("f1", booking_id="b1", service_key="s2")
        booking = {"services": [{"id": "s1"}, {"id": "s2"}]}
        fields = provider_cost_writeback(record, booking, 250.0)
        assert fields == {"services": [{"id": "s1"}, {"id": "s2", "providerCost": 250.0}]}

    def test_booking_level_record(self) -> None:
        record = _record("f1", booking_id="b1", service_key=None)
        assert provider_cost_writeback(record, {}, 90.0) == {"providerCost": 90.0}
