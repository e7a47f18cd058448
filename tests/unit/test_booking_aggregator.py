"""Unit tests for the client-grouped bookings view."""

from datetime import UTC, date, datetime

from concierge.application.dtos.document import StoredDocument
from concierge.application.services.booking_aggregator import (
    UNKNOWN_CLIENT_ID,
    UNKNOWN_CLIENT_NAME,
    booking_due,
    booking_paid,
    booking_total,
    days_left,
    filter_and_sort_groups,
    group_bookings_by_client,
    next_check_in,
)
from concierge.domain.enums import BookingSort, PaymentStatus, TimeFilter

TODAY = date(2026, 6, 15)


def _booking(booking_id: str, company_id: str = "c1", **fields) -> StoredDocument:
    return StoredDocument(id=booking_id, data={"companyId": company_id, **fields})


def _client(client_id: str, name, company_id: str = "c1") -> StoredDocument:
    return StoredDocument(id=client_id, data={"companyId": company_id, "name": name})


class TestBookingAmounts:
    """Totals and payments read from either generation of field names."""

    def test_total_prefers_total_value(self) -> None:
        assert booking_total({"totalValue": 500, "totalAmount": 300}) == 500.0

    def test_total_falls_back_when_total_value_is_zero(self) -> None:
        assert booking_total({"totalValue": 0, "totalAmount": 300}) == 300.0

    def test_paid_reads_total_paid(self) -> None:
        assert booking_paid({"totalPaid": "120"}) == 120.0

    def test_due_never_negative(self) -> None:
        assert booking_due({"totalValue": 100, "paidAmount": 150}) == 0.0
        assert booking_due({"totalAmount": 100, "totalPaid": 40}) == 60.0


class TestGroupBookingsByClient:
    """Grouping, roll-ups and company isolation."""

    def test_rolls_up_totals_per_client(self) -> None:
        bookings = [
            _booking("b1", clientId="cl1", totalValue=1000, paidAmount=1000),
            _booking("b2", clientId="cl1", totalAmount=500, totalPaid=100),
        ]
        groups = group_bookings_by_client(bookings, {"cl1": _client("cl1", "Ana")}, "c1")
        group = groups["cl1"]
        assert group.client_name == "Ana"
        assert group.total_value == 1500.0
        assert group.paid_amount == 1100.0
        assert group.due_amount == 400.0
        assert group.payment_status == PaymentStatus.PARTIALLY_PAID
        assert [b.id for b in group.bookings] == ["b1", "b2"]

    def test_fully_paid_group(self) -> None:
        groups = group_bookings_by_client(
            [_booking("b1", clientId="cl1", totalValue=200, paidAmount=200)], {}, "c1"
        )
        assert groups["cl1"].payment_status == PaymentStatus.PAID

    def test_zero_total_is_not_paid(self) -> None:
        groups = group_bookings_by_client([_booking("b1", clientId="cl1")], {}, "c1")
        assert groups["cl1"].payment_status == PaymentStatus.NOT_PAID

    def test_other_company_bookings_skipped(self) -> None:
        bookings = [
            _booking("b1", clientId="cl1", totalValue=100),
            _booking("b2", company_id="c2", clientId="cl1", totalValue=900),
        ]
        groups = group_bookings_by_client(bookings, {}, "c1")
        assert groups["cl1"].total_value == 100.0

    def test_foreign_client_details_not_leaked(self) -> None:
        bookings = [_booking("b1", clientId="cl1", clientName="From booking")]
        clients = {"cl1": _client("cl1", "Other company", company_id="c2")}
        group = group_bookings_by_client(bookings, clients, "c1")["cl1"]
        assert group.client_name == "From booking"
        assert group.client_details is None

    def test_missing_client_goes_to_unknown_group(self) -> None:
        groups = group_bookings_by_client([_booking("b1")], {}, "c1")
        assert UNKNOWN_CLIENT_ID in groups
        assert groups[UNKNOWN_CLIENT_ID].client_name == UNKNOWN_CLIENT_NAME

    def test_localized_client_name(self) -> None:
        clients = {"cl1": _client("cl1", {"ro": "Ioana", "en": "Joanna"})}
        group = group_bookings_by_client([_booking("b1", clientId="cl1")], clients, "c1")["cl1"]
        assert group.client_name == "Joanna"

    def test_payment_history_newest_first_with_booking_id(self) -> None:
        booking = _booking(
            "b1",
            clientId="cl1",
            paymentHistory=[
                {"amount": 10, "date": "2026-01-01T00:00:00Z"},
                {"amount": 20, "date": {"seconds": 1780000000}},
            ],
        )
        group = group_bookings_by_client([booking], {}, "c1")["cl1"]
        assert [p["amount"] for p in group.payment_history] == [20, 10]
        assert all(p["bookingId"] == "b1" for p in group.payment_history)

    def test_last_activity_uses_latest_payment(self) -> None:
        booking = _booking(
            "b1",
            clientId="cl1",
            createdAt="2026-01-01T00:00:00Z",
            lastPaymentDate="2026-03-01T00:00:00Z",
        )
        group = group_bookings_by_client([booking], {}, "c1")["cl1"]
        assert group.last_activity == datetime(2026, 3, 1, tzinfo=UTC)


class TestFilterAndSortGroups:
    """Time buckets, search and ordering."""

    def _groups(self):
        bookings = [
            _booking("up", clientId="a", checkIn="2026-07-01", checkOut="2026-07-08", totalValue=300),
            _booking(
                "now",
                clientId="b",
                checkIn="2026-06-10",
                checkOut="2026-06-20",
                totalValue=900,
                accommodationType="Villa Mare",
            ),
            _booking("old", clientId="c", checkIn="2026-05-01", checkOut="2026-05-05", totalValue=50),
        ]
        clients = {
            "a": _client("a", "Zed"),
            "b": _client("b", "Alice"),
            "c": _client("c", "Marco"),
        }
        return list(group_bookings_by_client(bookings, clients, "c1").values())

    def test_upcoming(self) -> None:
        result = filter_and_sort_groups(self._groups(), TimeFilter.UPCOMING, today=TODAY)
        assert [g.client_id for g in result] == ["a"]

    def test_active(self) -> None:
        result = filter_and_sort_groups(self._groups(), TimeFilter.ACTIVE, today=TODAY)
        assert [g.client_id for g in result] == ["b"]

    def test_past(self) -> None:
        result = filter_and_sort_groups(self._groups(), TimeFilter.PAST, today=TODAY)
        assert [g.client_id for g in result] == ["c"]

    def test_check_in_today_counts_as_upcoming(self) -> None:
        groups = list(
            group_bookings_by_client(
                [_booking("b1", clientId="x", checkIn="2026-06-15", checkOut="2026-06-16")], {}, "c1"
            ).values()
        )
        assert filter_and_sort_groups(groups, TimeFilter.UPCOMING, today=TODAY)
        assert filter_and_sort_groups(groups, TimeFilter.ACTIVE, today=TODAY)

    def test_search_matches_accommodation(self) -> None:
        result = filter_and_sort_groups(self._groups(), search="villa mare", today=TODAY)
        assert [g.client_id for g in result] == ["b"]

    def test_sort_by_date(self) -> None:
        result = filter_and_sort_groups(self._groups(), sort=BookingSort.DATE, today=TODAY)
        assert [g.client_id for g in result] == ["c", "b", "a"]

    def test_sort_by_client_name(self) -> None:
        result = filter_and_sort_groups(self._groups(), sort=BookingSort.CLIENT, today=TODAY)
        assert [g.client_name for g in result] == ["Alice", "Marco", "Zed"]

    def test_sort_by_total_value(self) -> None:
        result = filter_and_sort_groups(self._groups(), sort=BookingSort.TOTAL_VALUE, today=TODAY)
        assert [g.client_id for g in result] == ["b", "a", "c"]


class TestDaysLeft:
    """Human labels for the distance to a check-in."""

    def test_labels(self) -> None:
        assert days_left("2026-06-15", TODAY).label == "today"
        assert days_left("2026-06-16", TODAY).label == "tomorrow"
        assert days_left("2026-06-20", TODAY).label == "in 5 days"
        assert days_left("2026-06-14", TODAY).label == "yesterday"
        assert days_left("2026-06-12", TODAY).label == "3 days ago"

    def test_unreadable_date(self) -> None:
        assert days_left("not a date", TODAY) is None

    def test_next_check_in_ignores_past(self) -> None:
        bookings = [
            _booking("b1", clientId="x", checkIn="2026-06-01"),
            _booking("b2", clientId="x", checkIn="2026-06-18"),
            _booking("b3", clientId="x", checkIn="2026-08-01"),
        ]
        group = group_bookings_by_client(bookings, {}, "c1")["x"]
        result = next_check_in(group, TODAY)
        assert result is not None
        assert result.days == 3

    def test_next_check_in_none_when_all_past(self) -> None:
        group = group_bookings_by_client(
            [_booking("b1", clientId="x", checkIn="2026-06-01")], {}, "c1"
        )["x"]
        assert next_check_in(group, TODAY) is None
