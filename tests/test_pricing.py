"""Line pricing and booking totals."""

from decimal import Decimal
from types import SimpleNamespace

from booking_service.app.crud.bookings.pricing import (
    LinePrice,
    price_hotel_line,
    price_line,
    price_service_line,
    sum_lines,
    to_money,
)


class TestPriceLine:
    def test_markup_is_applied_to_cost(self):
        price = price_line(Decimal("100.00"), Decimal("20"), 1)
        assert price == LinePrice(Decimal("100.00"), Decimal("120.00"))

    def test_count_multiplies_cost(self):
        price = price_line(Decimal("100.00"), Decimal("20"), 3)
        assert price.cost_price == Decimal("300.00")
        assert price.selling_price == Decimal("360.00")

    def test_selling_never_below_cost(self):
        for markup in ("0.01", "1", "12.5", "250"):
            price = price_line(Decimal("33.33"), Decimal(markup), 7)
            assert price.selling_price >= price.cost_price

    def test_rounds_half_up_to_two_places(self):
        # 10.01 * 1.125 = 11.26125
        price = price_line(Decimal("10.01"), Decimal("12.5"), 1)
        assert price.selling_price == Decimal("11.26")
        # 0.05 * 1.5 = 0.075
        assert price_line(Decimal("0.05"), Decimal("50"), 1).selling_price == Decimal("0.08")

    def test_float_inputs_do_not_leak_binary_error(self):
        price = price_line(0.1, 10, 3)
        assert price.cost_price == Decimal("0.30")
        assert price.selling_price == Decimal("0.33")


class TestMasterLines:
    def test_hotel_line_ignores_nights(self):
        hotel = SimpleNamespace(cost_price=Decimal("250.00"),
                                selling_price_percentage=Decimal("10"))
        assert price_hotel_line(hotel, 2) == LinePrice(Decimal("500.00"), Decimal("550.00"))

    def test_service_line_uses_quantity(self):
        service = SimpleNamespace(cost_price=Decimal("50.00"),
                                  selling_price_percentage=Decimal("10"))
        assert price_service_line(service, 4) == LinePrice(Decimal("200.00"), Decimal("220.00"))


class TestTotals:
    def test_sum_of_lines(self):
        total = sum_lines([
            LinePrice(Decimal("100.00"), Decimal("120.00")),
            LinePrice(Decimal("50.00"), Decimal("55.00")),
        ])
        assert total == LinePrice(Decimal("150.00"), Decimal("175.00"))

    def test_empty_booking_totals_zero(self):
        assert sum_lines([]) == LinePrice(Decimal("0.00"), Decimal("0.00"))

    def test_to_money_handles_none_and_strings(self):
        assert to_money(None) == Decimal("0.00")
        assert to_money("12.345") == Decimal("12.35")
        assert to_money(7) == Decimal("7.00")
