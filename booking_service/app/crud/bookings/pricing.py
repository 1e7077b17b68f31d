"""
Booking pricing.

A line's cost is the master cost price times the room count (hotels) or the
quantity (services). The selling price adds the master markup percentage:

    cost    = cost_price * count
    selling = cost * (1 + selling_price_percentage / 100)

Hotel lines are not multiplied by the number of nights: the hotel master
price is the price of one room for the whole stay.

Every figure is a ``Decimal`` quantized to two places, and booking totals are
the sums of the already-quantized lines so they always match the stored rows.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, NamedTuple

TWO_PLACES = Decimal("0.01")
HUNDRED = Decimal("100")
# largest value a Numeric(10, 2) column holds
MAX_MONEY = Decimal("99999999.99")


class LinePrice(NamedTuple):
    cost_price: Decimal
    selling_price: Decimal


def to_money(value) -> Decimal:
    """Coerce a DB or user value to a two-place Decimal without going through float."""
    if value is None:
        return Decimal("0.00")
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def price_line(cost_price, markup_percentage, count: int) -> LinePrice:
    cost = Decimal(str(cost_price)) * count
    selling = cost * (1 + Decimal(str(markup_percentage)) / HUNDRED)
    return LinePrice(to_money(cost), to_money(selling))


def price_hotel_line(hotel, number_of_rooms: int) -> LinePrice:
    return price_line(hotel.cost_price, hotel.selling_price_percentage, number_of_rooms)


def price_service_line(service, quantity: int) -> LinePrice:
    return price_line(service.cost_price, service.selling_price_percentage, quantity)


def sum_lines(lines: Iterable[LinePrice]) -> LinePrice:
    total_cost = Decimal("0.00")
    total_selling = Decimal("0.00")
    for line in lines:
        total_cost += line.cost_price
        total_selling += line.selling_price
    return LinePrice(to_money(total_cost), to_money(total_selling))
