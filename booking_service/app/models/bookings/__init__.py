from .bookings import Booking
from .hotel_booking_items import HotelBookingItem
from .service_booking_items import ServiceBookingItem

from .payments import Payment
from .expenses import Expense
