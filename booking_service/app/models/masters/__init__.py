from .customers import Customer
from .hotels import Hotel
from .services import Service
