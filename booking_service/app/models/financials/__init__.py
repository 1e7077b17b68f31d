from .exchange_rates import ExchangeRate
