"""Data loading, cleaning, and in-memory query engine."""
from .loader import discover_inputs, load_orders, load_people, load_returns
from .store import DataStore
from .schemas import PeriodFilter, PeriodType
from .normalize import clean_orders, parse_dates, parse_currency, fix_postal_codes, classify_value_tier
