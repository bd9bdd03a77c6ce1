"""Analytical query catalog over the cleaned tables."""
from .catalog import CATALOG, QuerySpec, get_query, query_names, run_all, run_query
