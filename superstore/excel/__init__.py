"""Styled Excel output for query results."""
from .writer import ColSpec, ExcelWriter
