"""Diagnostics package.

Light-weight checks and printouts over the loaded calendar table.
month_lengths needs the optional extras: pip install "hijrical[diagnostics]"
"""

__all__ = ["pretty_month", "new_years_table", "round_trip", "month_lengths"]
