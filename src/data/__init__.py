"""
Data Package
Loads the rental CSV into typed records and splits it into train/test sets
"""

from .data_loader import RentalDataLoader, load_rental_data, split_rental_data

__all__ = [
    "RentalDataLoader",
    "load_rental_data",
    "split_rental_data",
]
