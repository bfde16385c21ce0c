"""Municipal taxi-driver registration spreadsheets -> printable B2 cards."""

__version__ = "0.3.0"
