from .date import DateLike, date_to_str, to_date, to_optional_date

__all__ = ["DateLike", "date_to_str", "to_date", "to_optional_date"]
