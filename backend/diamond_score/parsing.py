from typing import Any


class Parse:
    """Lenient readers for StatsAPI values.

    Upstream fields are optional and sometimes typed inconsistently (numbers as
    strings, objects replaced by null). These helpers never raise; anything
    unusable comes back as None or an empty dict."""

    @staticmethod
    def section(obj: Any, key: str) -> dict:
        if not isinstance(obj, dict):
            return {}
        value = obj.get(key)
        return value if isinstance(value, dict) else {}

    @staticmethod
    def int_or_none(value: Any) -> int | None:
        if value is None or isinstance(value, bool):
            return None
        try:
            number = float(value)
        except (ValueError, TypeError, OverflowError):
            return None
        # Counts are whole numbers; "3.9" is not a score
        if not number.is_integer():
            return None
        return int(number)

    @staticmethod
    def float_or_none(value: Any) -> float | None:
        if value is None or isinstance(value, bool):
            return None
        try:
            result = float(value)
        except (ValueError, TypeError):
            return None
        # NaN is not a usable percentage
        return result if result == result else None

    @staticmethod
    def str_or_none(value: Any) -> str | None:
        if isinstance(value, str) and value:
            return value
        return None
