from typing import Any

from utils.casing import snake_case_keys


def normalize_record(data: Any) -> Any:
    """Rename every key in a response body to snake_case, once, at the transport boundary."""
    return snake_case_keys(data)
