from datetime import date, datetime
from typing import Union

DATE_KEY_FORMAT = "%Y-%m-%d"


def format_param_date(value: Union[date, datetime]) -> str:
    """Render a day as the string key stored in ``tasks.date``."""
    return value.strftime(DATE_KEY_FORMAT)
