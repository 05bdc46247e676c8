from __future__ import annotations

import math
from typing import Annotated, Any, Optional

from pydantic import BeforeValidator


def _to_optional_text(value: Any) -> Optional[str]:
    """Coerce store values (ints, floats read from CSV, padded strings) to text.

    Blank strings and NaN collapse to None so that "absent" has one spelling.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return None
        if value.is_integer():
            return str(int(value))
    text = str(value).strip()
    return text or None


OptionalText = Annotated[Optional[str], BeforeValidator(_to_optional_text)]
