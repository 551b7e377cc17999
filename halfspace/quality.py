import math
from typing import Dict, List, Mapping, Optional, Tuple

from .config import settings

Issue = Tuple[str, str]  # (check_name, message)

def range_checks(x: Dict[str, float], limits: Optional[Mapping[str, Tuple[float, float]]] = None) -> List[Issue]:
    """
    Report values the trees cannot place meaningfully. Nothing is rejected:
    out-of-range values still traverse, they just land on the outermost cells.
    """
    issues: List[Issue] = []
    limits = limits or {}

    for f, v in x.items():
        if not math.isfinite(v):
            issues.append(("finite", f"{f} is {v}"))
            continue
        mn, mx = limits.get(f, settings.value_range)
        if not (mn <= v <= mx):
            issues.append(("range", f"{f} {v} out of [{mn},{mx}]"))

    return issues
