# mobsim/config/parameters.py
from __future__ import annotations

from typing import Dict


def parse_parameter_string(raw: str) -> Dict[str, str]:
    """
    Parse a KEY=VALUE parameter string: ``"MODEL=RWP,TIME=100,SEED=7"``.

    - pairs are separated by ``,`` and split on the first ``=``
    - pairs without a value are dropped
    - keys are upper-cased, later keys win
    """
    params: Dict[str, str] = {}

    for pair in raw.split(","):
        parts = pair.split("=", 1)
        if len(parts) < 2:
            continue

        key, value = parts[0].strip(), parts[1].strip()
        if not key or not value:
            continue

        params[key.upper()] = value

    return params
