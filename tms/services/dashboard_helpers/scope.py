# /tms/services/dashboard_helpers/scope.py

"""
The tagged variant that selects which role a dashboard is computed for.
Every aggregation entry point takes exactly one of these.
"""

from dataclasses import dataclass, field
from typing import Literal, Union


@dataclass(frozen=True)
class AdminScope:
    kind: Literal["admin"] = field(default="admin", init=False)


@dataclass(frozen=True)
class BedriftScope:
    id: int
    kind: Literal["bedrift"] = field(default="bedrift", init=False)


@dataclass(frozen=True)
class ElevScope:
    id: int
    kind: Literal["elev"] = field(default="elev", init=False)


DashboardScope = Union[AdminScope, BedriftScope, ElevScope]
