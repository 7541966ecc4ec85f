"""Interactive console front end."""

from mechanic_shop.cli.console import Console
from mechanic_shop.cli.menu import MechanicShop
from mechanic_shop.cli.resolver import RecordResolver, ResolutionState, ResolvedCar, ResolvedCustomer

__all__ = [
    "Console",
    "MechanicShop",
    "RecordResolver",
    "ResolutionState",
    "ResolvedCustomer",
    "ResolvedCar",
]
