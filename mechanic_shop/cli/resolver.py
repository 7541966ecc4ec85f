"""
Interactive record resolver.

Turns a last name typed at the counter into a concrete customer, then into
one of that customer's cars, creating either on the spot when needed.

Per resolution call the resolver moves through:

    START -> SEARCHING -> NO_MATCH    -> CREATING_NEW -> RESOLVED
                                      -> ABORTED
                       -> HAS_MATCHES -> SELECTED_EXISTING -> RESOLVED
                                      -> CREATING_NEW -> RESOLVED

Out-of-range or non-numeric selections re-prompt. Only a "N" answer to a
no-match question aborts. A failed inline creation also ends ABORTED.
"""

import enum
import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.orm import Session

from mechanic_shop.cli.console import Console
from mechanic_shop.cli.forms import prompt_car, prompt_customer
from mechanic_shop.models.customer import NAME_MAX_LENGTH
from mechanic_shop.tools.shop_tools import (
    add_car,
    add_customer,
    get_customer_cars,
    search_customers_by_last_name,
)
from mechanic_shop.utils.validators import check_length, parse_choice, parse_yes_no

logger = logging.getLogger(__name__)

CHOOSE_EXISTING = 1
CREATE_NEW = 2


class ResolutionState(str, enum.Enum):
    """Resolver state."""

    START = "start"
    SEARCHING = "searching"
    NO_MATCH = "no_match"
    HAS_MATCHES = "has_matches"
    SELECTED_EXISTING = "selected_existing"
    CREATING_NEW = "creating_new"
    RESOLVED = "resolved"
    ABORTED = "aborted"


@dataclass
class ResolvedCustomer:
    id: int
    first_name: str
    last_name: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass
class ResolvedCar:
    vin: str
    make: str
    model: str
    year: int


class RecordResolver:
    """Search-or-create lookup for customers and their cars."""

    def __init__(self, db: Session, console: Console):
        self.db = db
        self.console = console
        self.state = ResolutionState.START
        self.transitions: List[ResolutionState] = [self.state]

    def _enter(self, state: ResolutionState) -> None:
        logger.debug(f"Resolver {self.state.value} -> {state.value}")
        self.state = state
        self.transitions.append(state)

    def _reset(self) -> None:
        self.state = ResolutionState.START
        self.transitions = [self.state]

    def _choose_existing_or_new(self, what: str) -> int:
        return self.console.ask_valid(
            f"Type 1 to choose an existing {what} or 2 to add a new {what} (1/2): ",
            lambda answer: parse_choice(answer, 2),
        )

    # ------------------------------------------------------------------
    # Customer
    # ------------------------------------------------------------------

    def resolve_customer(self) -> Optional[ResolvedCustomer]:
        """Ask for a last name and resolve it to one customer, or None if aborted."""
        self._reset()
        last_name = self.console.ask_valid(
            "\tEnter last name: ",
            lambda answer: check_length("Last name", answer, NAME_MAX_LENGTH, required=True),
        )

        self._enter(ResolutionState.SEARCHING)
        matches = search_customers_by_last_name(self.db, last_name)

        if not matches:
            self._enter(ResolutionState.NO_MATCH)
            create = self.console.ask_valid(
                f"No customer with the last name {last_name}. Add as new customer? (Y/N): ",
                parse_yes_no,
            )
            if not create:
                self._enter(ResolutionState.ABORTED)
                return None
            return self._create_customer(last_name)

        self._enter(ResolutionState.HAS_MATCHES)
        for index, match in enumerate(matches, start=1):
            self.console.say(
                f"{index}. {match['first_name']} {match['last_name']} ({match['phone'] or 'no phone'})"
            )

        if self._choose_existing_or_new("customer") == CREATE_NEW:
            return self._create_customer(last_name)

        index = self.console.ask_valid(
            "\tChoose the number corresponding to the customer: ",
            lambda answer: parse_choice(answer, len(matches)),
        )
        chosen = matches[index - 1]
        self._enter(ResolutionState.SELECTED_EXISTING)
        self._enter(ResolutionState.RESOLVED)
        return ResolvedCustomer(chosen["id"], chosen["first_name"], chosen["last_name"])

    def _create_customer(self, last_name: str) -> Optional[ResolvedCustomer]:
        self._enter(ResolutionState.CREATING_NEW)
        fields = prompt_customer(self.console, last_name=last_name)
        result = add_customer(self.db, **fields)
        if not result["success"]:
            self.console.error(f"{result['message']}: {result['error']}")
            self._enter(ResolutionState.ABORTED)
            return None

        data = result["data"]
        self.console.say(result["message"])
        self._enter(ResolutionState.RESOLVED)
        return ResolvedCustomer(data["customer_id"], data["first_name"], data["last_name"])

    # ------------------------------------------------------------------
    # Car
    # ------------------------------------------------------------------

    def resolve_car(self, customer: ResolvedCustomer) -> Optional[ResolvedCar]:
        """Resolve one of the customer's cars, adding and linking a new one on request."""
        self._reset()
        self._enter(ResolutionState.SEARCHING)
        cars = get_customer_cars(self.db, customer.id)

        if not cars:
            self._enter(ResolutionState.NO_MATCH)
            create = self.console.ask_valid(
                f"No cars on file for {customer.full_name}. Add a new car? (Y/N): ",
                parse_yes_no,
            )
            if not create:
                self._enter(ResolutionState.ABORTED)
                return None
            return self._create_car(customer)

        self._enter(ResolutionState.HAS_MATCHES)
        self.console.say("List of related cars: ")
        for index, car in enumerate(cars, start=1):
            self.console.say(f"{index}. {car['vin']} {car['make']}, {car['model']}, {car['year']}")

        if self._choose_existing_or_new("car") == CREATE_NEW:
            return self._create_car(customer)

        index = self.console.ask_valid(
            "\tChoose the number corresponding to the car of your choice: ",
            lambda answer: parse_choice(answer, len(cars)),
        )
        chosen = cars[index - 1]
        self._enter(ResolutionState.SELECTED_EXISTING)
        self._enter(ResolutionState.RESOLVED)
        return ResolvedCar(chosen["vin"], chosen["make"], chosen["model"], chosen["year"])

    def _create_car(self, customer: ResolvedCustomer) -> Optional[ResolvedCar]:
        self._enter(ResolutionState.CREATING_NEW)
        fields = prompt_car(self.console)
        result = add_car(self.db, owner_id=customer.id, **fields)
        if not result["success"]:
            self.console.error(f"{result['message']}: {result['error']}")
            self._enter(ResolutionState.ABORTED)
            return None

        data = result["data"]
        self.console.say(result["message"])
        self._enter(ResolutionState.RESOLVED)
        return ResolvedCar(data["vin"], data["make"], data["model"], data["year"])
