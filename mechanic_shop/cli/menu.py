"""Main menu and the handler behind each option."""

import logging
from datetime import date
from typing import Callable, Dict, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mechanic_shop.cli.console import Console
from mechanic_shop.cli.forms import prompt_car, prompt_customer, prompt_mechanic
from mechanic_shop.cli.resolver import RecordResolver
from mechanic_shop.config import settings
from mechanic_shop.models.base import INT_MAX
from mechanic_shop.models.closed_request import MAX_BILL
from mechanic_shop.tools import report_tools, shop_tools
from mechanic_shop.utils.validators import (
    ValidationError,
    parse_choice,
    parse_date,
    parse_int,
    parse_number,
    parse_yes_no,
)

logger = logging.getLogger(__name__)

EXIT_OPTION = 11


def date_format_label(date_format: Optional[str] = None) -> str:
    """Human form of a strptime format, e.g. %Y-%m-%d -> YYYY-MM-DD."""
    date_format = date_format or settings.DATE_FORMAT
    for directive, label in (("%Y", "YYYY"), ("%m", "MM"), ("%d", "DD")):
        date_format = date_format.replace(directive, label)
    return date_format


class MechanicShop:
    """Interactive front end: one session and one console for the whole run."""

    def __init__(self, db: Session, console: Console):
        self.db = db
        self.console = console
        self.options: List[Tuple[str, Callable[[], None]]] = [
            ("AddCustomer", self.add_customer),
            ("AddMechanic", self.add_mechanic),
            ("AddCar", self.add_car),
            ("InsertServiceRequest", self.insert_service_request),
            ("CloseServiceRequest", self.close_service_request),
            ("ListCustomersWithBillLessThan100", self.list_customers_with_bill_less_than_100),
            ("ListCustomersWithMoreThan20Cars", self.list_customers_with_more_than_20_cars),
            ("ListCarsBefore1995With50000Miles", self.list_cars_before_1995_with_50000_miles),
            ("ListKCarsWithTheMostServices", self.list_k_cars_with_the_most_services),
            (
                "ListCustomersInDescendingOrderOfTheirTotalBill",
                self.list_customers_by_total_bill,
            ),
        ]

    # ------------------------------------------------------------------
    # Menu loop
    # ------------------------------------------------------------------

    def display_menu(self) -> None:
        self.console.say("MAIN MENU")
        self.console.say("---------")
        for number, (label, _) in enumerate(self.options, start=1):
            self.console.say(f"{number}. {label}")
        self.console.say(f"{EXIT_OPTION}. < EXIT")

    def read_choice(self) -> int:
        """Ask until a number between 1 and 11 is typed."""
        while True:
            answer = self.console.ask("Please make your choice: ")
            try:
                return parse_choice(answer, EXIT_OPTION)
            except ValidationError:
                self.console.say("Your input is invalid!")

    def run(self) -> None:
        """Show the menu and dispatch until EXIT is chosen."""
        while True:
            self.display_menu()
            choice = self.read_choice()
            if choice == EXIT_OPTION:
                return
            label, handler = self.options[choice - 1]
            self.dispatch(label, handler)

    def dispatch(self, label: str, handler: Callable[[], None]) -> None:
        """Run one operation; a store failure is reported and the menu continues."""
        logger.info(f"Running {label}")
        try:
            handler()
        except SQLAlchemyError as e:
            logger.error(f"{label} failed: {e}", exc_info=True)
            self.db.rollback()
            self.console.error(f"Error: {e}")

    def _report_result(self, result: Dict) -> None:
        if result["success"]:
            self.console.say(result["message"])
        else:
            self.console.error(f"{result['message']}: {result['error']}")

    # ------------------------------------------------------------------
    # 1-3: create records
    # ------------------------------------------------------------------

    def add_customer(self) -> None:
        fields = prompt_customer(self.console)
        self._report_result(shop_tools.add_customer(self.db, **fields))

    def add_mechanic(self) -> None:
        fields = prompt_mechanic(self.console)
        self._report_result(shop_tools.add_mechanic(self.db, **fields))

    def add_car(self) -> None:
        fields = prompt_car(self.console)
        self._report_result(shop_tools.add_car(self.db, **fields))

    # ------------------------------------------------------------------
    # 4: insert service request
    # ------------------------------------------------------------------

    def insert_service_request(self) -> None:
        resolver = RecordResolver(self.db, self.console)

        customer = resolver.resolve_customer()
        if customer is None:
            return
        self.console.say(f"Your name is {customer.full_name}.")
        self.console.say(f"Customer id is {customer.id}.")

        car = resolver.resolve_car(customer)
        if car is None:
            return

        request_date = self.console.ask_valid(
            f"\tEnter today's date in the format {date_format_label()}: ", parse_date
        )
        odometer = self.console.ask_valid(
            "\tEnter the number of miles on your odometer: ",
            lambda answer: parse_int(answer, minimum=0, maximum=INT_MAX),
        )
        complaint = self.console.ask("\tReason for service: ")

        self._report_result(
            shop_tools.insert_service_request(
                self.db,
                customer_id=customer.id,
                car_vin=car.vin,
                request_date=request_date,
                odometer=odometer,
                complaint=complaint,
            )
        )

    # ------------------------------------------------------------------
    # 5: close service request
    # ------------------------------------------------------------------

    def _lookup_until_found(self, prompt: str, what: str, lookup: Callable[[int], Optional[Dict]]):
        """Ask for an id until the record exists; None when the user gives up."""
        while True:
            record_id = self.console.ask_valid(
                prompt, lambda answer: parse_int(answer, minimum=0, maximum=INT_MAX)
            )
            record = lookup(record_id)
            if record is not None:
                return record
            again = self.console.ask_valid(
                f"{what} {record_id} does not exist. Re-enter? (Y/N): ", parse_yes_no
            )
            if not again:
                return None

    def close_service_request(self) -> None:
        request = self._lookup_until_found(
            "Enter Service Request Number: ",
            "Service Request Number",
            lambda rid: shop_tools.get_service_request(self.db, rid),
        )
        if request is None:
            return
        if request["is_closed"]:
            self.console.error(f"Service Request {request['id']} is already closed.")
            return

        mechanic = self._lookup_until_found(
            "Enter Employee ID: ",
            "Employee ID",
            lambda mid: shop_tools.get_mechanic(self.db, mid),
        )
        if mechanic is None:
            return

        request_date: date = request["request_date"]

        def parse_closing_date(answer: str) -> date:
            closed_date = parse_date(answer)
            if closed_date < request_date:
                raise ValidationError(
                    f"Closing date {closed_date.isoformat()} is before the service date "
                    f"{request_date.isoformat()}"
                )
            return closed_date

        self.console.say(f"This Service Request was made on {request_date.isoformat()}.")
        closed_date = self.console.ask_valid(
            f"Enter today's date in the format {date_format_label()}: ", parse_closing_date
        )
        comment = self.console.ask("Enter comments: ")
        bill = self.console.ask_valid(
            "Enter Bill: $", lambda answer: parse_number(answer, minimum=0, maximum=MAX_BILL)
        )

        self._report_result(
            shop_tools.close_service_request(
                self.db,
                request_id=request["id"],
                mechanic_id=mechanic["id"],
                closed_date=closed_date,
                bill=bill,
                comment=comment,
            )
        )

    # ------------------------------------------------------------------
    # 6-10: reports
    # ------------------------------------------------------------------

    def list_customers_with_bill_less_than_100(self) -> None:
        count = self.console.print_rows(report_tools.customers_with_bill_less_than(self.db))
        self.console.say(f"Customers with bills less than 100: {count}")

    def list_customers_with_more_than_20_cars(self) -> None:
        count = self.console.print_rows(report_tools.customers_with_more_than_cars(self.db))
        self.console.say(f"Customers with more than 20 cars: {count}")

    def list_cars_before_1995_with_50000_miles(self) -> None:
        count = self.console.print_rows(report_tools.cars_before_year_under_mileage(self.db))
        self.console.say(f"Cars before 1995 with under 50,000 miles: {count}")

    def list_k_cars_with_the_most_services(self) -> None:
        k = self.console.ask_valid(
            "Enter an integer for k: ", lambda answer: parse_int(answer, minimum=1, maximum=INT_MAX)
        )
        count = self.console.print_rows(report_tools.cars_with_most_services(self.db, k))
        self.console.say(f"Cars with most services: {count}")

    def list_customers_by_total_bill(self) -> None:
        count = self.console.print_rows(report_tools.customers_by_total_bill(self.db))
        self.console.say(f"Descending order of customers total bill: {count}")
