"""Prompt sequences that collect the fields of a new record."""

from typing import Any, Dict, Optional

from mechanic_shop.cli.console import Console
from mechanic_shop.models.base import INT_MAX
from mechanic_shop.models.car import MAKE_MAX_LENGTH, MIN_MODEL_YEAR, MODEL_MAX_LENGTH, VIN_MAX_LENGTH
from mechanic_shop.models.customer import ADDRESS_MAX_LENGTH, NAME_MAX_LENGTH, PHONE_MAX_LENGTH
from mechanic_shop.models.mechanic import MAX_EXPERIENCE_YEARS
from mechanic_shop.utils.validators import check_length, parse_int


def _text(console: Console, prompt: str, label: str, max_length: int, required: bool = True) -> str:
    return console.ask_valid(
        prompt, lambda answer: check_length(label, answer, max_length, required=required)
    )


def prompt_customer(console: Console, last_name: Optional[str] = None) -> Dict[str, Any]:
    """Collect first name, last name, phone and address.

    When last_name is given (the resolver already knows it) it is not asked.
    """
    first_name = _text(console, "Please enter the first name: ", "First name", NAME_MAX_LENGTH)
    if last_name is None:
        last_name = _text(console, "Please enter the last name: ", "Last name", NAME_MAX_LENGTH)
    phone = _text(
        console, "Please enter the phone number: ", "Phone number", PHONE_MAX_LENGTH, required=False
    )
    address = _text(
        console, "Please enter the address: ", "Address", ADDRESS_MAX_LENGTH, required=False
    )
    return {"first_name": first_name, "last_name": last_name, "phone": phone, "address": address}


def prompt_mechanic(console: Console) -> Dict[str, Any]:
    first_name = _text(console, "Please enter the first name: ", "First name", NAME_MAX_LENGTH)
    last_name = _text(console, "Please enter the last name: ", "Last name", NAME_MAX_LENGTH)
    experience = console.ask_valid(
        "Please enter the years of experience: ",
        lambda answer: parse_int(answer, minimum=0, maximum=MAX_EXPERIENCE_YEARS),
    )
    return {"first_name": first_name, "last_name": last_name, "experience": experience}


def prompt_car(console: Console) -> Dict[str, Any]:
    vin = _text(console, "Please enter the VIN: ", "VIN", VIN_MAX_LENGTH)
    make = _text(console, "Please enter the make: ", "Make", MAKE_MAX_LENGTH)
    model = _text(console, "Please enter the model: ", "Model", MODEL_MAX_LENGTH)
    year = console.ask_valid(
        "Please enter the year: ",
        lambda answer: parse_int(answer, minimum=MIN_MODEL_YEAR, maximum=INT_MAX),
    )
    return {"vin": vin, "make": make, "model": model, "year": year}
