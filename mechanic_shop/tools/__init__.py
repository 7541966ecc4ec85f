"""Shop tools for records, service requests and reports."""

from mechanic_shop.tools.report_tools import (
    cars_before_year_under_mileage,
    cars_with_most_services,
    customers_by_total_bill,
    customers_with_bill_less_than,
    customers_with_more_than_cars,
)
from mechanic_shop.tools.shop_tools import (
    add_car,
    add_customer,
    add_mechanic,
    close_service_request,
    get_customer_cars,
    get_mechanic,
    get_service_request,
    insert_service_request,
    link_car_to_customer,
    search_customers_by_last_name,
)

__all__ = [
    "add_customer",
    "add_mechanic",
    "add_car",
    "link_car_to_customer",
    "search_customers_by_last_name",
    "get_customer_cars",
    "get_service_request",
    "get_mechanic",
    "insert_service_request",
    "close_service_request",
    "customers_with_bill_less_than",
    "customers_with_more_than_cars",
    "cars_before_year_under_mileage",
    "cars_with_most_services",
    "customers_by_total_bill",
]
