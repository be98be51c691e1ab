"""Tests for building request DTOs from raw checkout payloads."""

import pytest

from storefront.application.dto import CreateOrderRequest, OrderItemSpec
from storefront.domain.exceptions import ValidationError


def _payload(**overrides) -> dict:
    data = {
        "customerDetails": {
            "firstName": "Lebo",
            "lastName": "Mokoena",
            "email": "lebo@example.co.za",
            "phone": "0821234567",
        },
        "deliveryAddress": {
            "street": "12 Vilakazi St",
            "city": "Soweto",
            "province": "Gauteng",
            "postalCode": "1804",
        },
        "items": [{"productId": "p1", "quantity": 2}],
        "paymentMethod": "card",
    }
    data.update(overrides)
    return data


class TestCreateOrderRequestFromDict:

    def test_camel_case_payload(self):
        request = CreateOrderRequest.from_dict(_payload())
        assert request.customer_details.first_name == "Lebo"
        assert request.delivery_address.postal_code == "1804"
        assert request.items == [OrderItemSpec("p1", 2)]
        assert request.payment_method == "card"

    def test_missing_sections_become_none(self):
        request = CreateOrderRequest.from_dict(
            _payload(customerDetails=None, deliveryAddress=None)
        )
        assert request.customer_details is None
        assert request.delivery_address is None

    def test_item_that_is_not_an_object(self):
        with pytest.raises(ValidationError, match="Order item must be an object"):
            CreateOrderRequest.from_dict(_payload(items=["p1"]))

    def test_customer_details_not_an_object(self):
        with pytest.raises(ValidationError, match="Customer details must be an object"):
            CreateOrderRequest.from_dict(_payload(customerDetails="Lebo Mokoena"))

    def test_delivery_address_not_an_object(self):
        with pytest.raises(ValidationError, match="Delivery address must be an object"):
            CreateOrderRequest.from_dict(_payload(deliveryAddress=["12 Vilakazi St"]))

    def test_payload_not_an_object(self):
        with pytest.raises(ValidationError):
            CreateOrderRequest.from_dict([])
