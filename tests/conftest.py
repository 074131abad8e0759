"""Shared pytest fixtures and configuration for all tests."""

import os

import pytest

# Keep src/main.py from wiring the real application on import
os.environ.setdefault("ENVIRONMENT", "test")


@pytest.fixture
def base_url() -> str:
    """Fixture providing the menu API origin used in tests."""
    return "https://menu.test"


@pytest.fixture
def category_payload() -> dict:
    """Fixture providing a category list envelope as sent by the API."""
    return {
        "status": True,
        "menuList": [
            {"menuID": "1", "image": "/a.png", "name": "Soups", "subMenuCount": 3},
            {"menuID": "2", "image": "/b.png", "name": "Salads", "subMenuCount": 5},
            {"menuID": "7", "image": "/c.png", "name": "Desserts", "subMenuCount": 2},
        ],
    }


@pytest.fixture
def dish_payload() -> dict:
    """Fixture providing a dish list envelope as sent by the API."""
    return {
        "status": True,
        "menuList": [
            {
                "id": "d1",
                "image": "/b.png",
                "name": "Tomato Soup",
                "content": "tomato, cream",
                "price": "250 ₽",
                "weight": "300g",
                "spicy": "Y",
            },
            {
                "id": "d2",
                "image": "/d.png",
                "name": "Chicken Broth",
                "content": "chicken, noodles",
                "price": "190 ₽",
                "weight": "350g",
                "spicy": None,
            },
        ],
    }
