"""
Pytest configuration and fixtures for the storefront backend.

Every test gets a fresh application bound to an in-memory SQLite database
seeded with two stores, their inventory and three users.
"""

import pytest

from storefront import create_app, db
from storefront.models import Product, Role, Store, StoreProduct, User

PASSWORD = "secret123"


def _seed():
    downtown = Store(name="Downtown", address="1 Main St")
    airport = Store(name="Airport", address="Terminal 2")
    coffee = Product(name="Coffee Beans", description="Dark roast, 1kg")
    tea = Product(name="Green Tea", description="Loose leaf, 250g")

    downtown_coffee = StoreProduct(store=downtown, product=coffee, price=10.0, quantity=5)
    downtown_tea = StoreProduct(store=downtown, product=tea, price=4.5, quantity=20)
    airport_coffee = StoreProduct(store=airport, product=coffee, price=12.0, quantity=3)

    admin = User(username="admin", role=Role.ADMIN, active=True)
    alice = User(username="alice", role=Role.USER, active=True)
    bob = User(username="bob", role=Role.USER, active=False)
    for user in (admin, alice, bob):
        user.set_password(PASSWORD)

    db.session.add_all([
        downtown, airport, coffee, tea,
        downtown_coffee, downtown_tea, airport_coffee,
        admin, alice, bob,
    ])
    db.session.commit()

    return {
        "downtown": downtown.id,
        "airport": airport.id,
        "downtown_coffee": downtown_coffee.id,
        "downtown_tea": downtown_tea.id,
        "airport_coffee": airport_coffee.id,
        "admin": admin.id,
        "alice": alice.id,
        "bob": bob.id,
    }


@pytest.fixture
def app():
    """
    Application configured for testing.
    """
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret-key",
        "JWT_SECRET_KEY": "test-jwt-secret",
        "SQLALCHEMY_DATABASE_URI": "sqlite://",
        "CACHE_TYPE": "SimpleCache",
    })

    with app.app_context():
        db.create_all()
        app.config["SEED_IDS"] = _seed()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def ids(app):
    """
    Primary keys of the seeded rows.
    """
    return app.config["SEED_IDS"]


@pytest.fixture
def app_ctx(app):
    """
    Pushed application context for calling services directly.
    """
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, username, password=PASSWORD):
    response = client.post("/api/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.get_json()
    return {"Authorization": f"Bearer {response.get_json()['token']}"}


@pytest.fixture
def user_headers(client):
    return login(client, "alice")


@pytest.fixture
def admin_headers(client):
    return login(client, "admin")
