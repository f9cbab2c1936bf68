"""Request parsing and response mapping for the JSON API.

Requests arrive as plain dicts (``request.get_json()``); responses are plain
dicts handed to ``jsonify``. Keys use the camelCase names the API exposes.
"""
from datetime import date

from storefront.exceptions import BusinessException

USERNAME_MAX_LENGTH = 80


def _require_text(data, field):
    value = data.get(field)
    if not isinstance(value, str) or not value.strip():
        raise BusinessException(f"{field} is required")
    return value


def parse_credentials(data):
    if not isinstance(data, dict):
        raise BusinessException("Request body must be a JSON object")
    username = _require_text(data, 'username').strip()
    password = _require_text(data, 'password')
    if len(username) > USERNAME_MAX_LENGTH:
        raise BusinessException(f"username must be at most {USERNAME_MAX_LENGTH} characters")
    return username, password


def parse_purchase_request(data):
    if not isinstance(data, dict):
        raise BusinessException("Request body must be a JSON object")
    store_product_id = data.get('storeProductId')
    quantity = data.get('quantity')
    # bool is an int subclass; reject it explicitly
    if not isinstance(store_product_id, int) or isinstance(store_product_id, bool):
        raise BusinessException("storeProductId must be an integer")
    if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
        raise BusinessException("quantity must be a positive integer")
    return store_product_id, quantity


def parse_report_date(value):
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise BusinessException("date must be formatted as YYYY-MM-DD")


def to_user_response(user):
    return {
        'id': user.id,
        'username': user.username,
        'role': user.role,
        'active': user.active,
    }


def to_purchase_response(purchase):
    store_product = purchase.store_product
    return {
        'id': purchase.id,
        'productName': store_product.product.name,
        'storeName': store_product.store.name,
        'quantity': purchase.quantity,
        'price': store_product.price,
        'totalPrice': purchase.quantity * store_product.price,
        'purchaseDate': purchase.purchase_date.isoformat(),
    }


def to_report_response(report):
    return {
        'id': report.id,
        'storeId': report.store.id,
        'storeName': report.store.name,
        'reportDate': report.report_date.isoformat(),
        'totalSales': report.total_sales,
    }


def to_store_response(store):
    return {
        'id': store.id,
        'name': store.name,
        'address': store.address,
    }


def to_store_product_response(store_product):
    return {
        'id': store_product.id,
        'productId': store_product.product.id,
        'productName': store_product.product.name,
        'description': store_product.product.description,
        'price': store_product.price,
        'quantity': store_product.quantity,
    }
