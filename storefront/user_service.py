"""Purchases, user management and daily sales reports."""
import logging
from datetime import datetime, timedelta

import pandas as pd

from storefront import db, cache
from storefront.decorators import log_method, transactional
from storefront.exceptions import BusinessException, ResourceNotFoundException
from storefront.models import (
    DailySalesReport,
    Store,
    StoreProduct,
    User,
    UserPurchase,
    get_or_raise,
    utcnow,
)
from storefront.schemas import (
    parse_purchase_request,
    to_purchase_response,
    to_report_response,
    to_user_response,
)


def _report_cache_key(store_id):
    return f"daily_reports_{store_id}"


def _get_user_by_username(username):
    user = User.query.filter_by(username=username).first()
    if user is None:
        raise ResourceNotFoundException("User not found")
    return user


def _get_user(user_id):
    return get_or_raise(User, user_id, "User not found")


@log_method("Purchase product")
@transactional
def purchase_product(username, data):
    store_product_id, quantity = parse_purchase_request(data)
    user = _get_user_by_username(username)

    store_product = get_or_raise(StoreProduct, store_product_id, "Product not found")

    if store_product.quantity < quantity:
        raise BusinessException(f"Insufficient stock available. Available: {store_product.quantity}")

    # Update inventory
    store_product.quantity -= quantity

    purchase = UserPurchase(user=user, store_product=store_product, quantity=quantity,
                            purchase_date=utcnow())
    db.session.add(purchase)
    db.session.flush()
    return to_purchase_response(purchase)


def _purchases_for(user_id):
    purchases = (UserPurchase.query
                 .filter_by(user_id=user_id)
                 .order_by(UserPurchase.purchase_date, UserPurchase.id)
                 .all())
    return [to_purchase_response(p) for p in purchases]


@log_method("Get user purchases by token")
def get_user_purchases(username):
    user = _get_user_by_username(username)
    return _purchases_for(user.id)


@log_method("Get user purchases by ID")
def get_user_purchases_by_id(user_id):
    _get_user(user_id)
    return _purchases_for(user_id)


@log_method("Get all users")
def get_all_users():
    return [to_user_response(u) for u in User.query.order_by(User.id).all()]


@log_method("Get user by ID")
def get_user_by_id(user_id):
    return to_user_response(_get_user(user_id))


@log_method("Deactivate user")
@transactional
def deactivate_user(user_id):
    _get_user(user_id).active = False


@log_method("Activate user")
@transactional
def activate_user(user_id):
    _get_user(user_id).active = True


@log_method("Get daily sales reports")
def get_daily_sales_reports(store_id):
    get_or_raise(Store, store_id, "Store not found")

    cache_key = _report_cache_key(store_id)
    reports = cache.get(cache_key)
    if reports is None:
        rows = (DailySalesReport.query
                .filter_by(store_id=store_id)
                .order_by(DailySalesReport.report_date)
                .all())
        reports = [to_report_response(r) for r in rows]
        cache.set(cache_key, reports)
    return reports


def _sales_by_store(start, end):
    """Sum quantity * price per store for purchases in ``[start, end)``."""
    sales_data = (db.session.query(StoreProduct.store_id, UserPurchase.quantity, StoreProduct.price)
                  .join(UserPurchase.store_product)
                  .filter(UserPurchase.purchase_date >= start,
                          UserPurchase.purchase_date < end)
                  .all())
    if not sales_data:
        return {}

    df = pd.DataFrame([tuple(row) for row in sales_data], columns=['store_id', 'quantity', 'price'])
    df['total'] = df['quantity'] * df['price']
    totals = df.groupby('store_id')['total'].sum()
    return {int(store_id): float(total) for store_id, total in totals.items()}


@transactional
def _create_missing_reports(report_date):
    start_of_day = datetime.combine(report_date, datetime.min.time())
    end_of_day = start_of_day + timedelta(days=1)

    totals = _sales_by_store(start_of_day, end_of_day)

    created = []
    for store in Store.query.order_by(Store.id).all():
        existing = DailySalesReport.query.filter_by(store_id=store.id, report_date=report_date).first()
        if existing is not None:
            logging.info(f"Report for store {store.id} on {report_date} already exists, skipping")
            continue

        report = DailySalesReport(store=store, report_date=report_date,
                                  total_sales=totals.get(store.id, 0.0))
        db.session.add(report)
        created.append(report)
        logging.info(f"Created report for store {store.id} on {report_date}: {report.total_sales}")

    db.session.flush()
    return [to_report_response(r) for r in created]


@log_method("Generate daily sales reports")
def generate_daily_sales_reports(report_date=None):
    if report_date is None:
        report_date = utcnow().date() - timedelta(days=1)
    created = _create_missing_reports(report_date)
    # Invalidate only once the reports are committed
    for report in created:
        cache.delete(_report_cache_key(report["storeId"]))
    return created
