from datetime import datetime, timezone
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash

# Import db from current module (initialized in __init__.py)
from storefront import db
from storefront.exceptions import ResourceNotFoundException

# Largest value an INTEGER primary key can hold
MAX_ID = 2 ** 63 - 1


def utcnow():
    """Current UTC time as a naive datetime, matching the DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def get_or_raise(model, entity_id, message):
    if not isinstance(entity_id, int) or not 0 < entity_id <= MAX_ID:
        raise ResourceNotFoundException(message)
    entity = db.session.get(model, entity_id)
    if entity is None:
        raise ResourceNotFoundException(message)
    return entity


class Role:
    USER = 'USER'
    ADMIN = 'ADMIN'


class User(db.Model, UserMixin):
    __tablename__ = 'users'
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)
    role = db.Column(db.String(20), nullable=False, default=Role.USER)
    active = db.Column(db.Boolean, nullable=False, default=True)

    purchases = db.relationship('UserPurchase', back_populates='user', lazy=True)

    @property
    def is_active(self):
        return self.active

    @property
    def is_admin(self):
        return self.role == Role.ADMIN

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    def __repr__(self):
        return f'<User {self.username}>'


class Store(db.Model):
    __tablename__ = 'stores'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(128), unique=True, nullable=False)
    address = db.Column(db.String(256))

    store_products = db.relationship('StoreProduct', back_populates='store', lazy=True)

    def __repr__(self):
        return f'<Store {self.name}>'


class Product(db.Model):
    __tablename__ = 'products'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(128), nullable=False)
    description = db.Column(db.Text)

    def __repr__(self):
        return f'<Product {self.name}>'


class StoreProduct(db.Model):
    __tablename__ = 'store_products'
    __table_args__ = (
        db.UniqueConstraint('store_id', 'product_id', name='uq_store_product'),
        db.CheckConstraint('quantity >= 0', name='ck_store_product_quantity'),
        db.CheckConstraint('price >= 0', name='ck_store_product_price'),
    )
    id = db.Column(db.Integer, primary_key=True)
    store_id = db.Column(db.Integer, db.ForeignKey('stores.id'), nullable=False)
    product_id = db.Column(db.Integer, db.ForeignKey('products.id'), nullable=False)
    price = db.Column(db.Float, nullable=False)
    quantity = db.Column(db.Integer, nullable=False, default=0)

    store = db.relationship('Store', back_populates='store_products')
    product = db.relationship('Product')

    def __repr__(self):
        return f'<StoreProduct {self.product_id}@{self.store_id} x{self.quantity}>'


class UserPurchase(db.Model):
    __tablename__ = 'user_purchases'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    store_product_id = db.Column(db.Integer, db.ForeignKey('store_products.id'), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    purchase_date = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)

    user = db.relationship('User', back_populates='purchases')
    store_product = db.relationship('StoreProduct')

    def __repr__(self):
        return f'<UserPurchase {self.user_id} - {self.purchase_date}>'


class DailySalesReport(db.Model):
    __tablename__ = 'daily_sales_reports'
    __table_args__ = (
        db.UniqueConstraint('store_id', 'report_date', name='uq_report_store_date'),
    )
    id = db.Column(db.Integer, primary_key=True)
    store_id = db.Column(db.Integer, db.ForeignKey('stores.id'), nullable=False)
    report_date = db.Column(db.Date, nullable=False)
    total_sales = db.Column(db.Float, nullable=False, default=0.0)

    store = db.relationship('Store')

    def __repr__(self):
        return f'<DailySalesReport {self.store_id} - {self.report_date}>'
