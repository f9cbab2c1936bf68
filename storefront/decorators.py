import logging
from functools import wraps

from flask import jsonify
from flask_login import current_user, login_required
from sqlalchemy.exc import IntegrityError

from storefront import db
from storefront.exceptions import BusinessException


def log_method(description):
    """Log entry into a service call and any failure it raises."""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            logging.info(f"{description} started")
            try:
                return func(*args, **kwargs)
            except Exception as e:
                logging.error(f"{description} failed: {e}")
                raise
        return wrapper
    return decorator


def admin_required(view):
    @wraps(view)
    @login_required
    def wrapped(*args, **kwargs):
        if not current_user.is_admin:
            return jsonify({'error': 'Admin role required'}), 403
        return view(*args, **kwargs)
    return wrapped


def transactional(func):
    """Commit the session when ``func`` returns, roll back when it raises."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            result = func(*args, **kwargs)
            db.session.commit()
        except IntegrityError as e:
            db.session.rollback()
            raise BusinessException(f"Integrity violation: {e.orig}") from e
        except Exception:
            db.session.rollback()
            raise
        return result
    return wrapper
