from flask import Blueprint, request, jsonify
from flask_login import login_required, current_user
from storefront import user_service, store_service
from storefront.decorators import admin_required
from storefront.schemas import parse_report_date


main = Blueprint('main', __name__, url_prefix='/api')

# Catalog

@main.route('/stores', methods=['GET'])
@login_required
def stores():
    return jsonify(store_service.get_stores())

@main.route('/stores/<int:store_id>/products', methods=['GET'])
@login_required
def store_products(store_id):
    return jsonify(store_service.get_store_products(store_id))

# Purchases for the authenticated user

@main.route('/purchases', methods=['POST'])
@login_required
def purchase():
    response = user_service.purchase_product(current_user.username, request.get_json(silent=True))
    return jsonify(response), 201

@main.route('/purchases', methods=['GET'])
@login_required
def my_purchases():
    return jsonify(user_service.get_user_purchases(current_user.username))

# User management (admin)

@main.route('/users', methods=['GET'])
@admin_required
def users():
    return jsonify(user_service.get_all_users())

@main.route('/users/<int:user_id>', methods=['GET'])
@admin_required
def user_detail(user_id):
    return jsonify(user_service.get_user_by_id(user_id))

@main.route('/users/<int:user_id>/purchases', methods=['GET'])
@admin_required
def user_purchases(user_id):
    return jsonify(user_service.get_user_purchases_by_id(user_id))

@main.route('/users/<int:user_id>/deactivate', methods=['PUT'])
@admin_required
def deactivate(user_id):
    user_service.deactivate_user(user_id)
    return jsonify({'message': 'User deactivated'})

@main.route('/users/<int:user_id>/activate', methods=['PUT'])
@admin_required
def activate(user_id):
    user_service.activate_user(user_id)
    return jsonify({'message': 'User activated'})

# Daily sales reports (admin)

@main.route('/stores/<int:store_id>/reports', methods=['GET'])
@admin_required
def daily_reports(store_id):
    return jsonify(user_service.get_daily_sales_reports(store_id))

@main.route('/reports/generate', methods=['POST'])
@admin_required
def generate_reports():
    data = request.get_json(silent=True) or {}
    report_date = parse_report_date(data.get('date'))
    return jsonify(user_service.generate_daily_sales_reports(report_date))
