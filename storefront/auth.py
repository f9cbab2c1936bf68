from flask import Blueprint, request, jsonify
from storefront import auth_service

auth = Blueprint('auth', __name__, url_prefix='/api/auth')

@auth.route('/register', methods=['POST'])
def register():
    user = auth_service.register(request.get_json(silent=True))
    return jsonify(user), 201

@auth.route('/login', methods=['POST'])
def login():
    token = auth_service.login(request.get_json(silent=True))
    return jsonify({'token': token, 'tokenType': 'Bearer'})
