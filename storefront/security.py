from datetime import datetime, timedelta, timezone

import jwt
from flask import current_app

BEARER_PREFIX = 'Bearer '


class TokenError(Exception):
    pass


def generate_token(username, role):
    now = datetime.now(timezone.utc)
    payload = {
        'sub': username,
        'role': role,
        'iat': now,
        'exp': now + timedelta(seconds=current_app.config['JWT_EXPIRATION_SECONDS']),
    }
    return jwt.encode(payload, current_app.config['JWT_SECRET_KEY'],
                      algorithm=current_app.config['JWT_ALGORITHM'])


def decode_token(token):
    # Accepts either the raw token or a full "Bearer <token>" header value
    if token.startswith(BEARER_PREFIX):
        token = token[len(BEARER_PREFIX):]
    try:
        return jwt.decode(token, current_app.config['JWT_SECRET_KEY'],
                          algorithms=[current_app.config['JWT_ALGORITHM']])
    except jwt.ExpiredSignatureError:
        raise TokenError('Token has expired')
    except jwt.PyJWTError:
        raise TokenError('Invalid authentication token')


def extract_username(token):
    username = decode_token(token).get('sub')
    if not username:
        raise TokenError('Token carries no subject')
    return username
