from storefront import db
from storefront.decorators import log_method, transactional
from storefront.exceptions import AuthException, BusinessException, ResourceNotFoundException
from storefront.models import Role, User
from storefront.schemas import parse_credentials, to_user_response
from storefront.security import generate_token


@log_method("User registration")
@transactional
def register(data):
    username, password = parse_credentials(data)
    if User.query.filter_by(username=username).first() is not None:
        raise BusinessException("Username already exists")

    user = User(username=username, role=Role.USER, active=True)
    user.set_password(password)
    db.session.add(user)
    db.session.flush()
    return to_user_response(user)


@log_method("User login")
def login(data):
    username, password = parse_credentials(data)
    user = User.query.filter_by(username=username).first()
    if user is None:
        raise ResourceNotFoundException("User not found")

    if not user.check_password(password):
        raise AuthException("Invalid credentials")

    if not user.active:
        raise AuthException("User account is deactivated")

    return generate_token(user.username, user.role)
