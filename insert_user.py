from storefront import create_app, db
from storefront.models import User, Role

app = create_app()

with app.app_context():
    db.create_all()

    # Create the admin user
    username = 'admin' #edit if youre different user
    password = 'admin123'

    # Check if user already exists
    user = User.query.filter_by(username=username).first()
    if user:
        print(f"User {username} already exists.")
    else:
        new_user = User(username=username, role=Role.ADMIN, active=True)
        new_user.set_password(password)
        db.session.add(new_user)
        db.session.commit()
        print(f"Admin user {username} added successfully.")
