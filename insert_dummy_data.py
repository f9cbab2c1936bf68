import random
from datetime import timedelta

from storefront import create_app, db
from storefront.models import Product, Role, Store, StoreProduct, User, UserPurchase, utcnow

app = create_app()

with app.app_context():
    db.create_all()

    # --- Generate and insert stores and products ---

    stores = [Store(name=f'Store {region}', address=f'{region} Avenue 1')
              for region in ['North', 'South', 'East', 'West', 'Central']]
    products = [Product(name=f'Product {i}', description=f'Dummy product number {i}')
                for i in range(1, 51)]  # 50 products total
    db.session.add_all(stores + products)
    db.session.flush()

    # --- Stock every store with a random subset of products ---

    store_products = []
    for store in stores:
        for product in random.sample(products, 20):
            store_products.append(StoreProduct(
                store=store,
                product=product,
                price=round(random.uniform(5.0, 150.0), 2),
                quantity=random.randint(50, 500),
            ))
    db.session.add_all(store_products)

    print("Inserted store inventory dummy data.")

    # --- Generate and insert purchase history ---

    buyer = User.query.filter_by(username='customer').first()
    if buyer is None:
        buyer = User(username='customer', role=Role.USER, active=True)
        buyer.set_password('customer123')
        db.session.add(buyer)

    start_date = utcnow() - timedelta(days=30)
    num_purchases = 500

    for _ in range(num_purchases):
        store_product = random.choice(store_products)
        quantity = random.randint(1, 5)
        if store_product.quantity < quantity:
            continue
        store_product.quantity -= quantity
        db.session.add(UserPurchase(
            user=buyer,
            store_product=store_product,
            quantity=quantity,
            purchase_date=start_date + timedelta(minutes=random.randint(0, 30 * 24 * 60)),
        ))

    print("Inserted purchase dummy data.")

    db.session.commit()
