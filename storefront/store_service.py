from storefront.decorators import log_method
from storefront.models import Store, StoreProduct, get_or_raise
from storefront.schemas import to_store_product_response, to_store_response


@log_method("Get stores")
def get_stores():
    return [to_store_response(s) for s in Store.query.order_by(Store.name).all()]


@log_method("Get store products")
def get_store_products(store_id):
    get_or_raise(Store, store_id, "Store not found")
    store_products = (StoreProduct.query
                      .filter_by(store_id=store_id)
                      .order_by(StoreProduct.id)
                      .all())
    return [to_store_product_response(sp) for sp in store_products]
