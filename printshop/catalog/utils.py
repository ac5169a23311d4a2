# printshop/catalog/utils.py

"""Serialization helpers for the catalog blueprint."""


def serialize_variation(v) -> dict:
    return {
        'id'         : v.id,
        'product_id' : v.product_id,
        'quantity'   : v.quantity,
        'size'       : v.size,
        'accessory'  : v.accessory,
        'price'      : v.price,
    }


def serialize_product(p) -> dict:
    """
    Product with its variations nested, as consumed by the order form:
      product_id, name, description, base_price, example_image,
      variations=[{variation_id, quantity, size, accessory, price}, …]
    """
    return {
        'product_id'    : p.id,
        'name'          : p.name,
        'description'   : p.description,
        'base_price'    : p.base_price,
        'example_image' : p.example_image,
        'variations'    : [{
            'variation_id' : v.id,
            'quantity'     : v.quantity,
            'size'         : v.size,
            'accessory'    : v.accessory,
            'price'        : v.price,
        } for v in p.variations],
    }
