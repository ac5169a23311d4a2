import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from printshop import create_app, db
from printshop.errors import NotFoundError, ValidationError
from printshop.models import Product, ProductVariation
from printshop.pricing import compute_total, price_custom_lines, price_variation_lines


def setup_app():
    app = create_app('testing')
    with app.app_context():
        db.drop_all()
        db.create_all()
    return app


def test_total_sums_both_line_sets_with_tax():
    variations = [(10.0, 2), (4.5, 3)]
    customs = [(7.25, 1)]
    expected = round((10.0 * 2 + 4.5 * 3 + 7.25 * 1) * 1.06, 2)
    assert compute_total(variations, customs) == expected


def test_single_variation_total():
    assert compute_total([(10.0, 2)], []) == 21.2


def test_empty_total_is_zero():
    assert compute_total([], []) == 0


def test_custom_lines_coerce_strings():
    assert price_custom_lines([{'price': '12.50', 'quantity': '2'}]) == [(12.5, 2)]


def test_custom_lines_reject_bad_price():
    with pytest.raises(ValidationError):
        price_custom_lines([{'price': 'abc', 'quantity': 1}])


def test_variation_lines_use_catalog_price():
    app = setup_app()
    with app.app_context():
        p = Product(name='Tee')
        db.session.add(p)
        db.session.flush()
        v = ProductVariation(product_id=p.id, size='L', price=9.0)
        db.session.add(v)
        db.session.commit()

        lines = price_variation_lines([{'variation_id': v.id, 'quantity': 4, 'price': 1.0}])
        assert lines == [(9.0, 4)]

        with pytest.raises(NotFoundError):
            price_variation_lines([{'variation_id': 9999, 'quantity': 1}])
