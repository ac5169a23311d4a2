import json
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from printshop import create_app, db
from printshop.models import Product


def setup_app():
    app = create_app('testing')
    with app.app_context():
        db.drop_all()
        db.create_all()
    return app


def test_root_and_favicon():
    client = setup_app().test_client()
    assert client.get('/').data == b'Backend is working!'
    assert client.get('/favicon.ico').status_code == 204


def test_unknown_route_is_json():
    client = setup_app().test_client()
    resp = client.get('/api/nope')
    assert resp.status_code == 404
    assert 'error' in resp.get_json()


def test_body_size_limit():
    app = setup_app()
    app.config['MAX_CONTENT_LENGTH'] = 64
    client = app.test_client()
    resp = client.post('/api/customers/upsert', json={'name': 'x' * 200})
    assert resp.status_code == 413


def test_datastore_details_hidden():
    app = setup_app()
    client = app.test_client()
    with app.app_context():
        db.drop_all()
    resp = client.get('/api/products')
    assert resp.status_code == 500
    assert resp.get_json() == {'error': 'Internal server error'}


def test_datastore_details_exposed_when_enabled():
    app = setup_app()
    app.config['EXPOSE_ERROR_DETAILS'] = True
    client = app.test_client()
    with app.app_context():
        db.drop_all()
    body = client.get('/api/products').get_json()
    assert body['error'] == 'Internal server error'
    assert 'products' in body['details']


def test_catalog_seed_command(tmp_path):
    app = setup_app()
    path = tmp_path / 'catalog.json'
    path.write_text(json.dumps([
        {'name': 'Tee', 'base_price': 8, 'variations': [
            {'size': 'S', 'price': 10},
            {'size': 'M', 'price': 11, 'accessory': 'Pocket'},
        ]},
        {'name': 'Mug'},
    ]))
    runner = app.test_cli_runner()
    result = runner.invoke(args=['catalog', 'seed', str(path)])
    assert result.exit_code == 0
    assert 'Added 2 products' in result.output

    with app.app_context():
        tee = Product.query.filter_by(name='Tee').one()
        assert [v.accessory for v in tee.variations] == ['None', 'Pocket']

    result = runner.invoke(args=['catalog', 'list'])
    assert 'Tee' in result.output and 'Pocket' in result.output


def test_cors_headers_on_api():
    client = setup_app().test_client()
    origin = 'http://frontend.local'
    resp = client.get('/api/products', headers={'Origin': origin})
    assert resp.headers.get('Access-Control-Allow-Origin') in ('*', origin)

    preflight = client.options('/api/estimates', headers={
        'Origin': origin,
        'Access-Control-Request-Method': 'POST',
    })
    assert preflight.headers.get('Access-Control-Allow-Origin') in ('*', origin)


def test_non_object_body_is_rejected():
    app = setup_app()
    client = app.test_client()
    resp = client.post('/api/customers/upsert', json=['x'])
    assert resp.status_code == 400
    assert resp.get_json()['error'] == 'Request body must be a JSON object'
    assert client.post('/api/estimates', json=[1, 2]).status_code == 400
    assert client.post('/api/invoices/1/pdf', json=['x']).status_code == 400
    assert client.put('/api/variations/1/price', json=[3]).status_code == 400
