from datetime import datetime

from printshop import db


class Product(db.Model):
    __tablename__ = 'products'
    id            = db.Column(db.Integer, primary_key=True)
    name          = db.Column(db.String(200), nullable=False)
    description   = db.Column(db.Text)
    base_price    = db.Column(db.Float, default=0.0)
    example_image = db.Column(db.String(500))
    variations    = db.relationship(
                      'ProductVariation',
                      backref='product',
                      lazy=True,
                      order_by='ProductVariation.id'
                    )


class ProductVariation(db.Model):
    __tablename__ = 'product_variations'
    id         = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(db.Integer, db.ForeignKey('products.id'), nullable=False)
    quantity   = db.Column(db.Integer)
    size       = db.Column(db.String(100), nullable=False)
    accessory  = db.Column(db.String(200), default='None')
    price      = db.Column(db.Float, nullable=False)


class Customer(db.Model):
    __tablename__ = 'customers'
    id         = db.Column(db.Integer, primary_key=True)
    name       = db.Column(db.String(200))
    company    = db.Column(db.String(200))
    email      = db.Column(db.String(200))
    phone      = db.Column(db.String(50))
    address    = db.Column(db.Text)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)


class Estimate(db.Model):
    __tablename__ = 'estimates'
    id            = db.Column(db.Integer, primary_key=True)
    customer_id   = db.Column(db.Integer, db.ForeignKey('customers.id'), nullable=True)
    customer_info = db.Column(db.JSON)
    store_info    = db.Column(db.JSON, default=dict)
    estimate_date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    total         = db.Column(db.Float, nullable=False, default=0.0)

    items = db.relationship(
        'EstimateItem',
        backref='estimate',
        lazy=True,
        order_by='EstimateItem.id',
        cascade='all, delete-orphan'
    )
    custom_items = db.relationship(
        'CustomEstimateItem',
        backref='estimate',
        lazy=True,
        order_by='CustomEstimateItem.id',
        cascade='all, delete-orphan'
    )


class EstimateItem(db.Model):
    __tablename__ = 'estimate_items'
    id                   = db.Column(db.Integer, primary_key=True)
    estimate_id          = db.Column(db.Integer, db.ForeignKey('estimates.id'), nullable=False)
    product_variation_id = db.Column(db.Integer, db.ForeignKey('product_variations.id'), nullable=False)
    quantity             = db.Column(db.Integer, nullable=False, default=1)

class CustomEstimateItem(db.Model):
    __tablename__ = 'custom_estimate_items'
    id           = db.Column(db.Integer, primary_key=True)
    estimate_id  = db.Column(db.Integer, db.ForeignKey('estimates.id'), nullable=False)
    product_name = db.Column(db.String(200))
    size         = db.Column(db.String(100))
    price        = db.Column(db.Float, nullable=False, default=0.0)
    quantity     = db.Column(db.Integer, nullable=False, default=1)
    accessory    = db.Column(db.String(200))


class Invoice(db.Model):
    __tablename__ = 'invoices'
    id            = db.Column(db.Integer, primary_key=True)
    customer_id   = db.Column(db.Integer, db.ForeignKey('customers.id'), nullable=True)
    customer_info = db.Column(db.JSON)
    invoice_date  = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    total         = db.Column(db.Float, nullable=False, default=0.0)
    pdf_link      = db.Column(db.String(500))

    items = db.relationship(
        'InvoiceItem',
        backref='invoice',
        lazy=True,
        order_by='InvoiceItem.id',
        cascade='all, delete-orphan'
    )
    custom_items = db.relationship(
        'CustomInvoiceItem',
        backref='invoice',
        lazy=True,
        order_by='CustomInvoiceItem.id',
        cascade='all, delete-orphan'
    )


class InvoiceItem(db.Model):
    __tablename__ = 'invoice_items'
    id                   = db.Column(db.Integer, primary_key=True)
    invoice_id           = db.Column(db.Integer, db.ForeignKey('invoices.id'), nullable=False)
    product_variation_id = db.Column(db.Integer, db.ForeignKey('product_variations.id'), nullable=False)
    quantity             = db.Column(db.Integer, nullable=False, default=1)

class CustomInvoiceItem(db.Model):
    __tablename__ = 'custom_invoice_items'
    id           = db.Column(db.Integer, primary_key=True)
    invoice_id   = db.Column(db.Integer, db.ForeignKey('invoices.id'), nullable=False)
    product_name = db.Column(db.String(200))
    size         = db.Column(db.String(100))
    price        = db.Column(db.Float, nullable=False, default=0.0)
    quantity     = db.Column(db.Integer, nullable=False, default=1)
    accessory    = db.Column(db.String(200))
