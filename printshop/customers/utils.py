# printshop/customers/utils.py

"""Customer search and upsert helpers."""

from sqlalchemy import func, or_

from printshop import db
from printshop.errors import ValidationError
from printshop.models import Customer


def identity(name, company) -> tuple:
    """(name, company) key with NULL and '' treated alike."""
    return ((name or '').strip(), (company or '').strip())


def serialize_customer(c) -> dict:
    return {
        'id'         : c.id,
        'name'       : c.name,
        'company'    : c.company,
        'email'      : c.email,
        'phone'      : c.phone,
        'address'    : c.address,
        'created_at' : c.created_at.isoformat() if c.created_at else None,
    }


def search_customers(q: str, limit: int = 10) -> list:
    """
    Case-insensitive substring search over name, email, phone and company.
    Newest first, at most ``limit`` rows, one row per (name, company).
    """
    query = Customer.query
    q = (q or '').strip()
    if q:
        term = f"%{q}%"
        query = query.filter(or_(
            Customer.name.ilike(term),
            Customer.email.ilike(term),
            Customer.phone.ilike(term),
            Customer.company.ilike(term),
        ))
    query = query.order_by(Customer.created_at.desc(), Customer.id.desc())

    results = []
    seen = set()
    for c in query:
        key = identity(c.name, c.company)
        if key in seen:
            continue
        seen.add(key)
        results.append(c)
        if len(results) >= limit:
            break
    return results


def upsert_customer(data: dict) -> int:
    """
    Reuse the customer with the same trimmed (name, company), refreshing its
    contact fields, or insert a new one.  Returns the customer id.  The
    caller owns the transaction.
    """
    name = data.get('name')
    if name is None:
        name = 'Unnamed'
    name    = str(name).strip()
    company = str(data.get('company') or '').strip()
    if not name and not company:
        raise ValidationError('At least a name or company is required')

    email   = data.get('email') or ''
    phone   = data.get('phone') or ''
    address = data.get('address') or ''

    existing = (
        Customer.query
        .filter(func.coalesce(Customer.name, '') == name)
        .filter(func.coalesce(Customer.company, '') == company)
        .order_by(Customer.id)
        .first()
    )
    if existing:
        existing.email   = email
        existing.phone   = phone
        existing.address = address
        return existing.id

    c = Customer(name=name, company=company, email=email, phone=phone, address=address)
    db.session.add(c)
    db.session.flush()  # obtain c.id
    return c.id
