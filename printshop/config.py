import os

from dotenv import dotenv_values, find_dotenv

class BaseConfig:
    SECRET_KEY = 'change-me'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///printshop.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    MAX_CONTENT_LENGTH = 25 * 1024 * 1024
    INVOICE_STORAGE_DIR = None  # None -> <instance>/invoices
    EXPOSE_ERROR_DETAILS = False
    CORS_ORIGINS = '*'
    CUSTOMER_SEARCH_LIMIT = 10
    PORT = 5000

class DevConfig(BaseConfig):
    DEBUG = True
    ENV = 'development'

class ProdConfig(BaseConfig):
    DEBUG = False
    ENV = 'production'

class TestConfig(BaseConfig):
    TESTING = True
    ENV = 'testing'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'


def load_environment(dotenv_path: str | None = None) -> dict:
    """Values from ``.env`` overlaid by the real process environment.

    Without ``dotenv_path`` the ``.env`` file is searched for from the
    working directory upwards.  The process environment always wins.
    """
    path = dotenv_path or find_dotenv(usecwd=True)
    values = {}
    if path:
        values = {k: v for k, v in dotenv_values(path).items() if v is not None}
    values.update(os.environ)
    return values


def env_overrides(env: dict) -> dict:
    """Map environment variables onto config keys."""
    out = {}
    if env.get('SECRET_KEY'):
        out['SECRET_KEY'] = env['SECRET_KEY']
    if env.get('DATABASE_URL'):
        out['SQLALCHEMY_DATABASE_URI'] = env['DATABASE_URL']
    if env.get('INVOICE_STORAGE_DIR'):
        out['INVOICE_STORAGE_DIR'] = env['INVOICE_STORAGE_DIR']
    if env.get('EXPOSE_ERROR_DETAILS'):
        out['EXPOSE_ERROR_DETAILS'] = env['EXPOSE_ERROR_DETAILS'].lower() == 'true'
    if env.get('CORS_ORIGINS'):
        out['CORS_ORIGINS'] = [o.strip() for o in env['CORS_ORIGINS'].split(',')]
    if env.get('PORT'):
        out['PORT'] = int(env['PORT'])
    return out
