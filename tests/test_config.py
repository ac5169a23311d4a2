import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from printshop import create_app
from printshop.config import env_overrides, load_environment


def test_dotenv_file_is_read(tmp_path, monkeypatch):
    db_file = tmp_path / 'fromenv.db'
    (tmp_path / '.env').write_text(
        f"DATABASE_URL=sqlite:///{db_file}\nEXPOSE_ERROR_DETAILS=true\n"
    )
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv('DATABASE_URL', raising=False)
    monkeypatch.delenv('EXPOSE_ERROR_DETAILS', raising=False)

    app = create_app('production')
    assert app.config['SQLALCHEMY_DATABASE_URI'] == f"sqlite:///{db_file}"
    assert app.config['EXPOSE_ERROR_DETAILS'] is True
    assert 'DATABASE_URL' not in os.environ


def test_process_environment_beats_dotenv(tmp_path, monkeypatch):
    (tmp_path / '.env').write_text(f"DATABASE_URL=sqlite:///{tmp_path / 'file.db'}\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv('DATABASE_URL', f"sqlite:///{tmp_path / 'process.db'}")

    app = create_app('production')
    assert app.config['SQLALCHEMY_DATABASE_URI'] == f"sqlite:///{tmp_path / 'process.db'}"


def test_testing_config_ignores_environment(tmp_path, monkeypatch):
    monkeypatch.setenv('DATABASE_URL', f"sqlite:///{tmp_path / 'process.db'}")
    app = create_app('testing')
    assert app.config['SQLALCHEMY_DATABASE_URI'] == 'sqlite:///:memory:'


def test_load_environment_explicit_path(tmp_path, monkeypatch):
    path = tmp_path / 'custom.env'
    path.write_text("PORT=8080\nCORS_ORIGINS=http://a.test, http://b.test\n")
    monkeypatch.delenv('PORT', raising=False)
    monkeypatch.delenv('CORS_ORIGINS', raising=False)

    overrides = env_overrides(load_environment(str(path)))
    assert overrides['PORT'] == 8080
    assert overrides['CORS_ORIGINS'] == ['http://a.test', 'http://b.test']
