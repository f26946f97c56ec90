import importlib


def setup_temp_db(tmp_path, monkeypatch):
    # create a temporary data directory and DB path
    data_dir = tmp_path / "data"
    db_file = data_dir / "app.db"
    conn_mod = importlib.import_module('db.connection')
    monkeypatch.setattr(conn_mod, 'DATA_DIR', data_dir)
    monkeypatch.setattr(conn_mod, 'DB_PATH', db_file)
    return conn_mod, db_file


def test_defaults_before_init(tmp_path, monkeypatch):
    setup_temp_db(tmp_path, monkeypatch)
    settings = importlib.import_module('db.settings')
    # no settings table yet: every getter falls back to its default
    assert settings.get_setting('missing', 'x') == 'x'
    assert settings.get_decimal_separator() == ','
    assert settings.get_ui_theme() == 'superhero'
    assert settings.get_ui_scaling() == 1.25


def test_settings_round_trip(tmp_path, monkeypatch):
    conn_mod, db_file = setup_temp_db(tmp_path, monkeypatch)
    db = importlib.import_module('db')
    db.init_db()
    assert db_file.exists()
    # init_db is idempotent
    db.init_db()

    settings = importlib.import_module('db.settings')
    settings.set_setting('test.key', 'value1')
    assert settings.get_setting('test.key') == 'value1'
    settings.set_setting('test.key', 'value2')
    assert settings.get_setting('test.key') == 'value2'

    settings.set_setting('decimal_separator', '.')
    settings.set_setting('ui_theme', ' Darkly ')
    settings.set_setting('ui_scaling', '1.5')
    assert settings.get_decimal_separator() == '.'
    assert settings.get_ui_theme() == 'darkly'
    assert settings.get_ui_scaling() == 1.5


def test_invalid_values_fall_back(tmp_path, monkeypatch):
    setup_temp_db(tmp_path, monkeypatch)
    db = importlib.import_module('db')
    db.init_db()
    settings = importlib.import_module('db.settings')

    settings.set_setting('decimal_separator', ';')
    settings.set_setting('ui_scaling', 'huge')
    assert settings.get_decimal_separator() == ','
    assert settings.get_ui_scaling() == 1.25

    settings.set_setting('ui_scaling', '10')
    assert settings.get_ui_scaling() == 1.25
