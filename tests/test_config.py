"""Tests for connection configuration and the adapter factory."""

import pytest

from schema_introspector.config import ConnectionConfig, load_connection_config
from schema_introspector.database import DatabaseFactory, MySQLAdapter, PostgreSQLAdapter


def test_postgres_config_from_env():
    config = load_connection_config('postgres', env={
        'POSTGRES_HOST': 'db.internal',
        'POSTGRES_PORT': '6543',
        'POSTGRES_USER': 'reader',
        'POSTGRES_PASSWORD': 'secret',
        'POSTGRES_DB': 'app',
    })

    assert config == ConnectionConfig(
        host='db.internal',
        port=6543,
        user='reader',
        password='secret',
        database='app',
        schema='public',
    )


def test_mysql_config_defaults():
    config = load_connection_config('mysql', env={'MYSQL_DB': 'shop'})

    assert config.host == '127.0.0.1'
    assert config.port == 3306
    assert config.user == 'root'
    assert config.schema == 'shop'


def test_port_is_parsed_with_numeric_base():
    config = load_connection_config('mysql', env={
        'MYSQL_DB': 'shop',
        'MYSQL_PORT': 'cea',
        'SCHEMA_NUMERIC_BASE': '16',
    })

    assert config.port == 3306
    assert config.numeric_base == 16


def test_missing_database_is_rejected():
    with pytest.raises(ValueError, match='POSTGRES_DB'):
        load_connection_config('postgresql', env={})


def test_non_numeric_port_is_rejected():
    with pytest.raises(ValueError, match='Expected a number'):
        load_connection_config('postgresql', env={'POSTGRES_DB': 'app', 'POSTGRES_PORT': 'abc'})


def test_unsupported_type_is_rejected():
    with pytest.raises(ValueError, match='Unsupported'):
        load_connection_config('oracle', env={})


@pytest.mark.parametrize('db_type, adapter_class', [
    ('postgresql', PostgreSQLAdapter),
    ('Postgres', PostgreSQLAdapter),
    ('mysql', MySQLAdapter),
])
def test_factory_creates_adapter(db_type, adapter_class):
    config = ConnectionConfig(database='app')

    adapter = DatabaseFactory.create_connector(db_type, config)

    assert isinstance(adapter, adapter_class)
    assert adapter.config is config


def test_factory_rejects_unknown_type():
    with pytest.raises(ValueError):
        DatabaseFactory.create_connector('sqlite', ConnectionConfig(database='app'))


def test_factory_lists_supported_types():
    assert DatabaseFactory.get_supported_types() == ['postgresql', 'mysql']
    assert 'database' in DatabaseFactory.get_required_config('MySQL')
    assert DatabaseFactory.get_required_config('oracle') == []
