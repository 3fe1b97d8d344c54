"""
Connection configuration for database adapters
"""

import os
from dataclasses import dataclass
from typing import Dict, Optional

from dotenv import load_dotenv


DEFAULT_PORTS = {
    'postgresql': 5432,
    'mysql': 3306,
}

ENV_PREFIXES = {
    'postgresql': 'POSTGRES',
    'mysql': 'MYSQL',
}


@dataclass(frozen=True)
class ConnectionConfig:
    """Everything an adapter needs to reach one database"""
    host: str = '127.0.0.1'
    port: int = 5432
    user: str = 'root'
    password: str = ''
    database: str = ''
    schema: str = 'public'
    numeric_base: int = 10
    pool_size: int = 5


def parse_int(value: Optional[str], default: int, base: int = 10) -> int:
    if value is None or value == '':
        return default
    try:
        return int(value, base)
    except ValueError:
        raise ValueError(f"Expected a number, got {value!r}")


def load_connection_config(db_type: str, env: Optional[Dict[str, str]] = None) -> ConnectionConfig:
    """Build a ConnectionConfig for db_type from environment variables / .env file"""
    db_type = db_type.lower()
    if db_type == 'postgres':
        db_type = 'postgresql'
    if db_type not in ENV_PREFIXES:
        raise ValueError(f"Unsupported database type: {db_type}")

    if env is None:
        load_dotenv()
        env = dict(os.environ)

    prefix = ENV_PREFIXES[db_type]
    numeric_base = parse_int(env.get('SCHEMA_NUMERIC_BASE'), 10)

    database = env.get(f'{prefix}_DB', '')
    if not database:
        raise ValueError(f"{prefix}_DB is not set. Please check your .env file.")

    return ConnectionConfig(
        host=env.get(f'{prefix}_HOST') or '127.0.0.1',
        port=parse_int(env.get(f'{prefix}_PORT'), DEFAULT_PORTS[db_type], numeric_base),
        user=env.get(f'{prefix}_USER') or 'root',
        password=env.get(f'{prefix}_PASSWORD', ''),
        database=database,
        schema=env.get(f'{prefix}_SCHEMA') or ('public' if db_type == 'postgresql' else database),
        numeric_base=numeric_base,
        pool_size=parse_int(env.get('SCHEMA_POOL_SIZE'), 5, numeric_base),
    )
