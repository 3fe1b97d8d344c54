"""
Database factory for creating appropriate database adapters
"""

from typing import List

from ..config import ConnectionConfig
from .adapters import DatabaseAdapter, PostgreSQLAdapter, MySQLAdapter


class DatabaseFactory:
    """Factory class to create appropriate database connector"""

    @staticmethod
    def create_connector(db_type: str, config: ConnectionConfig) -> DatabaseAdapter:
        """Create database adapter based on type"""
        if db_type.lower() in ['postgresql', 'postgres']:
            return PostgreSQLAdapter(config)
        elif db_type.lower() == 'mysql':
            return MySQLAdapter(config)
        else:
            raise ValueError(f"Unsupported database type: {db_type}")

    @staticmethod
    def get_supported_types() -> List[str]:
        """Get list of supported database types"""
        return ['postgresql', 'mysql']

    @staticmethod
    def get_required_config(db_type: str) -> List[str]:
        """Get required configuration keys for database type"""
        configs = {
            'postgresql': ['host', 'port', 'user', 'password', 'database', 'schema'],
            'mysql': ['host', 'port', 'user', 'password', 'database'],
        }
        return configs.get(db_type.lower(), [])
