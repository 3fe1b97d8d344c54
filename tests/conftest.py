"""
Shared fixtures: canned metadata for small schemas
"""

import pytest

from fakes import build_table, fk, pk, raw_column, ref, text


@pytest.fixture
def users_accounts_schema():
    """users(id, name) and accounts(id, user_id unique FK -> users.id)"""
    return [
        build_table('users', [pk(), text('name')]),
        build_table(
            'accounts',
            [pk(), fk('user_id'), raw_column('user_id', constraint='UNIQUE', nullable='NO')],
            [ref('user_id', 'users')],
        ),
    ]


@pytest.fixture
def group_users_schema():
    """groups and users linked through the group_users junction table"""
    return [
        build_table('groups', [pk(), text('name')]),
        build_table('users', [pk(), text('email')]),
        build_table(
            'group_users',
            [fk('group_id'), fk('user_id')],
            [ref('group_id', 'groups'), ref('user_id', 'users')],
        ),
    ]


@pytest.fixture
def mixed_relations_schema():
    """customers(id, address_id unique FK -> addresses, bank_id FK -> banks)"""
    return [
        build_table('addresses', [pk()]),
        build_table('banks', [pk()]),
        build_table(
            'customers',
            [pk(), fk('address_id'), raw_column('address_id', constraint='UNIQUE', nullable='NO'), fk('bank_id')],
            [ref('address_id', 'addresses'), ref('bank_id', 'banks')],
        ),
    ]
