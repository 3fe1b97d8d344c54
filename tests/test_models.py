"""Tests for the canonical model's JSON shape."""

import json

from schema_introspector.database import (
    Column, DataType, RelationKind, Table, TableReference, schema_to_dict,
)
from schema_introspector.normalization import normalize_relations


def test_scalar_column_omits_unset_fields():
    column = Column('name', True, False, False, False, DataType('string', size=255))

    assert column.to_dict() == {
        'name': 'name',
        'allowNull': True,
        'primary': False,
        'unique': False,
        'foreignKey': False,
        'dataType': {'type': 'string', 'size': 255},
    }
    assert column.is_synthetic is False


def test_enum_values_serialize_as_list():
    data_type = DataType('enum', values=('no', 'yes'))

    assert data_type.to_dict() == {'type': 'enum', 'values': ['no', 'yes']}


def test_relation_column_serializes_reference_and_kind():
    column = Column(
        'users', True, False, False, True,
        DataType('User', references=TableReference('user_id', 'users', 'id', through='group_users')),
        relation=RelationKind.MANY_TO_MANY,
    )

    data = column.to_dict()

    assert data['relation'] == 'many_to_many'
    assert data['dataType']['references'] == {
        'name': 'user_id', 'table': 'users', 'column': 'id', 'through': 'group_users',
    }
    assert column.is_synthetic is True


def test_schema_is_json_serializable(group_users_schema):
    schema = normalize_relations(group_users_schema)

    data = json.loads(json.dumps(schema_to_dict(schema)))

    assert [table['name'] for table in data] == ['groups', 'users']
    assert data[0]['columns'][-1]['name'] == 'users'


def test_get_column_returns_first_match():
    table = Table('users', (
        Column('id', False, True, True, False, DataType('number')),
    ))

    assert table.get_column('id').primary is True
    assert table.get_column('missing') is None
