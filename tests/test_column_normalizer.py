"""Tests for ColumnNormalizer."""

import pytest

from schema_introspector.config import ConnectionConfig
from schema_introspector.database import (
    EnumResolutionWarning, MySQLAdapter, RawColumnDescriptor, UnmappedTypeWarning,
)
from schema_introspector.database.type_maps import (
    MYSQL_SIZED_TYPES, MYSQL_TYPES, POSTGRESQL_SIZED_TYPES, POSTGRESQL_TYPES,
)
from schema_introspector.normalization import ColumnNormalizer

from fakes import raw_column


@pytest.fixture
def normalizer():
    return ColumnNormalizer(POSTGRESQL_TYPES, POSTGRESQL_SIZED_TYPES)


def test_converts_character_varying_primary_key(normalizer):
    column = normalizer.normalize(RawColumnDescriptor(
        column_name='test',
        is_nullable='NO',
        data_type='character varying',
        character_maximum_length='255',
        constraint_type='PRIMARY KEY',
    ))

    assert column.name == 'test'
    assert column.primary is True
    assert column.allow_null is False
    assert column.foreign_key is False
    assert column.unique is True
    assert column.data_type.type == 'string'
    assert column.data_type.size == 255
    assert normalizer.warnings == []


@pytest.mark.parametrize('nullable', ['YES', 'NO', True, None])
def test_primary_key_is_never_nullable(normalizer, nullable):
    column = normalizer.normalize(raw_column('id', constraint='PRIMARY KEY', nullable=nullable))

    assert column.primary is True
    assert column.allow_null is False


def test_unique_constraint_without_primary(normalizer):
    column = normalizer.normalize(raw_column('email', 'text', constraint='UNIQUE'))

    assert column.unique is True
    assert column.primary is False
    assert column.allow_null is True


def test_foreign_key_constraint_is_not_flagged_here(normalizer):
    column = normalizer.normalize(raw_column('user_id', constraint='FOREIGN KEY'))

    assert column.foreign_key is False
    assert column.unique is False
    assert column.data_type.references is None


def test_unsized_type_ignores_length(normalizer):
    column = normalizer.normalize(raw_column('count', 'integer', length='32'))

    assert column.data_type.type == 'number'
    assert column.data_type.size is None


def test_unparseable_length_leaves_size_unset(normalizer):
    column = normalizer.normalize(raw_column('name', 'character varying', length='lots'))

    assert column.data_type.type == 'string'
    assert column.data_type.size is None


def test_length_is_parsed_with_numeric_base():
    normalizer = ColumnNormalizer(POSTGRESQL_TYPES, POSTGRESQL_SIZED_TYPES, numeric_base=16)

    column = normalizer.normalize(raw_column('code', 'varchar', length='ff'))

    assert column.data_type.size == 255


@pytest.mark.parametrize('native, expected', [
    ('boolean', 'boolean'),
    ('timestamp with time zone', 'date'),
    ('double precision', 'number'),
    ('uuid', 'string'),
])
def test_maps_native_types(normalizer, native, expected):
    assert normalizer.normalize(raw_column('value', native)).data_type.type == expected


def test_enum_labels_are_resolved_in_catalog_order():
    calls = []

    def resolver(type_name):
        calls.append(type_name)
        return ['no', 'yes']

    normalizer = ColumnNormalizer(POSTGRESQL_TYPES, enum_resolver=resolver)
    column = normalizer.normalize(raw_column('answer', 'USER-DEFINED', type_name='yes_no'))

    assert calls == ['yes_no']
    assert column.data_type.type == 'enum'
    assert column.data_type.values == ('no', 'yes')
    assert normalizer.warnings == []


def test_enum_without_labels_degrades_to_unknown():
    normalizer = ColumnNormalizer(POSTGRESQL_TYPES, enum_resolver=lambda name: [])

    column = normalizer.normalize(raw_column('geom', 'USER-DEFINED', type_name='geometry'))

    assert column.data_type.type == 'unknown'
    assert column.data_type.values is None
    assert len(normalizer.warnings) == 1
    assert isinstance(normalizer.warnings[0], EnumResolutionWarning)
    assert normalizer.warnings[0].column_name == 'geom'


def test_failing_enum_lookup_degrades_to_unknown():
    def resolver(type_name):
        raise RuntimeError('catalog unavailable')

    normalizer = ColumnNormalizer(POSTGRESQL_TYPES, enum_resolver=resolver)
    column = normalizer.normalize(raw_column('status', 'USER-DEFINED', type_name='status'))

    assert column.data_type.type == 'unknown'
    assert isinstance(normalizer.warnings[0], EnumResolutionWarning)
    assert 'catalog unavailable' in str(normalizer.warnings[0])


def test_unmapped_type_degrades_to_unknown(normalizer):
    column = normalizer.normalize(raw_column('shape', 'tsvector', constraint='UNIQUE'))

    assert column.data_type.type == 'unknown'
    assert column.unique is True
    assert isinstance(normalizer.warnings[0], UnmappedTypeWarning)


def test_missing_type_degrades_to_unknown(normalizer):
    column = normalizer.normalize(raw_column('mystery', None))

    assert column.data_type.type == 'unknown'
    assert isinstance(normalizer.warnings[0], UnmappedTypeWarning)


def test_mysql_enum_labels_come_from_column_type():
    adapter = MySQLAdapter(ConnectionConfig(database='shop', port=3306))
    normalizer = ColumnNormalizer(
        MYSQL_TYPES, MYSQL_SIZED_TYPES, enum_resolver=adapter.fetch_enum_labels,
    )

    column = normalizer.normalize(raw_column('size', 'enum', type_name="enum('S','M','L')"))

    assert column.data_type.type == 'enum'
    assert column.data_type.values == ('S', 'M', 'L')
