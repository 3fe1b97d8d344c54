"""
Name inflection helpers used to derive relation names from table names
"""

import inflection


def singular(name: str) -> str:
    """users -> user, group_users -> group_user"""
    return inflection.singularize(name)


def plural(name: str) -> str:
    """user -> users; names that are already plural stay unchanged"""
    return inflection.pluralize(inflection.singularize(name))


def title_case(name: str) -> str:
    """Turn a table name into a type name: users -> User, group_users -> GroupUser"""
    return inflection.camelize(inflection.singularize(name))
