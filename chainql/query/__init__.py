"""chainQL fluent API: statement and predicate-group builders."""
from chainql.query.builder import QueryBuilder, SubqueryBuilder
from chainql.query.where import PredicateGroupBuilder, WhereClauseMixin

__all__ = [
    "PredicateGroupBuilder",
    "QueryBuilder",
    "SubqueryBuilder",
    "WhereClauseMixin",
]
