"""fluentQL compilation layer: builder state → parameterized SQL."""
from fluentql.compile.base import CompiledSQL, SQLCompiler
from fluentql.compile.binder import Binder
from fluentql.compile.mysql import MySQLCompiler
from fluentql.compile.postgres import PostgresCompiler
from fluentql.compile.predicates import PredicateCompiler
from fluentql.compile.registry import CompilerFactory
from fluentql.compile.sqlite import SQLiteCompiler

CompilerFactory.register_class("sqlite", SQLiteCompiler)
CompilerFactory.register_class("postgres", PostgresCompiler)
CompilerFactory.register_class("mysql", MySQLCompiler)

__all__ = [
    "Binder",
    "CompiledSQL",
    "CompilerFactory",
    "MySQLCompiler",
    "PostgresCompiler",
    "PredicateCompiler",
    "SQLCompiler",
    "SQLiteCompiler",
]
