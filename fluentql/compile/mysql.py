"""MySQL dialect compiler."""

from __future__ import annotations

from fluentql.compile.base import SQLCompiler


class MySQLCompiler(SQLCompiler):
    """Renders MySQL-flavoured parameterized SQL.

    Parameter style: ``%(name)s`` – compatible with ``PyMySQL`` and
    ``mysql-connector-python`` named-parameter execution.
    """

    @property
    def dialect_name(self) -> str:
        return "mysql"

    def param_placeholder(self, name: str) -> str:
        return f"%({name})s"
