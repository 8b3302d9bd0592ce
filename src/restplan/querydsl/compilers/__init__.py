from .base import BaseWhere
from .sequelize import SequelizeWhereCompiler, sequelize_where
from .sql import SqlWhereCompiler, sql_where

__all__ = (
    "BaseWhere",
    "SequelizeWhereCompiler",
    "sequelize_where",
    "SqlWhereCompiler",
    "sql_where",
)
