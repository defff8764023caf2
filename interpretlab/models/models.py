from sqlalchemy import Column, String, Integer, DateTime, Text, JSON
from sqlalchemy.dialects import mysql

from interpretlab.core.database import Base

# microsecond precision so updated_at keeps increasing on MySQL too
Timestamp = DateTime().with_variant(mysql.DATETIME(fsp=6), "mysql")

# a Python None is stored as SQL NULL rather than the JSON literal null
OpaqueMap = JSON(none_as_null=True)

TABLE_ARGS = {"mysql_engine": "InnoDB", "mysql_charset": "utf8mb4"}


class Model(Base):
    """An uploaded ML model"""
    __tablename__ = "models"
    __table_args__ = TABLE_ARGS

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    model_type = Column(String(50), nullable=False)
    framework = Column(String(100), nullable=False)
    file_path = Column(String(500), nullable=False)
    file_size = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default="uploading")
    # "metadata" is reserved on declarative classes
    metadata_ = Column("metadata", OpaqueMap, nullable=True)

    created_at = Column(Timestamp, nullable=False, index=True)
    updated_at = Column(Timestamp, nullable=False)


class Dataset(Base):
    """An uploaded CSV/JSON dataset"""
    __tablename__ = "datasets"
    __table_args__ = TABLE_ARGS

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    file_type = Column(String(10), nullable=False)
    file_path = Column(String(500), nullable=False)
    file_size = Column(Integer, nullable=False)
    columns = Column(JSON, nullable=False, default=list)
    row_count = Column(Integer, nullable=False, default=0)
    status = Column(String(20), nullable=False, default="uploading")
    metadata_ = Column("metadata", OpaqueMap, nullable=True)

    created_at = Column(Timestamp, nullable=False, index=True)
    updated_at = Column(Timestamp, nullable=False)


class Analysis(Base):
    __tablename__ = "analyses"
    __table_args__ = TABLE_ARGS

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    # plain keys: referenced rows are checked once at creation, never cascaded
    model_id = Column(Integer, nullable=False, index=True)
    dataset_id = Column(Integer, nullable=False, index=True)
    analysis_type = Column(String(50), nullable=False)
    parameters = Column(OpaqueMap, nullable=True)
    results = Column(OpaqueMap, nullable=True)
    status = Column(String(20), nullable=False, default="pending")

    created_at = Column(Timestamp, nullable=False, index=True)
    updated_at = Column(Timestamp, nullable=False)


class Visualization(Base):
    """Chart attached to an analysis, immutable once created"""
    __tablename__ = "visualizations"
    __table_args__ = TABLE_ARGS

    id = Column(Integer, primary_key=True, autoincrement=True)
    analysis_id = Column(Integer, nullable=False, index=True)
    chart_type = Column(String(50), nullable=False)
    config = Column(JSON, nullable=False, default=dict)
    data = Column(JSON, nullable=False, default=dict)

    created_at = Column(Timestamp, nullable=False, index=True)
