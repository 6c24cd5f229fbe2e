"""SQLAlchemy models for the brokerledger database."""

from sqlalchemy import (
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Platform(Base):
    """Export source lookup table."""

    __tablename__ = "platforms"

    id = Column(String, primary_key=True)
    description = Column(String, nullable=False)
    url = Column(String, nullable=False)


class ImportRecord(Base):
    """Import file model. The id is the file's sha256sum."""

    __tablename__ = "imports"

    id = Column(String, primary_key=True)
    filename = Column(String, nullable=False)
    platform_id = Column(String, ForeignKey("platforms.id"), nullable=False)
    generation_date = Column(DateTime, nullable=False)

    # Relationships
    accounts = relationship("Account", back_populates="import_record")
    transactions = relationship("Transaction", back_populates="import_record")


class Account(Base):
    """Broker account model."""

    __tablename__ = "accounts"

    id = Column(String, primary_key=True)
    platform_id = Column(String, ForeignKey("platforms.id"), nullable=False)
    import_id = Column(String, ForeignKey("imports.id"), nullable=False)
    label = Column(String, nullable=True)
    kind = Column(String, nullable=True)

    # Relationships
    import_record = relationship("ImportRecord", back_populates="accounts")
    transactions = relationship("Transaction", back_populates="account")


class Transaction(Base):
    """Investment transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    execution_time = Column(DateTime, nullable=False)
    ticker_symbol = Column(String, nullable=False)
    unit_quantity = Column(Float, nullable=False)
    cost_per_unit = Column(Float, nullable=False)
    currency_symbol = Column(String, nullable=False)
    account_id = Column(String, ForeignKey("accounts.id"), nullable=False)
    import_id = Column(String, ForeignKey("imports.id"), nullable=False)

    # Relationships
    account = relationship("Account", back_populates="transactions")
    import_record = relationship("ImportRecord", back_populates="transactions")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
