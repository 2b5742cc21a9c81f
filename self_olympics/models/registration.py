from sqlalchemy import Column, BigInteger, Integer, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from self_olympics.database.database import Base


class Registration(Base):
    __tablename__ = 'registrations'

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    nullifier = Column(String(255), nullable=False, unique=True)
    country_code = Column(String(10), ForeignKey('countries.country_code'), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
