from sqlalchemy import Column, Integer, String, DateTime, CheckConstraint
from sqlalchemy.sql import func
from self_olympics.database.database import Base


class Country(Base):
    __tablename__ = 'countries'
    __table_args__ = (
        CheckConstraint("count >= 0", name="ck_countries_count_non_negative"),
    )

    country_code = Column(String(10), primary_key=True)
    country_name = Column(String(100), nullable=False)
    # only ever changed by the registration upsert
    count = Column(Integer, nullable=False, default=1, server_default="1")
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
