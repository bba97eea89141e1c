from sqlalchemy import Column, Integer, BigInteger, CheckConstraint, DateTime, Text, Index
from sqlalchemy.sql import func
from core.database import Base


class Submission(Base):
    """A crowd-submitted prediction. Insert-only."""
    __tablename__ = "submissions"

    # BIGSERIAL on Postgres; SQLite only autoincrements INTEGER primary keys
    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    character = Column(Text, nullable=False, server_default="Deniusth")
    username = Column(Text, nullable=False)
    cause = Column(Text, nullable=False)
    probability = Column(Integer, nullable=False)
    era = Column(Text, nullable=False, server_default="AF")
    year = Column(Integer, nullable=True)  # NULL when not given, never a sentinel
    month_index = Column(Integer, nullable=False)
    month_name = Column(Text, nullable=False)
    day_of_month = Column(Integer, nullable=False)
    day_of_week_index = Column(Integer, nullable=False)
    day_of_week_name = Column(Text, nullable=False)

    __table_args__ = (
        CheckConstraint("probability >= 0 AND probability <= 100", name="ck_submissions_probability"),
        CheckConstraint("year BETWEEN 0 AND 100000", name="ck_submissions_year"),
        CheckConstraint("month_index BETWEEN 1 AND 16", name="ck_submissions_month_index"),
        CheckConstraint("day_of_month BETWEEN 1 AND 32", name="ck_submissions_day_of_month"),
        CheckConstraint("day_of_week_index BETWEEN 1 AND 8", name="ck_submissions_day_of_week_index"),
        Index("idx_submissions_character", "character"),
        Index("idx_submissions_month", "month_index"),
        Index("idx_submissions_created", created_at.desc()),
    )
