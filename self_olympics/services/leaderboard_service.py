"""Leaderboard of registrations per country."""

import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from self_olympics.models.country import Country
from self_olympics.utils.error_handler import StorageError

logger = logging.getLogger(__name__)


class LeaderboardService:

    @staticmethod
    def list_leaderboard(db: Session) -> List[Country]:
        """All countries, most registrations first, ties broken by name."""
        try:
            countries = (
                db.query(Country)
                .order_by(Country.count.desc(), Country.country_name.asc())
                .all()
            )
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error fetching leaderboard: {str(e)}")
            raise StorageError("Failed to fetch leaderboard", str(e))

        logger.info(f"Fetched {len(countries)} countries from leaderboard")
        return countries
