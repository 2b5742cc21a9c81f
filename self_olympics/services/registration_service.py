# self_olympics/services/registration_service.py

import logging
import time
import uuid
from dataclasses import dataclass
from typing import Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from self_olympics.models.country import Country
from self_olympics.models.registration import Registration
from self_olympics.schemas.registration import ProofRegistrationRequest, RegistrationResponse
from self_olympics.utils.countries import lookup_name
from self_olympics.utils.error_handler import StorageError, VerificationError
from self_olympics.utils.self_verifier import IdentityVerifier

logger = logging.getLogger(__name__)


@dataclass
class RegistrationResult:
    success: bool
    country_code: str
    country_name: str
    message: str
    count: Optional[int] = None
    already_registered: bool = False

    def to_response(self) -> RegistrationResponse:
        return RegistrationResponse(
            success=self.success,
            country_code=self.country_code,
            country_name=self.country_name,
            message=self.message,
            count=self.count,
            already_registered=True if self.already_registered else None,
        )


SIMPLE_NULLIFIER_PREFIX = "simple:"


def synthetic_nullifier(country_code: str) -> str:
    """
    Per-request token for registrations made without an identity proof.
    Unique per call, so it gives no protection against the same person voting twice.
    """
    return f"{country_code}-{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}"


def simple_nullifier(token: str) -> str:
    """
    Namespaces a token from an unverified registration so it can never
    collide with a nullifier disclosed by an identity proof.
    """
    return f"{SIMPLE_NULLIFIER_PREFIX}{token}"


def _upsert_statement(db: Session):
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    elif dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
    else:
        raise StorageError("Failed to register country", f"Unsupported database dialect: {dialect}")
    return insert


class RegistrationService:
    """Records one vote per identity and keeps the per-country count in step with it"""

    @staticmethod
    def register(db: Session, country_code: str, country_name: str, nullifier: str) -> RegistrationResult:
        country_code = country_code.strip().upper()
        insert = _upsert_statement(db)

        try:
            existing = RegistrationService._find_existing(db, nullifier)
            if existing:
                # nothing was written; end the read transaction
                db.rollback()
                return RegistrationService._already_registered(*existing)

            new_count = RegistrationService._increment_country(db, insert, country_code, country_name)
            RegistrationService._insert_registration(db, nullifier, country_code)
            db.commit()
        except IntegrityError as e:
            db.rollback()
            # a concurrent request recorded this nullifier first
            existing = RegistrationService._find_existing_after_conflict(db, nullifier, e)
            return RegistrationService._already_registered(*existing)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error registering {country_code}: {str(e)}")
            raise StorageError("Failed to register country", str(e))

        if new_count == 1:
            logger.info(f"Created {country_name} with count: 1")
        else:
            logger.info(f"Updated {country_name} to count: {new_count}")

        return RegistrationResult(
            success=True,
            country_code=country_code,
            country_name=country_name,
            count=new_count,
            message=f"Successfully registered for {country_name}!",
        )

    @staticmethod
    async def register_with_proof(
        db: Session,
        verifier: IdentityVerifier,
        request: ProofRegistrationRequest,
    ) -> RegistrationResult:
        outcome = await verifier.verify(
            request.attestation_id,
            request.proof,
            request.public_signals,
            request.user_context_data,
        )

        if not outcome.valid:
            logger.warning(f"Identity proof rejected: {outcome.details}")
            raise VerificationError("Verification failed", outcome.details)
        if not outcome.nationality:
            raise VerificationError("Nationality not disclosed", "The proof must disclose nationality")
        if not outcome.identifier:
            raise VerificationError("Verification failed", "The proof did not include a nullifier")
        if outcome.identifier.startswith(SIMPLE_NULLIFIER_PREFIX):
            raise VerificationError("Verification failed", "The proof disclosed a reserved nullifier")

        country_code = outcome.nationality.upper()
        country_name = lookup_name(country_code)

        return await run_in_threadpool(
            RegistrationService.register, db, country_code, country_name, outcome.identifier
        )

    @staticmethod
    def _find_existing(db: Session, nullifier: str) -> Optional[Tuple[str, str]]:
        row = (
            db.query(Registration.country_code, Country.country_name)
            .join(Country, Country.country_code == Registration.country_code)
            .filter(Registration.nullifier == nullifier)
            .first()
        )
        return (row.country_code, row.country_name) if row else None

    @staticmethod
    def _find_existing_after_conflict(db: Session, nullifier: str, error: IntegrityError) -> Tuple[str, str]:
        try:
            existing = RegistrationService._find_existing(db, nullifier)
        except SQLAlchemyError as e:
            db.rollback()
            raise StorageError("Failed to register country", str(e))
        if existing is None:
            logger.error(f"Integrity error registering nullifier: {str(error)}")
            raise StorageError("Failed to register country", str(error.orig))
        return existing

    @staticmethod
    def _increment_country(db: Session, insert, country_code: str, country_name: str) -> int:
        stmt = (
            insert(Country)
            .values(country_code=country_code, country_name=country_name, count=1)
            .on_conflict_do_update(
                index_elements=[Country.country_code],
                set_={"count": Country.count + 1, "updated_at": func.now()},
            )
            .returning(Country.count)
        )
        return db.execute(stmt).scalar_one()

    @staticmethod
    def _insert_registration(db: Session, nullifier: str, country_code: str) -> None:
        db.add(Registration(nullifier=nullifier, country_code=country_code))
        db.flush()

    @staticmethod
    def _already_registered(country_code: str, country_name: str) -> RegistrationResult:
        logger.info(f"Nullifier already registered for {country_name}")
        return RegistrationResult(
            success=False,
            already_registered=True,
            country_code=country_code,
            country_name=country_name,
            message=f"You have already registered for {country_name}.",
        )
