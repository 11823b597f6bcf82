"""Postgres-backed lead repository adapter."""

from datetime import timezone
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from leadengine.application.dtos.lead import Lead, LeadStatus
from leadengine.application.ports.lead_repository import LeadRepository
from leadengine.domain.exceptions import LeadAlreadyExistsError, PersistenceError
from leadengine.infrastructure.db import get_db_session
from leadengine.infrastructure.logging.logger import logger

from .models import LeadModel


class PostgresLeadRepository(LeadRepository):
    """Postgres implementation of lead repository."""

    def _model_to_dto(self, model: LeadModel) -> Lead:
        """
        Convert LeadModel to Lead DTO.

        Args:
            model: SQLAlchemy model instance

        Returns:
            Lead DTO
        """
        # SQLite returns naive datetimes
        created_at = model.created_at
        if created_at and created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)

        return Lead(
            business_id=model.business_id,
            name=model.name,
            phone=model.phone,
            email=model.email,
            service_interest=model.service_interest,
            status=LeadStatus(model.status),
            created_at=created_at,
        )

    async def get_by_phone(self, business_id: str, phone: str) -> Optional[Lead]:
        """
        Get a lead by its (business_id, phone) key.

        Args:
            business_id: Business identifier
            phone: Normalized phone number

        Returns:
            Lead DTO, or None if not found

        Raises:
            PersistenceError: If the database cannot be queried
        """
        db: Session = get_db_session()
        try:
            model = (
                db.query(LeadModel)
                .filter(LeadModel.business_id == business_id, LeadModel.phone == phone)
                .first()
            )
            return self._model_to_dto(model) if model is not None else None
        except SQLAlchemyError as e:
            logger.error(f"Database error while getting lead for business {business_id}: {str(e)}")
            raise PersistenceError("Could not read lead") from e
        finally:
            db.close()

    async def add(self, lead: Lead) -> None:
        """
        Insert a new lead.

        Args:
            lead: Lead DTO to insert

        Raises:
            LeadAlreadyExistsError: If (business_id, phone) violates the unique constraint
            PersistenceError: If the write fails for any other reason
        """
        db: Session = get_db_session()
        try:
            db.add(
                LeadModel(
                    business_id=lead.business_id,
                    name=lead.name,
                    phone=lead.phone,
                    email=lead.email,
                    service_interest=lead.service_interest,
                    status=lead.status.value,
                    created_at=lead.created_at,
                )
            )
            db.commit()
        except IntegrityError as e:
            db.rollback()
            raise LeadAlreadyExistsError(lead.business_id, lead.phone) from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Database error while saving lead for business {lead.business_id}: {str(e)}")
            raise PersistenceError("Could not save lead") from e
        finally:
            db.close()

    async def list(self) -> list[Lead]:
        """
        List all leads.

        Returns:
            List of all leads
        """
        db: Session = get_db_session()
        try:
            models = db.query(LeadModel).order_by(LeadModel.id).all()
            return [self._model_to_dto(model) for model in models]
        except SQLAlchemyError as e:
            logger.error(f"Database error while listing leads: {str(e)}")
            return []
        finally:
            db.close()
