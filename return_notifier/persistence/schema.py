"""Database schema definition and ORM models.

Reference tables consulted by the notification operation. Each ORM model
converts to and from its domain model.
"""

import logging
from typing import Dict, List

from sqlalchemy import Column, ForeignKey, Index, Integer, String, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship

from return_notifier.domain.models import Contractor, Employee, Reseller, Status

logger = logging.getLogger(__name__)

Base = declarative_base()


class SellerModel(Base):
    """ORM model for sellers table."""

    __tablename__ = "sellers"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(255), nullable=False, default="")
    email_from = Column(String(255), nullable=True)

    notification_emails = relationship(
        "SellerNotificationEmailModel",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="SellerNotificationEmailModel.position",
    )

    def to_domain(self) -> Reseller:
        emails: Dict[str, List[str]] = {}
        for row in self.notification_emails:
            emails.setdefault(row.event, []).append(row.email)

        return Reseller(
            id=self.id,
            name=self.name or "",
            email_from=self.email_from,
            notification_emails=emails,
        )

    @classmethod
    def from_domain(cls, reseller: Reseller) -> "SellerModel":
        model = cls(id=reseller.id, name=reseller.name, email_from=reseller.email_from)
        model.notification_emails = _notification_email_rows(reseller)
        return model


class SellerNotificationEmailModel(Base):
    """ORM model for seller_notification_emails table.

    One row per (seller, event, address); ``position`` keeps the configured order.
    """

    __tablename__ = "seller_notification_emails"

    seller_id = Column(
        Integer, ForeignKey("sellers.id", ondelete="CASCADE"), primary_key=True
    )
    event = Column(String(100), primary_key=True)
    email = Column(String(255), primary_key=True)
    position = Column(Integer, nullable=False, default=0)

    __table_args__ = (Index("idx_seller_emails_event", "seller_id", "event"),)


class ContractorModel(Base):
    """ORM model for contractors table."""

    __tablename__ = "contractors"

    id = Column(Integer, primary_key=True, autoincrement=False)
    type = Column(Integer, nullable=False, default=0)
    name = Column(String(255), nullable=False, default="")
    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    mobile = Column(String(50), nullable=True)

    def to_domain(self) -> Contractor:
        return Contractor(
            id=self.id,
            type=self.type,
            name=self.name or "",
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            mobile=self.mobile,
        )

    @classmethod
    def from_domain(cls, contractor: Contractor) -> "ContractorModel":
        return cls(
            id=contractor.id,
            type=contractor.type,
            name=contractor.name,
            first_name=contractor.first_name,
            last_name=contractor.last_name,
            email=contractor.email,
            mobile=contractor.mobile,
        )


class EmployeeModel(Base):
    """ORM model for employees table."""

    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, autoincrement=False)
    first_name = Column(String(255), nullable=False, default="")
    last_name = Column(String(255), nullable=False, default="")

    def to_domain(self) -> Employee:
        return Employee(
            id=self.id,
            first_name=self.first_name or "",
            last_name=self.last_name or "",
        )

    @classmethod
    def from_domain(cls, employee: Employee) -> "EmployeeModel":
        return cls(
            id=employee.id,
            first_name=employee.first_name,
            last_name=employee.last_name,
        )


class StatusModel(Base):
    """ORM model for statuses table."""

    __tablename__ = "statuses"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(255), nullable=False)

    def to_domain(self) -> Status:
        return Status(id=self.id, name=self.name)

    @classmethod
    def from_domain(cls, status: Status) -> "StatusModel":
        return cls(id=status.id, name=status.name)


def _notification_email_rows(reseller: Reseller) -> List[SellerNotificationEmailModel]:
    rows = []
    for event, emails in reseller.notification_emails.items():
        seen = set()
        for position, email in enumerate(emails):
            if not email or email in seen:
                continue
            seen.add(email)
            rows.append(
                SellerNotificationEmailModel(
                    seller_id=reseller.id, event=event, email=email, position=position
                )
            )
    return rows


def create_schema(engine: Engine) -> None:
    """Create all tables and indexes if they don't exist (idempotent)."""
    logger.info("Creating database schema if not exists")

    try:
        Base.metadata.create_all(engine, checkfirst=True)
        tables = inspect(engine).get_table_names()
        logger.info(f"Database schema ready. Tables: {', '.join(tables)}")
    except Exception as e:
        logger.error(f"Failed to create database schema: {e}", exc_info=True)
        raise
