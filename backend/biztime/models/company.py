"""
BizTime Backend - Company SQLAlchemy Model
===========================================

What:  ORM mapping for the `companies` table.
Who:   Queried by CompanyService and joined by InvoiceService; created at
       startup by `database.create_tables`.

Table Design:
    - code: short text key chosen by the client (e.g. "apple"); never renamed
    - name: display name, unique
    - description: free text, nullable

    One company owns zero or more invoices through `invoices.comp_code`.
"""

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from biztime.database import Base


class Company(Base):
    __tablename__ = "companies"

    code: Mapped[str] = mapped_column(
        String(50),
        primary_key=True,
        comment="Client-chosen company key",
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Display name",
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="Free text description",
    )

    def __repr__(self) -> str:
        return f"<Company(code='{self.code}', name='{self.name}')>"
