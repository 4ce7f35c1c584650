"""
BizTime Backend - Invoice SQLAlchemy Model
===========================================

What:  ORM mapping for the `invoices` table.
Who:   Queried by InvoiceService; CompanyService reads invoice ids from it.

Column defaults are server-side so that a plain
`INSERT INTO invoices (comp_code, amt)` fills in the rest:

    paid       → false
    add_date   → CURRENT_DATE
    paid_date  → NULL

No endpoint sets `paid` or `paid_date`.

Foreign key:
    comp_code → companies.code with no ON DELETE action, so the store refuses
    to delete a company that still owns invoices.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, Date, ForeignKey, Integer, Numeric, String, false, text
from sqlalchemy.orm import Mapped, mapped_column

from biztime.database import Base


class Invoice(Base):
    __tablename__ = "invoices"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    comp_code: Mapped[str] = mapped_column(
        String(50),
        ForeignKey("companies.code"),
        nullable=False,
        index=True,
        comment="Owning company",
    )

    # NUMERIC(10, 2): the store hands back Decimal('100.00'), serialized as "100.00"
    amt: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        comment="Invoice amount",
    )

    paid: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        server_default=false(),
    )

    add_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        server_default=text("CURRENT_DATE"),
    )

    paid_date: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Invoice(id={self.id}, comp_code='{self.comp_code}', amt={self.amt})>"
