from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, Integer, Numeric, String, Text, text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


# ---------------------------
# Core: events
# ---------------------------


class Event(Base):
    """A single financial event (income, expense or transfer).

    Transfers exist in two shapes. The canonical shape is one row with
    ``is_transfer = true`` (or ``type = 'transfer'``) and directional
    ``from_*``/``to_*`` references. The legacy shape is two rows, an
    ``income`` leg and an ``expense`` leg, linked by ``transfer_group_id`` and
    carrying single-sided ``account_id``/``company_id``/``individual_id``.
    """

    __tablename__ = "events"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    transfer_group_id: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    type: Mapped[str | None] = mapped_column(String, nullable=True)
    is_transfer: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false")
    )
    amount: Mapped[Decimal | None] = mapped_column(Numeric(18, 2), nullable=True)

    # Single-sided references (legacy leg shape)
    account_id: Mapped[str | None] = mapped_column(String, nullable=True)
    company_id: Mapped[str | None] = mapped_column(String, nullable=True)
    individual_id: Mapped[str | None] = mapped_column(String, nullable=True)
    contractor_id: Mapped[str | None] = mapped_column(String, nullable=True)
    counterparty_individual_id: Mapped[str | None] = mapped_column(String, nullable=True)

    # Directional references (canonical transfer shape)
    from_account_id: Mapped[str | None] = mapped_column(String, nullable=True)
    to_account_id: Mapped[str | None] = mapped_column(String, nullable=True)
    from_company_id: Mapped[str | None] = mapped_column(String, nullable=True)
    to_company_id: Mapped[str | None] = mapped_column(String, nullable=True)
    from_individual_id: Mapped[str | None] = mapped_column(String, nullable=True)
    to_individual_id: Mapped[str | None] = mapped_column(String, nullable=True)

    category_id: Mapped[str | None] = mapped_column(String, nullable=True)
    project_id: Mapped[str | None] = mapped_column(String, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Display ordering within a day column in the UI grid.
    cell_index: Mapped[int | None] = mapped_column(Integer, nullable=True)
    date_key: Mapped[str | None] = mapped_column(String, nullable=True)
    transfer_purpose: Mapped[str | None] = mapped_column(String, nullable=True)
    transfer_reason: Mapped[str | None] = mapped_column(String, nullable=True)
    exclude_from_totals: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false")
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=text("CURRENT_TIMESTAMP")
    )


__all__ = [
    "Base",
    "Event",
]
