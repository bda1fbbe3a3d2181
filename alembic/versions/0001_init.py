"""init
Revision ID: 0001_init
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


def _base():
    return [
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def _fk(name, target, nullable=False):
    return sa.Column(name, postgresql.UUID(as_uuid=True), sa.ForeignKey(f"{target}.id"), nullable=nullable)


def _status(default):
    return sa.Column("status", sa.String(length=20), nullable=False, server_default=default)


def upgrade():
    op.create_table(
        "venues",
        *_base(),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("address", sa.String(length=400), nullable=False),
        sa.Column("city", sa.String(length=120), nullable=False),
        sa.Column("country", sa.String(length=120), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
    )
    op.create_index("ix_venues_city", "venues", ["city"])

    op.create_table(
        "seat_maps",
        *_base(),
        _fk("venue_id", "venues"),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
    )
    op.create_table(
        "sections",
        *_base(),
        _fk("seat_map_id", "seat_maps"),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_table(
        "seat_rows",
        *_base(),
        _fk("section_id", "sections"),
        sa.Column("label", sa.String(length=20), nullable=False),
        sa.Column("seat_count", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_table(
        "seats",
        *_base(),
        _fk("venue_id", "venues"),
        sa.Column("seat_number", sa.String(length=20), nullable=False),
        sa.Column("row_label", sa.String(length=20), nullable=True),
        sa.Column("is_accessible", sa.Boolean(), nullable=False, server_default=sa.text("false")),
    )
    op.create_table(
        "organizers",
        *_base(),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("email", sa.String(length=200), nullable=False),
        sa.Column("phone", sa.String(length=40), nullable=True),
        sa.Column("website", sa.String(length=400), nullable=True),
    )
    op.create_table(
        "event_categories",
        *_base(),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
    )
    op.create_table(
        "events",
        *_base(),
        _fk("venue_id", "venues"),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("starts_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("ends_at", sa.DateTime(timezone=True), nullable=True),
        _status("DRAFT"),
    )
    op.create_index("ix_events_starts_at", "events", ["starts_at"])

    op.create_table(
        "event_schedules",
        *_base(),
        _fk("event_category_id", "event_categories"),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("starts_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("ends_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_table(
        "ticket_types",
        *_base(),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_refundable", sa.Boolean(), nullable=False, server_default=sa.text("true")),
    )
    op.create_table(
        "pricings",
        *_base(),
        _fk("event_id", "events"),
        _fk("ticket_type_id", "ticket_types"),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
        sa.Column("currency_code", sa.String(length=3), nullable=False, server_default="USD"),
        sa.Column("valid_from", sa.DateTime(timezone=True), nullable=True),
        sa.Column("valid_to", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_table(
        "ticket_statuses",
        *_base(),
        sa.Column("code", sa.String(length=30), nullable=False, unique=True),
        sa.Column("name", sa.String(length=120), nullable=False),
    )
    op.create_table(
        "reservations",
        *_base(),
        _fk("event_id", "events"),
        sa.Column("customer_email", sa.String(length=200), nullable=False),
        sa.Column("seat_count", sa.Integer(), nullable=False, server_default="1"),
        _status("HELD"),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_table(
        "tickets",
        *_base(),
        _fk("reservation_id", "reservations", nullable=True),
        _fk("seat_id", "seats", nullable=True),
        _fk("ticket_type_id", "ticket_types"),
        sa.Column("ticket_number", sa.String(length=40), nullable=False, unique=True),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
        sa.Column("issued_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_table(
        "ticket_holders",
        *_base(),
        sa.Column("first_name", sa.String(length=120), nullable=False),
        sa.Column("last_name", sa.String(length=120), nullable=False),
        sa.Column("email", sa.String(length=200), nullable=False),
        sa.Column("phone", sa.String(length=40), nullable=True),
    )
    op.create_table(
        "ticket_delivery_methods",
        *_base(),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("fee", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("is_digital", sa.Boolean(), nullable=False, server_default=sa.text("true")),
    )
    op.create_table(
        "customers",
        *_base(),
        sa.Column("first_name", sa.String(length=120), nullable=False),
        sa.Column("last_name", sa.String(length=120), nullable=False),
        sa.Column("email", sa.String(length=200), nullable=False),
        sa.Column("phone", sa.String(length=40), nullable=True),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
    )
    op.create_index("ix_customers_email", "customers", ["email"])

    op.create_table(
        "discounts",
        *_base(),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("percentage", sa.Numeric(5, 2), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
    )
    op.create_table(
        "promo_codes",
        *_base(),
        _fk("discount_id", "discounts"),
        sa.Column("code", sa.String(length=40), nullable=False, unique=True),
        sa.Column("valid_from", sa.DateTime(timezone=True), nullable=True),
        sa.Column("valid_to", sa.DateTime(timezone=True), nullable=True),
        sa.Column("max_uses", sa.Integer(), nullable=True),
        sa.Column("times_used", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_table(
        "refund_policies",
        *_base(),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("refund_window_days", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("refund_percentage", sa.Numeric(5, 2), nullable=False, server_default="100"),
    )
    op.create_table(
        "payment_methods",
        *_base(),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
    )
    op.create_table(
        "payments",
        *_base(),
        _fk("payment_method_id", "payment_methods"),
        sa.Column("reference", sa.String(length=80), nullable=False),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("currency_code", sa.String(length=3), nullable=False, server_default="USD"),
        sa.Column("paid_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_payments_reference", "payments", ["reference"])

    op.create_table(
        "bookings",
        *_base(),
        _fk("customer_id", "customers"),
        _fk("event_schedule_id", "event_schedules"),
        _fk("payment_id", "payments", nullable=True),
        sa.Column("booking_reference", sa.String(length=40), nullable=False, unique=True),
        _status("PENDING"),
        sa.Column("ticket_count", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("total_amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("booked_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_bookings_booked_at", "bookings", ["booked_at"])

    op.create_table(
        "payment_gateways",
        *_base(),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("provider", sa.String(length=120), nullable=False),
        sa.Column("api_endpoint", sa.String(length=400), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
    )
    op.create_table(
        "payment_statuses",
        *_base(),
        sa.Column("code", sa.String(length=30), nullable=False, unique=True),
        sa.Column("name", sa.String(length=120), nullable=False),
    )
    op.create_table(
        "card_issuers",
        *_base(),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("country", sa.String(length=120), nullable=True),
    )
    op.create_table(
        "card_types",
        *_base(),
        sa.Column("name", sa.String(length=120), nullable=False),
    )
    op.create_table(
        "transaction_fees",
        *_base(),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("fixed_amount", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("percentage", sa.Numeric(5, 2), nullable=False, server_default="0"),
    )
    op.create_table(
        "payment_transactions",
        *_base(),
        _fk("payment_gateway_id", "payment_gateways"),
        _fk("payment_status_id", "payment_statuses"),
        _fk("card_issuer_id", "card_issuers", nullable=True),
        _fk("card_type_id", "card_types", nullable=True),
        _fk("transaction_fee_id", "transaction_fees", nullable=True),
        sa.Column("external_reference", sa.String(length=120), nullable=False),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("currency_code", sa.String(length=3), nullable=False, server_default="USD"),
        sa.Column("processed_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_payment_transactions_external_reference", "payment_transactions", ["external_reference"])

    op.create_table(
        "refunds",
        *_base(),
        _fk("payment_transaction_id", "payment_transactions"),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("reason", sa.String(length=400), nullable=True),
        _status("REQUESTED"),
        sa.Column("refunded_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_table(
        "currencies",
        *_base(),
        sa.Column("code", sa.String(length=3), nullable=False, unique=True),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("symbol", sa.String(length=8), nullable=True),
        sa.Column("decimal_places", sa.Integer(), nullable=False, server_default="2"),
    )
    op.create_table(
        "merchant_accounts",
        *_base(),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("merchant_code", sa.String(length=60), nullable=False, unique=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
    )
    op.create_table(
        "settlements",
        *_base(),
        _fk("merchant_account_id", "merchant_accounts"),
        _fk("currency_id", "currencies"),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        _status("PENDING"),
        sa.Column("period_start", sa.DateTime(timezone=True), nullable=False),
        sa.Column("period_end", sa.DateTime(timezone=True), nullable=False),
        sa.Column("settled_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_table(
        "chargebacks",
        *_base(),
        _fk("settlement_id", "settlements"),
        _fk("currency_id", "currencies"),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("reason", sa.String(length=400), nullable=False),
        _status("OPEN"),
        sa.Column("opened_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_table(
        "billing_addresses",
        *_base(),
        sa.Column("line1", sa.String(length=200), nullable=False),
        sa.Column("line2", sa.String(length=200), nullable=True),
        sa.Column("city", sa.String(length=120), nullable=False),
        sa.Column("postal_code", sa.String(length=20), nullable=False),
        sa.Column("country", sa.String(length=120), nullable=False),
    )
    op.create_table(
        "payment_accounts",
        *_base(),
        _fk("billing_address_id", "billing_addresses"),
        sa.Column("account_holder", sa.String(length=200), nullable=False),
        sa.Column("account_number_last4", sa.String(length=4), nullable=False),
        sa.Column("is_default", sa.Boolean(), nullable=False, server_default=sa.text("false")),
    )


def downgrade():
    for table in (
        "payment_accounts",
        "billing_addresses",
        "chargebacks",
        "settlements",
        "merchant_accounts",
        "currencies",
        "refunds",
        "payment_transactions",
        "transaction_fees",
        "card_types",
        "card_issuers",
        "payment_statuses",
        "payment_gateways",
        "bookings",
        "payments",
        "payment_methods",
        "refund_policies",
        "promo_codes",
        "discounts",
        "customers",
        "ticket_delivery_methods",
        "ticket_holders",
        "tickets",
        "reservations",
        "ticket_statuses",
        "pricings",
        "ticket_types",
        "event_schedules",
        "events",
        "event_categories",
        "organizers",
        "seats",
        "seat_rows",
        "sections",
        "seat_maps",
        "venues",
    ):
        op.drop_table(table)
