from __future__ import annotations

from dataclasses import dataclass

from app.models.billing_address import BillingAddress
from app.models.booking import Booking
from app.models.card_issuer import CardIssuer
from app.models.card_type import CardType
from app.models.chargeback import Chargeback
from app.models.currency import Currency
from app.models.customer import Customer
from app.models.discount import Discount
from app.models.event import Event
from app.models.event_category import EventCategory
from app.models.event_schedule import EventSchedule
from app.models.merchant_account import MerchantAccount
from app.models.organizer import Organizer
from app.models.payment import Payment
from app.models.payment_account import PaymentAccount
from app.models.payment_gateway import PaymentGateway
from app.models.payment_method import PaymentMethod
from app.models.payment_status import PaymentStatus
from app.models.payment_transaction import PaymentTransaction
from app.models.pricing import Pricing
from app.models.promo_code import PromoCode
from app.models.refund import Refund
from app.models.refund_policy import RefundPolicy
from app.models.reservation import Reservation
from app.models.row import Row
from app.models.seat import Seat
from app.models.seat_map import SeatMap
from app.models.section import Section
from app.models.settlement import Settlement
from app.models.ticket import Ticket
from app.models.ticket_delivery_method import TicketDeliveryMethod
from app.models.ticket_holder import TicketHolder
from app.models.ticket_status import TicketStatus
from app.models.ticket_type import TicketType
from app.models.transaction_fee import TransactionFee
from app.models.venue import Venue
from app.services.query.descriptors import DescriptorRegistry, FieldDescriptorTable


@dataclass(frozen=True)
class EntityDefinition:
    model: type
    searchable: tuple[str, ...] | None = None
    include: tuple[str, ...] = ()

    @property
    def name(self) -> str:
        return self.model.__name__

    @property
    def route(self) -> str:
        return self.model.__name__.lower()


ENTITY_DEFINITIONS: tuple[EntityDefinition, ...] = (
    EntityDefinition(Venue, searchable=("name", "address", "city", "country")),
    EntityDefinition(SeatMap, include=("venue",)),
    EntityDefinition(Section, include=("seat_map",)),
    EntityDefinition(Row, include=("section",)),
    EntityDefinition(Seat, searchable=("seat_number", "row_label"), include=("venue",)),
    EntityDefinition(Organizer),
    EntityDefinition(EventCategory),
    EntityDefinition(Event, searchable=("name", "description"), include=("venue",)),
    EntityDefinition(EventSchedule, include=("event_category",)),
    EntityDefinition(TicketType),
    EntityDefinition(Pricing, searchable=("currency_code",), include=("event", "ticket_type")),
    EntityDefinition(TicketStatus),
    EntityDefinition(Reservation, searchable=("customer_email",), include=("event",)),
    EntityDefinition(Ticket, searchable=("ticket_number",), include=("reservation", "seat", "ticket_type")),
    EntityDefinition(TicketHolder),
    EntityDefinition(TicketDeliveryMethod),
    EntityDefinition(Customer),
    EntityDefinition(Booking, searchable=("booking_reference",), include=("customer", "event_schedule", "payment")),
    EntityDefinition(Discount),
    EntityDefinition(PromoCode, searchable=("code",), include=("discount",)),
    EntityDefinition(RefundPolicy),
    EntityDefinition(PaymentMethod),
    EntityDefinition(Payment, searchable=("reference",), include=("payment_method",)),
    EntityDefinition(PaymentGateway),
    EntityDefinition(PaymentStatus),
    EntityDefinition(CardIssuer),
    EntityDefinition(CardType),
    EntityDefinition(TransactionFee),
    EntityDefinition(
        PaymentTransaction,
        searchable=("external_reference",),
        include=("payment_gateway", "payment_status", "card_issuer", "card_type", "transaction_fee"),
    ),
    EntityDefinition(Refund, searchable=("reason",), include=("payment_transaction",)),
    EntityDefinition(Currency),
    EntityDefinition(MerchantAccount),
    EntityDefinition(Settlement, include=("merchant_account", "currency")),
    EntityDefinition(Chargeback, searchable=("reason",), include=("settlement", "currency")),
    EntityDefinition(BillingAddress),
    EntityDefinition(PaymentAccount, searchable=("account_holder",), include=("billing_address",)),
)


def _build_registry(definitions: tuple[EntityDefinition, ...]) -> DescriptorRegistry:
    registry = DescriptorRegistry()
    for definition in definitions:
        registry.register(definition.model, definition.searchable)
    registry.freeze()
    return registry


descriptor_registry = _build_registry(ENTITY_DEFINITIONS)


def table_for(definition: EntityDefinition) -> FieldDescriptorTable:
    return descriptor_registry.table_for(definition.model)
