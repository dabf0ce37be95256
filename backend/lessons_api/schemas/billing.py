"""Billing and admin aggregate schemas."""

from lessons_api.schemas.base import CamelModel


class CheckoutSessionResponse(CamelModel):
    url: str


class PaymentConfirmation(CamelModel):
    success: bool


class StatsResponse(CamelModel):
    total_users: int
    total_lessons: int
    reported_lessons: int
