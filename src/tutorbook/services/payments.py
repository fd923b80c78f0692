"""
Payment tracking service.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..models.lesson import Lesson
from ..models.money import to_decimal
from ..models.payment import Payment
from ..models.result import ErrorKind, Result
from ..storage.interfaces import StorageError
from ..validation.payment_validator import PaymentValidator
from .base import BaseService


logger = logging.getLogger(__name__)


@dataclass
class PaymentEntry:
    """A payment with its student's name and the lessons it settled."""

    payment: Payment
    student_name: str
    lessons: List[Lesson] = field(default_factory=list)


class PaymentService(BaseService):
    """
    Service for recording payments against lessons.

    Recording a payment marks the lessons it lists as paid. Deleting a
    payment can optionally mark them unpaid again.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.validator = PaymentValidator()

    def list_payments(self, student_id: Optional[int] = None) -> Result[List[PaymentEntry]]:
        """
        Get payments newest first.

        Args:
            student_id: Only this student's payments (optional)
        """
        try:
            state = self.storage.load_all()
        except StorageError as e:
            logger.error(f"Failed to load payments: {e}")
            return Result.failure(str(e), e, ErrorKind.STORAGE)

        payments = state.payments
        if student_id is not None:
            payments = [p for p in payments if p.student_id == int(student_id)]

        entries = [
            PaymentEntry(
                payment=p,
                student_name=state.student_name(p.student_id),
                lessons=[l for l in state.lessons if l.id in p.lesson_ids],
            )
            for p in payments
        ]
        entries.sort(key=lambda e: e.payment.date, reverse=True)
        return Result.success(entries)

    def record_payment(self, data: Dict[str, Any]) -> Result[Payment]:
        """
        Record a payment and mark its lessons paid.

        Args:
            data: Payload with student_id, amount, date and optional
                notes and lesson_ids

        Returns:
            Result containing the new payment; NOT_FOUND for an unknown
            student, INVALID_INPUT for a bad payload
        """
        validation = self.validator.validate(data)
        if not validation.is_valid:
            return Result.invalid(validation.error_message())

        try:
            state = self.storage.load_all()

            student = state.find_student(int(data["student_id"]))
            if student is None:
                return Result.not_found(f"Student not found: {data['student_id']}")

            lesson_ids = [int(i) for i in (data.get("lesson_ids") or [])]
            payment = Payment(
                id=state.allocate_id(),
                student_id=student.id,
                amount=to_decimal(data["amount"]),
                date=data["date"],
                notes=data.get("notes") or None,
                lesson_ids=lesson_ids,
                created_at=self._now_iso(),
            )
            state.payments.append(payment)

            for lesson_id in lesson_ids:
                lesson = state.find_lesson(lesson_id)
                if lesson is None:
                    logger.warning(f"Payment {payment.id} lists unknown lesson {lesson_id}")
                    continue
                if lesson.student_id != student.id:
                    logger.warning(
                        f"Payment {payment.id} for student {student.id} settles lesson "
                        f"{lesson_id} of student {lesson.student_id}"
                    )
                lesson.is_paid = True

            self.storage.save_all(state)

            logger.info(
                f"Recorded payment {payment.id} of {payment.amount} "
                f"from student {student.id} ({len(lesson_ids)} lesson(s))"
            )
            return Result.success(payment, "Payment recorded")

        except StorageError as e:
            logger.error(f"Failed to record payment: {e}")
            return Result.failure(str(e), e, ErrorKind.STORAGE)

        except Exception as e:
            logger.error(f"Failed to record payment: {e}", exc_info=True)
            return Result.failure(f"Failed to record payment: {e}", e)

    def delete_payment(self, payment_id: int, unmark_lessons: bool = False) -> Result[None]:
        """
        Delete a payment.

        Args:
            payment_id: Payment to delete
            unmark_lessons: Also mark the payment's lessons unpaid
        """
        try:
            state = self.storage.load_all()

            payment = state.find_payment(int(payment_id))
            if payment is None:
                return Result.not_found(f"Payment not found: {payment_id}")

            if unmark_lessons:
                for lesson_id in payment.lesson_ids:
                    lesson = state.find_lesson(lesson_id)
                    if lesson is not None:
                        lesson.is_paid = False

            state.payments = [p for p in state.payments if p.id != payment.id]
            self.storage.save_all(state)

            logger.info(f"Deleted payment {payment.id}")
            return Result.success(None, "Payment deleted")

        except StorageError as e:
            logger.error(f"Failed to delete payment {payment_id}: {e}")
            return Result.failure(str(e), e, ErrorKind.STORAGE)

        except Exception as e:
            logger.error(f"Failed to delete payment {payment_id}: {e}", exc_info=True)
            return Result.failure(f"Failed to delete payment {payment_id}: {e}", e)
