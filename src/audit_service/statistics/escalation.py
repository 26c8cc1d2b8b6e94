import logging
from collections.abc import Sequence

from audit_service.core.constants import FLAGGED_TICKET_MESSAGE
from audit_service.core.data_models import Ticket
from audit_service.core.exceptions import DuplicateTicketError
from audit_service.detection.data_models import FlaggedStudent
from audit_service.statistics.data_models import EscalationResult
from audit_service.storage.protocols import BatchStore, TicketStore, UserStore

logger = logging.getLogger(__name__)


class TicketEscalator:
    """
    Open remediation tickets for flagged students.

    At most one ticket ever exists per (exam, student): the existence check
    runs before a ticket is built, and the ticket store's uniqueness
    constraint backs it up when two runs race. Each student is handled on
    its own, so a failing lookup only skips that student.
    """

    def __init__(
        self,
        tickets: TicketStore,
        users: UserStore,
        batches: BatchStore,
    ) -> None:
        self._tickets = tickets
        self._users = users
        self._batches = batches

    def resolve_ta(self, student_id: str) -> str | None:
        """First TA of the student's first batch, if there is one."""
        student = self._users.get(student_id)
        if student is None:
            return None

        batches = self._batches.find_by_student(student.user_id)
        if batches and batches[0].tas:
            return batches[0].tas[0]
        return None

    def _escalate_one(self, exam_id: str, flagged: FlaggedStudent) -> bool:
        if self._tickets.find_one(exam_id, flagged.student_id) is not None:
            logger.debug(
                f"Ticket already exists for {flagged.student_id}, skipping"
            )
            return False

        ticket = Ticket(
            student=flagged.student_id,
            evaluator=flagged.outlier_evaluator,
            ta=self.resolve_ta(flagged.student_id),
            exam=exam_id,
            message=FLAGGED_TICKET_MESSAGE,
        )
        try:
            self._tickets.create(ticket)
        except DuplicateTicketError:
            logger.info(
                f"Ticket for {flagged.student_id} created concurrently, "
                "skipping"
            )
            return False

        logger.info(
            f"Opened ticket {ticket.ticket_id} for {flagged.student_id} "
            f"(evaluator={ticket.evaluator}, ta={ticket.ta})"
        )
        return True

    def escalate(
        self, exam_id: str, flagged: Sequence[FlaggedStudent]
    ) -> EscalationResult:
        result = EscalationResult(created=[], skipped=[], failed=[])
        for student in flagged:
            try:
                created = self._escalate_one(exam_id, student)
            except Exception:
                logger.exception(
                    f"Escalation failed for student {student.student_id}"
                )
                result.failed.append(student.student_id)
                continue

            if created:
                result.created.append(student.student_id)
            else:
                result.skipped.append(student.student_id)

        return result
