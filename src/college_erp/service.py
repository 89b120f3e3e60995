"""CampusService - the inbound API a presentation layer calls.

Each method resolves the acting session, checks its role, runs one pure
transition against the DirectoryStore, and queues a background save.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from college_erp import admin, enrollment
from college_erp.config import Settings
from college_erp.directory import DirectoryStore, Role
from college_erp.directory.queries import (
    TimetableEntry,
    available_courses,
    student_profile_for,
    timetable,
)
from college_erp.exceptions import NotAuthenticatedError, PermissionDeniedError
from college_erp.identity import SessionManager
from college_erp.ledger import record_payment
from college_erp.logging import configure_logging, sanitize_for_log
from college_erp.persistence import SnapshotRepository, SnapshotWriter

if TYPE_CHECKING:
    from collections.abc import Iterable

    from college_erp.directory import (
        Account,
        CourseRecord,
        Directory,
        FacultyRecord,
        PaymentMethod,
        StudentRecord,
    )
    from college_erp.identity import SignupProfile

logger = logging.getLogger(__name__)


class CampusService:
    """Main API for College ERP operations.

    Provides session, student self-service and admin operations over one
    DirectoryStore. Persistence is optional; without a writer the service
    runs purely in memory.
    """

    def __init__(
        self,
        store: DirectoryStore | None = None,
        session: SessionManager | None = None,
        writer: SnapshotWriter | None = None,
        settings: Settings | None = None,
        repository: SnapshotRepository | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            store: Owner of the aggregate. Defaults to a seeded store.
            session: Session slot. Defaults to signed out.
            writer: Background writer for durable saves (optional)
            settings: Runtime settings. Defaults to ``Settings()``.
            repository: Repository closed by ``close()`` (optional)
        """
        self.store = store if store is not None else DirectoryStore()
        self.session = session if session is not None else SessionManager()
        self.settings = settings if settings is not None else Settings()
        self._writer = writer
        self._repository = repository

    @classmethod
    def from_repository(
        cls,
        repository: SnapshotRepository,
        writer: SnapshotWriter,
        settings: Settings | None = None,
    ) -> CampusService:
        """Build a service from persisted state (or the seed dataset)."""
        return cls(
            store=DirectoryStore(repository.load()),
            session=SessionManager(repository.load_session()),
            writer=writer,
            settings=settings,
            repository=repository,
        )

    @classmethod
    def open(cls, settings: Settings | None = None) -> CampusService:
        """Start the core for a host process.

        Configures logging, opens the SQLite store at ``settings.db_path``
        and restores the saved directory and session. Pair with ``close()``.

        Args:
            settings: Runtime settings. Defaults to ``Settings.from_env()``.
        """
        settings = settings if settings is not None else Settings.from_env()
        configure_logging(settings.log_level, settings.log_dir)
        repository = SnapshotRepository(settings.db_path)
        service = cls.from_repository(repository, SnapshotWriter(repository), settings)
        logger.info("College ERP core started (db=%s)", settings.db_path)
        return service

    def close(self) -> None:
        """Drain pending saves and release the database."""
        if self._writer is not None:
            self._writer.close()
        if self._repository is not None:
            self._repository.close()

    # --- Internals ---

    def _persist(self, directory: Directory) -> None:
        if self._writer is not None:
            self._writer.save(directory)

    def _persist_session(self) -> None:
        if self._writer is not None:
            self._writer.save_session(self.session.account_id)

    def _require(self, role: Role) -> Account:
        account = self.session.current_account(self.store.snapshot())
        if account is None:
            raise NotAuthenticatedError("Sign in to continue")
        if account.role is not role:
            raise PermissionDeniedError(f"Only {role.value} accounts may do this")
        return account

    # --- Session ---

    def current_account(self) -> Account | None:
        """The signed-in account, if any."""
        return self.session.current_account(self.store.snapshot())

    def login(self, email: str, credential: str) -> Account:
        """Sign in.

        Raises:
            InvalidCredentialsError: If no account matches
        """
        account = self.session.authenticate(self.store.snapshot(), email, credential)
        self._persist_session()
        return account

    def signup(self, profile: SignupProfile) -> Account:
        """Create an account and sign it in.

        Raises:
            EmailAlreadyExistsError: If the email is taken
        """
        logger.debug("Signup request: %s", sanitize_for_log(repr(profile)))
        account = self.store.apply_with_result(
            lambda directory: self.session.register(directory, profile)
        )
        self._persist(self.store.snapshot())
        self._persist_session()
        return account

    def logout(self) -> None:
        """Sign out. Idempotent."""
        self.session.end_session()
        self._persist_session()

    # --- Student self-service ---

    def my_record(self) -> StudentRecord:
        """The signed-in student's record."""
        account = self._require(Role.STUDENT)
        return self.store.snapshot().get_student(account.id)

    def my_available_courses(self) -> list[CourseRecord]:
        account = self._require(Role.STUDENT)
        return available_courses(self.store.snapshot(), account.id)

    def my_timetable(self) -> list[TimetableEntry]:
        account = self._require(Role.STUDENT)
        return timetable(self.store.snapshot(), account.id)

    def add_course(self, course_id: str) -> StudentRecord:
        """Enroll the signed-in student in a course.

        Raises:
            CourseNotFoundError, AlreadyEnrolledError, CapacityReachedError
        """
        account = self._require(Role.STUDENT)
        directory = self.store.apply(
            lambda d: enrollment.enroll(d, account.id, course_id, self.settings.course_fee)
        )
        self._persist(directory)
        return directory.get_student(account.id)

    def drop_course(self, course_id: str) -> StudentRecord:
        """Drop a course for the signed-in student. No-op if not enrolled."""
        account = self._require(Role.STUDENT)
        directory = self.store.apply(
            lambda d: enrollment.drop(d, account.id, course_id, self.settings.course_fee)
        )
        self._persist(directory)
        return directory.get_student(account.id)

    def pay(self, amount: object, method: PaymentMethod | str) -> StudentRecord:
        """Record a payment from the signed-in student.

        Raises:
            InvalidAmountError: If amount is not a positive whole number
            InvalidPaymentMethodError: If method is not an accepted method
        """
        account = self._require(Role.STUDENT)

        def transition(directory: Directory) -> Directory:
            student = directory.get_student(account.id)
            return directory.with_students(record_payment(student, amount, method))

        directory = self.store.apply(transition)
        self._persist(directory)
        return directory.get_student(account.id)

    # --- Administration ---

    def add_student(self, profile: admin.StudentProfile) -> StudentRecord:
        """Create a student account and record.

        Raises:
            EmailAlreadyExistsError, InvalidAmountError
        """
        self._require(Role.ADMIN)
        student = self.store.apply_with_result(
            lambda d: admin.create_student(d, profile, self.settings.default_password)
        )
        self._persist(self.store.snapshot())
        return student

    def add_faculty(self, name: str, department: str, email: str) -> FacultyRecord:
        self._require(Role.ADMIN)
        member = self.store.apply_with_result(
            lambda d: admin.create_faculty(d, name, department, email)
        )
        self._persist(self.store.snapshot())
        return member

    def add_course_admin(
        self,
        code: str,
        title: str,
        capacity: int | str | None = None,
        faculty_id: str | None = None,
        schedule_lines: str | Iterable[str] = "",
    ) -> CourseRecord:
        """Create a course.

        Raises:
            DuplicateCourseCodeError, InvalidCapacityError, FacultyNotFoundError
        """
        self._require(Role.ADMIN)
        course = self.store.apply_with_result(
            lambda d: admin.create_course(
                d,
                code,
                title,
                capacity=capacity,
                faculty_id=faculty_id,
                schedule_lines=schedule_lines,
                default_capacity=self.settings.default_capacity,
            )
        )
        self._persist(self.store.snapshot())
        return course

    def enroll_student(self, student_id: str, course_id: str) -> StudentRecord:
        """Enroll any student in any course.

        Raises:
            StudentNotFoundError, CourseNotFoundError, AlreadyEnrolledError,
            CapacityReachedError
        """
        self._require(Role.ADMIN)
        directory = self.store.apply(
            lambda d: admin.enroll_student(d, student_id, course_id, self.settings.course_fee)
        )
        self._persist(directory)
        return directory.get_student(student_id)

    def fine_student(
        self, student_id: str, amount: object, note: str | None = None
    ) -> StudentRecord:
        """Add a fine to a student's balance.

        Raises:
            StudentNotFoundError, InvalidAmountError
        """
        self._require(Role.ADMIN)
        directory = self.store.apply(lambda d: admin.fine_student(d, student_id, amount, note))
        self._persist(directory)
        return directory.get_student(student_id)

    def profile_of(self, account: Account) -> StudentRecord | None:
        """Student record behind any account, or None for admins."""
        return student_profile_for(self.store.snapshot(), account)
