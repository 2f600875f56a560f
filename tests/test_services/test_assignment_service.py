# tests/test_services/test_assignment_service.py
import unittest
from datetime import date, time

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.database import Base
from core.exceptions import NotFound, Conflict

from organization.models import Organization
from shift.models import Shift
from assignment import service
from assignment.schema import AssignmentCreate
import models_bootstrap


class AssignmentServiceTests(unittest.TestCase):
    def setUp(self):
        self.engine = create_engine("sqlite:///:memory:", future=True)
        Base.metadata.create_all(self.engine)
        TestingSession = sessionmaker(bind=self.engine, future=True)
        self.db = TestingSession()

        org = Organization(name="Acme", timezone="UTC")
        other = Organization(name="Other Co", timezone="UTC")
        bare = Organization(name="No Default Inc", timezone="UTC")
        self.db.add_all([org, other, bare])
        self.db.flush()
        self.org_id, self.other_org_id, self.bare_org_id = org.id, other.id, bare.id

        day = Shift(company_id=org.id, shift_name="Day", start_time=time(9, 0), end_time=time(17, 0),
                    working_days=[], is_default=True)
        night = Shift(company_id=org.id, shift_name="Night", start_time=time(22, 0), end_time=time(6, 0),
                      working_days=[])
        foreign = Shift(company_id=other.id, shift_name="Foreign", start_time=time(8, 0), end_time=time(12, 0),
                        working_days=[])
        self.db.add_all([day, night, foreign])
        self.db.commit()
        self.day_id, self.night_id, self.foreign_id = day.id, night.id, foreign.id

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def _create(self, employee_id, shift_id, on, company_id=None):
        return service.create_assignment(self.db, AssignmentCreate(
            company_id=company_id or self.org_id,
            employee_id=employee_id,
            shift_id=shift_id,
            assigned_date=on,
        ))

    # ---- create ----
    def test_create_assignment(self):
        row = self._create(5, self.night_id, date(2024, 1, 10))
        self.assertIsInstance(row.id, int)
        self.assertEqual(row.shift_id, self.night_id)
        self.assertEqual(row.assigned_date, date(2024, 1, 10))

    def test_create_duplicate_employee_date_409(self):
        self._create(5, self.night_id, date(2024, 1, 10))
        with self.assertRaises(Conflict) as cm:
            self._create(5, self.day_id, date(2024, 1, 10))
        self.assertEqual(cm.exception.status_code, 409)
        self.assertEqual(cm.exception.detail, service.DUPLICATE_DETAIL)

    def test_same_employee_other_date_ok(self):
        self._create(5, self.night_id, date(2024, 1, 10))
        self._create(5, self.night_id, date(2024, 1, 11))
        self.assertEqual(len(service.get_assignments(self.db, company_id=self.org_id, employee_id=5)), 2)

    def test_create_with_other_org_shift_404(self):
        with self.assertRaises(NotFound):
            self._create(5, self.foreign_id, date(2024, 1, 10))

    def test_create_with_unknown_shift_404(self):
        with self.assertRaises(NotFound):
            self._create(5, 999999, date(2024, 1, 10))

    # ---- list / get ----
    def test_get_assignments_filters_and_order(self):
        self._create(2, self.night_id, date(2024, 1, 11))
        self._create(1, self.day_id, date(2024, 1, 11))
        self._create(1, self.night_id, date(2024, 1, 10))
        self._create(3, self.foreign_id, date(2024, 1, 10), company_id=self.other_org_id)

        rows = service.get_assignments(self.db, company_id=self.org_id)
        self.assertEqual(
            [(r.assigned_date, r.employee_id) for r in rows],
            [(date(2024, 1, 10), 1), (date(2024, 1, 11), 1), (date(2024, 1, 11), 2)],
        )

        by_shift = service.get_assignments(self.db, company_id=self.org_id, shift_id=self.night_id)
        self.assertEqual(len(by_shift), 2)

        on_day = service.get_assignments(self.db, company_id=self.org_id, assigned_date=date(2024, 1, 11))
        self.assertEqual(len(on_day), 2)

        in_range = service.get_assignments(
            self.db, company_id=self.org_id, start_date=date(2024, 1, 11), end_date=date(2024, 1, 31),
        )
        self.assertEqual({r.employee_id for r in in_range}, {1, 2})

    def test_get_assignment_for_org_scoped(self):
        row = self._create(5, self.night_id, date(2024, 1, 10))
        self.assertIsNotNone(service.get_assignment_for_org(self.db, row.id, self.org_id))
        self.assertIsNone(service.get_assignment_for_org(self.db, row.id, self.other_org_id))

    def test_count_for_shift(self):
        self.assertEqual(service.count_for_shift(self.db, self.night_id), 0)
        self._create(5, self.night_id, date(2024, 1, 10))
        self._create(6, self.night_id, date(2024, 1, 10))
        self.assertEqual(service.count_for_shift(self.db, self.night_id), 2)

    # ---- effective shift ----
    def test_effective_shift_prefers_assignment(self):
        self._create(5, self.night_id, date(2024, 1, 10))
        shift, source = service.resolve_effective_shift(self.db, self.org_id, 5, date(2024, 1, 10))
        self.assertEqual(shift.id, self.night_id)
        self.assertEqual(source, "assignment")

    def test_effective_shift_falls_back_to_default(self):
        self._create(5, self.night_id, date(2024, 1, 10))
        shift, source = service.resolve_effective_shift(self.db, self.org_id, 5, date(2024, 1, 11))
        self.assertEqual(shift.id, self.day_id)
        self.assertEqual(source, "default")

    def test_effective_shift_without_default_404(self):
        with self.assertRaises(NotFound):
            service.resolve_effective_shift(self.db, self.bare_org_id, 5, date(2024, 1, 10))


if __name__ == "__main__":
    unittest.main()
