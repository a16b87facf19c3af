import os
import tempfile

import pytest

# Keep the app away from the real data directory and email providers
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="salon-test-"))
os.environ["NOTIFICATIONS_ENABLED"] = "false"
os.environ.pop("RESEND_API_KEY", None)
os.environ.pop("SMTP_HOST", None)

from fastapi.testclient import TestClient  # noqa: E402

from salon.database import Database, get_db  # noqa: E402
from salon.domain.appointments.service import AppointmentService  # noqa: E402
from salon.domain.clients.service import ClientService  # noqa: E402
from salon.domain.incomes.service import IncomeService  # noqa: E402
from salon.domain.services.service import CatalogService  # noqa: E402
from salon.domain.staff.service import StaffService  # noqa: E402
from salon.email_service import get_notifier  # noqa: E402
from salon.main import app  # noqa: E402


class RecordingNotifier:
    """Stands in for the email notifier and remembers what it was asked to send"""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent = []

    def notify(self, event, appointment, client, staff=None, service=None):
        if self.fail:
            raise RuntimeError("SMTP server unavailable")
        self.sent.append(
            {
                "event": event,
                "appointment_id": appointment["id"],
                "client": client["name"],
                "staff": staff["name"] if staff else None,
                "service": service["name"] if service else None,
            }
        )

    @property
    def events(self):
        return [s["event"] for s in self.sent]


@pytest.fixture
def db(tmp_path):
    return Database(tmp_path / "data")


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def failing_notifier():
    return RecordingNotifier(fail=True)


@pytest.fixture
def appointments(db, notifier):
    return AppointmentService(db, notifier)


@pytest.fixture
def incomes(db):
    return IncomeService(db)


@pytest.fixture
def salon(db):
    """One service, client and staff member: the Haircut / Alice / Bob setup"""
    service = CatalogService(db).create_service({"name": "Haircut", "duration": 30, "price": 35.00})
    client = ClientService(db).create_client({"name": "Alice", "email": "alice@x.com"})
    staff = StaffService(db).create_staff({"name": "Bob", "role": "Stylist", "email": "bob@x.com"})
    return {"service": service, "client": client, "staff": staff}


@pytest.fixture
def booking(salon):
    """Appointment fields referencing the salon fixture"""
    return {
        "clientId": salon["client"]["id"],
        "staffId": salon["staff"]["id"],
        "serviceId": salon["service"]["id"],
        "date": "2024-12-23",
        "time": "10:00",
        "status": "pending",
    }


@pytest.fixture
def api(db, notifier):
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_notifier] = lambda: notifier
    yield TestClient(app)
    app.dependency_overrides.clear()
