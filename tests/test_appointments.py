"""Tests for appointment status transitions and their side effects"""

import pytest

from salon.domain.appointments.service import AppointmentService
from salon.domain.incomes.service import IncomeService
from salon.exceptions import Conflict, NotFound, PersistenceError, ValidationError


def test_create_pending_appointment(appointments, incomes, notifier, booking):
    change = appointments.create_appointment(booking)

    assert change.appointment["id"] == 1
    assert change.appointment["status"] == "pending"
    assert not change.income_created
    assert incomes.list_incomes() == []
    assert notifier.events == ["created"]


def test_status_defaults_to_pending(appointments, booking):
    booking.pop("status")
    assert appointments.create_appointment(booking).appointment["status"] == "pending"

    booking["status"] = ""
    assert appointments.create_appointment(booking).appointment["status"] == "pending"


def test_completion_records_income(appointments, incomes, booking):
    appointments.create_appointment(booking)

    change = appointments.update_status({"id": 1, "status": "complete"})

    assert change.income_created
    records = incomes.list_incomes()
    assert len(records) == 1
    income = records[0]
    assert income["appointmentId"] == 1
    assert income["amount"] == 35.00
    assert income["clientName"] == "Alice"
    assert income["staffName"] == "Bob"
    assert income["serviceName"] == "Haircut"
    assert income["date"] == "2024-12-23"
    assert income["time"] == "10:00"
    assert income["status"] == "completed"
    assert income["paymentMethod"] == "cash"


def test_booking_as_complete_records_income(appointments, incomes, booking):
    booking["status"] = "complete"

    change = appointments.create_appointment(booking)

    assert change.income_created
    assert incomes.get_income_for_appointment(change.appointment["id"])["amount"] == 35.00


def test_leaving_complete_retracts_income(appointments, incomes, notifier, booking):
    appointments.create_appointment(booking)
    appointments.update_status({"id": 1, "status": "complete"})

    change = appointments.update_status({"id": 1, "status": "no_show"})

    assert change.income_deleted
    assert change.appointment["status"] == "no_show"
    assert incomes.list_incomes() == []
    assert notifier.events == ["created", "status_changed", "status_changed"]


def test_non_complete_transitions_leave_incomes_alone(appointments, incomes, booking):
    appointments.create_appointment(booking)

    for status in ("no_show", "deleted_by_staff", "pending", "deleted_by_user"):
        change = appointments.update_status({"id": 1, "status": status})
        assert not change.income_created
        assert not change.income_deleted

    assert incomes.list_incomes() == []


def test_complete_to_complete_is_idempotent(appointments, incomes, booking):
    appointments.create_appointment(booking)
    appointments.update_status({"id": 1, "status": "complete"})

    change = appointments.update_status({"id": 1, "status": "complete"})

    assert not change.income_created
    assert len(incomes.list_incomes()) == 1


def test_recompletion_uses_current_price(appointments, incomes, db, booking):
    appointments.create_appointment(booking)
    appointments.update_status({"id": 1, "status": "complete"})
    appointments.update_status({"id": 1, "status": "pending"})
    db.services.update(1, {"price": 40.0})

    appointments.update_status({"id": 1, "status": "complete"})

    records = incomes.list_incomes()
    assert len(records) == 1
    assert records[0]["amount"] == 40.0


def test_edit_into_complete_records_income(appointments, incomes, booking):
    appointments.create_appointment(booking)

    change = appointments.update_appointment({**booking, "id": 1, "status": "complete", "time": "11:30"})

    assert change.income_created
    assert change.appointment["time"] == "11:30"
    assert incomes.list_incomes()[0]["time"] == "11:30"


def test_edit_out_of_complete_retracts_income(appointments, incomes, notifier, booking):
    booking["status"] = "complete"
    appointments.create_appointment(booking)

    change = appointments.update_appointment({**booking, "id": 1, "status": "pending"})

    assert change.income_deleted
    assert incomes.list_incomes() == []
    assert notifier.events == ["created", "updated"]


def test_delete_complete_appointment_retracts_income(appointments, incomes, notifier, booking):
    booking["status"] = "complete"
    appointments.create_appointment(booking)

    change = appointments.delete_appointment(1)

    assert change.income_deleted
    assert appointments.get_appointments() == []
    assert incomes.list_incomes() == []
    assert notifier.events == ["created", "cancelled"]


def test_delete_pending_appointment(appointments, booking):
    appointments.create_appointment(booking)

    change = appointments.delete_appointment("1")

    assert not change.income_deleted
    with pytest.raises(NotFound):
        appointments.get_appointment(1)


def test_missing_service_records_zero_income(appointments, incomes, db, booking):
    appointments.create_appointment(booking)
    db.services.remove(1)

    appointments.update_status({"id": 1, "status": "complete"})

    income = incomes.list_incomes()[0]
    assert income["amount"] == 0.0
    assert income["serviceName"] == "Unknown"


@pytest.mark.parametrize(
    "changes, field",
    [
        ({"date": "2024-13-45"}, "date"),
        ({"date": "23/12/2024"}, "date"),
        ({"time": "25:00"}, "time"),
        ({"time": "10am"}, "time"),
        ({"status": "finished"}, "status"),
        ({"clientId": None}, "clientId"),
    ],
)
def test_create_rejects_invalid_fields(appointments, notifier, booking, changes, field):
    with pytest.raises(ValidationError) as exc:
        appointments.create_appointment({**booking, **changes})

    assert exc.value.field == field
    assert appointments.get_appointments() == []
    assert notifier.sent == []


def test_update_status_requires_id_and_status(appointments, booking):
    appointments.create_appointment(booking)

    with pytest.raises(ValidationError) as exc:
        appointments.update_status({"status": "complete"})
    assert exc.value.field == "id"

    with pytest.raises(ValidationError) as exc:
        appointments.update_status({"id": 1})
    assert exc.value.field == "status"


def test_update_status_unknown_appointment(appointments):
    with pytest.raises(NotFound):
        appointments.update_status({"id": 99, "status": "complete"})


def test_notification_failure_does_not_fail_mutation(db, incomes, failing_notifier, booking):
    service = AppointmentService(db, failing_notifier)

    change = service.create_appointment({**booking, "status": "complete"})

    assert change.income_created
    assert service.get_appointment(1)["status"] == "complete"
    assert len(incomes.list_incomes()) == 1


def test_missing_client_skips_notification(appointments, notifier, db, booking):
    db.clients.remove(1)

    appointments.create_appointment(booking)

    assert notifier.sent == []


def test_notification_carries_names(appointments, notifier, booking):
    appointments.create_appointment(booking)

    assert notifier.sent == [
        {
            "event": "created",
            "appointment_id": 1,
            "client": "Alice",
            "staff": "Bob",
            "service": "Haircut",
        }
    ]


def test_existing_income_conflict_is_surfaced(appointments, incomes, notifier, db, booking):
    appointments.create_appointment(booking)
    # A stray record left behind for the appointment
    db.incomes.insert({"appointmentId": 1, "amount": 35.0, "date": "2024-12-23", "time": "10:00"})

    with pytest.raises(Conflict):
        appointments.update_status({"id": 1, "status": "complete"})

    # The status change itself is kept and the client is still notified
    assert appointments.get_appointment(1)["status"] == "complete"
    assert notifier.events == ["created", "status_changed"]
    assert len(incomes.list_incomes()) == 1


def test_income_failure_after_save(appointments, booking, monkeypatch):
    appointments.create_appointment(booking)

    def broken(*args, **kwargs):
        raise PersistenceError("Failed to access income storage: disk full")

    monkeypatch.setattr(IncomeService, "record_completion", broken)

    with pytest.raises(PersistenceError):
        appointments.update_status({"id": 1, "status": "complete"})
    assert appointments.get_appointment(1)["status"] == "complete"
