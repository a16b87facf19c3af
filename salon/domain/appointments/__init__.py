"""Appointment domain - bookings, status transitions and notifications"""
