"""Barber School package.

This package is organized by feature modules (courses, students, enrollments,
attendance, ...) with a thin Flask JSON controller layer and service/repository
layers underneath.
"""
