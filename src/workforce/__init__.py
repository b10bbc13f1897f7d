"""Workforce package.

Organized by feature modules (employees, users, availability, attendance,
payroll) with a thin Flask controller layer over service/repository layers.
"""
