"""HR self-service portal package.

Feature modules (users, attendance, leaves, payroll, reports) each carry a thin
Flask controller on top of service/repository layers.
"""
