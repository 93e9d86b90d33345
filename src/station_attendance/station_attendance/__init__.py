"""Station Attendance package.

Daily check-in/check-out ledger for fuel-station employees, organized by
feature modules (employees, attendance) with a thin Flask controller layer
over service and repository layers.
"""
