"""Timekeeping package.

Organized by feature modules (metrics, attendance, reports, ...). The
``metrics`` package is the pure calculation engine; the service layers around
it talk to storage only through repository protocols.
"""
