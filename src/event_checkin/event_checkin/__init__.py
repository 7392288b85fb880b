"""Event check-in package.

This package is organized by feature modules (checkin, ledger, reports, badges, ...)
with a thin Flask controller layer over service/store layers.
"""
