"""Student attendance backend.

This package is organized by feature modules (students, attendance, storage, qr)
with a thin Flask controller layer over service/repository layers.
"""
