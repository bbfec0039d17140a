"""Grease operations core.

This package is organized by feature modules (permissions, attendance,
absence requests, gig requests, ...) with a thin Flask controller layer on top
of service/repository layers. Services depend on repository Protocols only.
"""
