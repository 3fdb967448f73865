"""
certificate_kernel -- governance core for certificate requests.

Layers (inner to outer):
    domain/     pure value objects, contracts and decision services (no I/O)
    db/         SQLAlchemy declarative base, engine, append-only listeners
    models/     ORM tables for requests, statuses, events, comments, tags
    services/   SQLAlchemy-backed repositories (flush-only)
    selectors/  read-only queries (status validation catalog)

Orchestration of multi-step operations lives in ``certificate_services``.
"""
