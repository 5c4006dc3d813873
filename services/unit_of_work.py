"""
services/unit_of_work.py
------------------------
Transaction boundary for the service layer.

A UnitOfWork bundles one repository per entity over a single backend
(one pooled psycopg2 connection, or one InMemoryStore). Everything done
inside `async with uow_factory() as uow:` commits together or not at all.
"""

import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncContextManager, AsyncIterator, Callable

from db.connection import get_connection, release_connection
from repositories.doctor_repo import SqlDoctorRepository
from repositories.doctor_specialty_repo import SqlDoctorSpecialtyRepository
from repositories.interfaces import (
    DoctorRepository,
    DoctorSpecialtyRepository,
    PatientRepository,
    SpecialtyRepository,
    StatusRepository,
)
from repositories.memory_repo import (
    InMemoryDoctorRepository,
    InMemoryDoctorSpecialtyRepository,
    InMemoryPatientRepository,
    InMemorySpecialtyRepository,
    InMemoryStatusRepository,
    InMemoryStore,
)
from repositories.patient_repo import SqlPatientRepository
from repositories.specialty_repo import SqlSpecialtyRepository
from repositories.status_repo import SqlStatusRepository
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class UnitOfWork:
    statuses: StatusRepository
    specialties: SpecialtyRepository
    doctors: DoctorRepository
    doctor_specialties: DoctorSpecialtyRepository
    patients: PatientRepository


UnitOfWorkFactory = Callable[[], AsyncContextManager[UnitOfWork]]


@asynccontextmanager
async def sql_unit_of_work() -> AsyncIterator[UnitOfWork]:
    """
    Take a pooled connection, hand out repositories bound to it, then
    commit on success or roll back on any exception. The connection is
    always returned to the pool.
    """
    conn = get_connection()
    try:
        yield UnitOfWork(
            statuses=SqlStatusRepository(conn),
            specialties=SqlSpecialtyRepository(conn),
            doctors=SqlDoctorRepository(conn),
            doctor_specialties=SqlDoctorSpecialtyRepository(conn),
            patients=SqlPatientRepository(conn),
        )
        await asyncio.to_thread(conn.commit)
    except Exception as e:
        await asyncio.to_thread(conn.rollback)
        logger.error(f"Unit of work rolled back: {e}")
        raise
    finally:
        release_connection(conn)


def memory_unit_of_work(store: InMemoryStore) -> UnitOfWorkFactory:
    """
    Build a unit-of-work factory over an in-memory store.
    A failing block restores the store to its state at entry.
    """

    @asynccontextmanager
    async def factory() -> AsyncIterator[UnitOfWork]:
        snapshot = store.snapshot()
        try:
            yield UnitOfWork(
                statuses=InMemoryStatusRepository(store),
                specialties=InMemorySpecialtyRepository(store),
                doctors=InMemoryDoctorRepository(store),
                doctor_specialties=InMemoryDoctorSpecialtyRepository(store),
                patients=InMemoryPatientRepository(store),
            )
        except Exception:
            store.restore(snapshot)
            raise

    return factory
