"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist
and seeds the default status rows.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from config import DEFAULT_STATUSES
from db.connection import get_connection, release_connection
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Status table: lifecycle states referenced by doctors and patients
CREATE TABLE IF NOT EXISTS status (
    id              SERIAL PRIMARY KEY,
    name            VARCHAR(50) UNIQUE NOT NULL
);

-- Specialty table: medical specialties and their default appointment length
CREATE TABLE IF NOT EXISTS specialty (
    id                  SERIAL PRIMARY KEY,
    name                VARCHAR(100) UNIQUE NOT NULL,
    scheduled_duration  INT NOT NULL CHECK (scheduled_duration > 0)
);

-- Doctor table
CREATE TABLE IF NOT EXISTS doctor (
    id              SERIAL PRIMARY KEY,
    name            VARCHAR(150) NOT NULL,
    status_id       INT NOT NULL REFERENCES status(id)
);

-- Patient table
CREATE TABLE IF NOT EXISTS patient (
    id              SERIAL PRIMARY KEY,
    name            VARCHAR(150) NOT NULL,
    phone_number    VARCHAR(30) NOT NULL,
    document_number VARCHAR(30) UNIQUE NOT NULL,
    birth_date      DATE NOT NULL,
    status_id       INT NOT NULL REFERENCES status(id)
);

-- Doctor <-> specialty associations; dependents are removed explicitly, no cascade
CREATE TABLE IF NOT EXISTS doctor_specialty (
    doctor_id       INT NOT NULL REFERENCES doctor(id),
    specialty_id    INT NOT NULL REFERENCES specialty(id),
    PRIMARY KEY (doctor_id, specialty_id)
);

-- Indexes for the list filters
CREATE INDEX IF NOT EXISTS idx_doctor_status ON doctor(status_id);
CREATE INDEX IF NOT EXISTS idx_patient_status ON patient(status_id);
CREATE INDEX IF NOT EXISTS idx_doctor_specialty_specialty ON doctor_specialty(specialty_id);
"""

SEED_STATUS_SQL = """
    INSERT INTO status (name)
    VALUES (%s)
    ON CONFLICT (name) DO NOTHING;
"""


def create_tables() -> None:
    """
    Execute the schema SQL to create all tables, then seed default statuses.
    Safe to call multiple times (uses IF NOT EXISTS / ON CONFLICT).
    """
    conn = get_connection()
    try:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
            for name in DEFAULT_STATUSES:
                cur.execute(SEED_STATUS_SQL, (name,))
        conn.commit()
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        conn.rollback()
        logger.error(f"Failed to initialize schema: {e}")
        raise
    finally:
        release_connection(conn)


if __name__ == "__main__":
    from db.connection import init_pool
    init_pool()
    create_tables()
    print("Database schema created successfully.")
