import logging
import sqlite3
from pathlib import Path
from sqlalchemy import create_engine, event
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from talentsearch.config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine(db_path: Path | None = None):
    path = db_path or settings.database_path
    engine = create_engine(
        f"sqlite:///{path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


engine = get_engine()
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


SCHEMA_SQL = """\
-- ============================================================
-- JOBS
-- ============================================================
CREATE TABLE IF NOT EXISTS jobs (
    id               TEXT PRIMARY KEY,
    position         TEXT NOT NULL,
    company          TEXT NOT NULL,
    description      TEXT NOT NULL DEFAULT '',
    requirements     TEXT NOT NULL DEFAULT '[]',
    responsibilities TEXT NOT NULL DEFAULT '[]',
    location_city    TEXT,
    location_state   TEXT,
    location_country TEXT,
    location_remote  INTEGER NOT NULL DEFAULT 0,
    location_type    TEXT NOT NULL DEFAULT 'onsite'
                     CHECK(location_type IN ('onsite','remote','hybrid')),
    salary_min       REAL,
    salary_max       REAL,
    salary_currency  TEXT,
    salary_period    TEXT,
    job_type         TEXT NOT NULL
                     CHECK(job_type IN ('full-time','part-time','contract',
                                        'internship','temporary')),
    experience_level TEXT NOT NULL
                     CHECK(experience_level IN ('entry','mid-level','senior','executive')),
    categories       TEXT NOT NULL DEFAULT '[]',
    tags             TEXT NOT NULL DEFAULT '[]',
    created_by       TEXT NOT NULL,
    created_at       TEXT NOT NULL,
    updated_at       TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_jobs_type ON jobs(job_type);
CREATE INDEX IF NOT EXISTS idx_jobs_experience ON jobs(experience_level);
CREATE INDEX IF NOT EXISTS idx_jobs_created ON jobs(created_at);
CREATE INDEX IF NOT EXISTS idx_jobs_owner ON jobs(created_by);

-- ============================================================
-- APPLICANT PROFILES
-- ============================================================
CREATE TABLE IF NOT EXISTS applicant_profiles (
    id                   TEXT PRIMARY KEY,
    user_id              TEXT NOT NULL UNIQUE,
    headline             TEXT,
    summary              TEXT,
    skills               TEXT NOT NULL DEFAULT '[]',
    work_experience      TEXT NOT NULL DEFAULT '[]',
    education            TEXT NOT NULL DEFAULT '[]',
    preferred_job_types  TEXT NOT NULL DEFAULT '[]',
    preferred_locations  TEXT NOT NULL DEFAULT '[]',
    preferred_industries TEXT NOT NULL DEFAULT '[]',
    is_remote_only       INTEGER NOT NULL DEFAULT 0,
    created_at           TEXT NOT NULL,
    updated_at           TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_applicants_created ON applicant_profiles(created_at);

-- ============================================================
-- COMPANIES
-- ============================================================
CREATE TABLE IF NOT EXISTS companies (
    id               TEXT PRIMARY KEY,
    name             TEXT NOT NULL,
    description      TEXT,
    industry         TEXT NOT NULL DEFAULT '[]',
    location_city    TEXT,
    location_state   TEXT,
    location_country TEXT,
    website          TEXT,
    size             TEXT,
    founded          INTEGER,
    specialties      TEXT NOT NULL DEFAULT '[]',
    created_by       TEXT NOT NULL,
    created_at       TEXT NOT NULL,
    updated_at       TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_companies_name ON companies(name);
"""

FTS_SQL = """\
-- ============================================================
-- FTS5 (rowid mirrors the content table's rowid; porter stems like the
-- english analyzer on the search index)
-- ============================================================
CREATE VIRTUAL TABLE IF NOT EXISTS jobs_fts USING fts5(
    position, company, description, requirements, responsibilities, categories, tags,
    tokenize = 'porter unicode61'
);

CREATE VIRTUAL TABLE IF NOT EXISTS applicants_fts USING fts5(
    headline, summary, skills, work_experience, education,
    tokenize = 'porter unicode61'
);

CREATE TRIGGER IF NOT EXISTS jobs_ai AFTER INSERT ON jobs BEGIN
    INSERT INTO jobs_fts(rowid, position, company, description, requirements,
                         responsibilities, categories, tags)
    VALUES (new.rowid, new.position, new.company, new.description,
            (SELECT group_concat(value, ' ') FROM json_each(new.requirements)),
            (SELECT group_concat(value, ' ') FROM json_each(new.responsibilities)),
            (SELECT group_concat(value, ' ') FROM json_each(new.categories)),
            (SELECT group_concat(value, ' ') FROM json_each(new.tags)));
END;

CREATE TRIGGER IF NOT EXISTS jobs_ad AFTER DELETE ON jobs BEGIN
    DELETE FROM jobs_fts WHERE rowid = old.rowid;
END;

CREATE TRIGGER IF NOT EXISTS jobs_au AFTER UPDATE ON jobs BEGIN
    DELETE FROM jobs_fts WHERE rowid = old.rowid;
    INSERT INTO jobs_fts(rowid, position, company, description, requirements,
                         responsibilities, categories, tags)
    VALUES (new.rowid, new.position, new.company, new.description,
            (SELECT group_concat(value, ' ') FROM json_each(new.requirements)),
            (SELECT group_concat(value, ' ') FROM json_each(new.responsibilities)),
            (SELECT group_concat(value, ' ') FROM json_each(new.categories)),
            (SELECT group_concat(value, ' ') FROM json_each(new.tags)));
END;

CREATE TRIGGER IF NOT EXISTS applicants_ai AFTER INSERT ON applicant_profiles BEGIN
    INSERT INTO applicants_fts(rowid, headline, summary, skills, work_experience, education)
    VALUES (new.rowid, new.headline, new.summary,
            (SELECT group_concat(json_extract(value, '$.name'), ' ')
               FROM json_each(new.skills)),
            (SELECT group_concat(coalesce(json_extract(value, '$.position'), '') || ' ' ||
                                 coalesce(json_extract(value, '$.company'), ''), ' ')
               FROM json_each(new.work_experience)),
            (SELECT group_concat(json_extract(value, '$.field'), ' ')
               FROM json_each(new.education)));
END;

CREATE TRIGGER IF NOT EXISTS applicants_ad AFTER DELETE ON applicant_profiles BEGIN
    DELETE FROM applicants_fts WHERE rowid = old.rowid;
END;

CREATE TRIGGER IF NOT EXISTS applicants_au AFTER UPDATE ON applicant_profiles BEGIN
    DELETE FROM applicants_fts WHERE rowid = old.rowid;
    INSERT INTO applicants_fts(rowid, headline, summary, skills, work_experience, education)
    VALUES (new.rowid, new.headline, new.summary,
            (SELECT group_concat(json_extract(value, '$.name'), ' ')
               FROM json_each(new.skills)),
            (SELECT group_concat(coalesce(json_extract(value, '$.position'), '') || ' ' ||
                                 coalesce(json_extract(value, '$.company'), ''), ' ')
               FROM json_each(new.work_experience)),
            (SELECT group_concat(json_extract(value, '$.field'), ' ')
               FROM json_each(new.education)));
END;
"""


def init_db(db_path: Path | None = None):
    path = db_path or settings.database_path
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.executescript(SCHEMA_SQL)
    try:
        conn.executescript(FTS_SQL)
    except sqlite3.OperationalError as exc:
        # SQLite built without FTS5: the store falls back to substring matching
        logger.warning("Full-text tables unavailable: %s", exc)
    conn.close()


def has_full_text(db_path: Path | None = None) -> bool:
    path = db_path or settings.database_path
    conn = sqlite3.connect(str(path))
    try:
        row = conn.execute(
            "SELECT COUNT(*) FROM sqlite_master WHERE type = 'table' AND name IN ('jobs_fts', 'applicants_fts')"
        ).fetchone()
    finally:
        conn.close()
    return bool(row) and row[0] == 2
