"""Database schema for users, sessions and sets."""

SCHEMA = """
-- Account holders
CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,
    email TEXT UNIQUE NOT NULL,
    password_hash TEXT NOT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_users_email ON users(email);

-- Training sessions (session_type is free text, e.g. "upper" / "lower")
CREATE TABLE IF NOT EXISTS sessions (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL REFERENCES users(id),
    performed_at TEXT NOT NULL,  -- UTC ISO timestamp with microseconds
    notes TEXT,
    session_type TEXT
);

CREATE INDEX IF NOT EXISTS idx_sessions_user_performed ON sessions(user_id, performed_at);

-- Sets within a session
CREATE TABLE IF NOT EXISTS sets (
    id TEXT PRIMARY KEY,
    session_id TEXT NOT NULL REFERENCES sessions(id) ON DELETE CASCADE,
    exercise_id TEXT NOT NULL,
    set_index INTEGER NOT NULL,
    reps INTEGER NOT NULL CHECK (reps > 0),
    weight_kg REAL NOT NULL CHECK (weight_kg >= 0),
    rpe INTEGER,
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_sets_session ON sets(session_id);
"""
