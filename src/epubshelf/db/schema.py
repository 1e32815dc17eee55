# ABOUTME: SQL DDL statements for the epubshelf library database schema.
# ABOUTME: One books table holding metadata, cover, and both original and current EPUB bytes.

SCHEMA_V1 = """
-- Stored EPUBs. original_data is never modified; data is the latest rebuild.
CREATE TABLE books (
    id            INTEGER PRIMARY KEY AUTOINCREMENT,
    name          TEXT NOT NULL,
    title         TEXT NOT NULL DEFAULT '',
    author        TEXT NOT NULL DEFAULT '',
    description   TEXT NOT NULL DEFAULT '',
    language      TEXT NOT NULL DEFAULT '',
    publisher     TEXT NOT NULL DEFAULT '',
    identifiers   TEXT NOT NULL DEFAULT '{}',
    subjects      TEXT NOT NULL DEFAULT '[]',
    cover_path    TEXT,
    cover         BLOB,
    original_data BLOB NOT NULL,
    data          BLOB NOT NULL,
    file_hash     TEXT NOT NULL,
    date_added    TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now')),
    date_modified TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

CREATE UNIQUE INDEX idx_books_file_hash ON books(file_hash);

-- Schema versioning for future migrations
CREATE TABLE schema_version (
    version    INTEGER NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

INSERT INTO schema_version (version) VALUES (1);
"""
