"""002: create shows and wholesalers tables

Revision ID: 002
Revises: 001
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE shows (
            id                  UUID         PRIMARY KEY DEFAULT gen_random_uuid(),
            name                VARCHAR(255) NOT NULL,
            show_date           DATE         NOT NULL,
            platform            VARCHAR(20),
            status              VARCHAR(20)  NOT NULL DEFAULT 'PLANNED',
            location            VARCHAR(255),
            external_reference  VARCHAR(255),
            notes               TEXT,
            record_state        VARCHAR(10)  NOT NULL DEFAULT 'ACTIVE',
            created_at          TIMESTAMPTZ  NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ  NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_shows_name_not_empty  CHECK (length(trim(name)) > 0),
            CONSTRAINT ck_shows_platform        CHECK (platform IS NULL OR platform IN ('WHATNOT', 'INSTAGRAM', 'OTHER')),
            CONSTRAINT ck_shows_status          CHECK (status IN ('PLANNED', 'ACTIVE', 'COMPLETED', 'CANCELLED')),
            CONSTRAINT ck_shows_record_state    CHECK (record_state IN ('ACTIVE', 'DELETED'))
        );
    """)
    op.execute("CREATE INDEX idx_shows_show_date ON shows (show_date DESC) WHERE record_state = 'ACTIVE';")
    op.execute("""
        CREATE TRIGGER trg_shows_updated_at
            BEFORE UPDATE ON shows
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)

    op.execute("""
        CREATE TABLE wholesalers (
            id              UUID         PRIMARY KEY DEFAULT gen_random_uuid(),
            name            VARCHAR(255) NOT NULL,
            contact_email   VARCHAR(255),
            contact_phone   VARCHAR(50),
            tax_id          VARCHAR(100),
            notes           TEXT,
            record_state    VARCHAR(10)  NOT NULL DEFAULT 'ACTIVE',
            created_at      TIMESTAMPTZ  NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ  NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_wholesalers_name_not_empty CHECK (length(trim(name)) > 0),
            CONSTRAINT ck_wholesalers_record_state   CHECK (record_state IN ('ACTIVE', 'DELETED'))
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_wholesalers_updated_at
            BEFORE UPDATE ON wholesalers
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS wholesalers CASCADE;")
    op.execute("DROP TABLE IF EXISTS shows CASCADE;")
