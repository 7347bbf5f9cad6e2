"""004: create show_financials table

Revision ID: 004
Revises: 003
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE show_financials (
            show_id                   UUID          PRIMARY KEY REFERENCES shows (id) ON DELETE RESTRICT,
            payout_after_fees_amount  NUMERIC(19,4) NOT NULL,
            gross_sales_amount        NUMERIC(19,4),
            currency                  TEXT          NOT NULL DEFAULT 'USD',
            created_at                TIMESTAMPTZ   NOT NULL DEFAULT NOW(),
            updated_at                TIMESTAMPTZ   NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_show_financials_payout_gte_0 CHECK (payout_after_fees_amount >= 0),
            CONSTRAINT ck_show_financials_gross_gte_0  CHECK (gross_sales_amount IS NULL OR gross_sales_amount >= 0)
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_show_financials_updated_at
            BEFORE UPDATE ON show_financials
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)
    op.execute("COMMENT ON TABLE show_financials IS 'One payout snapshot per show; upserted, never deleted';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS show_financials CASCADE;")
